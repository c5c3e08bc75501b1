[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "approxbox"
version = "0.1.0"
description = "Axis-aligned and oriented bounding boxes, 2D convex hulls, minimum-area rectangles and small geometry utilities"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "geometry",
    "bounding-box",
    "convex-hull",
    "rotating-calipers",
    "oriented-bounding-box",
    "quaternion",
    "random-generators",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["approxbox"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
