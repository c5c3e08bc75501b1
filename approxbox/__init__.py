"""Bounding boxes, 2D convex hulls, minimum-area rectangles and geometry helpers."""

__version__ = "0.1.0"