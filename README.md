# approxbox

Small computational-geometry building blocks built on NumPy:

- `approxbox.aabb.AABB` – axis-aligned bounding boxes in any dimension
- `approxbox.oobb.OOBB` – oriented bounding boxes in 3D, rotated by an
  `approxbox.rotation.Quaternion`
- `approxbox.convex_hull.ConvexHull2D` – planar convex hull by a Graham scan,
  with the exact-sign predicates `orient2d` and `left_turn`
- `approxbox.min_area_rectangle.MinAreaRectangle` – smallest enclosing
  rectangle of a planar point set by rotating calipers, returning a `Box2d`
- `approxbox.random_generators` – deterministic 64-bit generators
  (`SplitMix64`, `XorShift128Plus`, `XorShift1024Star`) and the distributions
  `AlmostUniformUIntDistribution` and `AlmostUniformRealDistribution`
- helpers: `approxbox.angles` (mapping angles onto [-pi, pi] or [0, 2pi]),
  `approxbox.floatcmp` (ULP-based float comparison), `approxbox.gcd`
  (`gcd2`, `gcd3`) and `approxbox.timer.CPUTimer`

## Installation

```
pip install approxbox
```

For the tests:

```
pip install "approxbox[test]"
pytest
```

## Examples

Points in the plane are given as rows of an `(n, 2)` array.

Minimum-area rectangle:

```python
import numpy as np
from approxbox.min_area_rectangle import MinAreaRectangle

points = np.array([[0.0, 0.0], [2.0, 0.0], [2.0, 1.0], [0.0, 1.0], [1.0, 0.5]])
rect = MinAreaRectangle(points).compute()
rect.area        # 2.0 (up to rounding)
rect.corners()   # four corners, counter-clockwise, starting at rect.p
```

After `compute()`, `rect.u` and `rect.v` are orthonormal directions and
`rect.u_length`, `rect.v_length` the side lengths.

Convex hull indices, counter-clockwise from the lowest point:

```python
from approxbox.convex_hull import ConvexHull2D

hull = ConvexHull2D(points)
indices = hull.compute()   # [0, 1, 2, 3]
assert hull.verify_hull()
```

Axis-aligned boxes:

```python
from approxbox.aabb import AABB

box = AABB(3)               # empty box
box.unite([0.0, 0.0, 0.0])
box.unite([1.0, 2.0, 3.0])
box.volume()                # 6.0
box.overlaps_point([0.5, 1.0, 1.0])   # True
```

Oriented boxes:

```python
from approxbox.oobb import OOBB
from approxbox.rotation import Quaternion

obox = OOBB([0.0, 0.0, 0.0], [1.0, 2.0, 3.0], Quaternion.identity())
obox.corner_points()        # 8x3 array in the world frame
obox.switch_z_axis(0)       # make the box's x-axis its new z-axis
```

The rotation may also be given as a 3x3 rotation matrix.

Random numbers that are the same on every platform:

```python
from approxbox.random_generators import XorShift128Plus, AlmostUniformRealDistribution

gen = XorShift128Plus(314159)
dist = AlmostUniformRealDistribution(0.0, 1.0)
sample = dist(gen)
```

`XorShift128Plus()` and `XorShift1024Star()` without a seed are seeded from the
current time.

Failures inside the algorithms (an invalid box, a negative expansion, a
broken hull) raise `approxbox.errors.ApproxMVBBError`.

## What the package does not do

The package provides the pieces that a minimum-volume bounding box
computation is assembled from, but not that computation itself: there is no
function that takes a 3D point set and returns its (approximate) minimal
`OOBB`, no diameter estimation and no projection of points onto a plane. It
has no command-line interface and reads or writes no files.