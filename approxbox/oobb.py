"""Oriented bounding boxes in three dimensions."""

from __future__ import annotations

import sys
from typing import Optional, Sequence, Union

import numpy as np

from approxbox.aabb import AABB
from approxbox.errors import ensure
from approxbox.rotation import Quaternion

__all__ = ["OOBB"]

ArrayLike = Union[np.ndarray, Sequence[float]]

# Moves that exchange the z-axis with the x-axis (0) or the y-axis (1):
# the extra rotation and the new order of the coordinates.
_Z_SWITCHES = {
    0: (Quaternion(0.5, 0.5, 0.5, 0.5), [1, 2, 0]),
    1: (Quaternion(0.5, -0.5, -0.5, -0.5), [2, 0, 1]),
}

# Selection of the extent per corner; corner k takes bit 0 for x, 1 for y, 2 for z.
_CORNER_MASKS = np.array([[(k >> axis) & 1 for axis in range(3)] for k in range(8)], dtype=float)


def _vector3(p: ArrayLike, what: str = "point") -> np.ndarray:
    vector = np.asarray(p, dtype=float)
    if vector.shape != (3,):
        raise ValueError(f"expected a 3-dimensional {what}, got shape {vector.shape}")
    return vector


class OOBB:
    """Box that is axis aligned in its own coordinate system ``K``.

    ``rotation`` is the quaternion of the transformation ``A_IK`` taking
    coordinates in ``K`` to the world system ``I``; ``min_point`` and
    ``max_point`` are represented in ``K``.
    """

    def __init__(
        self,
        min_point: Optional[ArrayLike] = None,
        max_point: Optional[ArrayLike] = None,
        rotation: Union[Quaternion, ArrayLike, None] = None,
    ) -> None:
        if (min_point is None) != (max_point is None):
            raise ValueError("give both min_point and max_point or neither")
        self.rotation = Quaternion.identity()
        self.min_point = np.empty(3)
        self.max_point = np.empty(3)
        if min_point is None:
            self.reset()
            if rotation is not None:
                self.rotation = self._as_quaternion(rotation)
            return
        lo = _vector3(min_point)
        hi = _vector3(max_point)
        self.rotation = self._as_quaternion(rotation) if rotation is not None else Quaternion.identity()
        self.min_point = np.minimum(lo, hi)
        self.max_point = np.maximum(lo, hi)

    @staticmethod
    def _as_quaternion(rotation: Union[Quaternion, ArrayLike]) -> Quaternion:
        if isinstance(rotation, Quaternion):
            return rotation.normalized()
        return Quaternion.from_matrix(rotation).normalized()

    @classmethod
    def from_aabb(cls, aabb: AABB) -> "OOBB":
        """Box with the bounds of a 3-dimensional ``aabb`` and identity rotation."""
        if aabb.dim != 3:
            raise ValueError(f"an OOBB needs a 3-dimensional AABB, got dimension {aabb.dim}")
        box = cls()
        box.min_point = np.array(aabb.min_point, dtype=float)
        box.max_point = np.array(aabb.max_point, dtype=float)
        box.rotation = Quaternion.identity()
        return box

    @property
    def rotation_matrix(self) -> np.ndarray:
        """The 3x3 matrix ``A_IK``."""
        return self.rotation.to_matrix()

    def set_z_axis_longest(self) -> None:
        """Rotate the box frame so that its z-axis has the longest extent."""
        i = self.max_extent_axis()
        if i < 2:
            self.switch_z_axis(i)

    def switch_z_axis(self, i: int) -> None:
        """Make axis ``i`` (0 or 1) the new z-axis; other values do nothing."""
        switch = _Z_SWITCHES.get(i)
        if switch is None:
            return
        extra, order = switch
        self.rotation = self.rotation * extra
        self.min_point = self.min_point[order]
        self.max_point = self.max_point[order]

    def reset(self) -> None:
        """Make the box empty and its rotation the identity."""
        self.min_point = np.full(3, sys.float_info.max)
        # The smallest positive float, not the lowest one, as the maximum.
        self.max_point = np.full(3, sys.float_info.min)
        self.rotation = Quaternion.identity()

    def unite(self, p: ArrayLike) -> "OOBB":
        """Grow the box to contain ``p``, given in the box frame ``K``."""
        point = _vector3(p)
        self.max_point = np.maximum(self.max_point, point)
        self.min_point = np.minimum(self.min_point, point)
        return self

    def center(self) -> np.ndarray:
        """Center of the box in the frame ``K``."""
        return 0.5 * (self.max_point + self.min_point)

    def extent(self) -> np.ndarray:
        """Side lengths of the box in the frame ``K``."""
        return self.max_point - self.min_point

    def max_extent(self) -> float:
        """Largest side length."""
        return float(np.max(self.extent()))

    def max_extent_axis(self) -> int:
        """Index of the first axis with the largest side length."""
        return int(np.argmax(self.extent()))

    def is_empty(self) -> bool:
        """True if the box has no volume along at least one axis."""
        return bool(np.any(self.max_point <= self.min_point))

    def overlaps(self, p: ArrayLike, in_world_frame: bool = True) -> bool:
        """True if ``p`` lies in the box; ``p`` is in ``I`` or, if not ``in_world_frame``, in ``K``."""
        point = _vector3(p)
        if in_world_frame:
            point = self.rotation.inverse().rotate(point)
        return bool(np.all((point >= self.min_point) & (point <= self.max_point)))

    def expand_to_min_extent_relative(
        self, p: float = 0.1, default_extent: float = 0.1, eps: float = 1e-10
    ) -> None:
        """Give every axis at least the extent ``max_extent * p``.

        If that extent is below ``eps`` the box becomes a cube of side
        ``default_extent`` around its center.
        """
        e = self.extent()
        c = self.center()
        idx = int(np.argmax(e))
        ext = abs(e[idx]) * p
        if ext < eps:
            self.min_point = c - 0.5 * default_extent
            self.max_point = c + 0.5 * default_extent
            return
        mask = np.abs(e) < ext
        mask[idx] = False
        self.min_point = np.where(mask, c - 0.5 * ext, self.min_point)
        self.max_point = np.where(mask, c + 0.5 * ext, self.max_point)

    def expand_to_min_extent_absolute(self, min_extent: float) -> None:
        """Give every axis at least the extent ``min_extent``, keeping the center."""
        e = self.extent()
        c = self.center()
        half = 0.5 * min_extent
        mask = np.abs(e) < min_extent
        self.min_point = np.where(mask, c - half, self.min_point)
        self.max_point = np.where(mask, c + half, self.max_point)

    def expand(self, d: Union[float, ArrayLike]) -> None:
        """Grow the box by ``d`` on every side; a scalar or one value per axis."""
        amount = np.asarray(d, dtype=float)
        if amount.ndim == 0:
            ensure(amount >= 0, "d>=0")
        else:
            amount = _vector3(amount, "expansion")
            ensure(np.all(amount >= 0), "d>=0")
        self.min_point = self.min_point - amount
        self.max_point = self.max_point + amount

    def volume(self) -> float:
        """Product of the side lengths; may be negative for an empty box."""
        d = self.extent()
        return float(d[0] * d[1] * d[2])

    def direction(self, i: int) -> np.ndarray:
        """Axis ``i`` of the box frame expressed in the world frame ``I``."""
        ensure(0 <= i < 3, f"Index wrong: {i}")
        unit = np.zeros(3)
        unit[i] = 1.0
        return self.rotation.rotate(unit)

    def corner_points(self, in_world_frame: bool = True) -> np.ndarray:
        """The eight corners as rows, ordered by (x, y, z) index in ``K``, x fastest."""
        points = self.min_point + _CORNER_MASKS * self.extent()
        points[7] = self.max_point
        if in_world_frame:
            points = np.array([self.rotation.rotate(p) for p in points])
        return points

    def __repr__(self) -> str:
        return (
            f"OOBB(min={self.min_point.tolist()}, max={self.max_point.tolist()}, "
            f"rotation={self.rotation})"
        )