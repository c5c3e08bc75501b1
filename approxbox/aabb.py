"""Axis aligned bounding boxes of arbitrary dimension."""

from __future__ import annotations

import itertools
import sys
from typing import Optional, Sequence, Union

import numpy as np

from approxbox.errors import ApproxMVBBError, ensure

__all__ = ["AABB"]

_MAX = sys.float_info.max
_LOWEST = -sys.float_info.max

ArrayLike = Union[np.ndarray, Sequence[float]]


class AABB:
    """Axis aligned bounding box spanned by ``min_point`` and ``max_point``.

    A freshly created box is empty: its minimum is the largest float and its
    maximum the lowest, so that uniting any point makes it that point.
    """

    def __init__(self, dim: int = 3) -> None:
        if dim < 1:
            raise ValueError(f"dimension must be positive, got {dim}")
        self.dim = int(dim)
        self.min_point = np.empty(self.dim)
        self.max_point = np.empty(self.dim)
        self.reset()

    @classmethod
    def from_point(cls, p: ArrayLike) -> "AABB":
        """Box whose minimum and maximum are both ``p``."""
        point = np.array(p, dtype=float)
        if point.ndim != 1:
            raise ValueError("a point must be a one-dimensional vector")
        box = cls(point.size)
        box.min_point = point.copy()
        box.max_point = point.copy()
        return box

    @classmethod
    def from_bounds(cls, lower: ArrayLike, upper: ArrayLike) -> "AABB":
        """Box from its lower and upper corner; every upper coordinate must be >= lower."""
        lo = np.array(lower, dtype=float)
        hi = np.array(upper, dtype=float)
        if lo.ndim != 1 or lo.shape != hi.shape:
            raise ValueError("lower and upper corner must be vectors of equal size")
        ensure(
            np.all(hi >= lo),
            f"AABB initialized wrongly! min/max: {lo} / {hi}",
        )
        box = cls(lo.size)
        box.min_point = lo
        box.max_point = hi
        return box

    def _point(self, p: ArrayLike) -> np.ndarray:
        point = np.asarray(p, dtype=float)
        if point.shape != (self.dim,):
            raise ValueError(f"expected a point of dimension {self.dim}, got shape {point.shape}")
        return point

    def _check_box(self, box: "AABB") -> None:
        if box.dim != self.dim:
            raise ValueError(f"box dimension {box.dim} does not match {self.dim}")

    def reset(self) -> None:
        """Make the box empty."""
        self.min_point = np.full(self.dim, _MAX)
        self.max_point = np.full(self.dim, _LOWEST)

    def unite(self, p: ArrayLike) -> "AABB":
        """Grow the box to contain point ``p``."""
        point = self._point(p)
        self.max_point = np.maximum(self.max_point, point)
        self.min_point = np.minimum(self.min_point, point)
        return self

    def unite_box(self, box: "AABB") -> "AABB":
        """Grow the box to contain ``box``."""
        self._check_box(box)
        self.max_point = np.maximum(self.max_point, box.max_point)
        self.min_point = np.minimum(self.min_point, box.min_point)
        return self

    def __iadd__(self, other: object) -> "AABB":
        if isinstance(other, AABB):
            return self.unite_box(other)
        return self.unite(other)  # type: ignore[arg-type]

    def __add__(self, other: object) -> "AABB":
        if not isinstance(other, AABB):
            return NotImplemented
        result = self.copy()
        return result.unite_box(other)

    def copy(self) -> "AABB":
        """Independent copy of this box."""
        box = AABB(self.dim)
        box.min_point = self.min_point.copy()
        box.max_point = self.max_point.copy()
        return box

    def transform(self, matrix: ArrayLike, translation: Optional[ArrayLike] = None) -> "AABB":
        """Replace the box by the bounding box of its corners mapped affinely.

        ``matrix`` is either a 3x3 linear part, combined with ``translation``,
        or a 4x4 homogeneous affine transformation.
        """
        if self.dim != 3:
            raise ApproxMVBBError("So far AABB transform is only implemented in 3d")
        m = np.asarray(matrix, dtype=float)
        if m.shape == (4, 4):
            if translation is not None:
                raise ValueError("a homogeneous matrix already holds the translation")
            linear, offset = m[:3, :3], m[:3, 3]
        elif m.shape == (3, 3):
            linear = m
            offset = np.zeros(3) if translation is None else self._point(translation)
        else:
            raise ValueError(f"matrix must be 3x3 or 4x4, got shape {m.shape}")

        result = AABB(3)
        for corner in itertools.product(*zip(self.min_point, self.max_point)):
            result.unite(linear @ np.array(corner) + offset)
        self.min_point = result.min_point
        self.max_point = result.max_point
        return self

    def center(self) -> np.ndarray:
        """Midpoint of the box."""
        return 0.5 * (self.max_point + self.min_point)

    def overlaps(self, box: "AABB") -> bool:
        """True if this box and ``box`` intersect (touching counts)."""
        self._check_box(box)
        return bool(
            np.all((self.max_point >= box.min_point) & (self.min_point <= box.max_point))
        )

    def overlaps_point(self, p: ArrayLike) -> bool:
        """True if point ``p`` lies inside the box or on its boundary."""
        point = self._point(p)
        return bool(np.all((point >= self.min_point) & (point <= self.max_point)))

    def overlaps_subspace(self, box: "AABB", fixed_axis: int) -> bool:
        """True if the boxes intersect when axis ``fixed_axis`` is ignored."""
        self._check_box(box)
        if not 0 <= fixed_axis < self.dim:
            raise ValueError(f"axis {fixed_axis} out of range for dimension {self.dim}")
        t = (self.max_point >= box.min_point) & (self.min_point <= box.max_point)
        t[fixed_axis] = True
        return bool(np.all(t))

    def extent(self) -> np.ndarray:
        """Side lengths of the box; negative only for an empty, reset box."""
        return self.max_point - self.min_point

    def max_extent(self) -> float:
        """Largest side length."""
        return float(np.max(self.extent()))

    def is_empty(self) -> bool:
        """True if the box has no volume along at least one axis."""
        return bool(np.any(self.max_point <= self.min_point))

    def expand(self, d: Union[float, ArrayLike]) -> None:
        """Grow the box by ``d`` on every side; ``d`` is a scalar or one value per axis."""
        amount = np.asarray(d, dtype=float)
        if amount.ndim == 0:
            ensure(amount >= 0, "d>=0")
        else:
            amount = self._point(amount)
            ensure(np.all(amount >= 0), "d<0")
        self.min_point = self.min_point - amount
        self.max_point = self.max_point + amount

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

    def expand_to_min_extent_absolute(self, min_extent: Union[float, ArrayLike]) -> None:
        """Give every axis at least ``min_extent``; a scalar or one value per axis."""
        e = self.extent()
        c = self.center()
        limit = np.asarray(min_extent, dtype=float)
        if limit.ndim != 0:
            limit = self._point(limit)
        limit = np.broadcast_to(limit, e.shape)
        mask = np.abs(e) < limit
        self.min_point = np.where(mask, c - 0.5 * limit, self.min_point)
        self.max_point = np.where(mask, c + 0.5 * limit, self.max_point)

    def expand_to_max_extent(self, axis: Optional[int] = None, move_max: bool = True) -> None:
        """Make the box unbounded along ``axis``, or along every axis if ``axis`` is None.

        For a single axis, ``move_max`` chooses whether the maximum is moved to
        the largest float or the minimum to the lowest.
        """
        if axis is None:
            self.min_point = np.full(self.dim, _LOWEST)
            self.max_point = np.full(self.dim, _MAX)
            return
        ensure(0 <= axis < self.dim, "axis >= Dim !")
        if move_max:
            self.max_point[axis] = _MAX
        else:
            self.min_point[axis] = _LOWEST

    def volume(self) -> float:
        """Product of the side lengths."""
        return float(np.prod(self.extent()))

    def __repr__(self) -> str:
        return f"AABB(min={self.min_point.tolist()}, max={self.max_point.tolist()})"