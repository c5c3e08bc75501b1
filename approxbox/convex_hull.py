"""Convex hull of a planar point set by a Graham scan."""

from __future__ import annotations

import sys
from fractions import Fraction
from functools import cmp_to_key
from typing import List, Sequence, Union

import numpy as np

from approxbox.errors import ensure
from approxbox.floatcmp import points_almost_equal

__all__ = ["orient2d", "left_turn", "min_point_yx", "ConvexHull2D"]

ArrayLike = Union[np.ndarray, Sequence[Sequence[float]]]

_EPS = sys.float_info.epsilon / 2.0
_CCW_ERR_BOUND = (3.0 + 16.0 * _EPS) * _EPS


def orient2d(a: Sequence[float], b: Sequence[float], c: Sequence[float]) -> float:
    """Twice the signed area of the triangle ``a, b, c``.

    Positive if the points are in counter-clockwise order, negative if
    clockwise and exactly zero if they are collinear. The sign is exact:
    when the floating point estimate is too close to zero to be trusted
    the determinant is evaluated with rational arithmetic.
    """
    ax, ay = float(a[0]), float(a[1])
    bx, by = float(b[0]), float(b[1])
    cx, cy = float(c[0]), float(c[1])
    left = (ax - cx) * (by - cy)
    right = (ay - cy) * (bx - cx)
    det = left - right
    bound = _CCW_ERR_BOUND * (abs(left) + abs(right))
    if abs(det) >= bound and det != 0.0:
        return det
    fax, fay, fbx, fby, fcx, fcy = map(Fraction, (ax, ay, bx, by, cx, cy))
    exact = (fax - fcx) * (fby - fcy) - (fay - fcy) * (fbx - fcx)
    return float(exact)


def left_turn(a: Sequence[float], b: Sequence[float], c: Sequence[float]) -> bool:
    """True if going from ``a`` over ``b`` to ``c`` turns strictly left."""
    return orient2d(a, b, c) > 0.0


def _as_points(points: ArrayLike) -> np.ndarray:
    array = np.asarray(points, dtype=float)
    if array.size == 0:
        return np.empty((0, 2))
    if array.ndim != 2 or array.shape[1] != 2:
        raise ValueError(f"points must have shape (n, 2), got {array.shape}")
    return array


def min_point_yx(points: ArrayLike) -> int:
    """Index of the point with the lowest y, ties broken by the lowest x."""
    pts = _as_points(points)
    if len(pts) == 0:
        raise ValueError("cannot take the minimum of an empty point set")
    return min(range(len(pts)), key=lambda i: (pts[i, 1], pts[i, 0]))


class ConvexHull2D:
    """Convex hull of points given as rows of an ``(n, 2)`` array.

    After :meth:`compute`, ``indices`` lists the hull vertices as indices
    into ``points`` in counter-clockwise order, starting with the point of
    lowest y (and lowest x among those).
    """

    def __init__(self, points: ArrayLike) -> None:
        self.points = _as_points(points)
        self.indices: List[int] = []

    def _sorted_by_angle(self, base_idx: int, candidates: List[int]) -> List[int]:
        pts = self.points
        base = pts[base_idx]

        def compare(i: int, j: int) -> int:
            o = orient2d(base, pts[i], pts[j])
            if o > 0.0:
                return -1
            if o < 0.0:
                return 1
            di = float(np.sum((pts[i] - base) ** 2))
            dj = float(np.sum((pts[j] - base) ** 2))
            return (di > dj) - (di < dj)

        ordered = sorted(candidates, key=cmp_to_key(compare))

        # Of points on one ray from the base only the farthest is kept.
        kept: List[int] = []
        for idx in ordered:
            if kept and orient2d(base, pts[kept[-1]], pts[idx]) == 0.0:
                kept[-1] = idx
            else:
                kept.append(idx)
        return kept

    def compute(self) -> List[int]:
        """Compute the hull and return its vertex indices."""
        self.indices = []
        pts = self.points
        if len(pts) == 0:
            return self.indices

        position = min_point_yx(pts)
        base = pts[position]
        others = [
            i
            for i in range(len(pts))
            if i != position and not points_almost_equal(base, pts[i])
        ]
        if len(others) <= 1:
            self.indices = [position, *others]
            return self.indices

        ordered = [position, *self._sorted_by_angle(position, others)]

        unique: List[int] = []
        for idx in ordered:
            if not unique or not points_almost_equal(pts[unique[-1]], pts[idx]):
                unique.append(idx)
        if len(unique) <= 2:
            self.indices = unique
            return self.indices

        last_idx, first_idx = unique[0], unique[1]
        hull = [last_idx, first_idx]

        # Skip the leading points that do not turn left.
        rest = iter(unique[2:])
        start = next(
            (idx for idx in rest if left_turn(pts[last_idx], pts[first_idx], pts[idx])),
            None,
        )
        if start is None:
            self.indices = hull
            return self.indices

        hull.append(start)
        l_idx, m_idx = first_idx, start
        for curr in rest:
            if not left_turn(pts[m_idx], pts[curr], pts[last_idx]):
                continue
            while not left_turn(pts[l_idx], pts[m_idx], pts[curr]):
                ensure(len(hull) > 2, "convex hull stack exhausted")
                hull.pop()
                if len(hull) <= 1:
                    m_idx = l_idx
                    break
                m_idx = l_idx
                l_idx = hull[-2]
            hull.append(curr)
            l_idx, m_idx = m_idx, curr

        self.indices = hull
        return self.indices

    def verify_hull(self) -> bool:
        """True if every consecutive triple of hull vertices makes no right turn."""
        pts = self.points
        return all(
            orient2d(pts[a], pts[b], pts[c]) >= 0.0
            for a, b, c in zip(self.indices, self.indices[1:], self.indices[2:])
        )