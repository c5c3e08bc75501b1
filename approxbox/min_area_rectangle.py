"""Minimum area enclosing rectangle by rotating calipers."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Sequence, Union

import numpy as np

from approxbox.angles import map_to_2pi
from approxbox.convex_hull import ConvexHull2D
from approxbox.errors import ApproxMVBBError, ensure

__all__ = ["edge_angle", "intersect_lines", "Box2d", "MinAreaRectangle"]

ArrayLike = Union[np.ndarray, Sequence[float]]


def edge_angle(a: ArrayLike, b: ArrayLike) -> float:
    """Angle in [0, 2*pi) of the direction from ``a`` to ``b``."""
    return map_to_2pi(math.atan2(float(b[1]) - float(a[1]), float(b[0]) - float(a[0])))


def intersect_lines(
    p1: ArrayLike, angle1: float, p2: ArrayLike, angle2: float
) -> np.ndarray:
    """Intersection of the line through ``p1`` at ``angle1`` with the one through ``p2`` at ``angle2``."""
    d1 = np.array([math.cos(angle1), math.sin(angle1)])
    d2 = np.array([math.cos(angle2), math.sin(angle2)])
    a = np.asarray(p1, dtype=float)
    b = np.asarray(p2, dtype=float)
    det = d1[0] * (-d2[1]) - d1[1] * (-d2[0])
    if det == 0.0:
        raise ApproxMVBBError("lines are parallel and do not intersect")
    diff = b - a
    t = (diff[0] * (-d2[1]) - diff[1] * (-d2[0])) / det
    return a + t * d1


def _zero2() -> np.ndarray:
    return np.zeros(2)


@dataclass
class Box2d:
    """Rectangle ``p + s*u + t*v`` with ``s`` in [0, u_length], ``t`` in [0, v_length].

    After :meth:`MinAreaRectangle.compute`, ``u`` and ``v`` are orthonormal
    and form a right-handed system.
    """

    p: np.ndarray = field(default_factory=_zero2)
    u: np.ndarray = field(default_factory=_zero2)
    v: np.ndarray = field(default_factory=_zero2)
    area: float = 0.0
    u_length: float = 0.0
    v_length: float = 0.0

    def corners(self) -> np.ndarray:
        """The four corners, counter-clockwise, starting at ``p``."""
        du = self.u * self.u_length
        dv = self.v * self.v_length
        return np.array([self.p, self.p + du, self.p + du + dv, self.p + dv])

    def copy(self) -> "Box2d":
        """Independent copy of this box."""
        return Box2d(
            self.p.copy(), self.u.copy(), self.v.copy(), self.area, self.u_length, self.v_length
        )


@dataclass
class _Caliper:
    idx: int = 0
    pt_idx: int = 0
    angle: float = 0.0


class MinAreaRectangle:
    """Smallest rectangle enclosing points given as rows of an ``(n, 2)`` array."""

    def __init__(self, points: Sequence[Sequence[float]]) -> None:
        self._hull = ConvexHull2D(points)
        self.points = self._hull.points
        self.min_rectangle = Box2d()
        self.hull_indices: List[int] = []
        self._angles: List[float] = []

    def compute(self) -> Box2d:
        """Compute and return the minimum area rectangle."""
        self.min_rectangle = Box2d()
        if len(self.points) == 0:
            return self.min_rectangle
        self._hull.compute()
        ensure(self._hull.verify_hull(), "Convex hull not ok!")
        self._compute_rectangle()
        self._adjust_rectangle()
        return self.min_rectangle

    def _compute_rectangle(self) -> None:
        pts = self.points
        self.hull_indices = list(self._hull.indices)
        hull = self.hull_indices
        n = len(hull)
        box = self.min_rectangle
        if n == 0:
            return
        if n == 1:
            box.p = pts[hull[0]].copy()
            box.u = np.zeros(2)
            box.v = np.zeros(2)
            return
        if n == 2:
            box.p = pts[hull[0]].copy()
            box.u = pts[hull[1]] - pts[hull[0]]
            box.v = np.zeros(2)
            return

        self._angles = [edge_angle(pts[hull[i]], pts[hull[(i + 1) % n]]) for i in range(n)]

        calipers = [_Caliper(0, hull[0]) for _ in range(4)]
        self._update_calipers(0, calipers)
        best = self._box(calipers)
        for edge in range(1, n):
            self._update_calipers(edge, calipers)
            candidate = self._box(calipers)
            if candidate.area < best.area:
                best = candidate
        self.min_rectangle = best

    def _update_calipers(self, edge: int, calipers: List[_Caliper]) -> None:
        angle = self._angles[edge]
        first = calipers[0]
        first.idx = edge
        first.pt_idx = self.hull_indices[edge]
        first.angle = angle
        for k, caliper in enumerate(calipers[1:], start=1):
            caliper.angle = map_to_2pi(angle + k * 0.5 * math.pi)
            self._find_vertex(caliper)

    def _find_vertex(self, caliper: _Caliper) -> None:
        """Move the caliper to the hull vertex where it forms a tangent."""
        match = caliper.angle
        angles = self._angles
        n = len(self.hull_indices)
        curr_idx = caliper.idx
        curr_angle = angles[curr_idx]
        found = False
        for _ in range(n):
            curr_idx = (curr_idx + 1) % n
            next_angle = angles[curr_idx]
            if next_angle > curr_angle:
                found = curr_angle < match <= next_angle
            else:
                found = abs(curr_angle - next_angle) > 1e-10 and (
                    curr_angle < match or match <= next_angle
                )
            curr_angle = next_angle
            if found:
                break
        if not found:
            listed = ",".join(str(a) for a in angles)
            raise ApproxMVBBError(
                f"Could not find vertex with angle greater than: {match} in angles: {listed}"
            )
        caliper.idx = curr_idx
        caliper.pt_idx = self.hull_indices[curr_idx]

    def _box(self, c: List[_Caliper]) -> Box2d:
        pts = self.points
        corner_ab = intersect_lines(pts[c[0].pt_idx], c[0].angle, pts[c[1].pt_idx], c[1].angle)
        corner_dc = intersect_lines(pts[c[3].pt_idx], c[3].angle, pts[c[2].pt_idx], c[2].angle)
        p = intersect_lines(pts[c[0].pt_idx], c[0].angle, pts[c[3].pt_idx], c[3].angle)
        u = corner_ab - p
        v = corner_dc - p
        area = float(np.linalg.norm(u) * np.linalg.norm(v))
        return Box2d(p=p, u=u, v=v, area=area)

    def _adjust_rectangle(self) -> None:
        """Normalize ``u`` and ``v`` into a right-handed orthonormal system."""
        box = self.min_rectangle
        u_len = float(np.linalg.norm(box.u))
        v_len = float(np.linalg.norm(box.v))
        p = box.p.copy()
        if u_len == 0.0 and v_len == 0.0:
            u_dir = np.array([1.0, 0.0])
            v_dir = np.array([0.0, 1.0])
        elif u_len >= v_len:
            u_dir = box.u / u_len
            v_dir = np.array([-u_dir[1], u_dir[0]])
            if float(np.dot(box.v, v_dir)) < 0.0:
                p = p + box.v
        else:
            v_dir = box.v / v_len
            u_dir = np.array([v_dir[1], -v_dir[0]])
            if float(np.dot(box.u, u_dir)) < 0.0:
                p = p + box.u
        box.p = p
        box.u = u_dir
        box.v = v_dir
        box.u_length = u_len
        box.v_length = v_len
        box.area = u_len * v_len