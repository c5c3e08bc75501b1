import math

import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from approxbox.errors import ApproxMVBBError
from approxbox.min_area_rectangle import (
    Box2d,
    MinAreaRectangle,
    edge_angle,
    intersect_lines,
)


def test_edge_angle_range():
    assert edge_angle((0, 0), (0, 1)) == pytest.approx(math.pi / 2)
    assert edge_angle((0, 0), (0, -1)) == pytest.approx(1.5 * math.pi)
    assert edge_angle((1, 1), (2, 1)) == 0.0


def test_intersect_perpendicular_lines():
    result = intersect_lines((0, 0), 0.0, (2, 5), math.pi / 2)
    assert result == pytest.approx([2.0, 0.0], abs=1e-12)


def test_intersect_parallel_lines_raises():
    with pytest.raises(ApproxMVBBError):
        intersect_lines((0, 0), 0.0, (0, 1), 0.0)


def test_empty_point_set_gives_default_box():
    box = MinAreaRectangle([]).compute()
    assert box.area == 0.0
    assert box.u_length == 0.0
    assert box.p.tolist() == [0.0, 0.0]


def test_single_point():
    box = MinAreaRectangle([(2.0, -3.0)]).compute()
    assert box.p.tolist() == [2.0, -3.0]
    assert box.area == 0.0
    assert box.u_length == 0.0 and box.v_length == 0.0
    assert np.dot(box.u, box.v) == 0.0


def test_two_points():
    box = MinAreaRectangle([(1.0, 1.0), (4.0, 5.0)]).compute()
    assert box.p.tolist() == [1.0, 1.0]
    assert box.u_length == pytest.approx(5.0)
    assert box.v_length == 0.0
    assert box.area == 0.0


def test_axis_aligned_rectangle():
    pts = [(0, 0), (4, 0), (4, 2), (0, 2), (1, 1), (3, 0.5)]
    box = MinAreaRectangle(pts).compute()
    assert box.area == pytest.approx(8.0)


def test_rotated_square_matches_its_corners():
    angle = 0.3
    rot = np.array([[math.cos(angle), -math.sin(angle)], [math.sin(angle), math.cos(angle)]])
    square = np.array([(0, 0), (1, 0), (1, 1), (0, 1)], dtype=float) @ rot.T
    box = MinAreaRectangle(square).compute()
    aabb_area = float(np.prod(square.max(axis=0) - square.min(axis=0)))
    assert box.area < aabb_area
    corners = box.corners()
    for c in corners:
        assert min(np.linalg.norm(square - c, axis=1)) == pytest.approx(0.0, abs=1e-9)


def test_compute_is_repeatable():
    pts = [(0, 0), (3, 1), (2, 4), (-1, 2), (1, 1)]
    rect = MinAreaRectangle(pts)
    first = rect.compute().copy()
    second = rect.compute()
    assert first.area == second.area
    assert first.p.tolist() == second.p.tolist()


def test_box2d_corners_layout():
    box = Box2d(
        p=np.array([1.0, 1.0]),
        u=np.array([1.0, 0.0]),
        v=np.array([0.0, 1.0]),
        u_length=2.0,
        v_length=3.0,
    )
    assert box.corners().tolist() == [[1.0, 1.0], [3.0, 1.0], [3.0, 4.0], [1.0, 4.0]]


def _polygon_area(vertices):
    xs = vertices[:, 0]
    ys = vertices[:, 1]
    return 0.5 * abs(float(np.dot(xs, np.roll(ys, -1)) - np.dot(ys, np.roll(xs, -1))))


coords = st.integers(min_value=-30, max_value=30)
point_lists = st.lists(st.tuples(coords, coords), min_size=1, max_size=25)


@settings(max_examples=150, deadline=None)
@given(point_lists)
def test_rectangle_encloses_all_points(pts):
    rect = MinAreaRectangle(pts)
    box = rect.compute()
    arr = np.asarray(pts, dtype=float)
    tol = 1e-7

    assert np.dot(box.u, box.u) == pytest.approx(1.0)
    assert np.dot(box.v, box.v) == pytest.approx(1.0)
    assert abs(np.dot(box.u, box.v)) < 1e-9
    assert box.u[0] * box.v[1] - box.u[1] * box.v[0] > 0
    assert box.area == pytest.approx(box.u_length * box.v_length)

    rel = arr - box.p
    s = rel @ box.u
    t = rel @ box.v
    assert np.all(s >= -tol) and np.all(s <= box.u_length + tol)
    assert np.all(t >= -tol) and np.all(t <= box.v_length + tol)

    aabb_area = float(np.prod(arr.max(axis=0) - arr.min(axis=0)))
    assert box.area <= aabb_area + tol

    if len(rect.hull_indices) >= 3:
        hull_area = _polygon_area(arr[rect.hull_indices])
        assert box.area >= hull_area - tol