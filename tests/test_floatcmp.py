import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from approxbox.floatcmp import (
    MAX_ULPS,
    almost_equal,
    float_bits,
    float_from_bits,
    points_almost_equal,
    ulp_distance,
)

finite = st.floats(allow_nan=False, allow_infinity=False)


def _step(x, n, direction=math.inf):
    for _ in range(n):
        x = math.nextafter(x, direction)
    return x


def test_bits_of_one():
    assert float_bits(1.0) == 0x3FF0000000000000


def test_bits_of_negative_zero_is_sign_bit():
    assert float_bits(-0.0) == 1 << 63
    assert float_bits(0.0) == 0


@given(st.floats(allow_nan=False))
def test_bits_round_trip(x):
    assert float_from_bits(float_bits(x)) == x


@pytest.mark.parametrize("bits", [-1, 1 << 64])
def test_from_bits_rejects_out_of_range(bits):
    with pytest.raises(ValueError):
        float_from_bits(bits)


def test_zeros_are_zero_ulps_apart():
    assert ulp_distance(0.0, -0.0) == 0
    assert almost_equal(0.0, -0.0)


@given(finite, st.integers(min_value=0, max_value=20))
def test_distance_counts_steps(x, n):
    y = _step(x, n)
    if math.isinf(y):
        return_value = ulp_distance(x, y)
        assert return_value >= 0
    else:
        assert ulp_distance(x, y) == n
        assert ulp_distance(y, x) == n
        assert almost_equal(x, y) == (n <= MAX_ULPS)


@given(st.integers(min_value=0, max_value=10))
def test_distance_across_zero(n):
    below = _step(0.0, n, -math.inf)
    above = _step(0.0, n, math.inf)
    assert ulp_distance(below, above) == 2 * n


def test_nan_is_never_equal():
    nan = float("nan")
    assert not almost_equal(nan, nan)
    assert not almost_equal(nan, 1.0)
    assert not almost_equal(1.0, nan)


def test_custom_tolerance():
    x = 2.5
    y = _step(x, 10)
    assert not almost_equal(x, y)
    assert almost_equal(x, y, 10)
    assert not almost_equal(x, y, 9)


def test_points_almost_equal():
    p = [1.0, -3.0, 7.5]
    q = [_step(v, 2) for v in p]
    r = [p[0], p[1], _step(p[2], 50)]
    assert points_almost_equal(p, q)
    assert not points_almost_equal(p, r)


def test_points_dimension_mismatch():
    with pytest.raises(ValueError):
        points_almost_equal([1.0, 2.0], [1.0, 2.0, 3.0])