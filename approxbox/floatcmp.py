"""Comparison of double precision numbers by units in the last place."""

from __future__ import annotations

import math
import struct
from typing import Iterable

__all__ = [
    "MAX_ULPS",
    "float_bits",
    "float_from_bits",
    "ulp_distance",
    "almost_equal",
    "points_almost_equal",
]

MAX_ULPS = 4
"""Default number of ULPs tolerated when comparing two numbers."""

_BIT_COUNT = 64
_SIGN_BIT_MASK = 1 << (_BIT_COUNT - 1)
_ALL_BITS = (1 << _BIT_COUNT) - 1


def float_bits(x: float) -> int:
    """Return the IEEE 754 bit pattern of ``x`` as an unsigned 64-bit integer."""
    return struct.unpack("<Q", struct.pack("<d", float(x)))[0]


def float_from_bits(bits: int) -> float:
    """Reinterpret an unsigned 64-bit integer as a double."""
    if not 0 <= bits <= _ALL_BITS:
        raise ValueError(f"bit pattern out of range for a 64-bit float: {bits}")
    return struct.unpack("<d", struct.pack("<Q", bits))[0]


def _sign_and_magnitude_to_biased(sam: int) -> int:
    if sam & _SIGN_BIT_MASK:
        return (~sam + 1) & _ALL_BITS
    return _SIGN_BIT_MASK | sam


def ulp_distance(a: float, b: float) -> int:
    """Number of representable doubles between ``a`` and ``b``.

    Positive and negative zero are zero ULPs apart.
    """
    biased_a = _sign_and_magnitude_to_biased(float_bits(a))
    biased_b = _sign_and_magnitude_to_biased(float_bits(b))
    return abs(biased_a - biased_b)


def almost_equal(a: float, b: float, max_ulps: int = MAX_ULPS) -> bool:
    """True if ``a`` and ``b`` are at most ``max_ulps`` ULPs apart; never for NaN."""
    if math.isnan(a) or math.isnan(b):
        return False
    return ulp_distance(a, b) <= max_ulps


def points_almost_equal(
    p: Iterable[float], q: Iterable[float], max_ulps: int = MAX_ULPS
) -> bool:
    """True if every coordinate of ``p`` is almost equal to the one of ``q``."""
    try:
        return all(almost_equal(a, b, max_ulps) for a, b in zip(p, q, strict=True))
    except ValueError as exc:
        raise ValueError("points must have the same dimension") from exc