"""Greatest common divisor of integers."""

from __future__ import annotations

import operator

__all__ = ["gcd2", "gcd3"]


def _gcd_non_negative(a: int, b: int) -> int:
    while True:
        if a == 0 or a == b:
            return b
        if b == 0:
            return a
        if a > b:
            a %= b
        else:
            b %= a


def gcd2(a: int, b: int) -> int:
    """Greatest common divisor of two integers; ``gcd2(0, 0)`` is 0."""
    return _gcd_non_negative(abs(operator.index(a)), abs(operator.index(b)))


def gcd3(a: int, b: int, c: int) -> int:
    """Greatest common divisor of three integers."""
    a, b, c = (abs(operator.index(v)) for v in (a, b, c))
    if a == 0:
        return _gcd_non_negative(b, c)
    if b == 0:
        return _gcd_non_negative(a, c)
    if c == 0:
        return _gcd_non_negative(a, b)
    return _gcd_non_negative(a, _gcd_non_negative(b, c))