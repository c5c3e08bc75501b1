"""Mapping of angles onto canonical ranges."""

from __future__ import annotations

import math

__all__ = ["map_to_pi", "map_to_2pi", "relative_angle_pi", "relative_angle_2pi"]

_TWO_PI = 2.0 * math.pi


def map_to_pi(x: float) -> float:
    """Map an angle onto the range [-pi, pi]."""
    return x - math.floor(x / _TWO_PI + 0.5) * math.pi * 2.0


def map_to_2pi(x: float) -> float:
    """Map an angle onto the range [0, 2*pi]."""
    return x - math.floor(x / _TWO_PI) * math.pi * 2.0


def relative_angle_pi(angle: float, angle2: float) -> float:
    """Angle from ``angle`` to ``angle2`` in [-pi, pi]."""
    return map_to_pi(angle2 - angle)


def relative_angle_2pi(angle: float, angle2: float) -> float:
    """Angle from ``angle`` to ``angle2`` in [0, 2*pi]."""
    return map_to_2pi(angle2 - angle)