"""Small, fast 64-bit pseudo random generators and simple distributions."""

from __future__ import annotations

import copy
import time
from typing import Iterator, Optional, Protocol

__all__ = [
    "DEFAULT_SEED",
    "UINT64_MAX",
    "SplitMix64",
    "XorShift128Plus",
    "XorShift1024Star",
    "AlmostUniformUIntDistribution",
    "AlmostUniformRealDistribution",
    "DefaultRandomGen",
]

_MASK64 = (1 << 64) - 1
UINT64_MAX = _MASK64
"""Largest value any of the generators can return."""

DEFAULT_SEED = 314159
"""Seed used by default throughout the package."""


class _Generator(Protocol):
    def __call__(self) -> int: ...


def _time_seed() -> int:
    return int(time.time()) & _MASK64


class _Uint64Generator:
    """Common behaviour of the 64-bit generators."""

    min_value = 0
    max_value = UINT64_MAX

    def __call__(self) -> int:  # pragma: no cover - overridden
        raise NotImplementedError

    def __iter__(self) -> Iterator[int]:
        while True:
            yield self()


class SplitMix64(_Uint64Generator):
    """Fixed-increment SplittableRandom generator with 64 bits of state."""

    def __init__(self, seed: int) -> None:
        self._x = 0
        self.seed(seed)

    def seed(self, seed: int) -> None:
        """Set the state to ``seed``."""
        self._x = int(seed) & _MASK64

    def __call__(self) -> int:
        self._x = (self._x + 0x9E3779B97F4A7C15) & _MASK64
        z = self._x
        z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & _MASK64
        z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _MASK64
        return z ^ (z >> 31)


class XorShift128Plus(_Uint64Generator):
    """xorshift128+ generator; seeded from the clock when no seed is given."""

    _JUMP = (0x8A5CD789635D2DFF, 0x121FD2155C472F96)

    def __init__(self, seed: Optional[int] = None) -> None:
        self._s = [0, 0]
        self.seed(_time_seed() if seed is None else seed)

    def seed(self, seed: int) -> None:
        """Seed both state words with the first output of SplitMix64(seed)."""
        value = SplitMix64(seed)()
        self._s = [value, value]

    def __call__(self) -> int:
        s1 = self._s[0]
        s0 = self._s[1]
        self._s[0] = s0
        s1 = (s1 ^ (s1 << 23)) & _MASK64
        self._s[1] = s1 ^ s0 ^ (s1 >> 18) ^ (s0 >> 5)
        return (self._s[1] + s0) & _MASK64

    def jump(self) -> None:
        """Advance the state as if by 2**64 calls."""
        s0 = 0
        s1 = 0
        for word in self._JUMP:
            for b in range(64):
                if word & (1 << b):
                    s0 ^= self._s[0]
                    s1 ^= self._s[1]
                self()
        self._s = [s0, s1]

    def __copy__(self) -> "XorShift128Plus":
        other = XorShift128Plus.__new__(XorShift128Plus)
        other._s = list(self._s)
        return other


class XorShift1024Star(_Uint64Generator):
    """xorshift1024* generator; seeded from the clock when no seed is given."""

    _JUMP = (
        0x84242F96ECA9C41D,
        0xA3C65B8776F96855,
        0x5B34A39F070B5837,
        0x4489AFFCE4F31A1E,
        0x2FFEEB0A48316F40,
        0xDC2D9891FE68C022,
        0x3659132BB12FEA70,
        0xAAC17D8EFA43CAB8,
        0xC4CB815590989B13,
        0x5EE975283D71C93B,
        0x691548C86C1BD540,
        0x7910C41D10A1E6A5,
        0x0B5FC64563B3E2A8,
        0x047F7684E9FC949D,
        0xB99181F2D8F685CA,
        0x284600E3F30E38C3,
    )

    def __init__(self, seed: Optional[int] = None) -> None:
        self._p = 0
        self._s = [0] * 16
        self.seed(_time_seed() if seed is None else seed)

    def seed(self, seed: int) -> None:
        """Fill every state word with the first output of SplitMix64(seed)."""
        value = SplitMix64(seed)()
        self._s = [value] * 16

    def __call__(self) -> int:
        s0 = self._s[self._p]
        self._p = (self._p + 1) & 15
        s1 = self._s[self._p]
        s1 = (s1 ^ (s1 << 31)) & _MASK64
        self._s[self._p] = s1 ^ s0 ^ (s1 >> 11) ^ (s0 >> 30)
        return (self._s[self._p] * 1181783497276652981) & _MASK64

    def jump(self) -> None:
        """Advance the state as if by 2**512 calls."""
        t = [0] * 16
        for word in self._JUMP:
            for b in range(64):
                if word & (1 << b):
                    t = [tj ^ self._s[(j + self._p) & 15] for j, tj in enumerate(t)]
                self()
        for j, value in enumerate(t):
            self._s[(j + self._p) & 15] = value

    def __copy__(self) -> "XorShift1024Star":
        other = XorShift1024Star.__new__(XorShift1024Star)
        other._p = self._p
        other._s = list(self._s)
        return other


def _unit_sample(generator: _Generator) -> float:
    low = getattr(generator, "min_value", 0)
    high = getattr(generator, "max_value", UINT64_MAX)
    return float(generator() - low) / float(high - low)


class AlmostUniformUIntDistribution:
    """Fast, portable and not exactly uniform distribution of unsigned integers."""

    def __init__(self, low: int, high: int) -> None:
        if low < 0 or high < 0:
            raise ValueError("bounds of an unsigned distribution must be non-negative")
        if high < low:
            raise ValueError(f"upper bound {high} is below lower bound {low}")
        self.low = int(low)
        self.high = int(high)
        self._range = self.high - self.low

    def __call__(self, generator: _Generator) -> int:
        value = int(_unit_sample(generator) * self._range + self.low)
        return min(max(value, self.low), self.high)


class AlmostUniformRealDistribution:
    """Fast, portable and not exactly uniform distribution of floats."""

    def __init__(self, low: float, high: float) -> None:
        self.low = float(low)
        self.high = float(high)
        self._range = self.high - self.low

    def __call__(self, generator: _Generator) -> float:
        return _unit_sample(generator) * self._range + self.low


DefaultRandomGen = XorShift128Plus

# Re-exported so callers can duplicate generator state with copy.copy.
copy_generator = copy.copy