"""Unit quaternions describing rotations in three dimensions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

import numpy as np

__all__ = ["Quaternion"]

ArrayLike = Union[np.ndarray, "list[float]", "tuple[float, ...]"]


@dataclass(frozen=True)
class Quaternion:
    """Quaternion ``w + x*i + y*j + z*k``; the arguments are in the order w, x, y, z."""

    w: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __post_init__(self) -> None:
        for name in ("w", "x", "y", "z"):
            object.__setattr__(self, name, float(getattr(self, name)))

    @classmethod
    def identity(cls) -> "Quaternion":
        """The rotation that leaves every vector unchanged."""
        return cls(1.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_matrix(cls, matrix: ArrayLike) -> "Quaternion":
        """Quaternion of the rotation given by a 3x3 rotation matrix."""
        m = np.asarray(matrix, dtype=float)
        if m.shape != (3, 3):
            raise ValueError(f"rotation matrix must be 3x3, got shape {m.shape}")
        trace = m[0, 0] + m[1, 1] + m[2, 2]
        if trace > 0.0:
            s = math.sqrt(trace + 1.0)
            w = 0.5 * s
            s = 0.5 / s
            return cls(
                w,
                (m[2, 1] - m[1, 2]) * s,
                (m[0, 2] - m[2, 0]) * s,
                (m[1, 0] - m[0, 1]) * s,
            )
        i = 0
        if m[1, 1] > m[0, 0]:
            i = 1
        if m[2, 2] > m[i, i]:
            i = 2
        j = (i + 1) % 3
        k = (j + 1) % 3
        s = math.sqrt(m[i, i] - m[j, j] - m[k, k] + 1.0)
        v = [0.0, 0.0, 0.0]
        v[i] = 0.5 * s
        s = 0.5 / s
        w = (m[k, j] - m[j, k]) * s
        v[j] = (m[j, i] + m[i, j]) * s
        v[k] = (m[k, i] + m[i, k]) * s
        return cls(w, *v)

    @property
    def vec(self) -> np.ndarray:
        """The imaginary part (x, y, z)."""
        return np.array([self.x, self.y, self.z])

    @property
    def coeffs(self) -> np.ndarray:
        """All four components in the order w, x, y, z."""
        return np.array([self.w, self.x, self.y, self.z])

    def squared_norm(self) -> float:
        """Sum of the squared components."""
        return self.w * self.w + self.x * self.x + self.y * self.y + self.z * self.z

    def norm(self) -> float:
        """Euclidean length of the four components."""
        return math.sqrt(self.squared_norm())

    def normalized(self) -> "Quaternion":
        """This quaternion scaled to unit length."""
        n = self.norm()
        if n == 0.0:
            raise ValueError("cannot normalize a zero quaternion")
        return Quaternion(self.w / n, self.x / n, self.y / n, self.z / n)

    def conjugate(self) -> "Quaternion":
        """The quaternion with negated imaginary part."""
        return Quaternion(self.w, -self.x, -self.y, -self.z)

    def inverse(self) -> "Quaternion":
        """Multiplicative inverse; for unit quaternions the inverse rotation."""
        n2 = self.squared_norm()
        if n2 == 0.0:
            raise ValueError("a zero quaternion has no inverse")
        return Quaternion(self.w / n2, -self.x / n2, -self.y / n2, -self.z / n2)

    def to_matrix(self) -> np.ndarray:
        """3x3 rotation matrix; the quaternion is assumed to have unit length."""
        tx, ty, tz = 2.0 * self.x, 2.0 * self.y, 2.0 * self.z
        twx, twy, twz = tx * self.w, ty * self.w, tz * self.w
        txx, txy, txz = tx * self.x, ty * self.x, tz * self.x
        tyy, tyz, tzz = ty * self.y, tz * self.y, tz * self.z
        return np.array(
            [
                [1.0 - (tyy + tzz), txy - twz, txz + twy],
                [txy + twz, 1.0 - (txx + tzz), tyz - twx],
                [txz - twy, tyz + twx, 1.0 - (txx + tyy)],
            ]
        )

    def rotate(self, v: ArrayLike) -> np.ndarray:
        """Rotate the 3-vector ``v``; the quaternion is assumed to have unit length."""
        vector = np.asarray(v, dtype=float)
        if vector.shape != (3,):
            raise ValueError(f"expected a 3-vector, got shape {vector.shape}")
        q = self.vec
        uv = np.cross(q, vector)
        uv = uv + uv
        return vector + self.w * uv + np.cross(q, uv)

    def __mul__(self, other: object):
        """Hamilton product with a quaternion, or rotation of a 3-vector."""
        if isinstance(other, Quaternion):
            w1, x1, y1, z1 = self.w, self.x, self.y, self.z
            w2, x2, y2, z2 = other.w, other.x, other.y, other.z
            return Quaternion(
                w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
                w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
                w1 * y2 + y1 * w2 + z1 * x2 - x1 * z2,
                w1 * z2 + z1 * w2 + x1 * y2 - y1 * x2,
            )
        if isinstance(other, (np.ndarray, list, tuple)):
            return self.rotate(other)
        return NotImplemented