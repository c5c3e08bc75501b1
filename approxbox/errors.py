"""Exception type of the package and the checks that raise it."""

from __future__ import annotations

from typing import Any

__all__ = ["ApproxMVBBError", "ensure"]


class ApproxMVBBError(RuntimeError):
    """Raised when a geometric computation reaches an invalid state."""


def ensure(condition: Any, message: object) -> None:
    """Raise :class:`ApproxMVBBError` with ``message`` unless ``condition`` is true."""
    if not condition:
        raise ApproxMVBBError(str(message))