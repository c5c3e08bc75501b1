"""Wall-clock stopwatch with a high resolution clock."""

from __future__ import annotations

import time

__all__ = ["CPUTimer"]


class CPUTimer:
    """Measures the time elapsed since :meth:`start` was last called."""

    def __init__(self) -> None:
        self._start_ns = time.perf_counter_ns()

    def start(self) -> None:
        """Restart the measurement."""
        self._start_ns = time.perf_counter_ns()

    def elapsed(self) -> float:
        """Elapsed time in nanoseconds."""
        return float(time.perf_counter_ns() - self._start_ns)

    def elapsed_sec(self) -> float:
        """Elapsed time in seconds."""
        return self.elapsed() / 1e9

    def elapsed_min(self) -> float:
        """Elapsed time in minutes."""
        return self.elapsed() / 6e10

    def elapsed_millisec(self) -> float:
        """Elapsed time in milliseconds."""
        return self.elapsed() / 1e6

    def __enter__(self) -> "CPUTimer":
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None