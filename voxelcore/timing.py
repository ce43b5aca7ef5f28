"""Frame time measurement shared between the render loop and its readers."""

from __future__ import annotations

import time


class DeltaTime:
    """Read handle on the most recently measured frame time."""

    __slots__ = ("_nanos",)

    def __init__(self, nanoseconds: int = 0) -> None:
        self._nanos = int(nanoseconds)

    def get(self) -> float:
        """Return the last frame time in seconds."""
        return self._nanos / 1_000_000_000.0

    def _store(self, nanoseconds: int) -> None:
        self._nanos = int(nanoseconds)

    def __float__(self) -> float:
        return self.get()

    def __repr__(self) -> str:
        return str(self.get())


class DeltaTimeMeter:
    """Measures the time that passes between two calls of :meth:`update`."""

    def __init__(self) -> None:
        self._last_update = time.perf_counter_ns()
        self._current = DeltaTime()

    def update(self) -> None:
        """Record the time elapsed since the previous update."""
        now = time.perf_counter_ns()
        self._current._store(now - self._last_update)
        self._last_update = time.perf_counter_ns()

    def reader(self) -> DeltaTime:
        """Return a handle that always sees the latest recorded frame time."""
        return self._current