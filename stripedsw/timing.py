"""Simple elapsed-time measurement."""

from __future__ import annotations

from time import perf_counter


class Timer:
    """Measures seconds elapsed since the last call to :meth:`start`."""

    def __init__(self) -> None:
        self._started: float | None = None

    def start(self) -> None:
        """Record the current time as the starting point."""
        self._started = perf_counter()

    def elapsed(self) -> float:
        """Return the seconds elapsed since :meth:`start`."""
        if self._started is None:
            raise RuntimeError("timer has not been started")
        return perf_counter() - self._started