# src/sinkwatch/engine/clock.py
"""Clock abstraction for testable wait logic.

This module provides a Clock protocol that abstracts time access and
interruptible sleeping, enabling deterministic testing of the update
waiter's retry budget without real wall-clock delays.

Production code uses SystemClock (the default).
Tests inject MockClock to control time advancement.
"""

from __future__ import annotations

import threading
import time
from typing import Protocol


class Clock(Protocol):
    """Abstract clock for bounded waits.

    Implementations:
    - SystemClock: Uses time.monotonic() and Event.wait() (production)
    - MockClock: Returns controllable times, never blocks (testing)
    """

    def monotonic(self) -> float:
        """Return monotonic time in seconds.

        Must never go backwards. Used for elapsed-time diagnostics.
        """
        ...

    def time_ms(self) -> int:
        """Return wall-clock time in milliseconds since the epoch.

        Counters published by the collector are epoch milliseconds, so
        the harness records its start time on the same scale.
        """
        ...

    def wait(self, event: threading.Event, timeout: float) -> bool:
        """Block for up to ``timeout`` seconds or until ``event`` is set.

        Returns:
            True if the event was set (the wait was interrupted),
            False if the full timeout elapsed.
        """
        ...


class SystemClock:
    """Production clock backed by the time module and threading.Event."""

    def monotonic(self) -> float:
        return time.monotonic()

    def time_ms(self) -> int:
        return time.time_ns() // 1_000_000

    def wait(self, event: threading.Event, timeout: float) -> bool:
        return event.wait(timeout)


class MockClock:
    """Controllable clock for deterministic testing.

    wait() never blocks: it advances mock time by the full timeout unless
    the event is already set, in which case time stands still.

    Example:
        clock = MockClock(start=0.0)
        waiter = UpdateWaiter(source, max_attempts=3, delay_seconds=1.0, clock=clock)

        with pytest.raises(UpdateTimeoutError):
            waiter.wait()
        assert clock.monotonic() == 3.0
    """

    def __init__(self, start: float = 0.0, *, wall_ms: int = 0) -> None:
        """Initialize mock clock.

        Args:
            start: Initial monotonic time value (default 0.0).
            wall_ms: Wall-clock milliseconds reported at monotonic ``start``.
        """
        self._start = start
        self._current = start
        self._wall_ms = wall_ms
        self.waits: list[float] = []

    def monotonic(self) -> float:
        """Return current mock time."""
        return self._current

    def time_ms(self) -> int:
        """Return mock wall time, moving in step with monotonic time."""
        return self._wall_ms + int((self._current - self._start) * 1000)

    def wait(self, event: threading.Event, timeout: float) -> bool:
        """Record the wait and advance time unless already interrupted."""
        self.waits.append(timeout)
        if event.is_set():
            return True
        self.advance(timeout)
        return event.is_set()

    def advance(self, seconds: float) -> None:
        """Advance mock time by specified seconds.

        Raises:
            ValueError: If seconds is negative.
        """
        if seconds < 0:
            raise ValueError(f"Cannot advance time by negative amount: {seconds}")
        self._current += seconds


# Default clock for production use
DEFAULT_CLOCK: Clock = SystemClock()
