# src/sinkwatch/engine/waiter.py
"""UpdateWaiter: synchronous "next update newer than X" over a tailer.

The tailer publishes asynchronously; sequential scenario code wants to
block until something new arrives. The waiter polls the tailer's latest
snapshot up to max_attempts times, waiting delay_seconds between polls,
so the worst-case wait is max_attempts * delay_seconds.

Each wait() runs an explicit state machine:

    POLLING --(line present, version != baseline)--> SUCCEEDED
    POLLING --(attempt budget exhausted)-----------> TIMED_OUT
    POLLING --(cancel() during a delay)------------> CANCELLED

Delays go through an injected Clock so the budget can be tested without
sleeping, and through a threading.Event so another thread can cancel.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Protocol

import structlog

from sinkwatch.contracts.errors import UpdateCancelledError, UpdateTimeoutError
from sinkwatch.contracts.updates import NO_BASELINE, RawUpdate, WaitState
from sinkwatch.engine.clock import DEFAULT_CLOCK, Clock

if TYPE_CHECKING:
    from sinkwatch.core.config import WaitSettings

logger = structlog.get_logger(__name__)

DEFAULT_MAX_ATTEMPTS = 20
DEFAULT_DELAY_SECONDS = 5.0


class UpdateSource(Protocol):
    """Anything exposing a consistent (version, line) snapshot."""

    def latest(self) -> RawUpdate: ...


def is_newer(update: RawUpdate, baseline: int) -> bool:
    """Return True if ``update`` carries a line published after ``baseline``."""
    return update.line is not None and update.version != baseline


class UpdateWaiter:
    """Bounded, cancellable poll loop over an UpdateSource.

    Example:
        waiter = UpdateWaiter(tailer, max_attempts=20, delay_seconds=5.0)
        first = waiter.wait()
        second = waiter.wait(first.version)
    """

    def __init__(
        self,
        source: UpdateSource,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        delay_seconds: float = DEFAULT_DELAY_SECONDS,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the waiter.

        Args:
            source: Tailer (or stand-in) to poll
            max_attempts: Total number of polls per wait(), must be >= 1
            delay_seconds: Pause after each unsuccessful poll, must be >= 0
            clock: Time source; defaults to the system clock

        Raises:
            ValueError: If max_attempts or delay_seconds is out of range.
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
        if delay_seconds < 0:
            raise ValueError(f"delay_seconds must be >= 0, got {delay_seconds}")
        self._source = source
        self._max_attempts = max_attempts
        self._delay_seconds = delay_seconds
        self._clock = clock if clock is not None else DEFAULT_CLOCK
        self._cancel_event = threading.Event()
        self._state = WaitState.IDLE

    @classmethod
    def from_settings(
        cls,
        source: UpdateSource,
        settings: WaitSettings,
        *,
        clock: Clock | None = None,
    ) -> UpdateWaiter:
        """Factory from validated WaitSettings."""
        return cls(
            source,
            max_attempts=settings.max_attempts,
            delay_seconds=settings.delay_seconds,
            clock=clock,
        )

    @property
    def state(self) -> WaitState:
        """State reached by the most recent wait() (IDLE before any)."""
        return self._state

    @property
    def max_wait_seconds(self) -> float:
        return self._max_attempts * self._delay_seconds

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def cancel(self) -> None:
        """Interrupt the current or next wait(). Safe from any thread.

        Cancellation stays in effect until reset().
        """
        self._cancel_event.set()

    def reset(self) -> None:
        """Clear a previous cancel() so the waiter can be reused."""
        self._cancel_event.clear()
        self._state = WaitState.IDLE

    def wait(self, baseline: int = NO_BASELINE) -> RawUpdate:
        """Block until the source publishes a line newer than ``baseline``.

        Args:
            baseline: Version of the last update the caller consumed, or
                NO_BASELINE to accept the first observed update.

        Returns:
            The qualifying snapshot.

        Raises:
            UpdateTimeoutError: No qualifying update within max_attempts polls.
            UpdateCancelledError: cancel() was called while waiting.
        """
        self._state = WaitState.POLLING
        started = self._clock.monotonic()
        attempts = 0

        while self._state is WaitState.POLLING:
            update = self._source.latest()
            attempts += 1

            if is_newer(update, baseline):
                self._state = WaitState.SUCCEEDED
                logger.debug("Sink update received", baseline=baseline, version=update.version, attempts=attempts)
                return update

            if self._clock.wait(self._cancel_event, self._delay_seconds):
                self._state = WaitState.CANCELLED
            elif attempts >= self._max_attempts:
                self._state = WaitState.TIMED_OUT

        elapsed = self._clock.monotonic() - started
        if self._state is WaitState.CANCELLED:
            logger.warning("Wait for sink update cancelled", baseline=baseline, attempts=attempts, elapsed_seconds=elapsed)
            raise UpdateCancelledError(attempts, elapsed)

        logger.warning("Timed out waiting for sink update", baseline=baseline, attempts=attempts, elapsed_seconds=elapsed)
        raise UpdateTimeoutError(attempts, elapsed)


def wait_for_update(
    source: UpdateSource,
    baseline: int = NO_BASELINE,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    delay_seconds: float = DEFAULT_DELAY_SECONDS,
    clock: Clock | None = None,
) -> RawUpdate:
    """One-shot wait; see UpdateWaiter.wait()."""
    waiter = UpdateWaiter(source, max_attempts=max_attempts, delay_seconds=delay_seconds, clock=clock)
    return waiter.wait(baseline)
