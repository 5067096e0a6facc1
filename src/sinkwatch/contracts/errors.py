# src/sinkwatch/contracts/errors.py
"""Failure taxonomy for sink verification.

Every condition here is surfaced to the caller. The only failures the
harness absorbs are transient read errors inside the tailer, which are
treated as "no update yet" and never reach this module.
"""

from typing import Literal

CheckKind = Literal["keys", "sanity", "progression"]


class SinkWatchError(Exception):
    """Base class for all sinkwatch failures."""


class UpdateTimeoutError(SinkWatchError):
    """No qualifying update appeared within the attempt budget.

    Attributes:
        attempts: Number of polls made before giving up
        elapsed_seconds: Total time spent waiting, measured by the waiter's clock
    """

    def __init__(self, attempts: int, elapsed_seconds: float) -> None:
        self.attempts = attempts
        self.elapsed_seconds = elapsed_seconds
        super().__init__(f"Sink update not received after {attempts} tries in {elapsed_seconds:.1f}s")


class UpdateCancelledError(SinkWatchError):
    """Waiting for an update was interrupted by a cancel request."""

    def __init__(self, attempts: int, elapsed_seconds: float) -> None:
        self.attempts = attempts
        self.elapsed_seconds = elapsed_seconds
        super().__init__(f"Wait for sink update cancelled after {attempts} tries in {elapsed_seconds:.1f}s")


class MetricParseError(SinkWatchError):
    """A prefixed metric token does not have the ``key=integer`` shape.

    A malformed metric line means the producer is broken or incompatible,
    so this is fatal rather than skipped.

    Attributes:
        token: The offending token, already trimmed
        reason: What was wrong with it
    """

    def __init__(self, token: str, reason: str) -> None:
        self.token = token
        self.reason = reason
        super().__init__(f"Malformed metric token {token!r}: {reason}")


class InvariantViolation(SinkWatchError):
    """A key-presence, sanity or progression check failed.

    Attributes:
        check: Which family of check failed
        subject: The counter, counter pair, or key set that broke
        values: The values involved, keyed by a descriptive label
    """

    def __init__(
        self,
        check: CheckKind,
        subject: str,
        message: str,
        *,
        values: dict[str, int | None] | None = None,
    ) -> None:
        self.check = check
        self.subject = subject
        self.values = values or {}
        detail = ", ".join(f"{k}={v}" for k, v in self.values.items())
        suffix = f" ({detail})" if detail else ""
        super().__init__(f"{check} check failed for {subject}: {message}{suffix}")
