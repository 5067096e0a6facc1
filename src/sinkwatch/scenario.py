# src/sinkwatch/scenario.py
"""End-to-end verification of the garbage collector's published metrics.

Waits for two consecutive fresh snapshots in the sink, checks each one on
its own, then checks that the second shows the collector made progress.

The first line observed may predate this run (the sink file survives
between runs), so by default it is consumed and discarded before the
snapshots that are actually checked.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from sinkwatch.contracts.updates import NO_BASELINE, RawUpdate, Sample
from sinkwatch.core.config import SinkWatchSettings
from sinkwatch.engine.clock import DEFAULT_CLOCK, Clock
from sinkwatch.engine.parser import parse_line
from sinkwatch.engine.validator import check_progression, check_sanity, require_keys
from sinkwatch.engine.waiter import UpdateSource, UpdateWaiter

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ScenarioResult:
    """The two checked snapshots and the start time they were checked against."""

    first: RawUpdate
    second: RawUpdate
    first_sample: Sample
    second_sample: Sample
    test_start_ms: int


def _checked_sample(update: RawUpdate, settings: SinkWatchSettings, test_start_ms: int) -> Sample:
    sample = parse_line(update.line, settings.metrics.prefix)
    logger.debug("Sink line received", version=update.version, line=update.line)
    logger.debug("Parsed sample", version=update.version, sample=sample)

    require_keys(sample, settings.metrics.expected_keys)
    check_sanity(sample, test_start_ms)
    return sample


def verify_sink_metrics(
    source: UpdateSource,
    settings: SinkWatchSettings,
    *,
    clock: Clock | None = None,
) -> ScenarioResult:
    """Run the full publish-and-progress check against a running tailer.

    Args:
        source: Tailer already observing settings.sink_path
        settings: Wait budget, metric prefix and expected keys
        clock: Time source; defaults to the system clock

    Returns:
        ScenarioResult for the two checked snapshots.

    Raises:
        UpdateTimeoutError: The sink stopped receiving updates.
        UpdateCancelledError: A wait was cancelled.
        MetricParseError: A snapshot contained a malformed metric.
        InvariantViolation: A snapshot failed key, sanity or progression checks.
    """
    clock = clock if clock is not None else DEFAULT_CLOCK
    waiter = UpdateWaiter.from_settings(source, settings.wait, clock=clock)

    test_start_ms = clock.time_ms()
    log = logger.bind(sink_path=str(settings.sink_path), test_start_ms=test_start_ms)
    log.info("Verifying sink metrics", max_wait_seconds=settings.wait.max_wait_seconds)

    baseline = NO_BASELINE
    if settings.discard_first_update:
        stale = waiter.wait(baseline)
        log.debug("Discarded initial sink line", version=stale.version)
        baseline = stale.version

    first = waiter.wait(baseline)
    first_sample = _checked_sample(first, settings, test_start_ms)

    second = waiter.wait(first.version)
    second_sample = _checked_sample(second, settings, test_start_ms)

    check_progression(first_sample, second_sample)
    log.info("Sink metrics verified", first_version=first.version, second_version=second.version)

    return ScenarioResult(
        first=first,
        second=second,
        first_sample=first_sample,
        second_sample=second_sample,
        test_start_ms=test_start_ms,
    )
