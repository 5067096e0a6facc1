# src/sinkwatch/engine/validator.py
"""Consistency checks over parsed sink samples.

Three kinds of check, all pure:

- key presence: every expected metric was published
- sanity: within one sample, each started/finished pair is ordered and
  no earlier than the moment the harness started watching
- progression: between two reporting cycles, the collector actually ran
  again, so its started/finished/run-cycle counters all moved forward

Progression is strict. A collector that completes zero cycles between two
observations fails the check; that is a timing assumption of the harness
(the poll budget must cover at least one collection period).
"""

from collections.abc import Iterable

import structlog

from sinkwatch.contracts.errors import CheckKind, InvariantViolation
from sinkwatch.contracts.metrics import PROGRESSION_COUNTERS, SANITY_PAIRS
from sinkwatch.contracts.updates import Sample

logger = structlog.get_logger(__name__)


def missing_keys(sample: Sample, expected_keys: Iterable[str]) -> list[str]:
    """Return the expected keys absent from ``sample``, sorted."""
    return sorted(key for key in set(expected_keys) if key not in sample)


def check_keys_present(sample: Sample, expected_keys: Iterable[str]) -> bool:
    """Return True iff every expected key exists in the sample."""
    return all(key in sample for key in expected_keys)


def require_keys(sample: Sample, expected_keys: Iterable[str]) -> None:
    """Raise if any expected key is absent.

    Raises:
        InvariantViolation: Listing every missing key.
    """
    missing = missing_keys(sample, expected_keys)
    if missing:
        raise InvariantViolation("keys", ", ".join(missing), f"{len(missing)} expected metric(s) not published")


def _counter(sample: Sample, name: str, check: CheckKind) -> int:
    try:
        return sample[name]
    except KeyError:
        raise InvariantViolation(check, name, "counter missing from sample") from None


def check_sanity(sample: Sample, test_start: int) -> None:
    """Validate started/finished ordering within one reporting cycle.

    For the primary and the write-ahead-log pair:
    ``started >= test_start`` and ``finished >= started``.

    Args:
        sample: One parsed snapshot.
        test_start: Harness start time, same unit as the counters.

    Raises:
        InvariantViolation: Naming the offending pair and its values.
    """
    for started_key, finished_key in SANITY_PAIRS:
        pair = f"{started_key}/{finished_key}"
        started = _counter(sample, started_key, "sanity")
        finished = _counter(sample, finished_key, "sanity")
        values: dict[str, int | None] = {started_key: started, finished_key: finished, "test_start": test_start}

        if started < test_start:
            raise InvariantViolation("sanity", pair, "started before the test began", values=values)
        if finished < started:
            raise InvariantViolation("sanity", pair, "finished before it started", values=values)

    logger.debug("Sample passed sanity check", test_start=test_start)


def check_progression(earlier: Sample, later: Sample) -> None:
    """Validate that the progression counters strictly increased.

    Raises:
        InvariantViolation: Naming the first counter that did not increase.
    """
    for name in PROGRESSION_COUNTERS:
        before = _counter(earlier, name, "progression")
        after = _counter(later, name, "progression")
        if after <= before:
            raise InvariantViolation(
                "progression",
                name,
                "counter did not increase between cycles",
                values={"earlier": before, "later": after},
            )

    logger.debug("Samples passed progression check", counters=list(PROGRESSION_COUNTERS))
