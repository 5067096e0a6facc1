"""Shared contracts for cross-boundary data types.

This package is a LEAF MODULE with no outbound dependencies to core/engine.
Settings classes are NOT re-exported here - import them from
sinkwatch.core.config.
"""

from sinkwatch.contracts.errors import (
    InvariantViolation,
    MetricParseError,
    SinkWatchError,
    UpdateCancelledError,
    UpdateTimeoutError,
)
from sinkwatch.contracts.metrics import (
    EXPECTED_GC_METRIC_KEYS,
    GC_FINISHED,
    GC_METRIC_PREFIX,
    GC_RUN_CYCLE_COUNT,
    GC_STARTED,
    GC_WAL_FINISHED,
    GC_WAL_STARTED,
    PROGRESSION_COUNTERS,
    SANITY_PAIRS,
)
from sinkwatch.contracts.updates import (
    INITIAL_UPDATE,
    NO_BASELINE,
    RawUpdate,
    Sample,
    WaitState,
)

__all__ = [
    "EXPECTED_GC_METRIC_KEYS",
    "GC_FINISHED",
    "GC_METRIC_PREFIX",
    "GC_RUN_CYCLE_COUNT",
    "GC_STARTED",
    "GC_WAL_FINISHED",
    "GC_WAL_STARTED",
    "INITIAL_UPDATE",
    "NO_BASELINE",
    "PROGRESSION_COUNTERS",
    "SANITY_PAIRS",
    "InvariantViolation",
    "MetricParseError",
    "RawUpdate",
    "Sample",
    "SinkWatchError",
    "UpdateCancelledError",
    "UpdateTimeoutError",
    "WaitState",
]
