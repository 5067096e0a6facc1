# src/sinkwatch/contracts/metrics.py
"""Names of the garbage collector counters published to the metrics sink.

The collector writes one snapshot per reporting period. Every counter name
shares GC_METRIC_PREFIX; write-ahead-log counters add ``Wal`` after it.
"""

GC_METRIC_PREFIX = "AccGc"

GC_STARTED = "AccGcStarted"
GC_FINISHED = "AccGcFinished"
GC_RUN_CYCLE_COUNT = "AccGcRunCycleCount"
GC_WAL_STARTED = "AccGcWalStarted"
GC_WAL_FINISHED = "AccGcWalFinished"

EXPECTED_GC_METRIC_KEYS: tuple[str, ...] = (
    "AccGcCandidates",
    "AccGcDeleted",
    "AccGcErrors",
    GC_FINISHED,
    "AccGcInUse",
    "AccGcPostOpDuration",
    GC_RUN_CYCLE_COUNT,
    GC_STARTED,
    "AccGcWalCandidates",
    "AccGcWalDeleted",
    "AccGcWalErrors",
    GC_WAL_FINISHED,
    "AccGcWalInUse",
    GC_WAL_STARTED,
)

# (started, finished) pairs that must be ordered within one snapshot.
SANITY_PAIRS: tuple[tuple[str, str], ...] = (
    (GC_STARTED, GC_FINISHED),
    (GC_WAL_STARTED, GC_WAL_FINISHED),
)

# Counters that must strictly increase between two reporting cycles.
PROGRESSION_COUNTERS: tuple[str, ...] = (
    GC_STARTED,
    GC_FINISHED,
    GC_RUN_CYCLE_COUNT,
)
