# src/sinkwatch/contracts/updates.py
"""Types exchanged between the tailer, the waiter and their callers."""

from dataclasses import dataclass
from enum import StrEnum

# Mapping of metric name to value for one parsed sink line.
type Sample = dict[str, int]

# Baseline meaning "accept the very first observed update".
NO_BASELINE = -1


@dataclass(frozen=True, slots=True)
class RawUpdate:
    """One published observation of the sink file.

    The tailer replaces its snapshot as a whole, so a reader holding a
    RawUpdate always sees a version and the line it was published with.

    Attributes:
        version: Publish counter, 0 before anything was observed
        line: Newest non-empty line, None until the first publish
    """

    version: int
    line: str | None


INITIAL_UPDATE = RawUpdate(version=0, line=None)


class WaitState(StrEnum):
    """Lifecycle of a single UpdateWaiter.wait() call."""

    IDLE = "idle"
    POLLING = "polling"
    SUCCEEDED = "succeeded"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"
