# src/sinkwatch/testing/__init__.py
"""Test infrastructure for sink verification.

Factories for building sink lines and samples the way the collector's
file sink writes them, plus a writer that plays the collector's part.

Usage:
    from sinkwatch.testing import SinkWriter, make_gc_sample, make_metric_line

    writer = SinkWriter(tmp_path / "gc.metrics")
    writer.append(make_metric_line(make_gc_sample(started=100, finished=110, run_cycle=1)))
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from sinkwatch.contracts.metrics import (
    EXPECTED_GC_METRIC_KEYS,
    GC_FINISHED,
    GC_RUN_CYCLE_COUNT,
    GC_STARTED,
    GC_WAL_FINISHED,
    GC_WAL_STARTED,
)
from sinkwatch.contracts.updates import Sample

# Record context the file sink prepends to every line; none of it is a metric.
DEFAULT_CONTEXT: dict[str, str] = {
    "Context": "accumulo",
    "ProcessName": "GarbageCollector",
    "Hostname": "gc-host",
}


def make_gc_sample(
    *,
    started: int = 1_000,
    finished: int = 1_010,
    run_cycle: int = 1,
    wal_started: int | None = None,
    wal_finished: int | None = None,
    **overrides: int,
) -> Sample:
    """Build a complete garbage collector sample.

    Every expected key is present; counters not named default to 0.
    Write-ahead-log started/finished default to the primary pair.
    """
    sample: Sample = dict.fromkeys(EXPECTED_GC_METRIC_KEYS, 0)
    sample[GC_STARTED] = started
    sample[GC_FINISHED] = finished
    sample[GC_RUN_CYCLE_COUNT] = run_cycle
    sample[GC_WAL_STARTED] = started if wal_started is None else wal_started
    sample[GC_WAL_FINISHED] = finished if wal_finished is None else wal_finished
    sample.update(overrides)
    return sample


def make_metric_line(
    metrics: Mapping[str, int | str],
    *,
    context: Mapping[str, str] | None = None,
    timestamp: int = 1_700_000_000_000,
) -> str:
    """Render one file sink record (no trailing newline).

    Format: ``<timestamp> accumulo.gc: <context fields>, <metric fields>``.
    The record header is glued onto the first field, so at least one
    context field is required to keep every metric parseable.

    Raises:
        ValueError: If ``context`` is empty.
    """
    if context is not None and not context:
        raise ValueError("context must contain at least one field")
    fields = {**(DEFAULT_CONTEXT if context is None else context), **metrics}
    body = ", ".join(f"{key}={value}" for key, value in fields.items())
    return f"{timestamp} accumulo.gc: {body}"


class SinkWriter:
    """Append records to a sink file like the collector's file sink does."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.lines_written = 0

    def append(self, line: str) -> None:
        with self.path.open("a", encoding="utf-8") as f:
            f.write(line + "\n")
            f.flush()
        self.lines_written += 1

    def append_sample(self, sample: Mapping[str, int]) -> str:
        """Render ``sample`` as a sink line, append it, and return the line."""
        line = make_metric_line(sample)
        self.append(line)
        return line
