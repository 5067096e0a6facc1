# src/sinkwatch/engine/__init__.py
"""Tailing and validation engine.

- FileTailer: Background reader publishing the newest sink line
- UpdateWaiter: Bounded, cancellable wait for the next published line
- parse_line: Prefix-filtered ``key=value`` line parser
- check_*: Key presence, sanity and progression checks

Example:
    from sinkwatch.engine import FileTailer, UpdateWaiter, check_progression, parse_line

    with FileTailer(sink_path) as tailer:
        waiter = UpdateWaiter(tailer)
        first = waiter.wait()
        second = waiter.wait(first.version)

    check_progression(parse_line(first.line), parse_line(second.line))
"""

from sinkwatch.engine.clock import DEFAULT_CLOCK, Clock, MockClock, SystemClock
from sinkwatch.engine.parser import is_metric_token, parse_line
from sinkwatch.engine.tailer import FileTailer, tail_file
from sinkwatch.engine.validator import (
    check_keys_present,
    check_progression,
    check_sanity,
    missing_keys,
    require_keys,
)
from sinkwatch.engine.waiter import UpdateSource, UpdateWaiter, wait_for_update

__all__ = [
    "DEFAULT_CLOCK",
    "Clock",
    "FileTailer",
    "MockClock",
    "SystemClock",
    "UpdateSource",
    "UpdateWaiter",
    "check_keys_present",
    "check_progression",
    "check_sanity",
    "is_metric_token",
    "missing_keys",
    "parse_line",
    "require_keys",
    "tail_file",
    "wait_for_update",
]
