# src/sinkwatch/engine/parser.py
"""Parser for metrics file sink records.

The file sink writes each record as one line of comma separated
``key=value`` fields, mixing record context (hostname, context name, ...)
with the metrics themselves:

    1700000000000 accumulo.gc: Context=accumulo, Hostname=gc1, AccGcStarted=1700000000123, ...

Only fields whose name starts with the configured prefix are metrics we
care about. Everything else is filtered out by is_metric_token() before
any parsing is attempted, so a malformed *metric* token can still be
reported as a hard failure.
"""

import re

from sinkwatch.contracts.errors import MetricParseError
from sinkwatch.contracts.metrics import GC_METRIC_PREFIX
from sinkwatch.contracts.updates import Sample

FIELD_SEPARATOR = ","
KEY_VALUE_SEPARATOR = "="

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def is_metric_token(token: str, prefix: str = GC_METRIC_PREFIX) -> bool:
    """Return True if a trimmed token names a metric under ``prefix``."""
    return token.startswith(prefix)


def parse_value(token: str, raw: str) -> int:
    """Parse a metric value as a signed 64-bit integer.

    Python's int() is more permissive than the sink format (underscores,
    unicode digits), so the shape is checked explicitly first.

    Raises:
        MetricParseError: If the value is not a base-10 integer in range.
    """
    text = raw.strip()
    if not _INT_PATTERN.fullmatch(text):
        raise MetricParseError(token, f"value {text!r} is not an integer")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise MetricParseError(token, f"value {text} is outside the 64-bit range")
    return value


def parse_line(line: str | None, prefix: str = GC_METRIC_PREFIX) -> Sample:
    """Extract the metrics starting with ``prefix`` from one sink line.

    Args:
        line: Raw sink line. None or empty yields an empty sample.
        prefix: Metric name prefix to keep.

    Returns:
        Mapping of metric name to value. If a metric repeats, the last
        occurrence wins.

    Raises:
        MetricParseError: If a prefixed token lacks ``=`` or its value is
            not an integer.
    """
    if not line:
        return {}

    sample: Sample = {}
    for field in line.split(FIELD_SEPARATOR):
        token = field.strip()
        if not is_metric_token(token, prefix):
            continue
        key, sep, raw_value = token.partition(KEY_VALUE_SEPARATOR)
        if not sep:
            raise MetricParseError(token, f"missing {KEY_VALUE_SEPARATOR!r}")
        sample[key.strip()] = parse_value(token, raw_value)
    return sample
