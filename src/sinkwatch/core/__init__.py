# src/sinkwatch/core/__init__.py
"""Core infrastructure: Configuration, Logging."""

from sinkwatch.core.config import (
    MetricsSettings,
    SinkWatchSettings,
    TailerSettings,
    WaitSettings,
    load_settings,
)
from sinkwatch.core.logging import configure_logging, get_logger

__all__ = [
    "MetricsSettings",
    "SinkWatchSettings",
    "TailerSettings",
    "WaitSettings",
    "configure_logging",
    "get_logger",
    "load_settings",
]
