# tests/fixtures/__init__.py
"""Shared helpers for sinkwatch tests.

Available helpers:
- TEST_START_MS: wall time reported by the mock_clock fixture at t=0
- StaticSource / ScriptedSource: stand-ins for a FileTailer
"""

from tests.fixtures.sources import TEST_START_MS, ScriptedSource, StaticSource

__all__ = [
    "TEST_START_MS",
    "ScriptedSource",
    "StaticSource",
]
