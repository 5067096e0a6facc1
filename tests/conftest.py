# tests/conftest.py
"""Shared test fixtures and helpers.

Fixtures:
- sink_path: Path of a (not yet created) sink file in tmp_path
- sink_writer: SinkWriter appending to sink_path
- mock_clock: MockClock starting at t=0 with a fixed wall time

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import os
from collections.abc import Iterator
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from sinkwatch.engine.clock import MockClock
from sinkwatch.testing import SinkWriter
from tests.fixtures.sources import TEST_START_MS


# =============================================================================
# FileTailer Cleanup Fixture (Thread Leak Prevention)
# =============================================================================


@pytest.fixture(autouse=True)
def _auto_stop_tailers() -> Iterator[None]:
    """Automatically stop every FileTailer created during a test.

    Tailer threads are daemons, but a test that forgets stop() would keep
    polling tmp_path files into later tests and muddy their logs.
    """
    from sinkwatch.engine.tailer import FileTailer

    created: list[FileTailer] = []
    original_init = FileTailer.__init__

    def tracking_init(self: FileTailer, *args, **kwargs) -> None:  # type: ignore[no-untyped-def]
        original_init(self, *args, **kwargs)
        created.append(self)

    FileTailer.__init__ = tracking_init  # type: ignore[method-assign]
    try:
        yield
    finally:
        FileTailer.__init__ = original_init  # type: ignore[method-assign]
        for tailer in created:
            tailer.stop(timeout=1.0)


# =============================================================================
# Sink Fixtures
# =============================================================================


@pytest.fixture
def sink_path(tmp_path: Path) -> Path:
    return tmp_path / "gc.metrics"


@pytest.fixture
def sink_writer(sink_path: Path) -> SinkWriter:
    return SinkWriter(sink_path)


@pytest.fixture
def mock_clock() -> MockClock:
    return MockClock(start=0.0, wall_ms=TEST_START_MS)


# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))
