# tests/unit/engine/test_clock.py
"""Tests for the Clock abstraction (SystemClock, MockClock, DEFAULT_CLOCK).

The Clock protocol lets UpdateWaiter's retry budget be tested without
sleeping. SystemClock delegates to the time module and Event.wait();
MockClock advances time programmatically.
"""

import threading
import time

import pytest

from sinkwatch.engine.clock import DEFAULT_CLOCK, Clock, MockClock, SystemClock


class TestClockProtocol:
    def test_default_clock_is_system_clock(self) -> None:
        assert isinstance(DEFAULT_CLOCK, SystemClock)

    def test_clock_protocol_not_runtime_checkable(self) -> None:
        """Clock protocol does not have @runtime_checkable decorator."""
        with pytest.raises(TypeError):
            isinstance(object(), Clock)  # type: ignore[misc]


class TestSystemClock:
    def test_monotonic_delegates_to_time_monotonic(self) -> None:
        clock = SystemClock()
        before = time.monotonic()
        result = clock.monotonic()
        after = time.monotonic()
        assert before <= result <= after

    def test_time_ms_is_epoch_milliseconds(self) -> None:
        clock = SystemClock()
        before = int(time.time() * 1000)
        result = clock.time_ms()
        after = int(time.time() * 1000) + 1
        assert before - 1 <= result <= after

    def test_wait_returns_true_when_event_already_set(self) -> None:
        event = threading.Event()
        event.set()
        assert SystemClock().wait(event, 10.0) is True

    def test_wait_returns_false_after_timeout(self) -> None:
        clock = SystemClock()
        start = time.monotonic()
        assert clock.wait(threading.Event(), 0.01) is False
        assert time.monotonic() - start >= 0.01

    def test_wait_interrupted_from_another_thread(self) -> None:
        event = threading.Event()
        timer = threading.Timer(0.05, event.set)
        timer.start()
        try:
            start = time.monotonic()
            assert SystemClock().wait(event, 10.0) is True
            assert time.monotonic() - start < 5.0
        finally:
            timer.cancel()


class TestMockClock:
    def test_default_start_is_zero(self) -> None:
        assert MockClock().monotonic() == 0.0

    def test_advance_moves_monotonic_time(self) -> None:
        clock = MockClock(start=10.0)
        clock.advance(2.5)
        assert clock.monotonic() == 12.5

    def test_advance_negative_raises(self) -> None:
        clock = MockClock()
        with pytest.raises(ValueError, match="negative"):
            clock.advance(-1.0)

    def test_time_ms_tracks_advance(self) -> None:
        clock = MockClock(start=5.0, wall_ms=1_000)
        assert clock.time_ms() == 1_000
        clock.advance(1.5)
        assert clock.time_ms() == 2_500

    def test_wait_advances_full_timeout(self) -> None:
        clock = MockClock()
        assert clock.wait(threading.Event(), 3.0) is False
        assert clock.monotonic() == 3.0
        assert clock.waits == [3.0]

    def test_wait_does_not_advance_when_event_set(self) -> None:
        clock = MockClock()
        event = threading.Event()
        event.set()
        assert clock.wait(event, 3.0) is True
        assert clock.monotonic() == 0.0
        assert clock.waits == [3.0]
