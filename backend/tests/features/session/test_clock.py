"""
Tests for SessionClock.

Ticks land on start + n * interval, and nothing fires after stop().
"""

import pytest

from nrg.shared.scheduling import ManualScheduler
from nrg.features.session import SessionClock


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def clock(scheduler):
    return SessionClock(scheduler, interval_seconds=1.0)


class TestSessionClock:

    def test_ticks_once_per_interval(self, scheduler, clock):
        elapsed = []
        clock.start(elapsed.append)
        scheduler.advance(5.0)

        assert elapsed == [1.0, 2.0, 3.0, 4.0, 5.0]
        assert clock.ticks == 5

    def test_no_drift_with_fractional_advances(self, scheduler, clock):
        elapsed = []
        clock.start(elapsed.append)
        for _ in range(120):
            scheduler.advance(0.25)

        assert clock.ticks == 30
        assert elapsed[-1] == pytest.approx(30.0)

    def test_late_callbacks_do_not_accumulate(self):
        """Every call fires 0.3s late; tick n still lands at n + 0.3."""

        class LateScheduler(ManualScheduler):
            def call_later(self, delay, callback):
                return super().call_later(delay + 0.3, callback)

        scheduler = LateScheduler()
        clock = SessionClock(scheduler)
        elapsed = []
        clock.start(elapsed.append)
        scheduler.advance(10.5)

        assert clock.ticks == 10
        assert elapsed[-1] == pytest.approx(10.3)

    def test_elapsed_relative_to_start(self):
        scheduler = ManualScheduler(start=1000.0)
        clock = SessionClock(scheduler)
        elapsed = []
        clock.start(elapsed.append)
        scheduler.advance(2.0)

        assert elapsed == [1.0, 2.0]
        assert clock.elapsed_seconds() == pytest.approx(2.0)

    def test_no_tick_after_stop(self, scheduler, clock):
        elapsed = []
        clock.start(elapsed.append)
        scheduler.advance(3.0)
        clock.stop()
        scheduler.advance(10.0)

        assert len(elapsed) == 3
        assert not clock.running
        assert clock.elapsed_seconds() == 0.0
        assert scheduler.pending == 0

    def test_stop_is_idempotent(self, clock):
        clock.stop()
        clock.start(lambda e: None)
        clock.stop()
        clock.stop()
        assert not clock.running

    def test_stop_from_inside_tick(self, scheduler, clock):
        elapsed = []

        def on_tick(e):
            elapsed.append(e)
            if e >= 2.0:
                clock.stop()

        clock.start(on_tick)
        scheduler.advance(10.0)
        assert elapsed == [1.0, 2.0]

    def test_restart_resets_elapsed(self, scheduler, clock):
        first, second = [], []
        clock.start(first.append)
        scheduler.advance(2.5)
        clock.start(second.append)
        scheduler.advance(2.0)

        assert first == [1.0, 2.0]
        assert second == [1.0, 2.0]
        assert clock.ticks == 2
