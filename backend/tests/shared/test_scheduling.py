"""
Tests for the virtual-time scheduler.

The ManualScheduler drives every timing test in the suite, so its
ordering and cancellation guarantees are checked here.
"""

import asyncio

import pytest

from nrg.shared.scheduling import ManualScheduler, AsyncioScheduler


# =============================================================================
# Test ManualScheduler
# =============================================================================

class TestManualScheduler:
    """Tests for ManualScheduler."""

    def test_starts_at_given_time(self):
        assert ManualScheduler().now() == 0.0
        assert ManualScheduler(start=100.0).now() == 100.0

    def test_fires_when_due(self):
        scheduler = ManualScheduler()
        fired = []
        scheduler.call_later(5.0, lambda: fired.append(scheduler.now()))

        scheduler.advance(4.9)
        assert fired == []

        scheduler.advance(0.1)
        assert fired == [pytest.approx(5.0)]

    def test_fires_in_due_order(self):
        scheduler = ManualScheduler()
        fired = []
        scheduler.call_later(3.0, lambda: fired.append("c"))
        scheduler.call_later(1.0, lambda: fired.append("a"))
        scheduler.call_later(2.0, lambda: fired.append("b"))

        scheduler.advance(10.0)
        assert fired == ["a", "b", "c"]

    def test_ties_fire_in_scheduling_order(self):
        scheduler = ManualScheduler()
        fired = []
        scheduler.call_later(1.0, lambda: fired.append("first"))
        scheduler.call_later(1.0, lambda: fired.append("second"))

        scheduler.advance(1.0)
        assert fired == ["first", "second"]

    def test_cancelled_call_never_fires(self):
        scheduler = ManualScheduler()
        fired = []
        handle = scheduler.call_later(1.0, lambda: fired.append("x"))
        handle.cancel()

        scheduler.advance(5.0)
        assert fired == []
        assert scheduler.pending == 0

    def test_call_scheduled_during_advance_fires_in_window(self):
        """A callback re-arming itself keeps firing within one advance()."""
        scheduler = ManualScheduler()
        fired = []

        def tick():
            fired.append(scheduler.now())
            scheduler.call_later(1.0, tick)

        scheduler.call_later(1.0, tick)
        scheduler.advance(3.0)

        assert fired == [1.0, 2.0, 3.0]
        assert scheduler.pending == 1

    def test_callback_sees_due_time(self):
        scheduler = ManualScheduler()
        seen = []
        scheduler.call_later(2.0, lambda: seen.append(scheduler.now()))
        scheduler.advance(10.0)

        assert seen == [2.0]
        assert scheduler.now() == 10.0

    def test_negative_delay_runs_on_next_advance(self):
        scheduler = ManualScheduler(start=5.0)
        fired = []
        scheduler.call_later(-1.0, lambda: fired.append(scheduler.now()))

        scheduler.advance(0.0)
        assert fired == [5.0]


# =============================================================================
# Test AsyncioScheduler
# =============================================================================

class TestAsyncioScheduler:
    """Tests for AsyncioScheduler on a real event loop."""

    def test_call_later_on_loop(self):
        loop = asyncio.new_event_loop()
        try:
            scheduler = AsyncioScheduler(loop)
            fired = []

            async def main():
                scheduler.call_later(0.01, lambda: fired.append(True))
                await asyncio.sleep(0.05)

            loop.run_until_complete(main())
            assert fired == [True]
        finally:
            loop.close()

    def test_cancel_on_loop(self):
        loop = asyncio.new_event_loop()
        try:
            scheduler = AsyncioScheduler(loop)
            fired = []

            async def main():
                handle = scheduler.call_later(0.01, lambda: fired.append(True))
                handle.cancel()
                await asyncio.sleep(0.05)

            loop.run_until_complete(main())
            assert fired == []
        finally:
            loop.close()

    def test_now_is_loop_time(self):
        loop = asyncio.new_event_loop()
        try:
            scheduler = AsyncioScheduler(loop)
            assert scheduler.now() == pytest.approx(loop.time(), abs=0.1)
        finally:
            loop.close()
