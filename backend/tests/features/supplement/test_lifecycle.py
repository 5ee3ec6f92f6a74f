"""
Tests for SupplementLifecycle.

Covers every transition, the undo/expiry race and single finalization,
on virtual time.
"""

import logging

import pytest

from nrg.shared.scheduling import ManualScheduler
from nrg.features.supplement import (
    SupplementLifecycle,
    LifecycleState,
    SupplementSource,
    TriggerReason,
)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def finalized():
    return []


@pytest.fixture
def lifecycle(scheduler, finalized):
    return SupplementLifecycle(scheduler, on_finalize=finalized.append)


# =============================================================================
# Test Transitions
# =============================================================================

class TestTransitions:

    def test_starts_idle(self, lifecycle):
        assert lifecycle.state is LifecycleState.IDLE
        assert lifecycle.event is None
        assert not lifecycle.is_active

    def test_raise_alert(self, lifecycle):
        assert lifecycle.raise_alert(100.0, TriggerReason.LOW_HRV)
        assert lifecycle.state is LifecycleState.RAISED
        assert lifecycle.source is SupplementSource.AUTOMATIC
        assert lifecycle.event.reason is TriggerReason.LOW_HRV
        assert lifecycle.event.raised_at_elapsed_seconds == 100.0

    def test_second_raise_rejected(self, lifecycle):
        """Only one outstanding event at a time."""
        lifecycle.raise_alert(100.0, TriggerReason.LOW_HRV)
        assert not lifecycle.raise_alert(101.0, TriggerReason.TIME_SINCE_LAST_GEL)
        assert lifecycle.event.reason is TriggerReason.LOW_HRV

    def test_confirm_automatic_from_raised(self, lifecycle):
        lifecycle.raise_alert(100.0, TriggerReason.LOW_HRV)
        assert lifecycle.confirm_automatic()
        assert lifecycle.state is LifecycleState.AWAITING_CONFIRMATION
        assert lifecycle.countdown_remaining_seconds == pytest.approx(5.0)

    def test_confirm_automatic_requires_raised(self, lifecycle):
        assert not lifecycle.confirm_automatic()
        assert lifecycle.state is LifecycleState.IDLE

    def test_confirm_manual_skips_raised(self, lifecycle):
        assert lifecycle.confirm_manual(50.0)
        assert lifecycle.state is LifecycleState.AWAITING_CONFIRMATION
        assert lifecycle.source is SupplementSource.MANUAL
        assert lifecycle.event.reason is None

    def test_confirm_manual_rejected_while_raised(self, lifecycle):
        lifecycle.raise_alert(100.0, TriggerReason.LOW_HRV)
        assert not lifecycle.confirm_manual(101.0)
        assert lifecycle.source is SupplementSource.AUTOMATIC

    def test_undo_outside_window_rejected(self, lifecycle):
        assert not lifecycle.undo()
        lifecycle.raise_alert(100.0, TriggerReason.LOW_HRV)
        assert not lifecycle.undo()
        assert lifecycle.state is LifecycleState.RAISED


# =============================================================================
# Test Countdown
# =============================================================================

class TestCountdown:

    def test_expiry_finalizes_once(self, scheduler, lifecycle, finalized):
        lifecycle.confirm_manual(10.0)
        scheduler.advance(4.5)
        assert finalized == []

        scheduler.advance(0.5)
        assert len(finalized) == 1
        assert finalized[0].source is SupplementSource.MANUAL
        assert lifecycle.state is LifecycleState.IDLE
        assert lifecycle.event is None

        scheduler.advance(60.0)
        assert len(finalized) == 1

    def test_countdown_remaining(self, scheduler, lifecycle):
        lifecycle.confirm_manual(10.0)
        scheduler.advance(2.0)
        assert lifecycle.countdown_remaining_seconds == pytest.approx(3.0)
        assert lifecycle.to_dict()["countdown_remaining_seconds"] == pytest.approx(3.0)

    def test_no_countdown_when_idle(self, lifecycle):
        assert lifecycle.countdown_remaining_seconds is None

    def test_undo_automatic_returns_to_raised(self, scheduler, lifecycle, finalized):
        lifecycle.raise_alert(100.0, TriggerReason.TIME_SINCE_LAST_GEL)
        lifecycle.confirm_automatic()
        scheduler.advance(2.0)

        assert lifecycle.undo()
        assert lifecycle.state is LifecycleState.RAISED
        assert lifecycle.event.reason is TriggerReason.TIME_SINCE_LAST_GEL

        scheduler.advance(10.0)
        assert finalized == []

    def test_undo_manual_returns_to_idle(self, scheduler, lifecycle, finalized):
        lifecycle.confirm_manual(10.0)
        scheduler.advance(1.0)

        assert lifecycle.undo()
        assert lifecycle.state is LifecycleState.IDLE
        assert lifecycle.event is None

        scheduler.advance(10.0)
        assert finalized == []

    @pytest.mark.parametrize("undo_at", [0.0, 1.0, 2.5, 4.0, 4.999])
    def test_undo_any_time_before_expiry_prevents_finalize(
        self, scheduler, lifecycle, finalized, undo_at
    ):
        lifecycle.raise_alert(0.0, TriggerReason.LOW_HRV)
        lifecycle.confirm_automatic()
        scheduler.advance(undo_at)
        assert lifecycle.undo()

        scheduler.advance(30.0)
        assert finalized == []

    def test_undo_after_expiry_is_rejected(self, scheduler, lifecycle, finalized):
        lifecycle.confirm_manual(10.0)
        scheduler.advance(5.0)

        assert not lifecycle.undo()
        assert len(finalized) == 1

    def test_reconfirm_after_undo_finalizes_normally(self, scheduler, lifecycle, finalized):
        lifecycle.raise_alert(100.0, TriggerReason.TIME_SINCE_LAST_GEL)
        lifecycle.confirm_automatic()
        scheduler.advance(2.0)
        lifecycle.undo()

        lifecycle.confirm_automatic()
        scheduler.advance(4.0)
        assert finalized == []

        scheduler.advance(1.0)
        assert len(finalized) == 1
        assert finalized[0].source is SupplementSource.AUTOMATIC

    def test_stale_expiry_ignored(self, scheduler, lifecycle, finalized):
        """The first window's timer must not finalize the second window early."""
        lifecycle.raise_alert(0.0, TriggerReason.LOW_HRV)
        lifecycle.confirm_automatic()
        scheduler.advance(3.0)
        lifecycle.undo()
        lifecycle.confirm_automatic()

        scheduler.advance(2.0)      # first window would have expired here
        assert finalized == []
        assert lifecycle.state is LifecycleState.AWAITING_CONFIRMATION

    def test_reset_cancels_window(self, scheduler, lifecycle, finalized):
        lifecycle.confirm_manual(10.0)
        lifecycle.reset()

        scheduler.advance(10.0)
        assert finalized == []
        assert lifecycle.state is LifecycleState.IDLE
        assert scheduler.pending == 0

    def test_failing_finalize_is_logged(self, scheduler, caplog):
        def broken(event):
            raise RuntimeError("history store unavailable")

        lifecycle = SupplementLifecycle(scheduler, on_finalize=broken)
        lifecycle.confirm_manual(10.0)

        with caplog.at_level(logging.ERROR, logger="nrg.features.supplement.lifecycle"):
            scheduler.advance(5.0)

        assert lifecycle.state is LifecycleState.IDLE
        assert "history store unavailable" in caplog.text
        assert "manual intake" in caplog.text
