"""
Supplement Lifecycle

Finite state machine for one gel intake:

    IDLE --rule fires--------------> RAISED(auto)
    IDLE --3s manual hold----------> AWAITING_CONFIRMATION(manual)
    RAISED(auto) --3s hold---------> AWAITING_CONFIRMATION(auto)
    AWAITING_CONFIRMATION --5s-----> finalize -> IDLE
    AWAITING_CONFIRMATION(auto) --undo--> RAISED(auto)
    AWAITING_CONFIRMATION(manual) --undo--> IDLE

The 5s undo window is a cancellable timed transition. The expiry
callback is the single decision point: it holds the shared lock and
checks the countdown token exactly once, so undo and finalize can never
both take effect and finalize can never run twice for one event.
"""

import logging
import threading
from typing import Callable, Optional

from nrg.shared.constants import UNDO_WINDOW_SECONDS
from nrg.shared.scheduling import Scheduler, ScheduledCall

from .models import (
    LifecycleState,
    SupplementEvent,
    SupplementSource,
    TriggerReason,
)

logger = logging.getLogger(__name__)


class _Countdown:
    """Token for one armed undo window."""

    def __init__(self, started_at: float):
        self.started_at = started_at
        self.handle: Optional[ScheduledCall] = None


class SupplementLifecycle:
    """
    Consume / confirm / undo state machine.

    Transition methods return True when the transition happened and
    False when the command does not apply to the current state (for
    example undo() after the event already finalized).

    Usage:
        lifecycle = SupplementLifecycle(scheduler, on_finalize=record_intake)
        lifecycle.raise_alert(elapsed_seconds=2700, reason=TriggerReason.LOW_HRV)
        lifecycle.confirm_automatic()     # 5s window starts
        lifecycle.undo()                  # back to RAISED
    """

    def __init__(
        self,
        scheduler: Scheduler,
        on_finalize: Callable[[SupplementEvent], None],
        undo_window_seconds: float = UNDO_WINDOW_SECONDS,
        lock: Optional[threading.RLock] = None
    ):
        self._scheduler = scheduler
        self._on_finalize = on_finalize
        self.undo_window_seconds = undo_window_seconds
        self._lock = lock or threading.RLock()

        self._state = LifecycleState.IDLE
        self._event: Optional[SupplementEvent] = None
        self._countdown: Optional[_Countdown] = None

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def event(self) -> Optional[SupplementEvent]:
        return self._event

    @property
    def source(self) -> Optional[SupplementSource]:
        return self._event.source if self._event else None

    @property
    def is_active(self) -> bool:
        """True while an event is outstanding (rule evaluation suspended)."""
        return self._state is not LifecycleState.IDLE

    @property
    def countdown_remaining_seconds(self) -> Optional[float]:
        """Seconds left in the undo window, None when no window runs."""
        countdown = self._countdown
        if countdown is None:
            return None
        elapsed = self._scheduler.now() - countdown.started_at
        return max(0.0, self.undo_window_seconds - elapsed)

    # =========================================================================
    # Transitions
    # =========================================================================

    def raise_alert(self, elapsed_seconds: float, reason: TriggerReason) -> bool:
        """IDLE -> RAISED(automatic)."""
        with self._lock:
            if self._state is not LifecycleState.IDLE:
                return False
            self._event = SupplementEvent(
                source=SupplementSource.AUTOMATIC,
                raised_at_elapsed_seconds=elapsed_seconds,
                reason=reason,
            )
            self._state = LifecycleState.RAISED
            return True

    def confirm_manual(self, elapsed_seconds: float) -> bool:
        """IDLE -> AWAITING_CONFIRMATION(manual), skipping RAISED."""
        with self._lock:
            if self._state is not LifecycleState.IDLE:
                return False
            self._event = SupplementEvent(
                source=SupplementSource.MANUAL,
                raised_at_elapsed_seconds=elapsed_seconds,
            )
            self._enter_awaiting_confirmation()
            return True

    def confirm_automatic(self) -> bool:
        """RAISED(automatic) -> AWAITING_CONFIRMATION(automatic)."""
        with self._lock:
            if self._state is not LifecycleState.RAISED:
                return False
            self._enter_awaiting_confirmation()
            return True

    def undo(self) -> bool:
        """
        Cancel the undo window.

        Automatic events go back to RAISED (the prompt is shown again);
        manual events are dropped and the lifecycle returns to IDLE.
        """
        with self._lock:
            if self._state is not LifecycleState.AWAITING_CONFIRMATION:
                return False

            self._cancel_countdown()
            if self._event.source is SupplementSource.AUTOMATIC:
                self._state = LifecycleState.RAISED
            else:
                self._event = None
                self._state = LifecycleState.IDLE

            logger.debug(f"Intake undone, lifecycle -> {self._state.value}")
            return True

    def reset(self) -> None:
        """Drop any outstanding event without finalizing (session stop)."""
        with self._lock:
            self._cancel_countdown()
            self._event = None
            self._state = LifecycleState.IDLE

    # =========================================================================
    # Countdown
    # =========================================================================

    def _enter_awaiting_confirmation(self) -> None:
        self._cancel_countdown()
        countdown = _Countdown(started_at=self._scheduler.now())
        countdown.handle = self._scheduler.call_later(
            self.undo_window_seconds,
            lambda: self._on_countdown_expired(countdown),
        )
        self._countdown = countdown
        self._state = LifecycleState.AWAITING_CONFIRMATION

    def _cancel_countdown(self) -> None:
        if self._countdown is not None:
            if self._countdown.handle is not None:
                self._countdown.handle.cancel()
            self._countdown = None

    def _on_countdown_expired(self, countdown: _Countdown) -> None:
        with self._lock:
            # Stale window: undone, reset, or replaced before expiry
            if self._countdown is not countdown:
                return

            event = self._event
            self._countdown = None
            self._event = None
            self._state = LifecycleState.IDLE

            try:
                self._on_finalize(event)
            except Exception as e:
                logger.error(
                    f"Finalize failed for {event.source.value} intake "
                    f"raised at {event.raised_at_elapsed_seconds:.0f}s: {e}"
                )

    def to_dict(self) -> dict:
        """Convert to dict for API response."""
        remaining = self.countdown_remaining_seconds
        return {
            "state": self._state.value,
            "event": self._event.to_dict() if self._event else None,
            "countdown_remaining_seconds": round(remaining, 2) if remaining is not None else None,
        }
