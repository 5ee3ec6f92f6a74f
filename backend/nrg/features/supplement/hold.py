"""
Hold-to-confirm gesture.

The athlete confirms an intake by holding the gel button for a fixed
duration (3s). Releasing early cancels the hold.
"""

import threading
from typing import Callable, Optional

from nrg.shared.constants import HOLD_DURATION_SECONDS
from nrg.shared.scheduling import Scheduler, ScheduledCall


class _Hold:
    def __init__(self, pressed_at: float, on_complete: Callable[[], None]):
        self.pressed_at = pressed_at
        self.on_complete = on_complete
        self.handle: Optional[ScheduledCall] = None


class HoldGesture:
    """
    Timed press tracker.

    Usage:
        gesture = HoldGesture(scheduler)
        gesture.press(on_complete=controller.confirm_manual)
        ...
        gesture.release()     # before 3s -> nothing happens
    """

    def __init__(
        self,
        scheduler: Scheduler,
        duration_seconds: float = HOLD_DURATION_SECONDS,
        lock: Optional[threading.RLock] = None
    ):
        self._scheduler = scheduler
        self.duration_seconds = duration_seconds
        self._lock = lock or threading.RLock()
        self._hold: Optional[_Hold] = None

    @property
    def is_holding(self) -> bool:
        return self._hold is not None

    @property
    def progress(self) -> float:
        """Fraction of the hold completed (0.0 - 1.0)."""
        hold = self._hold
        if hold is None:
            return 0.0
        held = self._scheduler.now() - hold.pressed_at
        return min(1.0, max(0.0, held / self.duration_seconds))

    def press(self, on_complete: Callable[[], None]) -> bool:
        """
        Start a hold.

        Returns:
            False if a hold is already in progress
        """
        with self._lock:
            if self._hold is not None:
                return False
            hold = _Hold(self._scheduler.now(), on_complete)
            hold.handle = self._scheduler.call_later(
                self.duration_seconds,
                lambda: self._complete(hold),
            )
            self._hold = hold
            return True

    def release(self) -> bool:
        """
        End the hold early.

        Returns:
            True if a hold in progress was cancelled
        """
        with self._lock:
            hold = self._hold
            if hold is None:
                return False
            if hold.handle is not None:
                hold.handle.cancel()
            self._hold = None
            return True

    def _complete(self, hold: _Hold) -> None:
        with self._lock:
            if self._hold is not hold:
                return
            self._hold = None
            hold.on_complete()
