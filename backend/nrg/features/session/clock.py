"""
Session clock.

Fires a tick once per fixed interval while running. Elapsed time is
always recomputed from the monotonic start timestamp, and tick n is
scheduled for start + n * interval, so late callbacks never accumulate
drift.
"""

import logging
import threading
from typing import Callable, Optional

from nrg.shared.constants import TICK_INTERVAL_SECONDS
from nrg.shared.scheduling import Scheduler, ScheduledCall

logger = logging.getLogger(__name__)


class SessionClock:
    """
    Deterministic tick source.

    Call `start(on_tick)` to begin ticking; `on_tick` receives the
    elapsed seconds. Call `stop()` to halt: it is idempotent, and no
    tick fires after it returns (each run carries a generation number
    checked under the lock before the callback runs).

    Usage:
        clock = SessionClock(scheduler)
        clock.start(lambda elapsed: print(elapsed))
        # ... later ...
        clock.stop()
    """

    def __init__(
        self,
        scheduler: Scheduler,
        interval_seconds: float = TICK_INTERVAL_SECONDS,
        lock: Optional[threading.RLock] = None
    ):
        self._scheduler = scheduler
        self.interval_seconds = interval_seconds
        self._lock = lock or threading.RLock()

        self._running = False
        self._generation = 0
        self._start_time: Optional[float] = None
        self._ticks = 0
        self._on_tick: Optional[Callable[[float], None]] = None
        self._pending: Optional[ScheduledCall] = None

    @property
    def running(self) -> bool:
        return self._running

    @property
    def ticks(self) -> int:
        return self._ticks

    def elapsed_seconds(self) -> float:
        """Elapsed time right now (0 when stopped)."""
        if not self._running or self._start_time is None:
            return 0.0
        return max(0.0, self._scheduler.now() - self._start_time)

    def start(self, on_tick: Callable[[float], None]) -> None:
        """Start ticking from zero. Restarts if already running."""
        with self._lock:
            self._cancel_pending()
            self._generation += 1
            self._running = True
            self._start_time = self._scheduler.now()
            self._ticks = 0
            self._on_tick = on_tick
            self._schedule_next(self._generation)

    def stop(self) -> None:
        """Stop ticking. Safe to call repeatedly."""
        with self._lock:
            if not self._running:
                return
            self._running = False
            self._generation += 1
            self._cancel_pending()
            self._on_tick = None

    def _schedule_next(self, generation: int) -> None:
        due = self._start_time + (self._ticks + 1) * self.interval_seconds
        delay = due - self._scheduler.now()
        self._pending = self._scheduler.call_later(
            delay,
            lambda: self._fire(generation),
        )

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _fire(self, generation: int) -> None:
        with self._lock:
            if not self._running or generation != self._generation:
                return

            self._pending = None
            self._ticks += 1
            elapsed = self._scheduler.now() - self._start_time
            self._on_tick(elapsed)

            # The callback may have stopped or restarted the clock
            if self._running and generation == self._generation:
                self._schedule_next(generation)
