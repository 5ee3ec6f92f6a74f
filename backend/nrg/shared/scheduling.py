"""
Time sources and delayed-call scheduling.

Every timed behaviour in the engine (the session tick, the undo
countdown, the hold gesture) goes through a Scheduler, so the same code
runs on the asyncio event loop in the service and on a virtual clock in
tests and simulations.

Usage:
    scheduler = AsyncioScheduler(asyncio.get_running_loop())
    handle = scheduler.call_later(1.0, on_tick)
    handle.cancel()

    # Deterministic time for tests
    scheduler = ManualScheduler()
    scheduler.call_later(5.0, finalize)
    scheduler.advance(5.0)      # finalize() runs here
"""

import asyncio
import heapq
import itertools
import threading
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Protocol, Tuple


class ScheduledCall(Protocol):
    """Handle returned by Scheduler.call_later()."""

    def cancel(self) -> None:
        ...


class Scheduler(ABC):
    """
    Abstract monotonic time source with delayed callbacks.

    Implementations must guarantee that a cancelled call never fires.
    """

    @abstractmethod
    def now(self) -> float:
        """Monotonic time in seconds."""
        pass

    @abstractmethod
    def call_later(
        self,
        delay: float,
        callback: Callable[[], None]
    ) -> ScheduledCall:
        """
        Run callback once after delay seconds.

        Args:
            delay: Seconds from now (negative values run as soon as possible)
            callback: Zero-argument callable

        Returns:
            Handle with cancel()
        """
        pass


# =============================================================================
# Asyncio
# =============================================================================

class _ThreadsafeCall:
    """Call armed on the loop thread on behalf of a foreign thread."""

    def __init__(self):
        self._handle: Optional[asyncio.TimerHandle] = None
        self._cancelled = False
        self._lock = threading.Lock()

    def arm(self, loop: asyncio.AbstractEventLoop, delay: float, callback):
        with self._lock:
            if self._cancelled:
                return
            self._handle = loop.call_later(delay, callback)

    def cancel(self) -> None:
        with self._lock:
            self._cancelled = True
            if self._handle is not None:
                self._handle.cancel()


class AsyncioScheduler(Scheduler):
    """
    Scheduler backed by an asyncio event loop.

    Uses loop.time() (monotonic) and loop.call_later(). Calls made from
    a thread other than the loop's are handed over with
    call_soon_threadsafe().
    """

    def __init__(self, loop: asyncio.AbstractEventLoop):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    def now(self) -> float:
        return self._loop.time()

    def call_later(
        self,
        delay: float,
        callback: Callable[[], None]
    ) -> ScheduledCall:
        delay = max(delay, 0.0)

        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is self._loop:
            return self._loop.call_later(delay, callback)

        call = _ThreadsafeCall()
        self._loop.call_soon_threadsafe(call.arm, self._loop, delay, callback)
        return call


# =============================================================================
# Manual (virtual time)
# =============================================================================

class ManualCall:
    """Pending call on a ManualScheduler."""

    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler(Scheduler):
    """
    Virtual-time scheduler driven explicitly by advance().

    Calls fire in due-time order (ties in scheduling order), and calls
    scheduled while advancing fire in the same advance() if they fall
    inside the window. Used by tests and scripts/simulate_run.py.
    """

    def __init__(self, start: float = 0.0):
        self._now = start
        self._queue: List[Tuple[float, int, ManualCall]] = []
        self._sequence = itertools.count()

    def now(self) -> float:
        return self._now

    def call_later(
        self,
        delay: float,
        callback: Callable[[], None]
    ) -> ManualCall:
        call = ManualCall(self._now + max(delay, 0.0), callback)
        heapq.heappush(self._queue, (call.due, next(self._sequence), call))
        return call

    def advance(self, seconds: float) -> None:
        """Move virtual time forward, firing every call that comes due."""
        self.run_until(self._now + seconds)

    def run_until(self, target: float) -> None:
        while self._queue and self._queue[0][0] <= target:
            due, _, call = heapq.heappop(self._queue)
            if call.cancelled:
                continue
            self._now = max(self._now, due)
            call.callback()
        self._now = max(self._now, target)

    @property
    def pending(self) -> int:
        """Number of calls still waiting to fire."""
        return sum(1 for _, _, call in self._queue if not call.cancelled)
