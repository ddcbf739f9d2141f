"""Per-session countdown timer with a one-shot expiry signal.

The timer counts down once per second while running. Ticks are scheduled
through a TickScheduler so the same timer runs on background threads in
the terminal app and on a manually advanced clock in tests.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, Protocol

logger = logging.getLogger(__name__)

TICK_SECONDS = 1.0


class TickHandle(Protocol):
    def cancel(self) -> None: ...


class TickScheduler(ABC):
    """Schedules a single callback after a delay."""

    @abstractmethod
    def schedule(self, delay: float, callback: Callable[[], None]) -> TickHandle:
        """Run `callback` once after `delay` seconds.

        Returns:
            A handle whose cancel() prevents the callback if it has not run.
        """
        ...


class ThreadingTickScheduler(TickScheduler):
    """Runs callbacks on daemon threading.Timer threads."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> TickHandle:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class CountdownTimer:
    """Counts down from `total_seconds` to zero, one second per tick.

    A total of 0 (or None) means no limit: the timer never runs and never
    expires. Reaching zero stops the timer and fires the expiry listeners
    exactly once; reset() re-arms a fresh countdown.

    Every scheduled tick carries the generation it was scheduled in.
    pause() and reset() bump the generation under the lock, so a tick that
    was already pending when they were called cannot decrement.
    """

    def __init__(
        self,
        total_seconds: int | None = 0,
        scheduler: TickScheduler | None = None,
    ):
        self.total_seconds = max(0, total_seconds or 0)
        self._scheduler = scheduler or ThreadingTickScheduler()
        self._lock = threading.Lock()
        self._seconds_left = self.total_seconds
        self._running = False
        self._expired = False
        self._generation = 0
        self._pending: TickHandle | None = None
        self._tick_listeners: list[Callable[[int], None]] = []
        self._expiry_listeners: list[Callable[[], None]] = []

    @property
    def has_limit(self) -> bool:
        return self.total_seconds > 0

    @property
    def seconds_left(self) -> int:
        with self._lock:
            return self._seconds_left

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._running

    @property
    def expired(self) -> bool:
        with self._lock:
            return self._expired

    def add_tick_listener(self, listener: Callable[[int], None]) -> None:
        """Register a callback receiving seconds_left after every decrement."""
        self._tick_listeners.append(listener)

    def add_expiry_listener(self, listener: Callable[[], None]) -> None:
        self._expiry_listeners.append(listener)

    def start(self) -> None:
        """Start or resume. No-op without a limit, when expired, or when running."""
        with self._lock:
            if not self.has_limit or self._expired or self._running:
                return
            self._running = True
            self._schedule_next()

    def pause(self) -> None:
        with self._lock:
            self._stop()

    def reset(self) -> None:
        with self._lock:
            self._stop()
            self._seconds_left = self.total_seconds
            self._expired = False

    def _stop(self) -> None:
        """Stop ticking and invalidate any pending tick. Caller holds the lock."""
        self._running = False
        self._generation += 1
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _schedule_next(self) -> None:
        generation = self._generation
        self._pending = self._scheduler.schedule(
            TICK_SECONDS, lambda: self._tick(generation)
        )

    def _tick(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or not self._running:
                return
            self._pending = None
            self._seconds_left -= 1
            seconds_left = self._seconds_left
            just_expired = seconds_left <= 0
            if just_expired:
                self._seconds_left = 0
                self._running = False
                self._expired = True
                self._generation += 1
            else:
                self._schedule_next()

        # Listeners run outside the lock so they may call back into the timer.
        for listener in self._tick_listeners:
            listener(seconds_left)
        if just_expired:
            logger.debug("Countdown of %ds expired", self.total_seconds)
            for listener in self._expiry_listeners:
                listener()


def format_clock(seconds: int) -> str:
    """Format seconds as mm:ss."""
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"
