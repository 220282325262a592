"""Virtual-time scheduling, single-shot timers and the elapsed-time clock."""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass
from typing import Callable

LABEL_PREFIX = "Elapsed Time: "

_MS_PER_SECOND = 1000
_MS_PER_MINUTE = 60 * _MS_PER_SECOND
_MS_PER_HOUR = 60 * _MS_PER_MINUTE


@dataclass(eq=False)
class TimerHandle:
    """A callback scheduled to run at a given virtual time."""

    when: int
    callback: Callable[[], None]
    cancelled: bool = False


class Scheduler:
    """Runs callbacks in order of their due time as virtual time advances."""

    def __init__(self) -> None:
        self._now = 0
        self._queue: list[tuple[int, int, TimerHandle]] = []
        self._counter = itertools.count()

    @property
    def now(self) -> int:
        """Current virtual time in milliseconds."""
        return self._now

    @property
    def pending(self) -> int:
        """Number of callbacks still waiting to run."""
        return sum(1 for _, _, handle in self._queue if not handle.cancelled)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        if delay_ms < 0:
            raise ValueError(f"delay must not be negative: {delay_ms}")
        handle = TimerHandle(self._now + delay_ms, callback)
        heapq.heappush(self._queue, (handle.when, next(self._counter), handle))
        return handle

    def cancel(self, handle: TimerHandle) -> None:
        handle.cancelled = True

    def advance(self, ms: int) -> int:
        """Move time forward by ``ms``, running every callback that falls due.

        Returns the number of callbacks run.
        """
        if ms < 0:
            raise ValueError(f"cannot move time backwards: {ms}")
        target = self._now + ms
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            when, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._now = when
            handle.cancelled = True
            handle.callback()
            fired += 1
        self._now = target
        return fired


class Timer:
    """A restartable timer that calls ``callback`` when its interval expires."""

    def __init__(
        self,
        scheduler: Scheduler,
        callback: Callable[[], None],
        *,
        single_shot: bool = True,
    ) -> None:
        self._scheduler = scheduler
        self._callback = callback
        self._single_shot = single_shot
        self._handle: TimerHandle | None = None
        self._interval = 0

    @property
    def active(self) -> bool:
        return self._handle is not None

    @property
    def interval_ms(self) -> int:
        return self._interval

    def start(self, interval_ms: int) -> None:
        """(Re)start the timer; any pending expiry is discarded."""
        if not self._single_shot and interval_ms <= 0:
            raise ValueError("a repeating timer needs a positive interval")
        self.stop()
        self._interval = interval_ms
        self._handle = self._scheduler.call_later(interval_ms, self._fire)

    def stop(self) -> None:
        if self._handle is not None:
            self._scheduler.cancel(self._handle)
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        if not self._single_shot:
            self._handle = self._scheduler.call_later(self._interval, self._fire)
        self._callback()


def format_elapsed(ms: int) -> str:
    """Format milliseconds as ``hh:mm:ss``; hours are not wrapped."""
    if ms < 0:
        raise ValueError(f"elapsed time must not be negative: {ms}")
    hours = ms // _MS_PER_HOUR
    minutes = (ms % _MS_PER_HOUR) // _MS_PER_MINUTE
    seconds = (ms % _MS_PER_MINUTE) // _MS_PER_SECOND
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


class ElapsedClock:
    """Shows the time since the device was switched on, refreshed every second."""

    UPDATE_INTERVAL_MS = 1000

    def __init__(self, scheduler: Scheduler) -> None:
        self._scheduler = scheduler
        self._started_at: int | None = None
        self._updater = Timer(scheduler, self.refresh, single_shot=False)
        self.text = LABEL_PREFIX + format_elapsed(0)

    @property
    def running(self) -> bool:
        return self._updater.active

    @property
    def elapsed_ms(self) -> int:
        if self._started_at is None:
            return 0
        return self._scheduler.now - self._started_at

    def start(self) -> None:
        self._started_at = self._scheduler.now
        self._updater.start(self.UPDATE_INTERVAL_MS)

    def reset(self) -> None:
        """Stop updating and zero the displayed time."""
        self._updater.stop()
        self._started_at = self._scheduler.now
        self.refresh()

    def refresh(self) -> None:
        self.text = LABEL_PREFIX + format_elapsed(self.elapsed_ms)