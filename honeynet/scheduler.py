"""Single-threaded timer schedulers.

Every timer in the simulation (attack cadence, flash reset, countdown tick,
respawn delay) goes through one of these.  Both run callbacks one at a time
on a single logical timeline:

* ``VirtualScheduler`` keeps a heap of pending callbacks and only moves time
  when ``advance`` is called.  Tests and headless runs use it.
* ``AsyncioScheduler`` hands timers to a running asyncio event loop.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

log = logging.getLogger(__name__)


class Timer:
    """Handle for a scheduled callback."""

    def __init__(self, when: float, callback: Callable[[], None]):
        self.when = when
        self.callback = callback
        self.cancelled = False
        self._handle: Optional[asyncio.TimerHandle] = None

    def cancel(self) -> None:
        self.cancelled = True
        if self._handle is not None:
            self._handle.cancel()


class Scheduler:
    def now(self) -> float:
        raise NotImplementedError

    def timestamp(self) -> datetime:
        raise NotImplementedError

    def call_later(self, delay: float, callback: Callable[[], None]) -> Timer:
        raise NotImplementedError


class VirtualScheduler(Scheduler):
    """Discrete-event clock; callbacks due at the same instant run FIFO."""

    def __init__(self, origin: Optional[datetime] = None):
        self.origin = origin or datetime.now()
        self._now = 0.0
        self._queue: list[tuple[float, int, Timer]] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self._now

    def timestamp(self) -> datetime:
        return self.origin + timedelta(seconds=self._now)

    def call_later(self, delay: float, callback: Callable[[], None]) -> Timer:
        if delay < 0:
            raise ValueError("delay must not be negative")
        timer = Timer(self._now + delay, callback)
        heapq.heappush(self._queue, (timer.when, next(self._seq), timer))
        return timer

    def pending(self) -> int:
        return sum(1 for _, _, t in self._queue if not t.cancelled)

    def advance(self, seconds: float) -> int:
        """Move time forward by *seconds*, running everything that falls due.

        Callbacks scheduled while advancing run too if their due time is
        inside the window.  Returns the number of callbacks run.
        """
        if seconds < 0:
            raise ValueError("cannot move time backwards")
        deadline = self._now + seconds
        ran = 0
        while self._queue and self._queue[0][0] <= deadline:
            when, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self._now = when
            timer.callback()
            ran += 1
        self._now = deadline
        return ran


class AsyncioScheduler(Scheduler):
    """Timers backed by ``loop.call_later``; must be used on the loop thread."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.loop = loop or asyncio.get_running_loop()

    def now(self) -> float:
        return self.loop.time()

    def timestamp(self) -> datetime:
        return datetime.now()

    def call_later(self, delay: float, callback: Callable[[], None]) -> Timer:
        timer = Timer(self.now() + delay, callback)

        def _fire():
            if timer.cancelled:
                return
            try:
                callback()
            except Exception:
                log.exception("timer callback failed")

        timer._handle = self.loop.call_later(delay, _fire)
        return timer
