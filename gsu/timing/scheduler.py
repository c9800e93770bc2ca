"""Scheduler primitives the timing wrappers are built on.

Two implementations share one small interface:

* :class:`AsyncioScheduler` runs timers on an asyncio event loop (the host's
  cooperative scheduler).
* :class:`ManualScheduler` keeps a virtual clock and only fires timers when it is
  advanced, which makes timing behaviour reproducible in simulations and tests.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Protocol, Tuple

from loguru import logger


class TimerHandle(Protocol):
    def cancel(self) -> None: ...

    def cancelled(self) -> bool: ...

    def when(self) -> float: ...


class Scheduler(Protocol):
    def now(self) -> float: ...

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle: ...


class AsyncioScheduler:
    """Schedule callbacks on an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.loop = loop if loop is not None else asyncio.get_running_loop()

    def now(self) -> float:
        return self.loop.time()

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> asyncio.TimerHandle:
        return self.loop.call_later(max(0.0, delay), callback, *args)

    async def wait(self, seconds: float) -> float:
        """Suspend the current task for ``seconds`` and return the measured delay."""

        start = self.loop.time()
        await asyncio.sleep(seconds)
        return self.loop.time() - start


@dataclass(order=True)
class ManualTimer:
    """A timer queued on a :class:`ManualScheduler`."""

    deadline: float
    seq: int
    callback: Callable[..., Any] = field(compare=False)
    args: Tuple[Any, ...] = field(compare=False, default=())
    _cancelled: bool = field(compare=False, default=False)

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled

    def when(self) -> float:
        return self.deadline


class ManualScheduler:
    """Virtual-clock timer queue.

    Timers fire in deadline order, ties broken by the order they were scheduled.
    The clock is moved to each deadline before its callback runs, so callbacks
    observe the exact scheduled time through :meth:`now`.
    """

    def __init__(self, start: float = 0.0):
        self._now = float(start)
        self._queue: List[ManualTimer] = []
        self._counter = itertools.count()

    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> ManualTimer:
        timer = ManualTimer(self._now + max(0.0, delay), next(self._counter), callback, args)
        heapq.heappush(self._queue, timer)
        return timer

    @property
    def pending(self) -> int:
        return sum(1 for timer in self._queue if not timer.cancelled())

    def advance(self, seconds: float) -> int:
        """Move the clock forward, running every timer that becomes due.

        Timers scheduled by callbacks during the advance also run if they fall
        inside the window. An exception from a callback propagates to the caller
        with the clock left at that timer's deadline.

        Returns:
            Number of callbacks invoked.
        """

        if seconds < 0:
            raise ValueError("cannot advance a clock backwards")
        target = self._now + seconds
        fired = 0
        while self._queue and self._queue[0].deadline <= target:
            timer = heapq.heappop(self._queue)
            if timer.cancelled():
                continue
            # already popped, so a raising callback cannot fire twice
            self._now = timer.deadline
            fired += 1
            timer.callback(*timer.args)
        self._now = target
        logger.trace("manual clock at {now:.3f} after {fired} callbacks", now=self._now, fired=fired)
        return fired

    def run_pending(self) -> int:
        """Run callbacks that are due at the current time."""

        return self.advance(0.0)


def default_scheduler() -> AsyncioScheduler:
    """Return a scheduler bound to the running event loop."""

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError as exc:
        raise RuntimeError("no running event loop; pass a scheduler explicitly") from exc
    return AsyncioScheduler(loop)


__all__ = [
    "TimerHandle",
    "Scheduler",
    "AsyncioScheduler",
    "ManualScheduler",
    "default_scheduler",
]
