"""Fixed-interval repeating callbacks."""

from __future__ import annotations

from typing import Callable, Optional

from loguru import logger

from .scheduler import Scheduler, TimerHandle, default_scheduler


class RepeatingTimer:
    """Call ``callback(elapsed)`` every ``interval`` seconds until cancelled.

    Each wait starts when the previous callback returns, and ``elapsed`` is the
    delay actually measured for that wait. Under load it can exceed ``interval``.
    """

    def __init__(self, interval: float, callback: Callable[[float], object], scheduler: Scheduler):
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval!r}")
        self.interval = float(interval)
        self.callback = callback
        self.scheduler = scheduler
        self.invocations = 0
        self.failed = False
        self._handle: Optional[TimerHandle] = None
        self._wait_started = 0.0
        self._cancelled = False

    @property
    def active(self) -> bool:
        return not self._cancelled and not self.failed

    def start(self) -> "RepeatingTimer":
        if self._handle is None and self.active:
            self._arm()
        return self

    def cancel(self) -> None:
        """Stop the timer. Safe to call repeatedly and from inside the callback."""

        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _arm(self) -> None:
        self._wait_started = self.scheduler.now()
        self._handle = self.scheduler.call_later(self.interval, self._fire)

    def _fire(self) -> None:
        self._handle = None
        if self._cancelled:
            return
        elapsed = self.scheduler.now() - self._wait_started
        self.invocations += 1
        try:
            self.callback(elapsed)
        except Exception as exc:
            self.failed = True
            logger.error("repeating timer ({interval}s) stopped: {exc!r}", interval=self.interval, exc=exc)
            raise
        if not self._cancelled:
            self._arm()


def every(
    interval: float,
    callback: Callable[[float], object],
    scheduler: Optional[Scheduler] = None,
) -> RepeatingTimer:
    """Start a :class:`RepeatingTimer` and return it as the cancellation handle."""

    timer = RepeatingTimer(interval, callback, scheduler if scheduler is not None else default_scheduler())
    logger.debug("every {interval}s -> {callback}", interval=interval, callback=getattr(callback, "__name__", callback))
    return timer.start()


__all__ = ["RepeatingTimer", "every"]
