"""Trailing-edge debounce wrapper."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Tuple

from loguru import logger

from .scheduler import Scheduler, TimerHandle, default_scheduler


class Debouncer:
    """Delay ``callback`` until no call has arrived for ``delay`` seconds.

    Every call replaces the pending invocation, so the callback runs once per
    burst with the arguments of the last call.
    """

    def __init__(self, callback: Callable[..., Any], delay: float, scheduler: Scheduler):
        if delay < 0:
            raise ValueError(f"delay must be non-negative, got {delay!r}")
        self.callback = callback
        self.delay = float(delay)
        self.scheduler = scheduler
        self._pending: Optional[TimerHandle] = None
        self._pending_call: Optional[Tuple[Tuple[Any, ...], Dict[str, Any]]] = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        if self._pending is not None:
            logger.trace("debounce: replacing pending call to {cb}", cb=getattr(self.callback, "__name__", self.callback))
        self.cancel()
        self._pending_call = (args, kwargs)
        self._pending = self.scheduler.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        """Drop the pending invocation, if any."""

        if self._pending is not None:
            self._pending.cancel()
        self._pending = None
        self._pending_call = None

    def flush(self) -> bool:
        """Run the pending invocation now instead of waiting.

        Returns:
            ``True`` if there was a pending call.
        """

        if self._pending is None:
            return False
        self._pending.cancel()
        self._fire()
        return True

    def _fire(self) -> None:
        call = self._pending_call
        # cleared first: the callback may call the wrapper again
        self._pending = None
        self._pending_call = None
        if call is None:
            return
        args, kwargs = call
        self.callback(*args, **kwargs)


def debounce(callback: Callable[..., Any], delay: float, scheduler: Optional[Scheduler] = None) -> Debouncer:
    return Debouncer(callback, delay, scheduler if scheduler is not None else default_scheduler())


__all__ = ["Debouncer", "debounce"]
