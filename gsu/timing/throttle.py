"""Leading-edge throttle wrapper."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Tuple

from loguru import logger

from .scheduler import Scheduler, TimerHandle, default_scheduler


class Throttler:
    """Fire on the first call, then drop calls until ``cooldown`` has passed.

    Dropped calls are discarded: nothing is queued or replayed later.
    """

    def __init__(self, callback: Callable[..., Any], cooldown: float, scheduler: Scheduler):
        if cooldown < 0:
            raise ValueError(f"cooldown must be non-negative, got {cooldown!r}")
        self.callback = callback
        self.cooldown = float(cooldown)
        self.scheduler = scheduler
        self.dropped = 0
        self._cooldown: Optional[TimerHandle] = None

    @property
    def ready(self) -> bool:
        return self._cooldown is None

    def __call__(self, *args: Any, **kwargs: Any) -> bool:
        """Forward the call if the throttle is ready.

        Returns:
            ``True`` if the call was accepted, ``False`` if it was dropped.
        """

        if self._cooldown is not None:
            self.dropped += 1
            logger.trace("throttle: dropped call to {cb}", cb=getattr(self.callback, "__name__", self.callback))
            return False
        self.scheduler.call_later(0.0, self._invoke, (args, kwargs))
        self._cooldown = self.scheduler.call_later(self.cooldown, self._end_cooldown)
        return True

    def reset(self) -> None:
        """End the cooldown early."""

        if self._cooldown is not None:
            self._cooldown.cancel()
        self._cooldown = None

    def _end_cooldown(self) -> None:
        self._cooldown = None

    def _invoke(self, call: Tuple[Tuple[Any, ...], Dict[str, Any]]) -> None:
        args, kwargs = call
        self.callback(*args, **kwargs)


def throttle(callback: Callable[..., Any], cooldown: float, scheduler: Optional[Scheduler] = None) -> Throttler:
    return Throttler(callback, cooldown, scheduler if scheduler is not None else default_scheduler())


__all__ = ["Throttler", "throttle"]
