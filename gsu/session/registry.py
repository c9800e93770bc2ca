"""Session start-time bookkeeping driven by host lifecycle notifications."""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, Hashable, Iterable, List, Protocol

from loguru import logger


class SessionNotFoundError(LookupError):
    """Raised when a session has no recorded start time."""


class SessionHost(Protocol):
    """The part of the host engine the registry listens to."""

    def sessions(self) -> Iterable[Hashable]: ...

    def connect_session_started(self, callback: Callable[[Hashable], Any]) -> Any: ...

    def connect_session_ended(self, callback: Callable[[Hashable], Any]) -> Any: ...


class SessionRegistry:
    """Map each live session to the monotonic time it started.

    Entries are only added and removed by the two lifecycle handlers; an ended
    session is forgotten immediately.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._started: Dict[Hashable, float] = {}

    def on_session_started(self, session: Hashable) -> None:
        self._started[session] = self.clock()
        logger.debug("session started: {session}", session=session)

    def on_session_ended(self, session: Hashable) -> None:
        if self._started.pop(session, None) is None:
            logger.debug("session end for unknown session {session}", session=session)
            return
        logger.debug("session ended: {session}", session=session)

    def start_time(self, session: Hashable) -> float:
        try:
            return self._started[session]
        except KeyError:
            raise SessionNotFoundError(f"no recorded start for session {session!r}") from None

    def sessions(self) -> List[Hashable]:
        return list(self._started)

    def attach(self, host: SessionHost) -> "SessionRegistry":
        """Subscribe to ``host`` and record sessions that are already live."""

        host.connect_session_started(self.on_session_started)
        host.connect_session_ended(self.on_session_ended)
        for session in host.sessions():
            if session not in self._started:
                self.on_session_started(session)
        return self

    def clear(self) -> None:
        """Forget every session (process shutdown)."""

        self._started.clear()

    def __contains__(self, session: object) -> bool:
        return session in self._started

    def __len__(self) -> int:
        return len(self._started)


def session_duration(registry: SessionRegistry, session: Hashable) -> float:
    """Seconds since ``session`` started.

    Raises:
        SessionNotFoundError: If the session never started or has ended.
    """

    return registry.clock() - registry.start_time(session)


__all__ = ["SessionNotFoundError", "SessionHost", "SessionRegistry", "session_duration"]
