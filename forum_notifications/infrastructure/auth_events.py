"""In-process broadcast of authentication lifecycle events."""

from __future__ import annotations

import logging

from forum_notifications.application.use_cases.notifications.ports import (
    AuthEventListener,
    Unsubscribe,
)
from forum_notifications.domain.entities import AuthEvent

logger = logging.getLogger(__name__)


class AuthEventBus:
    """Deliver :class:`AuthEvent` values to every registered listener."""

    def __init__(self) -> None:
        self._listeners: list[AuthEventListener] = []

    def subscribe(self, listener: AuthEventListener) -> Unsubscribe:
        """Register ``listener`` and return a callable removing it again."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, event: AuthEvent | str) -> None:
        """Call every listener with ``event``; a failing listener does not stop the rest."""

        event = AuthEvent(event)
        # Listeners may unsubscribe while being notified.
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Auth event listener failed for %s", event.value)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)


__all__ = ["AuthEventBus"]
