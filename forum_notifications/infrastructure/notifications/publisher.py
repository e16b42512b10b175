"""Push notification store snapshots to websocket subscribers."""

from __future__ import annotations

import asyncio
from typing import Any

from anyio import from_thread

from forum_notifications.application.use_cases.notifications import (
    NotificationState,
    NotificationStore,
)
from forum_notifications.application.use_cases.notifications.ports import Unsubscribe
from forum_notifications.domain.entities import Notification

from .manager import NotificationConnectionManager


class NotificationStatePublisher:
    """Serialize :class:`NotificationState` changes and schedule their delivery."""

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager
        self._unsubscribe: Unsubscribe | None = None

    def attach(self, store: NotificationStore) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = store.subscribe(self.dispatch)

    def detach(self) -> None:
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        if unsubscribe is not None:
            unsubscribe()

    def dispatch(self, state: NotificationState) -> None:
        """Schedule ``state`` to be delivered to every connected view."""

        if not self._manager.connection_count:
            return
        message = {"type": "notifications", "data": serialize_state(state)}
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            from_thread.run(self._manager.broadcast, message)
        else:
            loop.create_task(self._manager.broadcast(message))


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    return {
        "id": notification.id,
        "type": notification.type,
        "is_read": notification.is_read,
        "created_at": notification.created_at,
        "topic_id": notification.topic_id,
        "post_number": notification.post_number,
        "user_id": notification.user_id,
        "data": dict(notification.data),
        "message": notification.message,
        "title": notification.title,
    }


def serialize_state(state: NotificationState) -> dict[str, Any]:
    return {
        "notifications": [serialize_notification(item) for item in state.notifications],
        "is_loading": state.is_loading,
        "has_error": state.has_error,
        "error_message": state.error_message,
        "unread_count": state.unread_count,
        "total_count": state.total_count,
    }


__all__ = ["NotificationStatePublisher", "serialize_notification", "serialize_state"]
