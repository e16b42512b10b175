"""In-memory notification list with optimistic read-state mutations."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, tzinfo

from forum_notifications.domain.entities import (
    Notification,
    NotificationPreferences,
    NotificationSection,
)

from .filters import (
    CATEGORY_ALL,
    READ_STATE_ALL,
    count_unread,
    filter_by_category,
    filter_by_preferences,
    filter_by_read_state,
)
from .grouping import group_by_time
from .ports import NotificationSource, SourceResponse, Unsubscribe
from .transform import extract_raw_records, transform_notifications

logger = logging.getLogger(__name__)

DEFAULT_LOAD_ERROR = "Failed to load notifications"


@dataclass(frozen=True)
class NotificationState:
    """Immutable view of the store handed to listeners and API callers."""

    notifications: tuple[Notification, ...]
    is_loading: bool
    has_error: bool
    error_message: str | None
    unread_count: int
    total_count: int


StateListener = Callable[[NotificationState], None]


class NotificationStore:
    """Hold the user's notifications and keep read state in step with the forum.

    Mark-as-read calls patch the local list only after the forum confirms
    them; a failed call triggers a full reload instead. Loads are sequenced:
    when several overlap only the most recently started one may replace the
    list, and reads confirmed while a load was in flight are re-applied to
    its result.
    """

    def __init__(self, source: NotificationSource) -> None:
        self._source = source
        self._notifications: list[Notification] = []
        self._listeners: list[StateListener] = []
        self._load_sequence = 0
        self._reads_during_load: set[int] = set()
        self._all_read_during_load = False
        self.is_loading = False
        self.has_error = False
        self.error_message: str | None = None

    @property
    def notifications(self) -> tuple[Notification, ...]:
        return tuple(self._notifications)

    @property
    def unread_count(self) -> int:
        return count_unread(self._notifications)

    @property
    def total_count(self) -> int:
        return len(self._notifications)

    def snapshot(self) -> NotificationState:
        return NotificationState(
            notifications=self.notifications,
            is_loading=self.is_loading,
            has_error=self.has_error,
            error_message=self.error_message,
            unread_count=self.unread_count,
            total_count=self.total_count,
        )

    def get(self, notification_id: int) -> Notification | None:
        for notification in self._notifications:
            if notification.id == notification_id:
                return notification
        return None

    def subscribe(self, listener: StateListener) -> Unsubscribe:
        """Register ``listener`` for state changes and return its unsubscribe hook."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def load_notifications(self) -> bool:
        """Fetch the list from the forum and replace the local copy.

        On failure the error flags are set and the previous list is kept.
        Returns ``True`` when this call's result was applied.
        """

        self._load_sequence += 1
        sequence = self._load_sequence
        self._reads_during_load = set()
        self._all_read_during_load = False

        self.is_loading = True
        self.has_error = False
        self.error_message = None
        self._publish()

        response = await self._call("fetch notifications", self._source.fetch_notifications)

        if sequence != self._load_sequence:
            logger.debug("Discarding result of superseded notification load %s", sequence)
            return False

        if not response.success or response.data is None:
            message = response.error or DEFAULT_LOAD_ERROR
            logger.error("Failed to load notifications: %s", message)
            self.is_loading = False
            self.has_error = True
            self.error_message = message
            self._publish()
            return False

        notifications = transform_notifications(extract_raw_records(response.data))
        # A mark-all confirmed mid-load marks the whole fetched page read, including
        # anything the forum created after the call. The fetch carries no cutoff to
        # tell those apart; the next load shows them unread again.
        if self._all_read_during_load:
            notifications = [notification.mark_read() for notification in notifications]
        elif self._reads_during_load:
            notifications = [
                notification.mark_read() if notification.id in self._reads_during_load else notification
                for notification in notifications
            ]

        self._notifications = notifications
        self.is_loading = False
        self._publish()
        return True

    async def mark_as_read(self, notification_id: int) -> bool:
        """Mark one notification read on the forum, then locally."""

        response = await self._call(
            "mark notification as read",
            lambda: self._source.mark_one_read(notification_id),
        )
        if not response.success:
            logger.warning(
                "Failed to mark notification %s as read: %s; reloading",
                notification_id,
                response.error,
            )
            await self.load_notifications()
            return False

        self._reads_during_load.add(notification_id)
        self._notifications = [
            notification.mark_read() if notification.id == notification_id else notification
            for notification in self._notifications
        ]
        self._publish()
        return True

    async def mark_all_as_read(self) -> bool:
        """Mark every notification read on the forum, then locally."""

        response = await self._call("mark all notifications as read", self._source.mark_all_read)
        if not response.success:
            logger.warning(
                "Failed to mark all notifications as read: %s; reloading", response.error
            )
            await self.load_notifications()
            return False

        self._all_read_during_load = True
        self._notifications = [notification.mark_read() for notification in self._notifications]
        self._publish()
        return True

    def clear(self) -> None:
        """Drop the list and error state without contacting the forum."""

        self._load_sequence += 1
        self._notifications = []
        self._reads_during_load = set()
        self._all_read_during_load = False
        self.is_loading = False
        self.has_error = False
        self.error_message = None
        self._publish()

    def visible_notifications(
        self,
        preferences: NotificationPreferences | None = None,
        *,
        category: str = CATEGORY_ALL,
        read_state: str = READ_STATE_ALL,
    ) -> list[Notification]:
        """Apply preference, category and read-state filters in that order."""

        notifications = list(self._notifications)
        if preferences is not None:
            notifications = filter_by_preferences(notifications, preferences)
        notifications = filter_by_category(notifications, category)
        return filter_by_read_state(notifications, read_state)

    def sections(
        self,
        preferences: NotificationPreferences | None = None,
        *,
        category: str = CATEGORY_ALL,
        read_state: str = READ_STATE_ALL,
        now: datetime | None = None,
        tz: tzinfo | None = None,
    ) -> list[NotificationSection]:
        visible = self.visible_notifications(preferences, category=category, read_state=read_state)
        return group_by_time(visible, now=now, tz=tz)

    async def _call(self, action: str, operation) -> SourceResponse:
        try:
            return await operation()
        except Exception as exc:
            logger.exception("Unexpected error while trying to %s", action)
            return SourceResponse(success=False, error=str(exc) or exc.__class__.__name__)

    def _publish(self) -> None:
        if not self._listeners:
            return
        state = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Notification state listener failed")


__all__ = ["DEFAULT_LOAD_ERROR", "NotificationState", "NotificationStore", "StateListener"]
