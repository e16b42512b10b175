"""Notification preference state with local persistence and forum sync."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

from anyio import to_thread

from forum_notifications.domain.entities import (
    DEFAULT_PREFERENCES,
    LIKE_FREQUENCIES,
    NotificationPreferences,
)

from .ports import PreferenceSource, PreferenceStorage, Unsubscribe

logger = logging.getLogger(__name__)

LOCAL_STORAGE_KEY = "notification_preferences"
# The only preference the forum stores; everything else stays local.
SYNCED_PREFERENCE = "like_frequency"


@dataclass(frozen=True)
class PreferencesState:
    preferences: NotificationPreferences
    is_loading: bool
    is_syncing: bool


PreferencesListener = Callable[[PreferencesState], None]


class NotificationPreferencesService:
    """Own the current :class:`NotificationPreferences` of one client.

    Local storage is the source of truth for every toggle. When a username is
    known the forum's like frequency overrides the local one on load, and
    changing it locally is pushed back to the forum.
    """

    def __init__(
        self,
        storage: PreferenceStorage,
        source: PreferenceSource | None = None,
        *,
        username: str | None = None,
        storage_key: str = LOCAL_STORAGE_KEY,
    ) -> None:
        self._storage = storage
        self._source = source
        self._username = username
        self._storage_key = storage_key
        self._listeners: list[PreferencesListener] = []
        self.preferences: NotificationPreferences = DEFAULT_PREFERENCES
        self.is_loading = True
        self.is_syncing = False

    @property
    def username(self) -> str | None:
        return self._username

    def set_username(self, username: str | None) -> None:
        self._username = username or None

    def snapshot(self) -> PreferencesState:
        return PreferencesState(
            preferences=self.preferences,
            is_loading=self.is_loading,
            is_syncing=self.is_syncing,
        )

    def subscribe(self, listener: PreferencesListener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def load(self) -> NotificationPreferences:
        """Load the stored preferences, then merge the forum's like frequency."""

        try:
            stored = await to_thread.run_sync(self._storage.load, self._storage_key)
            local = NotificationPreferences.from_mapping(stored) if stored else DEFAULT_PREFERENCES
        except Exception:
            logger.exception("Failed to load notification preferences; using defaults")
            local = DEFAULT_PREFERENCES

        self.preferences = local
        self.is_loading = False
        self._publish()

        await self.sync_from_remote()
        return self.preferences

    async def sync_from_remote(self) -> bool:
        """Pull the like frequency from the forum; keep local values on failure."""

        if not (self._username and self._source):
            return False

        self.is_syncing = True
        self._publish()
        try:
            try:
                remote = await self._source.fetch_preferences(self._username)
            except Exception:
                logger.exception("Error loading preferences from the forum")
                remote = None

            like_frequency = (remote or {}).get(SYNCED_PREFERENCE)
            if like_frequency not in LIKE_FREQUENCIES:
                logger.info("Forum preferences unavailable; keeping local preferences")
                return False

            self.preferences = replace(self.preferences, like_frequency=like_frequency)
            await self._persist(self.preferences)
            return True
        finally:
            self.is_syncing = False
            self._publish()

    async def set_preference(self, key: str, value: Any) -> NotificationPreferences:
        """Update one preference, persist it and sync it when the forum owns it.

        Raises :class:`ValueError` for unknown keys or invalid values. A failed
        forum sync keeps the local change.
        """

        updated = self.preferences.with_value(key, value)
        self.preferences = updated
        self._publish()
        await self._persist(updated)

        if key == SYNCED_PREFERENCE and self._username and self._source:
            self.is_syncing = True
            self._publish()
            try:
                response = await self._source.sync_preferences(
                    self._username, {SYNCED_PREFERENCE: updated.like_frequency}
                )
                if not response.success:
                    logger.warning(
                        "Failed to sync like frequency to the forum (%s); keeping local change",
                        response.error,
                    )
            except Exception:
                logger.exception("Error syncing like frequency to the forum")
            finally:
                self.is_syncing = False
                self._publish()

        return updated

    async def reset_to_defaults(self) -> NotificationPreferences:
        self.preferences = DEFAULT_PREFERENCES
        self._publish()
        await self._persist(DEFAULT_PREFERENCES)
        return self.preferences

    async def _persist(self, preferences: NotificationPreferences) -> None:
        # Storage backends are blocking (SQLAlchemy sessions), so they run in a worker thread.
        try:
            await to_thread.run_sync(self._storage.save, self._storage_key, preferences)
        except Exception:
            logger.exception("Failed to save notification preferences")

    def _publish(self) -> None:
        if not self._listeners:
            return
        state = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Notification preferences listener failed")


__all__ = [
    "LOCAL_STORAGE_KEY",
    "NotificationPreferencesService",
    "PreferencesListener",
    "PreferencesState",
    "SYNCED_PREFERENCE",
]
