"""Interfaces the notification use cases expect from external collaborators."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from forum_notifications.domain.entities import AuthEvent, NotificationPreferences


@dataclass(frozen=True)
class SourceResponse:
    """Outcome of a remote call; ``error`` is set when ``success`` is false."""

    success: bool
    data: Any = None
    error: str | None = None


class NotificationSource(Protocol):
    """Remote forum endpoints for the notification list and read state."""

    async def fetch_notifications(self) -> SourceResponse: ...

    async def mark_one_read(self, notification_id: int) -> SourceResponse: ...

    async def mark_all_read(self) -> SourceResponse: ...


class PreferenceSource(Protocol):
    """Remote forum endpoints for the like frequency user option."""

    async def fetch_preferences(self, username: str) -> dict[str, str] | None: ...

    async def sync_preferences(
        self, username: str, preferences: Mapping[str, str]
    ) -> SourceResponse: ...


class PreferenceStorage(Protocol):
    """Local persistence for the full preference record."""

    def load(self, key: str) -> Mapping[str, Any] | None: ...

    def save(self, key: str, preferences: NotificationPreferences) -> None: ...


AuthEventListener = Callable[[AuthEvent], None]
Unsubscribe = Callable[[], None]
AuthEventSubscriber = Callable[[AuthEventListener], Unsubscribe]


__all__ = [
    "AuthEventListener",
    "AuthEventSubscriber",
    "NotificationSource",
    "PreferenceSource",
    "PreferenceStorage",
    "SourceResponse",
    "Unsubscribe",
]
