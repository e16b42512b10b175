"""Service wiring and FastAPI dependency utilities."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import HTTPException, Request, status

from forum_notifications.application.use_cases.notifications import (
    NotificationPreferencesService,
    NotificationSource,
    NotificationStore,
    PreferenceSource,
    PreferenceStorage,
    RefreshTrigger,
)
from forum_notifications.application.use_cases.notifications.preferences import LOCAL_STORAGE_KEY
from forum_notifications.config import Settings
from forum_notifications.infrastructure.auth_events import AuthEventBus
from forum_notifications.infrastructure.forum_client import ForumNotificationClient
from forum_notifications.infrastructure.notifications import (
    NotificationConnectionManager,
    NotificationStatePublisher,
)

logger = logging.getLogger(__name__)


@dataclass
class NotificationServices:
    """Every collaborator of the notification pipeline for one running app."""

    store: NotificationStore
    preferences: NotificationPreferencesService
    auth_events: AuthEventBus
    refresh_trigger: RefreshTrigger
    connections: NotificationConnectionManager
    state_publisher: NotificationStatePublisher
    client: ForumNotificationClient | None = None
    load_on_startup: bool = False

    async def startup(self) -> None:
        self.refresh_trigger.attach()
        self.state_publisher.attach(self.store)
        await self.preferences.load()
        if self.load_on_startup:
            await self.store.load_notifications()

    async def shutdown(self) -> None:
        self.refresh_trigger.detach()
        self.state_publisher.detach()
        if self.client is not None:
            await self.client.aclose()


def build_services(
    settings: Settings,
    *,
    storage: PreferenceStorage,
    source: NotificationSource | None = None,
    preference_source: PreferenceSource | None = None,
) -> NotificationServices:
    """Assemble the pipeline; the forum client is created unless sources are given."""

    client: ForumNotificationClient | None = None
    if source is None or preference_source is None:
        client = ForumNotificationClient.from_settings(settings)
    source = source or client
    preference_source = preference_source or client

    username = settings.forum_api_username
    store = NotificationStore(source)
    preferences = NotificationPreferencesService(
        storage,
        preference_source,
        username=username,
        storage_key=username or LOCAL_STORAGE_KEY,
    )
    auth_events = AuthEventBus()
    connections = NotificationConnectionManager()
    return NotificationServices(
        store=store,
        preferences=preferences,
        auth_events=auth_events,
        refresh_trigger=RefreshTrigger(store, auth_events.subscribe, preferences=preferences),
        connections=connections,
        state_publisher=NotificationStatePublisher(connections),
        client=client,
        load_on_startup=bool(username),
    )


def _services_from_state(state) -> NotificationServices:
    services = getattr(state, "notification_services", None)
    if services is None:
        logger.error("Notification services requested before application startup")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Notification services are not ready",
        )
    return services


def get_services(request: Request) -> NotificationServices:
    return _services_from_state(request.app.state)


__all__ = [
    "NotificationServices",
    "build_services",
    "get_services",
]
