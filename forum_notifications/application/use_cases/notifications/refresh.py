"""Reload or clear notifications in response to authentication events."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import anyio

from forum_notifications.domain.entities import AuthEvent

from .ports import AuthEventSubscriber, Unsubscribe
from .preferences import NotificationPreferencesService
from .store import NotificationStore

logger = logging.getLogger(__name__)


class RefreshTrigger:
    """Bind a :class:`NotificationStore` to the authentication lifecycle.

    ``signed-in`` and ``refreshed`` reload the list (and re-sync preferences
    when a preference service is attached); ``signed-out`` clears it without
    contacting the forum. :meth:`attach` and :meth:`detach` are idempotent.
    """

    def __init__(
        self,
        store: NotificationStore,
        subscribe: AuthEventSubscriber,
        *,
        preferences: NotificationPreferencesService | None = None,
    ) -> None:
        self._store = store
        self._subscribe = subscribe
        self._preferences = preferences
        self._unsubscribe: Unsubscribe | None = None
        self._tasks: set[asyncio.Task[Any]] = set()

    @property
    def attached(self) -> bool:
        return self._unsubscribe is not None

    def attach(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self._subscribe(self._on_event)

    def detach(self) -> None:
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        if unsubscribe is not None:
            unsubscribe()

    async def handle_event(self, event: AuthEvent | str) -> None:
        """React to ``event`` and wait for the resulting work to finish."""

        try:
            event = AuthEvent(event)
        except ValueError:
            logger.warning("Ignoring unknown auth event %r", event)
            return

        if event is AuthEvent.SIGNED_OUT:
            self._store.clear()
            return

        await self._store.load_notifications()
        if self._preferences is not None:
            await self._preferences.sync_from_remote()

    async def wait_idle(self) -> None:
        """Wait until every reaction scheduled from the event bus has finished."""

        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _on_event(self, event: AuthEvent) -> None:
        if event == AuthEvent.SIGNED_OUT:
            # Clearing is synchronous so the list is gone before the callback returns.
            self._store.clear()
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            anyio.run(self.handle_event, event)
        else:
            task = loop.create_task(self.handle_event(event))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)


__all__ = ["RefreshTrigger"]
