"""Connection management helpers for notification websockets."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class NotificationConnectionManager:
    """Track the websockets of the client views watching the notification list."""

    def __init__(self) -> None:
        self._connections: set[WebSocket] = set()

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    async def connect(self, websocket: WebSocket) -> None:
        """Accept the websocket connection and register it."""

        await websocket.accept()
        self._connections.add(websocket)

    def disconnect(self, websocket: WebSocket) -> None:
        self._connections.discard(websocket)

    async def broadcast(self, message: dict[str, Any]) -> None:
        """Send ``message`` to every active connection, dropping broken ones."""

        for connection in list(self._connections):
            try:
                await connection.send_json(message)
            except Exception:  # pragma: no cover - client went away mid-send
                logger.debug("Dropping notification websocket after failed send")
                self.disconnect(connection)


__all__ = ["NotificationConnectionManager"]
