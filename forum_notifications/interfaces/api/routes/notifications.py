"""Endpoints and websocket handler for the notification list."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect, status

from forum_notifications.application.use_cases.notifications import (
    count_unread,
    format_relative_time,
    get_notification_snippet,
    get_notification_title,
    resolve_navigation_target,
)
from forum_notifications.domain.entities import Notification, NotificationSection
from forum_notifications.infrastructure.notifications import serialize_state
from forum_notifications.interfaces.api.dependencies import NotificationServices, get_services
from forum_notifications.interfaces.api.schemas import (
    MarkAllReadResponse,
    MarkReadResponse,
    NavigationTargetRead,
    NotificationFeedRead,
    NotificationRead,
    NotificationSectionRead,
    NotificationTargetResponse,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])

CategoryParam = Literal["all", "replies", "mentions", "system"]
ReadStateParam = Literal["all", "unread", "read"]


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id,
        type=notification.type,
        is_read=notification.is_read,
        created_at=notification.created_at,
        topic_id=notification.topic_id,
        post_number=notification.post_number,
        user_id=notification.user_id,
        data=dict(notification.data),
        message=notification.message,
        title=notification.title,
        display_title=get_notification_title(notification),
        snippet=get_notification_snippet(notification),
        relative_time=format_relative_time(notification.created_at),
    )


def _section_to_schema(section: NotificationSection) -> NotificationSectionRead:
    return NotificationSectionRead(
        title=section.title,
        data=[_notification_to_schema(notification) for notification in section.data],
    )


def _build_feed(
    services: NotificationServices, category: str, read_state: str
) -> NotificationFeedRead:
    store = services.store
    preferences = services.preferences.preferences
    visible = store.visible_notifications(preferences, category=category, read_state=read_state)
    sections = store.sections(preferences, category=category, read_state=read_state)
    return NotificationFeedRead(
        sections=[_section_to_schema(section) for section in sections],
        unread_count=store.unread_count,
        visible_unread_count=count_unread(visible),
        total_count=store.total_count,
        is_loading=store.is_loading,
        has_error=store.has_error,
        error_message=store.error_message,
    )


@router.get("/", response_model=NotificationFeedRead)
def list_notifications(
    category: CategoryParam = Query("all"),
    read_state: ReadStateParam = Query("all"),
    services: NotificationServices = Depends(get_services),
) -> NotificationFeedRead:
    """Return the current notifications grouped by day after every filter."""

    return _build_feed(services, category, read_state)


@router.post("/refresh", response_model=NotificationFeedRead)
async def refresh_notifications(
    category: CategoryParam = Query("all"),
    read_state: ReadStateParam = Query("all"),
    services: NotificationServices = Depends(get_services),
) -> NotificationFeedRead:
    """Reload the list from the forum; errors are reported in the feed flags."""

    await services.store.load_notifications()
    return _build_feed(services, category, read_state)


@router.post("/read-all", response_model=MarkAllReadResponse)
async def mark_all_notifications_read(
    services: NotificationServices = Depends(get_services),
) -> MarkAllReadResponse:
    success = await services.store.mark_all_as_read()
    return MarkAllReadResponse(success=success, unread_count=services.store.unread_count)


@router.post("/{notification_id}/read", response_model=MarkReadResponse)
async def mark_notification_read(
    notification_id: int,
    services: NotificationServices = Depends(get_services),
) -> MarkReadResponse:
    success = await services.store.mark_as_read(notification_id)
    return MarkReadResponse(
        id=notification_id, success=success, unread_count=services.store.unread_count
    )


@router.get("/{notification_id}/target", response_model=NotificationTargetResponse)
def get_notification_target(
    notification_id: int,
    services: NotificationServices = Depends(get_services),
) -> NotificationTargetResponse:
    """Return the screen the client should open for the notification."""

    notification = services.store.get(notification_id)
    if notification is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")

    target = resolve_navigation_target(notification)
    if target is None:
        return NotificationTargetResponse(id=notification_id)
    return NotificationTargetResponse(
        id=notification_id,
        target=NavigationTargetRead(path=target.path, params=target.params),
    )


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint streaming a store snapshot after every change."""

    services: NotificationServices | None = getattr(
        websocket.app.state, "notification_services", None
    )
    if services is None:
        await websocket.close(code=1011)
        return

    await services.connections.connect(websocket)
    try:
        await websocket.send_json(
            {"type": "init", "data": serialize_state(services.store.snapshot())}
        )
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except Exception:
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type == "ack":
                ids = message.get("ids", [])
                if isinstance(ids, list):
                    for notification_id in ids:
                        if isinstance(notification_id, int) and not isinstance(notification_id, bool):
                            await services.store.mark_as_read(notification_id)
    except WebSocketDisconnect:
        services.connections.disconnect(websocket)
    except Exception:  # pragma: no cover
        services.connections.disconnect(websocket)
        raise


__all__ = ["router"]
