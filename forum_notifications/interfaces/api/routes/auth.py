"""Endpoint forwarding authentication lifecycle events to the notification pipeline."""

from fastapi import APIRouter, Depends

from forum_notifications.interfaces.api.dependencies import NotificationServices, get_services
from forum_notifications.interfaces.api.schemas import AuthEventRequest, AuthEventResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/events", response_model=AuthEventResponse)
async def publish_auth_event(
    payload: AuthEventRequest,
    services: NotificationServices = Depends(get_services),
) -> AuthEventResponse:
    """Broadcast ``payload.event`` and wait for the refresh it schedules."""

    services.auth_events.emit(payload.event)
    await services.refresh_trigger.wait_idle()
    return AuthEventResponse(
        event=payload.event, listeners=services.auth_events.listener_count
    )


__all__ = ["router"]
