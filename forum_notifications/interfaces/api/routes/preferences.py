"""Endpoints reading and changing the notification preferences."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from forum_notifications.application.use_cases.notifications import PreferencesState
from forum_notifications.interfaces.api.dependencies import NotificationServices, get_services
from forum_notifications.interfaces.api.schemas import (
    NotificationPreferencesRead,
    PreferenceUpdateRequest,
    PreferencesStateRead,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notification-preferences", tags=["notification-preferences"])


def _state_to_schema(state: PreferencesState) -> PreferencesStateRead:
    return PreferencesStateRead(
        preferences=NotificationPreferencesRead(**state.preferences.to_dict()),
        is_loading=state.is_loading,
        is_syncing=state.is_syncing,
    )


@router.get("/", response_model=PreferencesStateRead)
def get_preferences(
    services: NotificationServices = Depends(get_services),
) -> PreferencesStateRead:
    return _state_to_schema(services.preferences.snapshot())


@router.put("/", response_model=PreferencesStateRead)
async def update_preference(
    payload: PreferenceUpdateRequest,
    services: NotificationServices = Depends(get_services),
) -> PreferencesStateRead:
    """Change one preference; ``like_frequency`` is also pushed to the forum."""

    try:
        await services.preferences.set_preference(payload.key, payload.value)
    except ValueError as exc:
        logger.info("Rejected preference update for %r: %s", payload.key, exc)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    return _state_to_schema(services.preferences.snapshot())


@router.post("/reset", response_model=PreferencesStateRead)
async def reset_preferences(
    services: NotificationServices = Depends(get_services),
) -> PreferencesStateRead:
    await services.preferences.reset_to_defaults()
    return _state_to_schema(services.preferences.snapshot())


__all__ = ["router"]
