"""Pydantic models for notification preference endpoints."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class NotificationPreferencesRead(BaseModel):
    version: int
    replies: bool
    mentions: bool
    likes: bool
    private_messages: bool
    badges: bool
    system: bool
    following: bool
    like_frequency: Literal["always", "daily", "weekly", "never"]
    push_enabled: bool
    push_sound: bool
    push_alert: bool


class PreferencesStateRead(BaseModel):
    preferences: NotificationPreferencesRead
    is_loading: bool
    is_syncing: bool


class PreferenceUpdateRequest(BaseModel):
    """Payload used to change a single preference."""

    key: str = Field(..., min_length=1, description="Preference name, e.g. likes or like_frequency")
    value: bool | str = Field(..., description="New value; like_frequency takes a string")


__all__ = ["NotificationPreferencesRead", "PreferenceUpdateRequest", "PreferencesStateRead"]
