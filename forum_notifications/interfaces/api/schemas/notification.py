"""Pydantic models describing notification payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: int
    type: str
    is_read: bool
    created_at: str
    topic_id: int | None = None
    post_number: int | None = None
    user_id: int | None = None
    data: dict[str, Any] = Field(default_factory=dict)
    message: str | None = None
    title: str | None = None
    display_title: str = Field(..., description="Headline built from the notification data")
    snippet: str = Field("", description="Secondary line shown under the headline")
    relative_time: str = Field(..., description="Compact age such as 3m, 2h or Yesterday")


class NotificationSectionRead(BaseModel):
    title: str
    data: list[NotificationRead]


class NotificationFeedRead(BaseModel):
    """Grouped, filtered notification list plus the store flags."""

    sections: list[NotificationSectionRead]
    unread_count: int = Field(..., description="Unread notifications in the full list")
    visible_unread_count: int = Field(..., description="Unread notifications after filtering")
    total_count: int
    is_loading: bool
    has_error: bool
    error_message: str | None = None


class MarkReadResponse(BaseModel):
    id: int
    success: bool
    unread_count: int


class MarkAllReadResponse(BaseModel):
    success: bool
    unread_count: int


class NavigationTargetRead(BaseModel):
    path: str
    params: dict[str, str] | None = None


class NotificationTargetResponse(BaseModel):
    """Destination for a notification; ``target`` is null when there is none."""

    id: int
    target: NavigationTargetRead | None = None


__all__ = [
    "MarkAllReadResponse",
    "MarkReadResponse",
    "NavigationTargetRead",
    "NotificationFeedRead",
    "NotificationRead",
    "NotificationSectionRead",
    "NotificationTargetResponse",
]
