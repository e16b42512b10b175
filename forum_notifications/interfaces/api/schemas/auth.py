"""Pydantic models for forwarded authentication events."""

from pydantic import BaseModel

from forum_notifications.domain.entities import AuthEvent


class AuthEventRequest(BaseModel):
    event: AuthEvent


class AuthEventResponse(BaseModel):
    event: AuthEvent
    listeners: int


__all__ = ["AuthEventRequest", "AuthEventResponse"]
