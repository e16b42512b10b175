"""Authentication lifecycle signals consumed by the notification pipeline."""

from enum import Enum


class AuthEvent(str, Enum):
    """Events published by the external authentication flow."""

    SIGNED_IN = "signed-in"
    REFRESHED = "refreshed"
    SIGNED_OUT = "signed-out"


__all__ = ["AuthEvent"]
