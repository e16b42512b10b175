"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    forum_base_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the Discourse forum that owns the notifications",
        min_length=1,
    )
    forum_api_key: str | None = Field(
        default=None,
        description="API key sent in the Api-Key header of forum requests",
    )
    forum_api_username: str | None = Field(
        default=None,
        description="Username acting on the forum; also keys stored preferences",
    )
    request_timeout_seconds: float = Field(
        default=15.0,
        description="Timeout applied to every forum request",
        gt=0,
    )
    database_url: str = Field(
        default="sqlite:///./notification_preferences.db",
        description="Database connection URL used by SQLAlchemy for local preferences",
        min_length=1,
    )
    app_timezone: str | None = Field(
        default=None,
        description="Timezone used to compute calendar days when grouping notifications",
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    @model_validator(mode="after")
    def _validate_forum_credentials(self) -> "Settings":
        if bool(self.forum_api_key) ^ bool(self.forum_api_username):
            raise ValueError(
                "FORUM_API_KEY and FORUM_API_USERNAME must both be provided to authenticate"
            )
        self.forum_base_url = self.forum_base_url.rstrip("/")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
