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

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key used to verify JWT bearer tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str | None = Field(
        default=None,
        description="IANA timezone (or UTC+HH:MM offset) used to render schedule dates",
    )
    vapid_public_key: str | None = Field(
        default=None,
        description="Public VAPID key handed to browsers when they subscribe to push",
    )
    vapid_private_key: str | None = Field(
        default=None,
        description="Private VAPID key used to sign Web Push requests",
    )
    vapid_subject: str = Field(
        default="mailto:thesis-office@example.edu",
        description="Contact URI sent in the VAPID claims",
    )
    push_timeout_seconds: float = Field(
        default=10.0,
        description="Per-request timeout applied to every push attempt",
        gt=0,
    )
    push_max_workers: int = Field(
        default=8,
        description="Upper bound of concurrent push deliveries",
        gt=0,
    )
    push_ttl_seconds: int = Field(
        default=86400,
        description="Time to live requested from the push service",
        ge=0,
    )
    notification_click_url: str = Field(
        default="/dashboard/notifications",
        description="Page opened when a push notification is clicked",
    )

    @model_validator(mode="after")
    def _validate_vapid_pair(self) -> "Settings":
        if bool(self.vapid_public_key) ^ bool(self.vapid_private_key):
            raise ValueError(
                "VAPID_PUBLIC_KEY and VAPID_PRIVATE_KEY must both be provided to enable push"
            )
        return self

    @property
    def push_enabled(self) -> bool:
        return bool(self.vapid_public_key and self.vapid_private_key)


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
