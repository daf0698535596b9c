"""Reminder sweep settings.

Environment variables use REMINDER_ prefix.
Example: REMINDER_CRON_SECRET=change-me
"""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class ReminderSettings(BaseSettings):
    """Settings for the reminder sweep and its trigger endpoint."""

    cron_secret: SecretStr | None = Field(
        default=None,
        description="Shared secret the scheduler presents as a Bearer token",
    )
    test_window_hours: int = Field(
        default=24,
        ge=1,
        le=24 * 30,
        description="Look-ahead window for the test reminder email",
    )
    test_max_tasks: int = Field(
        default=5,
        ge=1,
        le=100,
        description="Maximum tasks listed in the test reminder email",
    )
    display_timezone: str = Field(
        default="UTC",
        description="Timezone label used when rendering reminder times",
    )

    model_config = SettingsConfigDict(
        env_prefix="REMINDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )
