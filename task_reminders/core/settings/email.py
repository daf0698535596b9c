"""Email delivery settings.

Environment variables use EMAIL_ prefix.
Example: EMAIL_BACKEND=resend, EMAIL_API_KEY=re_xxx
"""

from __future__ import annotations

from typing import Literal

from pydantic import EmailStr, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmailSettings(BaseSettings):
    """Email delivery configuration.

    Supports two backends:
    - console: Log emails instead of sending (development)
    - resend: Resend HTTP API (production)
    """

    enabled: bool = Field(
        default=True,
        description="Enable email sending functionality",
    )
    backend: Literal["console", "resend"] = Field(
        default="console",
        description="Email backend: console (dev) or resend (production)",
    )

    api_key: SecretStr | None = Field(
        default=None,
        description="Resend API key",
    )
    api_base_url: str = Field(
        default="https://api.resend.com",
        description="Resend API base URL",
    )

    default_from_email: EmailStr = Field(
        default="onboarding@resend.dev",
        description="Sender email address",
    )
    default_from_name: str = Field(
        default="Task Reminders",
        max_length=100,
        description="Sender display name",
    )

    timeout: float = Field(
        default=30.0,
        ge=1.0,
        le=300.0,
        description="HTTP timeout for a single delivery in seconds",
    )

    template_dir: str | None = Field(
        default=None,
        description="Directory overriding the bundled email templates",
    )

    model_config = SettingsConfigDict(
        env_prefix="EMAIL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @property
    def is_configured(self) -> bool:
        """Check if email is properly configured for sending."""
        if not self.enabled:
            return False
        if self.backend == "resend":
            return self.api_key is not None and bool(self.api_key.get_secret_value())
        return True

    @property
    def from_header(self) -> str:
        """Formatted sender, e.g. ``Task Reminders <onboarding@resend.dev>``."""
        return f"{self.default_from_name} <{self.default_from_email}>"
