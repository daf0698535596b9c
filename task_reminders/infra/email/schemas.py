"""Email message schema."""

from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field


class EmailMessage(BaseModel):
    """A complete email ready for a provider.

    Example:
        message = EmailMessage(
            to=["user@example.com"],
            subject="You have 2 tasks due",
            body_text="Water the plants ...",
            body_html="<p>Water the plants ...</p>",
        )
    """

    to: list[EmailStr] = Field(min_length=1, description="Primary recipients")
    subject: str = Field(min_length=1, max_length=998, description="Subject line")
    body_text: str | None = Field(default=None, description="Plain text body")
    body_html: str | None = Field(default=None, description="HTML body")
    tags: dict[str, str] = Field(
        default_factory=dict,
        description="Provider tags for analytics, e.g. {'category': 'task-reminder'}",
    )
