"""Pydantic schemas for the users feature."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from task_reminders.core.schemas import CustomBase


class UserCreate(CustomBase):
    """Sign-up payload."""

    email: EmailStr
    display_name: str = Field(..., min_length=1, max_length=100)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class UserRead(CustomBase):
    """User as returned by the API."""

    id: UUID
    email: EmailStr
    display_name: str
    created_at: datetime
