"""Pydantic schemas for the categories feature."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from task_reminders.core.schemas import CustomBase


class CategoryCreate(CustomBase):
    name: str = Field(..., min_length=1, max_length=100)
    color: str = Field(
        default="bg-blue-500",
        min_length=1,
        max_length=50,
        description="Symbolic color token",
    )
    icon: str = Field(default="📁", min_length=1, max_length=16)


class CategoryUpdate(CustomBase):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    color: str | None = Field(default=None, min_length=1, max_length=50)
    icon: str | None = Field(default=None, min_length=1, max_length=16)


class CategoryRead(CustomBase):
    id: UUID
    name: str
    color: str
    icon: str
    created_at: datetime
