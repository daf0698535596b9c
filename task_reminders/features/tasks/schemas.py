"""Pydantic schemas for the tasks feature."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import AwareDatetime, Field

from task_reminders.core.schemas import CustomBase
from task_reminders.features.reminders.recurrence import Frequency


class TaskCreate(CustomBase):
    """Payload used when creating a task."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    category_id: UUID | None = None
    frequency: Frequency = Frequency.ONCE
    next_reminder: AwareDatetime = Field(
        ..., description="First reminder instant; must carry a UTC offset"
    )
    email_notification: bool = True


class TaskUpdate(CustomBase):
    """Partial update; only fields that are sent are changed."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    category_id: UUID | None = None
    frequency: Frequency | None = None
    next_reminder: AwareDatetime | None = None
    email_notification: bool | None = None
    completed: bool | None = None


class TaskRead(CustomBase):
    """Task as returned by the API."""

    id: UUID
    user_id: UUID
    category_id: UUID | None
    title: str
    description: str | None
    frequency: str
    next_reminder: datetime
    email_notification: bool
    completed: bool
    created_at: datetime
    updated_at: datetime
