"""Schemas and records for the reminders feature."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from pydantic import Field

from task_reminders.core.schemas import CamelModel, CustomBase
from task_reminders.features.tasks.schemas import TaskRead


@dataclass(frozen=True, slots=True)
class DueTask:
    """A task whose reminder is due, joined with what the email needs."""

    task_id: UUID
    user_id: UUID
    title: str
    description: str | None
    category_name: str | None
    frequency: str
    next_reminder: datetime
    owner_email: str
    owner_display_name: str


@dataclass(slots=True)
class ReminderGroup:
    """One owner's due tasks, delivered as a single notification."""

    user_id: UUID
    email: str
    display_name: str
    tasks: list[DueTask] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.tasks)


class SweepSummary(CamelModel):
    """Outcome of one sweep, returned to the scheduler as camelCase JSON."""

    success: bool = True
    tasks_found: int = Field(default=0, ge=0, description="Due tasks selected")
    emails_sent: int = Field(default=0, ge=0, description="Notifications delivered")
    tasks_updated: int = Field(default=0, ge=0, description="Tasks rescheduled")
    tasks_failed: int = Field(default=0, ge=0, description="Tasks whose reschedule failed")
    users_failed: int = Field(default=0, ge=0, description="Owners whose notification failed")
    timestamp: datetime


class UpcomingReminders(CustomBase):
    """A user's incomplete tasks bucketed by when they come due."""

    overdue: list[TaskRead] = Field(default_factory=list)
    today: list[TaskRead] = Field(default_factory=list)
    upcoming: list[TaskRead] = Field(default_factory=list)
    overdue_count: int = 0
    today_count: int = 0
    upcoming_count: int = 0


class TestReminderResult(CustomBase):
    """Result of sending a preview reminder to the current user."""

    success: bool = True
    message_id: str | None = None
    recipient: str
    tasks_included: int = Field(ge=0)
