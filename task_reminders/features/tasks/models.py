"""SQLAlchemy models for the tasks feature."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from task_reminders.core.database import UTCDateTime, UUIDTimestampedBase
from task_reminders.features.reminders.recurrence import Frequency


class Task(UUIDTimestampedBase):
    """A recurring task with its next scheduled reminder.

    ``frequency`` is stored as its string value so rows written by other
    clients with unknown values still load; the sweep leaves such tasks'
    schedule untouched.
    """

    __tablename__ = "tasks"
    __table_args__ = (
        Index("ix_tasks_due", "next_reminder", "completed", "email_notification"),
    )

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    category_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text(), nullable=True)
    frequency: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=Frequency.ONCE.value,
    )
    next_reminder: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    email_notification: Mapped[bool] = mapped_column(Boolean(), default=True, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean(), default=False, nullable=False)
