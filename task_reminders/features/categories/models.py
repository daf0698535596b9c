"""SQLAlchemy models for the categories feature."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from task_reminders.core.database import UUIDTimestampedBase


class Category(UUIDTimestampedBase):
    """User-defined grouping for tasks, with a color token and an icon glyph."""

    __tablename__ = "categories"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    color: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Symbolic color token, e.g. bg-blue-500",
    )
    icon: Mapped[str] = mapped_column(String(16), nullable=False)
