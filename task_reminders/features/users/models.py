"""SQLAlchemy models for the users feature."""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from task_reminders.core.database import UUIDTimestampedBase


class User(UUIDTimestampedBase):
    """Account that owns categories and tasks.

    Credentials live with the external identity provider; this row only
    carries what reminders need: where to send them and how to greet.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(254), unique=True, nullable=False)
    display_name: Mapped[str] = mapped_column(String(100), nullable=False)
