"""Database base classes, column types, and the generic repository."""

from task_reminders.core.database.base import (
    NAMING_CONVENTION,
    Base,
    TimestampMixin,
    UUIDPKMixin,
    UUIDTimestampedBase,
    utcnow,
)
from task_reminders.core.database.exceptions import RepositoryError
from task_reminders.core.database.repository import BaseRepository
from task_reminders.core.database.types import UTCDateTime

__all__ = [
    "NAMING_CONVENTION",
    "Base",
    "BaseRepository",
    "RepositoryError",
    "TimestampMixin",
    "UTCDateTime",
    "UUIDPKMixin",
    "UUIDTimestampedBase",
    "utcnow",
]
