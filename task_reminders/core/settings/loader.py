"""LRU-cached settings loaders.

Settings are loaded and validated once, then cached for the lifetime of
the process.

Testing:
    Clear the cache to force a reload after changing the environment:
    get_reminder_settings.cache_clear()
"""

from __future__ import annotations

from functools import lru_cache

from .app import AppSettings
from .database import DatabaseSettings
from .email import EmailSettings
from .logs import LoggingSettings
from .reminders import ReminderSettings


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """Get cached application settings."""
    return AppSettings()


@lru_cache(maxsize=1)
def get_db_settings() -> DatabaseSettings:
    """Get cached database settings."""
    return DatabaseSettings()


@lru_cache(maxsize=1)
def get_email_settings() -> EmailSettings:
    """Get cached email settings."""
    return EmailSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings."""
    return LoggingSettings()


@lru_cache(maxsize=1)
def get_reminder_settings() -> ReminderSettings:
    """Get cached reminder settings."""
    return ReminderSettings()


def clear_all_caches() -> None:
    """Clear every settings cache (useful in tests)."""
    get_app_settings.cache_clear()
    get_db_settings.cache_clear()
    get_email_settings.cache_clear()
    get_logging_settings.cache_clear()
    get_reminder_settings.cache_clear()
