"""Recurrence handling for task reminders.

A task repeats on one of a closed set of frequencies. After its reminder
has been delivered, ``advance`` computes the next reminder instant:

    once     -> +365 days (a one-off task is pushed a year out)
    daily    -> +24 hours
    weekly   -> +7 days
    monthly  -> next calendar month, same day of month
    yearly   -> next calendar year, same month and day

Monthly and yearly steps keep the day of month; when the target month is
too short the surplus days roll over into the following month, so
January 31 advances to March 2 in a leap year (March 3 otherwise).
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from enum import StrEnum

from dateutil.relativedelta import relativedelta

logger = logging.getLogger(__name__)


class Frequency(StrEnum):
    """Supported recurrence frequencies."""

    ONCE = "once"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


def parse_frequency(value: str | Frequency) -> Frequency | None:
    """Return the matching ``Frequency``, or None for unknown values."""
    try:
        return Frequency(value)
    except ValueError:
        return None


def _add_months(instant: datetime, months: int) -> datetime:
    """Add calendar months, rolling surplus days into the following month.

    Anchoring on the first of the month avoids the clamping that
    ``relativedelta`` applies on its own (Jan 31 + 1 month -> Feb 29).
    """
    first_of_month = instant.replace(day=1)
    return first_of_month + relativedelta(months=months) + timedelta(days=instant.day - 1)


def advance(instant: datetime, frequency: str | Frequency) -> datetime:
    """Compute the reminder instant that follows ``instant``.

    Args:
        instant: Current reminder instant (timezone-aware).
        frequency: Recurrence frequency; raw stored strings are accepted.

    Returns:
        The next reminder instant. Unknown frequencies return ``instant``
        unchanged so the task is not rescheduled.
    """
    parsed = parse_frequency(frequency)
    if parsed is None:
        logger.warning(
            "Unknown task frequency, reminder left unchanged",
            extra={"frequency": str(frequency), "operation": "recurrence.advance"},
        )
        return instant

    match parsed:
        case Frequency.ONCE:
            return instant + timedelta(days=365)
        case Frequency.DAILY:
            return instant + timedelta(hours=24)
        case Frequency.WEEKLY:
            return instant + timedelta(weeks=1)
        case Frequency.MONTHLY:
            return _add_months(instant, 1)
        case Frequency.YEARLY:
            return _add_months(instant, 12)


def describe_frequency(frequency: str | Frequency) -> str:
    """Human-readable label used in reminder emails."""
    parsed = parse_frequency(frequency)
    if parsed is None:
        return str(frequency)
    return {
        Frequency.ONCE: "One time",
        Frequency.DAILY: "Daily",
        Frequency.WEEKLY: "Weekly",
        Frequency.MONTHLY: "Monthly",
        Frequency.YEARLY: "Yearly",
    }[parsed]
