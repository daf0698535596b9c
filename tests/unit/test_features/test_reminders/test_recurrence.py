"""Unit tests for reminder recurrence."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from task_reminders.features.reminders.recurrence import (
    Frequency,
    advance,
    describe_frequency,
    parse_frequency,
)

# ──────────────────────────────────────────────────────────────
# Test advance
# ──────────────────────────────────────────────────────────────


class TestAdvance:
    """Tests for computing the next reminder instant."""

    def test_daily_adds_one_day(self):
        current = datetime(2024, 1, 15, 9, 0, tzinfo=UTC)

        assert advance(current, Frequency.DAILY) == datetime(2024, 1, 16, 9, 0, tzinfo=UTC)

    def test_weekly_adds_seven_days(self):
        current = datetime(2024, 1, 15, 9, 0, tzinfo=UTC)

        assert advance(current, Frequency.WEEKLY) == datetime(2024, 1, 22, 9, 0, tzinfo=UTC)

    def test_once_pushes_a_year_out(self):
        current = datetime(2024, 1, 15, 9, 0, tzinfo=UTC)

        assert advance(current, Frequency.ONCE) == current + timedelta(days=365)

    def test_monthly_keeps_day_of_month(self):
        current = datetime(2024, 1, 15, 9, 0, tzinfo=UTC)

        assert advance(current, Frequency.MONTHLY) == datetime(2024, 2, 15, 9, 0, tzinfo=UTC)

    def test_monthly_rolls_over_short_month_in_leap_year(self):
        current = datetime(2024, 1, 31, 9, 0, tzinfo=UTC)

        assert advance(current, Frequency.MONTHLY) == datetime(2024, 3, 2, 9, 0, tzinfo=UTC)

    def test_monthly_rolls_over_short_month(self):
        current = datetime(2023, 1, 31, 9, 0, tzinfo=UTC)

        assert advance(current, Frequency.MONTHLY) == datetime(2023, 3, 3, 9, 0, tzinfo=UTC)

    def test_monthly_crosses_year_boundary(self):
        current = datetime(2024, 12, 10, 9, 0, tzinfo=UTC)

        assert advance(current, Frequency.MONTHLY) == datetime(2025, 1, 10, 9, 0, tzinfo=UTC)

    def test_yearly_adds_calendar_year(self):
        current = datetime(2024, 3, 10, 18, 30, tzinfo=UTC)

        assert advance(current, Frequency.YEARLY) == datetime(2025, 3, 10, 18, 30, tzinfo=UTC)

    def test_yearly_from_leap_day_rolls_to_march_first(self):
        current = datetime(2024, 2, 29, 9, 0, tzinfo=UTC)

        assert advance(current, Frequency.YEARLY) == datetime(2025, 3, 1, 9, 0, tzinfo=UTC)

    def test_accepts_stored_string_values(self):
        current = datetime(2024, 1, 15, 9, 0, tzinfo=UTC)

        assert advance(current, "daily") == advance(current, Frequency.DAILY)

    def test_unknown_frequency_returns_instant_unchanged(self, caplog):
        current = datetime(2024, 1, 15, 9, 0, tzinfo=UTC)

        with caplog.at_level("WARNING"):
            result = advance(current, "fortnightly")

        assert result == current
        assert "Unknown task frequency" in caplog.text

    @pytest.mark.parametrize("frequency", list(Frequency))
    def test_always_moves_forward(self, frequency):
        current = datetime(2024, 1, 31, 23, 59, tzinfo=UTC)

        assert advance(current, frequency) > current


class TestFrequencyHelpers:
    """Tests for parsing and describing frequencies."""

    def test_parse_known_value(self):
        assert parse_frequency("weekly") is Frequency.WEEKLY

    def test_parse_unknown_value(self):
        assert parse_frequency("hourly") is None

    def test_describe_known_value(self):
        assert describe_frequency("once") == "One time"
        assert describe_frequency(Frequency.MONTHLY) == "Monthly"

    def test_describe_unknown_value_passes_through(self):
        assert describe_frequency("hourly") == "hourly"
