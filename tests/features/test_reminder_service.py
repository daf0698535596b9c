"""Tests for the reminder sweep and per-user reminder services."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from task_reminders.core.database import RepositoryError
from task_reminders.core.exceptions import ConfigurationException
from task_reminders.features.reminders.exceptions import (
    ReminderDeliveryException,
    ReminderSweepError,
)
from task_reminders.features.reminders.service import (
    ReminderSweepService,
    UserReminderService,
)
from task_reminders.features.tasks.repository import TaskRepository
from task_reminders.infra.email import SENDER_RESTRICTED


@pytest.fixture
def sweep(db_session, provider, email_builder) -> ReminderSweepService:
    return ReminderSweepService(db_session, provider, email_builder)


# ──────────────────────────────────────────────────────────────
# Sweep
# ──────────────────────────────────────────────────────────────


class TestReminderSweep:
    @pytest.mark.asyncio
    async def test_nothing_due(self, sweep, provider, now):
        summary = await sweep.run(now)

        assert summary.success
        assert summary.tasks_found == 0
        assert summary.emails_sent == 0
        assert summary.timestamp == now
        assert provider.sent == []

    @pytest.mark.asyncio
    async def test_success_sends_once_and_advances_daily_task(
        self, sweep, db_session, provider, user_factory, task_factory, now
    ):
        user = await user_factory(email="ada@example.com")
        task = await task_factory(user, frequency="daily", next_reminder=now)

        summary = await sweep.run(now)

        assert summary.tasks_found == 1
        assert summary.emails_sent == 1
        assert summary.tasks_updated == 1
        assert summary.users_failed == 0
        assert len(provider.sent) == 1
        assert provider.sent[0].subject == "You have 1 task due"

        await db_session.refresh(task)
        assert task.next_reminder == now + timedelta(hours=24)

    @pytest.mark.asyncio
    async def test_each_frequency_is_advanced(
        self, sweep, db_session, user_factory, task_factory, now
    ):
        user = await user_factory()
        weekly = await task_factory(user, frequency="weekly")
        monthly = await task_factory(user, frequency="monthly")
        once = await task_factory(user, frequency="once")

        await sweep.run(now)

        for task in (weekly, monthly, once):
            await db_session.refresh(task)
        assert weekly.next_reminder == now + timedelta(days=7)
        assert monthly.next_reminder == now.replace(month=2)
        assert once.next_reminder == now + timedelta(days=365)

    @pytest.mark.asyncio
    async def test_delivery_failure_leaves_tasks_due(
        self, sweep, db_session, provider, user_factory, task_factory, now
    ):
        user = await user_factory(email="ada@example.com")
        task = await task_factory(user, next_reminder=now - timedelta(minutes=10))
        provider.fail_for = {"ada@example.com"}

        summary = await sweep.run(now)

        assert summary.success
        assert summary.tasks_found == 1
        assert summary.emails_sent == 0
        assert summary.tasks_updated == 0
        assert summary.users_failed == 1

        await db_session.refresh(task)
        assert task.next_reminder == now - timedelta(minutes=10)

    @pytest.mark.asyncio
    async def test_provider_exception_is_contained(
        self, db_session, email_builder, user_factory, task_factory, now
    ):
        user = await user_factory()
        task = await task_factory(user)
        provider = AsyncMock()
        provider.send.side_effect = RuntimeError("socket closed")

        summary = await ReminderSweepService(db_session, provider, email_builder).run(now)

        assert summary.users_failed == 1
        await db_session.refresh(task)
        assert task.next_reminder == now

    @pytest.mark.asyncio
    async def test_one_email_per_user_with_only_their_tasks(
        self, sweep, provider, user_factory, task_factory, now
    ):
        ada = await user_factory(email="ada@example.com", display_name="Ada")
        bob = await user_factory(email="bob@example.com", display_name="Bob")
        await task_factory(ada, title="Ada chore 1")
        await task_factory(ada, title="Ada chore 2")
        await task_factory(bob, title="Bob chore")

        summary = await sweep.run(now)

        assert summary.tasks_found == 3
        assert summary.emails_sent == 2
        assert len(provider.sent) == 2

        (ada_mail,) = provider.sent_to("ada@example.com")
        (bob_mail,) = provider.sent_to("bob@example.com")
        assert ada_mail.subject == "You have 2 tasks due"
        assert "Ada chore 1" in ada_mail.body_html
        assert "Ada chore 2" in ada_mail.body_html
        assert "Bob chore" not in ada_mail.body_html
        assert "Bob chore" in bob_mail.body_html
        assert "Ada chore" not in bob_mail.body_html

    @pytest.mark.asyncio
    async def test_one_users_failure_does_not_block_others(
        self, sweep, db_session, provider, user_factory, task_factory, now
    ):
        ada = await user_factory(email="ada@example.com")
        bob = await user_factory(email="bob@example.com")
        ada_task = await task_factory(ada)
        bob_task = await task_factory(bob)
        provider.fail_for = {"ada@example.com"}

        summary = await sweep.run(now)

        assert summary.emails_sent == 1
        assert summary.users_failed == 1
        assert summary.tasks_updated == 1
        await db_session.refresh(ada_task)
        await db_session.refresh(bob_task)
        assert ada_task.next_reminder == now
        assert bob_task.next_reminder == now + timedelta(hours=24)

    @pytest.mark.asyncio
    async def test_second_sweep_is_a_no_op(self, sweep, provider, user_factory, task_factory, now):
        user = await user_factory()
        await task_factory(user)

        first = await sweep.run(now)
        second = await sweep.run(now)

        assert first.emails_sent == 1
        assert second.tasks_found == 0
        assert second.emails_sent == 0
        assert second.tasks_updated == 0
        assert len(provider.sent) == 1

    @pytest.mark.asyncio
    async def test_completed_and_muted_tasks_untouched(
        self, sweep, db_session, provider, user_factory, task_factory, now
    ):
        user = await user_factory()
        done = await task_factory(user, completed=True)
        muted = await task_factory(user, email_notification=False)

        summary = await sweep.run(now)

        assert summary.tasks_found == 0
        assert provider.sent == []
        await db_session.refresh(done)
        await db_session.refresh(muted)
        assert done.next_reminder == now
        assert muted.next_reminder == now

    @pytest.mark.asyncio
    async def test_per_task_update_failure_is_counted(
        self, sweep, db_session, provider, user_factory, task_factory, now
    ):
        user = await user_factory()
        first = await task_factory(user, title="first", next_reminder=now - timedelta(hours=2))
        second = await task_factory(user, title="second", next_reminder=now - timedelta(hours=1))
        original = TaskRepository.reschedule

        async def flaky(self, session, task_id, next_reminder):
            if task_id == first.id:
                raise OperationalError("UPDATE", {}, Exception("database is locked"))
            return await original(self, session, task_id, next_reminder)

        with patch.object(TaskRepository, "reschedule", flaky):
            summary = await sweep.run(now)

        assert summary.emails_sent == 1
        assert summary.tasks_updated == 1
        assert summary.tasks_failed == 1
        assert len(provider.sent) == 1

        await db_session.refresh(first)
        await db_session.refresh(second)
        assert first.next_reminder == now - timedelta(hours=2)
        assert second.next_reminder == now + timedelta(hours=23)

    @pytest.mark.asyncio
    async def test_out_of_range_reschedule_does_not_stop_the_sweep(
        self, sweep, db_session, provider, user_factory, task_factory
    ):
        end_of_calendar = datetime(9999, 12, 1, 12, 0, tzinfo=UTC)
        ada = await user_factory(email="ada@example.com")
        bob = await user_factory(email="bob@example.com")
        stuck = await task_factory(
            ada, frequency="monthly", next_reminder=end_of_calendar - timedelta(hours=3)
        )
        fine = await task_factory(
            bob, frequency="daily", next_reminder=end_of_calendar - timedelta(hours=2)
        )

        summary = await sweep.run(end_of_calendar)

        assert summary.tasks_found == 2
        assert summary.emails_sent == 2
        assert summary.tasks_updated == 1
        assert summary.tasks_failed == 1
        assert provider.sent_to("bob@example.com")

        await db_session.refresh(stuck)
        await db_session.refresh(fine)
        assert stuck.next_reminder == end_of_calendar - timedelta(hours=3)
        assert fine.next_reminder == end_of_calendar + timedelta(hours=22)

    @pytest.mark.asyncio
    async def test_unknown_frequency_is_not_counted_as_updated(
        self, sweep, db_session, provider, user_factory, task_factory, now
    ):
        user = await user_factory()
        odd = await task_factory(user, frequency="fortnightly")
        daily = await task_factory(user, frequency="daily")

        summary = await sweep.run(now)

        assert summary.emails_sent == 1
        assert summary.tasks_updated == 1
        assert summary.tasks_failed == 1

        await db_session.refresh(odd)
        await db_session.refresh(daily)
        assert odd.next_reminder == now
        assert daily.next_reminder == now + timedelta(hours=24)

    @pytest.mark.asyncio
    async def test_query_failure_aborts_before_sending(self, db_session, provider, email_builder, now):
        repository = AsyncMock()
        repository.find_due.side_effect = RepositoryError("Failed to query due tasks")
        service = ReminderSweepService(db_session, provider, email_builder, repository=repository)

        with pytest.raises(ReminderSweepError) as exc_info:
            await service.run(now)

        assert exc_info.value.status_code == 500
        assert provider.sent == []


# ──────────────────────────────────────────────────────────────
# Upcoming view and test reminder
# ──────────────────────────────────────────────────────────────


class TestUserReminderService:
    @pytest.mark.asyncio
    async def test_upcoming_buckets(
        self, db_session, reminder_settings, user_factory, task_factory, now
    ):
        user = await user_factory()
        await task_factory(user, title="late", next_reminder=now - timedelta(hours=1))
        await task_factory(user, title="tonight", next_reminder=now + timedelta(hours=10))
        await task_factory(user, title="tomorrow", next_reminder=now + timedelta(hours=20))
        await task_factory(user, title="done", completed=True, next_reminder=now + timedelta(hours=1))

        view = await UserReminderService(db_session, user, reminder_settings).upcoming(now)

        assert [t.title for t in view.overdue] == ["late"]
        assert [t.title for t in view.today] == ["tonight"]
        assert [t.title for t in view.upcoming] == ["tomorrow"]
        assert (view.overdue_count, view.today_count, view.upcoming_count) == (1, 1, 1)

    @pytest.mark.asyncio
    async def test_send_test_lists_window_and_does_not_advance(
        self, db_session, provider, email_builder, reminder_settings, user_factory, task_factory, now
    ):
        user = await user_factory(email="ada@example.com")
        soon = await task_factory(user, title="soon", next_reminder=now + timedelta(hours=2))
        await task_factory(user, title="next week", next_reminder=now + timedelta(days=7))
        service = UserReminderService(
            db_session, user, reminder_settings, provider=provider, builder=email_builder
        )

        result = await service.send_test(now)

        assert result.success
        assert result.recipient == "ada@example.com"
        assert result.tasks_included == 1
        (message,) = provider.sent
        assert message.subject == "Test Reminder - You have 1 upcoming task"
        assert "soon" in message.body_html
        assert "next week" not in message.body_html

        await db_session.refresh(soon)
        assert soon.next_reminder == now + timedelta(hours=2)

    @pytest.mark.asyncio
    async def test_send_test_caps_task_count(
        self, db_session, provider, email_builder, reminder_settings, user_factory, task_factory, now
    ):
        user = await user_factory()
        for minutes in range(1, 9):
            await task_factory(user, next_reminder=now + timedelta(minutes=minutes))
        service = UserReminderService(
            db_session, user, reminder_settings, provider=provider, builder=email_builder
        )

        result = await service.send_test(now)

        assert result.tasks_included == reminder_settings.test_max_tasks

    @pytest.mark.asyncio
    async def test_sender_restricted_maps_to_403(
        self, db_session, provider, email_builder, reminder_settings, user_factory, now
    ):
        user = await user_factory(email="ada@example.com")
        provider.fail_for = {"ada@example.com"}
        provider.error_code = SENDER_RESTRICTED
        service = UserReminderService(
            db_session, user, reminder_settings, provider=provider, builder=email_builder
        )

        with pytest.raises(ReminderDeliveryException) as exc_info:
            await service.send_test(now)

        assert exc_info.value.status_code == 403
        assert "Resend is in testing mode" in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_other_failure_maps_to_500(
        self, db_session, provider, email_builder, reminder_settings, user_factory, now
    ):
        user = await user_factory(email="ada@example.com")
        provider.fail_for = {"ada@example.com"}
        service = UserReminderService(
            db_session, user, reminder_settings, provider=provider, builder=email_builder
        )

        with pytest.raises(ReminderDeliveryException) as exc_info:
            await service.send_test(now)

        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_send_test_without_provider(self, db_session, reminder_settings, user_factory):
        user = await user_factory()

        with pytest.raises(ConfigurationException):
            await UserReminderService(db_session, user, reminder_settings).send_test()
