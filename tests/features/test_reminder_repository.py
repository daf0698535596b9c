"""Tests for the due-task selector."""

from __future__ import annotations

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from task_reminders.core.database import RepositoryError
from task_reminders.features.reminders.repository import ReminderRepository


@pytest.fixture
def repository() -> ReminderRepository:
    return ReminderRepository()


@pytest.mark.asyncio
async def test_selects_due_task_with_owner_and_category(
    db_session, repository, user_factory, category_factory, task_factory, now
):
    user = await user_factory(email="ada@example.com", display_name="Ada")
    home = await category_factory(user, name="Home")
    task = await task_factory(user, category=home, next_reminder=now - timedelta(hours=1))

    due = await repository.find_due(db_session, now)

    assert len(due) == 1
    assert due[0].task_id == task.id
    assert due[0].owner_email == "ada@example.com"
    assert due[0].owner_display_name == "Ada"
    assert due[0].category_name == "Home"
    assert due[0].next_reminder == now - timedelta(hours=1)


@pytest.mark.asyncio
async def test_boundary_is_inclusive(db_session, repository, user_factory, task_factory, now):
    user = await user_factory()
    await task_factory(user, next_reminder=now)

    assert len(await repository.find_due(db_session, now)) == 1


@pytest.mark.asyncio
async def test_future_task_not_selected(db_session, repository, user_factory, task_factory, now):
    user = await user_factory()
    await task_factory(user, next_reminder=now + timedelta(seconds=1))

    assert await repository.find_due(db_session, now) == []


@pytest.mark.asyncio
async def test_completed_task_never_selected(
    db_session, repository, user_factory, task_factory, now
):
    user = await user_factory()
    await task_factory(user, completed=True, next_reminder=now - timedelta(days=30))

    assert await repository.find_due(db_session, now) == []


@pytest.mark.asyncio
async def test_email_disabled_task_never_selected(
    db_session, repository, user_factory, task_factory, now
):
    user = await user_factory()
    await task_factory(user, email_notification=False, next_reminder=now - timedelta(days=1))

    assert await repository.find_due(db_session, now) == []


@pytest.mark.asyncio
async def test_ordered_by_next_reminder(db_session, repository, user_factory, task_factory, now):
    user = await user_factory()
    await task_factory(user, title="later", next_reminder=now - timedelta(minutes=5))
    await task_factory(user, title="earlier", next_reminder=now - timedelta(hours=5))

    due = await repository.find_due(db_session, now)

    assert [d.title for d in due] == ["earlier", "later"]


@pytest.mark.asyncio
async def test_task_without_category_selected(
    db_session, repository, user_factory, task_factory, now
):
    user = await user_factory()
    await task_factory(user)

    due = await repository.find_due(db_session, now)

    assert due[0].category_name is None


@pytest.mark.asyncio
async def test_owner_without_email_is_skipped(
    db_session, repository, user_factory, task_factory, now, caplog
):
    user = await user_factory()
    await task_factory(user)
    await db_session.execute(
        text("UPDATE users SET email = '' WHERE id = :id"), {"id": user.id.hex}
    )
    await db_session.commit()

    with caplog.at_level("WARNING"):
        due = await repository.find_due(db_session, now)

    assert due == []
    assert "Skipping due task without a reachable owner" in caplog.text


@pytest.mark.asyncio
async def test_missing_owner_is_skipped(db_session, repository, user_factory, task_factory, now):
    user = await user_factory()
    await task_factory(user)
    # Orphan the task behind the ORM's back
    await db_session.execute(text("PRAGMA foreign_keys=OFF"))
    await db_session.execute(text("DELETE FROM users WHERE id = :id"), {"id": user.id.hex})
    await db_session.commit()

    assert await repository.find_due(db_session, now) == []


@pytest.mark.asyncio
async def test_query_failure_raises_repository_error(repository, now):
    session = AsyncMock()
    session.execute.side_effect = OperationalError("SELECT", {}, Exception("db down"))

    with pytest.raises(RepositoryError):
        await repository.find_due(session, now)


@pytest.mark.asyncio
async def test_find_upcoming_for_user_window_and_limit(
    db_session, repository, user_factory, task_factory, now
):
    user = await user_factory()
    other = await user_factory()
    await task_factory(user, title="overdue", next_reminder=now - timedelta(minutes=1))
    for hours in range(1, 8):
        await task_factory(user, title=f"in {hours}h", next_reminder=now + timedelta(hours=hours))
    await task_factory(user, title="too far", next_reminder=now + timedelta(hours=25))
    await task_factory(user, title="muted", email_notification=False, next_reminder=now)
    await task_factory(other, title="not mine", next_reminder=now + timedelta(hours=1))

    upcoming = await repository.find_upcoming_for_user(
        db_session, user.id, start=now, end=now + timedelta(hours=24), limit=5
    )

    assert [t.title for t in upcoming] == ["in 1h", "in 2h", "in 3h", "in 4h", "in 5h"]
