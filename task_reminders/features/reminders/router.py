"""API router for the reminders feature.

Two audiences:
- the external scheduler calls ``/cron/check-reminders`` on a fixed interval
- signed-in users read their upcoming reminders and send themselves a test email
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from task_reminders.core.dependencies.auth import CurrentUser
from task_reminders.core.dependencies.cron import verify_cron_secret
from task_reminders.core.dependencies.database import get_db_session
from task_reminders.core.dependencies.email import (
    EmailProviderDep,
    ReminderEmailBuilderDep,
)
from task_reminders.core.schemas import ProblemDetails
from task_reminders.core.settings import ReminderSettings, get_reminder_settings
from task_reminders.features.reminders.schemas import (
    SweepSummary,
    TestReminderResult,
    UpcomingReminders,
)
from task_reminders.features.reminders.service import (
    ReminderSweepService,
    UserReminderService,
)

router = APIRouter(tags=["reminders"])

SessionDep = Annotated[AsyncSession, Depends(get_db_session)]
ReminderSettingsDep = Annotated[ReminderSettings, Depends(get_reminder_settings)]


def get_sweep_service(
    session: SessionDep,
    provider: EmailProviderDep,
    builder: ReminderEmailBuilderDep,
) -> ReminderSweepService:
    return ReminderSweepService(session, provider, builder)


@router.api_route(
    "/cron/check-reminders",
    methods=["GET", "POST"],
    response_model=SweepSummary,
    summary="Run a reminder sweep",
    description=(
        "Email every user whose tasks are due and reschedule the delivered tasks. "
        "Requires the scheduler secret as a Bearer token."
    ),
    dependencies=[Depends(verify_cron_secret)],
    responses={
        401: {"model": ProblemDetails, "description": "Missing or invalid scheduler secret"},
        500: {"model": ProblemDetails, "description": "Email not configured or query failed"},
    },
)
async def check_reminders(
    service: Annotated[ReminderSweepService, Depends(get_sweep_service)],
) -> SweepSummary:
    return await service.run()


@router.get(
    "/reminders/upcoming",
    response_model=UpcomingReminders,
    summary="Upcoming reminders",
    description="The current user's incomplete tasks grouped as overdue, today and upcoming.",
)
async def upcoming_reminders(
    user: CurrentUser,
    session: SessionDep,
    settings: ReminderSettingsDep,
) -> UpcomingReminders:
    return await UserReminderService(session, user, settings).upcoming()


@router.post(
    "/reminders/test",
    response_model=TestReminderResult,
    summary="Send a test reminder",
    description=(
        "Email the current user a preview of the reminders due in the next "
        "window. Nothing is rescheduled."
    ),
    responses={
        403: {"model": ProblemDetails, "description": "Sender may only email its own address"},
        500: {"model": ProblemDetails, "description": "Delivery failed or not configured"},
    },
)
async def send_test_reminder(
    user: CurrentUser,
    session: SessionDep,
    settings: ReminderSettingsDep,
    provider: EmailProviderDep,
    builder: ReminderEmailBuilderDep,
) -> TestReminderResult:
    service = UserReminderService(
        session,
        user,
        settings,
        provider=provider,
        builder=builder,
    )
    return await service.send_test()
