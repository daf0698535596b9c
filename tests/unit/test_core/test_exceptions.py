"""Unit tests for the problem-details exception hierarchy."""

from __future__ import annotations

import pytest

from task_reminders.core.exceptions import (
    AppException,
    ConfigurationException,
    ConflictException,
    ForbiddenException,
    NotFoundException,
    UnauthorizedException,
    ValidationException,
    default_title,
)
from task_reminders.features.reminders.exceptions import (
    SENDER_RESTRICTED_DETAIL,
    ReminderDeliveryException,
    ReminderSweepError,
)


@pytest.mark.parametrize(
    ("exc_class", "status_code", "type_"),
    [
        (NotFoundException, 404, "not-found"),
        (ValidationException, 422, "validation-error"),
        (UnauthorizedException, 401, "unauthorized"),
        (ForbiddenException, 403, "forbidden"),
        (ConflictException, 409, "conflict"),
        (ConfigurationException, 500, "configuration-error"),
    ],
)
def test_subclass_defaults(exc_class, status_code, type_):
    exc = exc_class("boom")

    assert exc.status_code == status_code
    assert exc.type == type_
    assert exc.detail == "boom"
    assert exc.extra == {}
    assert str(exc) == "boom"


def test_explicit_type_and_extra():
    exc = NotFoundException("Task not found", type="task-not-found", extra={"task_id": "t1"})

    assert exc.type == "task-not-found"
    assert exc.title == "Not Found"
    assert exc.extra == {"task_id": "t1"}


def test_base_exception_title_follows_status():
    exc = AppException("teapot", status_code=418)

    assert exc.title == "I'm a Teapot"
    assert exc.type == "about:blank"


def test_default_title_unknown_status():
    assert default_title(599) == "Error"


def test_sweep_error_is_internal():
    exc = ReminderSweepError(extra={"as_of": "2024-01-15T09:00:00+00:00"})

    assert exc.status_code == 500
    assert exc.type == "reminder-sweep-failed"
    assert exc.detail == "Failed to query due tasks"


def test_sender_restricted_is_forbidden():
    exc = ReminderDeliveryException.sender_restricted("only your own email")

    assert exc.status_code == 403
    assert exc.type == "sender-restricted"
    assert exc.detail == SENDER_RESTRICTED_DETAIL
    assert exc.extra == {"provider_error": "only your own email"}


def test_delivery_failure_defaults_to_500():
    exc = ReminderDeliveryException("provider down")

    assert exc.status_code == 500
    assert exc.type == "reminder-delivery-failed"
    assert exc.title == "Internal Server Error"
