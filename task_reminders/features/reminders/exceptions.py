"""Exceptions raised by the reminders feature.

Both render as RFC 7807 problem details through the global handler.
"""

from __future__ import annotations

from typing import Any

from task_reminders.core.exceptions import AppException, InternalServerException

SENDER_RESTRICTED_DETAIL = (
    "Resend is in testing mode. Please use your verified email address in your "
    "profile, or verify a domain at resend.com/domains to send to any email."
)


class ReminderSweepError(InternalServerException):
    """The due-task query failed, so the sweep was aborted before any send."""

    default_type = "reminder-sweep-failed"

    def __init__(self, detail: str = "Failed to query due tasks", extra: dict[str, Any] | None = None) -> None:
        super().__init__(detail, extra=extra)


class ReminderDeliveryException(AppException):
    """A reminder requested directly by the user could not be delivered.

    Uses 403 when the sender account may only deliver to its own verified
    address, 500 otherwise.
    """

    default_type = "reminder-delivery-failed"

    @classmethod
    def sender_restricted(cls, provider_error: str | None) -> ReminderDeliveryException:
        return cls(
            SENDER_RESTRICTED_DETAIL,
            status_code=403,
            type="sender-restricted",
            extra={"provider_error": provider_error},
        )
