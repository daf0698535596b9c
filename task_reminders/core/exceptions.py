"""Application exceptions rendered as RFC 7807 problem details.

Each subclass only declares its HTTP status, default problem ``type`` and
``title``; the global handler in ``app.exception_handlers`` turns any
``AppException`` into a JSON problem response.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, ClassVar


def default_title(status_code: int) -> str:
    """Human-readable title for an HTTP status code."""
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


class AppException(Exception):
    """Base application exception.

    Attributes:
        status_code: HTTP status of the response.
        detail: Human-readable explanation of this occurrence.
        type: Problem type identifier, e.g. ``task-not-found``.
        title: Short summary of the problem type.
        instance: URI of the occurrence; the handler falls back to the request path.
        extra: Members merged into the problem body.

    Example:
        raise NotFoundException(
            detail="Task not found",
            type="task-not-found",
            extra={"task_id": str(task_id)},
        )
    """

    status_code: int = 500
    default_type: ClassVar[str] = "about:blank"
    title: str | None = None

    def __init__(
        self,
        detail: str,
        type: str | None = None,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
        *,
        status_code: int | None = None,
        title: str | None = None,
    ) -> None:
        if status_code is not None:
            self.status_code = status_code
        self.detail = detail
        self.type = type or self.default_type
        self.title = title or self.title or default_title(self.status_code)
        self.instance = instance
        self.extra = extra or {}
        super().__init__(detail)


class NotFoundException(AppException):
    status_code = 404
    default_type = "not-found"
    title = "Not Found"


class ValidationException(AppException):
    status_code = 422
    default_type = "validation-error"
    title = "Validation Error"


class UnauthorizedException(AppException):
    """Caller identity or scheduler credential was missing or wrong.

    Responses carry ``WWW-Authenticate: Bearer``.
    """

    status_code = 401
    default_type = "unauthorized"
    title = "Unauthorized"


class ForbiddenException(AppException):
    status_code = 403
    default_type = "forbidden"
    title = "Forbidden"


class ConflictException(AppException):
    status_code = 409
    default_type = "conflict"
    title = "Conflict"


class InternalServerException(AppException):
    status_code = 500
    default_type = "internal-error"
    title = "Internal Server Error"


class ConfigurationException(InternalServerException):
    """A setting the request depends on is missing, e.g. the email API key."""

    default_type = "configuration-error"
