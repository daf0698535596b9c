"""Shared API schemas."""

from task_reminders.core.schemas.base import CamelModel, CustomBase
from task_reminders.core.schemas.problem_details import (
    FieldError,
    ProblemDetails,
    ValidationProblemDetails,
)

__all__ = [
    "CamelModel",
    "CustomBase",
    "FieldError",
    "ProblemDetails",
    "ValidationProblemDetails",
]
