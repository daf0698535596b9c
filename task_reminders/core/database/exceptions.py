"""Database repository exceptions.

Repository-level errors carry richer context than raw SQLAlchemy
exceptions; services translate them into HTTP-facing ``AppException``s.
"""

from __future__ import annotations

from typing import Any


class RepositoryError(Exception):
    """A query failed; ``details`` names the operation that raised."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message
