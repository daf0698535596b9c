"""JSON Lines formatter with OpenTelemetry trace correlation."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from opentelemetry import trace

# Attributes every LogRecord carries; anything else came from ``extra=`` or a filter
_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


def _utc_timestamp(created: float) -> str:
    return datetime.fromtimestamp(created, tz=UTC).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


class JSONFormatter(logging.Formatter):
    """Render each record as one JSON object per line.

    Fixed keys are ``timestamp``, ``level``, ``logger`` and ``message``.
    ``static`` fields (the service name) follow, then trace ids when a span
    is active, then whatever the call site passed in ``extra=`` or the
    context filter injected (``sweep_id``, ``user_id``, ``operation``).

    Example output:
        {"timestamp": "2024-01-15T09:00:00.123Z", "level": "INFO", "logger": "task_reminders.features.reminders.service", "message": "Reminder sweep finished", "service": "task-reminders", "sweep_id": "3f9c2a1b7d4e", "tasks_found": 3}
    """

    def __init__(self, static: dict[str, Any] | None = None) -> None:
        super().__init__()
        self.static = dict(static or {})

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "timestamp": _utc_timestamp(record.created),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **self.static,
        }

        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            data["trace_id"] = format(span_context.trace_id, "032x")
            data["span_id"] = format(span_context.span_id, "016x")

        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            data["stack_trace"] = self.formatStack(record.stack_info)

        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS:
                data.setdefault(key, value)

        return json.dumps(data, ensure_ascii=False, default=str)
