"""Logging infrastructure.

Structured logging with:
- JSON Lines output with OpenTelemetry trace correlation
- Automatic context injection (sweep_id, user_id, ...) via contextvars
- QueueHandler + QueueListener for non-blocking I/O
- Lazy evaluation for DEBUG messages

Basic usage:
    import logging
    from task_reminders.infra.logging import get_lazy_logger, set_log_context

    logger = logging.getLogger(__name__)
    lazy_logger = get_lazy_logger(__name__)

    set_log_context(sweep_id="abc-123")
    logger.info("Sweep started")
    lazy_logger.debug(lambda: f"Due tasks: {len(tasks)}")
"""

from task_reminders.infra.logging.config import configure_logging, setup_logging, shutdown
from task_reminders.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    remove_from_log_context,
    set_log_context,
)
from task_reminders.infra.logging.formatters import JSONFormatter
from task_reminders.infra.logging.lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "LazyLoggerAdapter",
    "clear_log_context",
    "configure_logging",
    "get_lazy_logger",
    "get_log_context",
    "remove_from_log_context",
    "set_log_context",
    "setup_logging",
    "shutdown",
]
