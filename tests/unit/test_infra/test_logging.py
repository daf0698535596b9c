"""Unit tests for the logging infrastructure."""

from __future__ import annotations

import json
import logging
import sys

import pytest

from task_reminders.infra.logging import (
    ContextInjectingFilter,
    JSONFormatter,
    clear_log_context,
    get_lazy_logger,
    get_log_context,
    remove_from_log_context,
    set_log_context,
)


@pytest.fixture(autouse=True)
def _reset_context():
    clear_log_context()
    yield
    clear_log_context()


def _record(msg: str = "Reminder sweep finished", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="task_reminders.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_emits_single_json_line(self):
        output = JSONFormatter().format(_record(tasks_found=3))

        data = json.loads(output)
        assert "\n" not in output
        assert data["level"] == "INFO"
        assert data["logger"] == "task_reminders.test"
        assert data["message"] == "Reminder sweep finished"
        assert data["tasks_found"] == 3
        assert data["timestamp"].endswith("Z")

    def test_static_fields(self):
        data = json.loads(JSONFormatter(static={"service": "task-reminders"}).format(_record()))

        assert data["service"] == "task-reminders"

    def test_exception_is_escaped(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record()
            record.exc_info = sys.exc_info()

        output = JSONFormatter().format(record)

        assert "\n" not in output
        assert "RuntimeError: boom" in json.loads(output)["exception"]


class TestLogContext:
    def test_set_and_remove(self):
        set_log_context(sweep_id="abc", user_id="u1")
        remove_from_log_context("sweep_id")

        assert get_log_context() == {"user_id": "u1"}

    def test_filter_injects_without_overwriting(self):
        set_log_context(sweep_id="abc", operation="from-context")
        record = _record(operation="from-call-site")

        assert ContextInjectingFilter().filter(record)
        assert record.sweep_id == "abc"
        assert record.operation == "from-call-site"


class TestLazyLogger:
    def test_callable_not_evaluated_when_disabled(self):
        logger = get_lazy_logger("task_reminders.test.lazy")
        logger.logger.setLevel(logging.INFO)
        calls = []

        logger.debug(lambda: calls.append("evaluated") or "expensive")

        assert calls == []

    def test_callable_evaluated_when_enabled(self, caplog):
        logger = get_lazy_logger("task_reminders.test.lazy_enabled")

        with caplog.at_level(logging.DEBUG, logger="task_reminders.test.lazy_enabled"):
            logger.debug(lambda: "computed message")

        assert "computed message" in caplog.text
