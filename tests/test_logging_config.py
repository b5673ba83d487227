"""Tests for JSON and text log formatters."""

from __future__ import annotations

import json
import logging
import sys

from gitlab_client.config import settings
from gitlab_client.logging_config import JSONFormatter, TextFormatter, setup_logging
from gitlab_client.request_context import request_id_var


def _make_record(msg: str = "hello", level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(
        name="test.logger",
        level=level,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


def test_json_output_structure():
    fmt = JSONFormatter()
    record = _make_record("test message")
    output = fmt.format(record)
    data = json.loads(output)
    assert data["level"] == "INFO"
    assert data["logger"] == "test.logger"
    assert data["message"] == "test message"
    assert "timestamp" in data


def test_json_includes_request_id():
    fmt = JSONFormatter()
    token = request_id_var.set("abc123def456")
    try:
        record = _make_record("with id")
        data = json.loads(fmt.format(record))
        assert data["request_id"] == "abc123def456"
    finally:
        request_id_var.reset(token)


def test_json_excludes_empty_request_id():
    fmt = JSONFormatter()
    record = _make_record("no id")
    data = json.loads(fmt.format(record))
    assert "request_id" not in data


def test_json_includes_extras():
    fmt = JSONFormatter()
    record = _make_record("GitLab returned 404")
    record.status_code = 404
    data = json.loads(fmt.format(record))
    assert data["status_code"] == 404


def test_json_exception_formatting():
    fmt = JSONFormatter()
    try:
        raise ValueError("boom")
    except ValueError:
        record = _make_record("error")
        record.exc_info = sys.exc_info()
    data = json.loads(fmt.format(record))
    assert "ValueError: boom" in data["exception"]


def test_text_format_with_request_id():
    fmt = TextFormatter()
    token = request_id_var.set("aabbccdd1122")
    try:
        output = fmt.format(_make_record("hello text"))
        assert "[aabbccdd1122]" in output
        assert "hello text" in output
    finally:
        request_id_var.reset(token)


def test_text_format_without_request_id():
    output = TextFormatter().format(_make_record("no rid"))
    assert "test.logger - no rid" in output


def test_setup_logging_json():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging("debug", "json")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_setup_logging_unknown_level_falls_back_to_info():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging("chatty", "text")
        assert root.level == logging.INFO
        assert isinstance(root.handlers[0].formatter, TextFormatter)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_text_format_appends_request_fields():
    record = _make_record("GitLab returned 404")
    record.method = "GET"
    record.url = "https://gitlab.com/api/v4/projects/1"
    record.status_code = 404
    output = TextFormatter().format(record)
    assert output.endswith(
        "GitLab returned 404 method=GET url=https://gitlab.com/api/v4/projects/1 status_code=404"
    )


def test_text_format_includes_page():
    record = _make_record("Pagination aborted")
    record.page = 3
    assert TextFormatter().format(record).endswith("Pagination aborted page=3")


def test_json_excludes_standard_attrs():
    data = json.loads(JSONFormatter().format(_make_record("plain")))
    assert set(data) == {"timestamp", "level", "logger", "message"}


def test_setup_logging_defaults_from_settings(monkeypatch):
    monkeypatch.setattr(settings, "log_level", "WARNING")
    monkeypatch.setattr(settings, "log_format", "json")
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging()
        assert root.level == logging.WARNING
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
