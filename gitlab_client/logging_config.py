"""Log formatting for client request traces (JSON or text)."""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import datetime, timezone

from gitlab_client.config import settings
from gitlab_client.request_context import get_request_id

# Fields the client attaches via ``extra=`` on request/pagination log lines.
REQUEST_FIELDS: tuple[str, ...] = ("method", "url", "status_code", "page")

# Attributes every LogRecord carries; JSONFormatter emits anything else.
_STANDARD_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


def _timestamp(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


class JSONFormatter(logging.Formatter):
    """One JSON object per line; request fields become top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "timestamp": _timestamp(record).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = get_request_id()
        if request_id:
            entry["request_id"] = request_id

        for key, value in record.__dict__.items():
            if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_"):
                entry[key] = value

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = "".join(
                traceback.format_exception(*record.exc_info)
            )

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """``<ts> LEVEL [rid] logger - message key=value ...``"""

    def format(self, record: logging.LogRecord) -> str:
        ts = _timestamp(record).strftime("%Y-%m-%d %H:%M:%S")
        request_id = get_request_id()
        rid_prefix = f"[{request_id[:12]}] " if request_id else ""

        line = f"{ts} {record.levelname:<8} {rid_prefix}{record.name} - {record.getMessage()}"

        fields = [
            f"{name}={getattr(record, name)}"
            for name in REQUEST_FIELDS
            if getattr(record, name, None) is not None
        ]
        if fields:
            line += " " + " ".join(fields)

        if record.exc_info and record.exc_info[0] is not None:
            line += "\n" + "".join(traceback.format_exception(*record.exc_info))

        return line


def setup_logging(log_level: str | None = None, log_format: str | None = None) -> None:
    """Install one stderr handler on the root logger.

    Level and format default to ``LOG_LEVEL`` / ``LOG_FORMAT`` from settings.
    """
    log_level = log_level or settings.log_level
    log_format = log_format or settings.log_format

    root = logging.getLogger()
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    if log_format.lower() == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())
    root.addHandler(handler)

    # httpx logs every request at INFO; the client logs its own
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
