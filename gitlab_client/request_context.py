"""Correlation ID for log lines emitted while a request is in flight."""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def generate_request_id() -> str:
    """Return a new 32-character hex request ID."""
    return uuid.uuid4().hex


def get_request_id() -> str:
    """Read the current request ID from the contextvar."""
    return request_id_var.get()


@contextmanager
def bind_request_id() -> Iterator[str]:
    """Bind a fresh request ID unless one is already bound.

    Nested calls (every page of one pagination run) reuse the outer ID.
    """
    current = request_id_var.get()
    if current:
        yield current
        return
    token = request_id_var.set(generate_request_id())
    try:
        yield request_id_var.get()
    finally:
        request_id_var.reset(token)
