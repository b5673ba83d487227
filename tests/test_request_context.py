"""Tests for request ID generation and contextvar propagation."""

from __future__ import annotations

import re

from gitlab_client.request_context import (
    bind_request_id,
    generate_request_id,
    get_request_id,
    request_id_var,
)


def test_generate_request_id_is_hex():
    rid = generate_request_id()
    assert re.fullmatch(r"[0-9a-f]{32}", rid), f"Not 32 hex chars: {rid}"


def test_generate_request_id_unique():
    ids = {generate_request_id() for _ in range(100)}
    assert len(ids) == 100


def test_default_is_empty():
    assert get_request_id() == ""


def test_bind_sets_and_resets():
    with bind_request_id() as rid:
        assert re.fullmatch(r"[0-9a-f]{32}", rid)
        assert get_request_id() == rid
    assert get_request_id() == ""


def test_nested_bind_reuses_outer_id():
    with bind_request_id() as outer:
        with bind_request_id() as inner:
            assert inner == outer
        assert get_request_id() == outer


def test_bind_keeps_caller_id():
    token = request_id_var.set("caller-supplied")
    try:
        with bind_request_id() as rid:
            assert rid == "caller-supplied"
        assert get_request_id() == "caller-supplied"
    finally:
        request_id_var.reset(token)
