"""Tests for the resource operation table."""

from __future__ import annotations

import pytest

from gitlab_client.resources import (
    OPERATIONS,
    Operation,
    OperationKind,
    get_operation,
)


def test_names_are_unique():
    assert len(OPERATIONS) == len({op.name for op in OPERATIONS.values()})


def test_methods_are_supported():
    assert {op.method for op in OPERATIONS.values()} <= {"GET", "POST", "PUT", "DELETE"}


def test_paginated_operations_are_gets():
    for op in OPERATIONS.values():
        if op.kind is OperationKind.PAGINATED:
            assert op.method == "GET", op.name


@pytest.mark.parametrize(
    ("name", "args", "expected"),
    [
        ("projects.all", (), "projects"),
        ("projects.show", (42,), "projects/42"),
        ("projects.show", ("group/sub/proj",), "projects/group%2Fsub%2Fproj"),
        ("issues.show", (1, 7), "projects/1/issues/7"),
        ("issue_notes.update", (1, 7, 3), "projects/1/issues/7/notes/3"),
        ("branches.show", (1, "feature/x"), "projects/1/repository/branches/feature%2Fx"),
        ("search.users", ("jo doe",), "search?scope=users&search=jo%20doe"),
        ("users.current", (), "user"),
    ],
)
def test_endpoint_rendering(name, args, expected):
    assert get_operation(name).endpoint(*args) == expected


def test_get_file_default_ref():
    op = get_operation("repositories.get_file")
    assert op.endpoint(5, "docs/README.md") == (
        "projects/5/repository/files/docs%2FREADME.md/raw?ref=main"
    )
    assert op.endpoint(5, "a.txt", "dev") == "projects/5/repository/files/a.txt/raw?ref=dev"


def test_arity_errors():
    op = get_operation("issues.show")
    with pytest.raises(TypeError):
        op.endpoint(1)
    with pytest.raises(TypeError):
        op.endpoint(1, 2, 3)


def test_unknown_operation():
    with pytest.raises(KeyError):
        get_operation("projects.nope")


@pytest.mark.parametrize(
    ("name", "kind"),
    [
        ("projects.all", OperationKind.PAGINATED),
        ("projects.search", OperationKind.PAGINATED),
        ("pipelines.jobs", OperationKind.PAGINATED),
        ("commits.all", OperationKind.PAGINATED),
        ("projects.show", OperationKind.SINGLE),
        ("jobs.trace", OperationKind.SINGLE),
        ("commits.comments", OperationKind.SINGLE),
    ],
)
def test_kinds(name, kind):
    assert get_operation(name).kind is kind


def test_operation_is_immutable():
    op = Operation("things", "all", "GET", "things")
    with pytest.raises(AttributeError):
        op.path = "other"  # type: ignore[misc]
    assert op.kind is OperationKind.SINGLE
    assert op.arity == 0
