"""Typed async client for the GitLab REST API."""

from __future__ import annotations

from gitlab_client.client import AsyncGitLabClient
from gitlab_client.exceptions import (
    ApiError,
    AuthenticationError,
    ErrorKind,
    NotFoundError,
    RateLimitError,
)
from gitlab_client.models import (
    ClientConfig,
    CollectionEnvelope,
    RateLimitInfo,
    RequestOptions,
    ResponseEnvelope,
)
from gitlab_client.pagination import Paginator
from gitlab_client.resources import OPERATIONS, Operation, OperationKind, get_operation

__all__ = [
    "AsyncGitLabClient",
    "ApiError",
    "AuthenticationError",
    "NotFoundError",
    "RateLimitError",
    "ErrorKind",
    "ClientConfig",
    "RateLimitInfo",
    "RequestOptions",
    "ResponseEnvelope",
    "CollectionEnvelope",
    "Paginator",
    "Operation",
    "OperationKind",
    "OPERATIONS",
    "get_operation",
]
