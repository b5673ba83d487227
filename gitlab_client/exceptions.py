"""Exception hierarchy for GitLab API failures."""

from __future__ import annotations

import enum
from typing import Any


class ErrorKind(str, enum.Enum):
    API = "api"
    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"
    RATE_LIMIT = "rate_limit"


class ApiError(Exception):
    """Base exception for every non-2xx GitLab response."""

    kind: ErrorKind = ErrorKind.API

    def __init__(
        self,
        message: str,
        status_code: int,
        response_body: str,
        url: str,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.response_body = response_body
        self.url = url
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "status_code": self.status_code,
            "response_body": self.response_body,
            "url": self.url,
        }


class AuthenticationError(ApiError):
    """Raised on 401 responses."""

    kind = ErrorKind.AUTHENTICATION


class NotFoundError(ApiError):
    """Raised on 404 responses."""

    kind = ErrorKind.NOT_FOUND


class RateLimitError(ApiError):
    """Raised on 429 responses."""

    kind = ErrorKind.RATE_LIMIT


# Maps HTTP status codes to (exception class, message prefix).
_STATUS_MAP: dict[int, tuple[type[ApiError], str]] = {
    401: (AuthenticationError, "Authentication failed"),
    404: (NotFoundError, "Resource not found"),
    429: (RateLimitError, "Rate limit exceeded"),
}


def build_exception(status_code: int, body: str, url: str) -> ApiError:
    """Construct the appropriate exception for *status_code*."""
    exc_cls, prefix = _STATUS_MAP.get(
        status_code, (ApiError, f"HTTP error {status_code}")
    )
    return exc_cls(f"{prefix}: {body}", status_code, body, url)
