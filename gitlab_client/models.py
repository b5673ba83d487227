"""Configuration, request and envelope models used by the client."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

DEFAULT_API_VERSION = "v4"
DEFAULT_PER_PAGE = 100
HTTP_METHODS = frozenset({"GET", "POST", "PUT", "DELETE"})


def normalize_host(host: str) -> str:
    """Prefix ``https://`` unless *host* already names a scheme."""
    if host.startswith(("http://", "https://")):
        return host
    return f"https://{host}"


def parse_int(value: str | None) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError:
        return None


class ClientConfig(BaseModel):
    """Immutable connection settings for one GitLab instance."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(..., min_length=1, description="GitLab host, with or without scheme")
    token: str = Field(..., min_length=1, repr=False, description="Personal access token")
    api_version: str = Field(DEFAULT_API_VERSION, min_length=1)

    @field_validator("host", "token")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @property
    def base_url(self) -> str:
        return f"{normalize_host(self.host)}/api/{self.api_version}"


@dataclass(frozen=True)
class RateLimitInfo:
    """Rate-limit telemetry parsed from ``RateLimit-*`` response headers."""

    remaining: int | str | None = None
    reset: int | str | None = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> RateLimitInfo:
        """Absent headers yield ``None``; non-numeric values are kept verbatim."""
        return cls(
            remaining=_rate_limit_value(headers, "ratelimit-remaining"),
            reset=_rate_limit_value(headers, "ratelimit-reset"),
        )


def _rate_limit_value(headers: Mapping[str, str], name: str) -> int | str | None:
    raw = headers.get(name)
    value = parse_int(raw)
    if value is None and raw:
        logger.debug("Non-numeric %s header: %r", name, raw)
        return raw
    return value


@dataclass(frozen=True)
class RequestOptions:
    """Per-call header overrides, query parameters and page size."""

    headers: Mapping[str, str] | None = None
    query: Mapping[str, Any] | None = None
    per_page: int | None = None

    def __post_init__(self) -> None:
        if self.per_page is not None and self.per_page < 1:
            raise ValueError(f"per_page must be positive, got {self.per_page}")


@dataclass(frozen=True)
class RequestDescriptor:
    method: str
    endpoint: str
    body: Any = None
    options: RequestOptions = field(default_factory=RequestOptions)

    def __post_init__(self) -> None:
        method = self.method.upper()
        if method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method: {self.method!r}")
        object.__setattr__(self, "method", method)

    def url(self, base_url: str) -> str:
        """Join *base_url* and the endpoint, appending ``options.query``."""
        return f"{base_url}/{append_query(self.endpoint, self.options.query)}"


def append_query(endpoint: str, query: Mapping[str, Any] | None) -> str:
    """Append *query* to *endpoint*, using ``&`` when it already has one."""
    if not query:
        return endpoint
    encoded = str(httpx.QueryParams(query))
    if not encoded:
        return endpoint
    separator = "&" if "?" in endpoint else "?"
    return f"{endpoint}{separator}{encoded}"


@dataclass(frozen=True)
class ResponseEnvelope:
    """Result of a single request: parsed body (or ``None``) plus headers."""

    data: Any
    headers: httpx.Headers


@dataclass(frozen=True)
class CollectionEnvelope:
    """Accumulated result of a paginated request."""

    items: list[Any]
    current_page: int
    total_pages: int | None
    total_items: int | None
    headers: httpx.Headers
