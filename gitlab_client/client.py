"""Async HTTP client for the GitLab REST API."""

from __future__ import annotations

import json
import logging
import time
from typing import Any

import httpx

from gitlab_client.config import Settings
from gitlab_client.config import settings as default_settings
from gitlab_client.exceptions import build_exception
from gitlab_client.logging_config import setup_logging
from gitlab_client.metrics import MetricsCollector
from gitlab_client.models import (
    DEFAULT_API_VERSION,
    ClientConfig,
    CollectionEnvelope,
    RateLimitInfo,
    RequestDescriptor,
    RequestOptions,
    ResponseEnvelope,
)
from gitlab_client.pagination import Paginator
from gitlab_client.request_context import bind_request_id
from gitlab_client.resources import Operation, OperationKind, get_operation

logger = logging.getLogger(__name__)


def _read_text(response: httpx.Response) -> str:
    """Best-effort body text; an unreadable body reads as empty."""
    try:
        return response.text
    except (httpx.StreamError, UnicodeDecodeError, LookupError):
        return ""


def _parse_body(response: httpx.Response) -> Any:
    """JSON if the body parses, text if it decodes cleanly, else raw bytes.

    An empty body (e.g. 204) gives ``None``. Binary payloads such as job
    artifact archives come back as ``bytes`` rather than mangled text.
    """
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        pass
    try:
        return response.content.decode(response.charset_encoding or "utf-8")
    except (UnicodeDecodeError, LookupError):
        return response.content


class AsyncGitLabClient:
    """Async client for one GitLab instance (backed by ``httpx.AsyncClient``).

    Every response, successful or not, refreshes ``last_rate_limit`` from the
    ``RateLimit-Remaining`` / ``RateLimit-Reset`` headers. Nothing is retried;
    callers that hit ``RateLimitError`` can back off using that telemetry.
    """

    def __init__(
        self,
        host: str,
        token: str,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = 30.0,
        *,
        _transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        # Validates host/token before any connection is set up
        self.config = ClientConfig(host=host, token=token, api_version=api_version)
        kwargs: dict[str, Any] = {"timeout": timeout, "follow_redirects": True}
        if _transport is not None:
            kwargs["transport"] = _transport
        self._client = httpx.AsyncClient(**kwargs)
        self.last_rate_limit = RateLimitInfo()
        self.metrics = MetricsCollector()
        self._paginator = Paginator(self.execute, self.metrics)

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        configure_logging: bool = False,
        _transport: httpx.AsyncBaseTransport | None = None,
    ) -> AsyncGitLabClient:
        """Build a client from ``GITLAB_*`` environment settings.

        With *configure_logging*, also install the ``LOG_LEVEL`` / ``LOG_FORMAT``
        handler via ``setup_logging``.
        """
        settings = settings or default_settings
        if configure_logging:
            setup_logging(settings.log_level, settings.log_format)
        return cls(
            host=settings.gitlab_host,
            token=settings.gitlab_token,
            api_version=settings.gitlab_api_version,
            timeout=settings.gitlab_timeout,
            _transport=_transport,
        )

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def rate_limit_remaining(self) -> int | str | None:
        return self.last_rate_limit.remaining

    @property
    def rate_limit_reset(self) -> int | str | None:
        return self.last_rate_limit.reset

    # -- context manager -----------------------------------------------------

    async def __aenter__(self) -> AsyncGitLabClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    # -- internal ------------------------------------------------------------

    def _build_headers(self, options: RequestOptions) -> httpx.Headers:
        headers = httpx.Headers(
            {
                "PRIVATE-TOKEN": self.config.token,
                "Content-Type": "application/json",
            }
        )
        if options.headers:
            headers.update(options.headers)
        return headers

    def _handle_response(self, response: httpx.Response, url: str) -> None:
        self.last_rate_limit = RateLimitInfo.from_headers(response.headers)
        if not response.is_success:
            body = _read_text(response)
            logger.warning(
                "GitLab returned %d for %s %s",
                response.status_code,
                response.request.method,
                url,
                extra={
                    "method": response.request.method,
                    "url": url,
                    "status_code": response.status_code,
                },
            )
            raise build_exception(response.status_code, body, url)

    # -- public methods ------------------------------------------------------

    async def execute(
        self,
        method: str,
        endpoint: str,
        body: Any = None,
        options: RequestOptions | None = None,
    ) -> ResponseEnvelope:
        """Perform one request against ``base_url/endpoint``.

        Raises:
            AuthenticationError: on 401.
            NotFoundError: on 404.
            RateLimitError: on 429.
            ApiError: on any other non-2xx status.
            httpx.RequestError: on transport failures, unmodified.
        """
        request = RequestDescriptor(method, endpoint, body, options or RequestOptions())
        url = request.url(self.base_url)
        content = json.dumps(body) if body is not None else None

        with bind_request_id():
            logger.debug(
                "%s %s", request.method, url, extra={"method": request.method, "url": url}
            )
            started = time.perf_counter()
            try:
                response = await self._client.request(
                    request.method,
                    url,
                    headers=self._build_headers(request.options),
                    content=content,
                )
            except httpx.RequestError:
                self.metrics.inc_transport_failure()
                logger.exception(
                    "Request to %s failed", url, extra={"method": request.method, "url": url}
                )
                raise
            self.metrics.record_latency((time.perf_counter() - started) * 1000)
            self.metrics.inc_request(response.status_code)

            self._handle_response(response, url)
            return ResponseEnvelope(data=_parse_body(response), headers=response.headers)

    async def paginate(
        self,
        method: str,
        endpoint: str,
        body: Any = None,
        options: RequestOptions | None = None,
    ) -> CollectionEnvelope | Any:
        """Fetch every page of a collection endpoint; see ``Paginator``."""
        return await self._paginator.paginate(method, endpoint, body, options)

    async def call(
        self,
        operation: Operation | str,
        *path_args: object,
        body: Any = None,
        options: RequestOptions | None = None,
    ) -> ResponseEnvelope | CollectionEnvelope | Any:
        """Run a resource operation, e.g. ``call("issues.show", 42, 7)``."""
        if not isinstance(operation, Operation):
            operation = get_operation(operation)
        endpoint = operation.endpoint(*path_args)
        if operation.kind is OperationKind.PAGINATED:
            return await self.paginate(operation.method, endpoint, body, options)
        return await self.execute(operation.method, endpoint, body, options)
