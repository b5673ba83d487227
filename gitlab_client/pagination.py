"""Page-number pagination over GitLab collection endpoints.

GitLab signals the end of a collection in two ways, either of which may be
missing: a page shorter than ``per_page``, and the ``X-Total-Pages`` header.
The short page is checked first and always wins; the header only ends a run
whose last page happened to be exactly full.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Protocol

from gitlab_client.metrics import MetricsCollector
from gitlab_client.models import (
    DEFAULT_PER_PAGE,
    CollectionEnvelope,
    RequestOptions,
    ResponseEnvelope,
    append_query,
    parse_int,
)
from gitlab_client.request_context import bind_request_id

logger = logging.getLogger(__name__)


class Executor(Protocol):
    def __call__(
        self,
        method: str,
        endpoint: str,
        body: Any = None,
        options: RequestOptions | None = None,
    ) -> Awaitable[ResponseEnvelope]: ...


class Paginator:
    """Drives an executor across pages and assembles a ``CollectionEnvelope``."""

    def __init__(
        self,
        execute: Executor,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self._execute = execute
        self._metrics = metrics

    async def paginate(
        self,
        method: str,
        endpoint: str,
        body: Any = None,
        options: RequestOptions | None = None,
    ) -> CollectionEnvelope | Any:
        """Fetch every page of *endpoint*.

        Returns the payload untouched, without an envelope, as soon as a page
        is not a JSON array. Errors from the executor propagate on the page
        they occur; nothing is retried.
        """
        options = options or RequestOptions()
        per_page = options.per_page or DEFAULT_PER_PAGE
        # Only headers go to the executor; query is rebuilt per page here.
        page_options = RequestOptions(headers=options.headers)

        items: list[Any] = []
        page = 1
        total_pages: int | None = None
        total_items: int | None = None

        if self._metrics is not None:
            self._metrics.inc_pagination()

        with bind_request_id():
            while True:
                query = {**(options.query or {}), "page": page, "per_page": per_page}
                page_endpoint = append_query(endpoint, query)
                try:
                    response = await self._execute(method, page_endpoint, body, page_options)
                except Exception:
                    logger.warning(
                        "Pagination of %s aborted on page %d",
                        endpoint,
                        page,
                        extra={"page": page},
                    )
                    raise

                if self._metrics is not None:
                    self._metrics.inc_page()

                headers = response.headers
                payload = response.data
                if not isinstance(payload, list):
                    logger.debug(
                        "Page %d of %s is not a list; returning payload as-is",
                        page,
                        endpoint,
                    )
                    return payload

                items.extend(payload)

                parsed = parse_int(headers.get("x-total-pages"))
                if parsed is not None:
                    total_pages = parsed
                parsed = parse_int(headers.get("x-total"))
                if parsed is not None:
                    total_items = parsed

                if len(payload) < per_page:
                    page += 1
                    break
                if total_pages and page >= total_pages:
                    page += 1
                    break
                page += 1

        logger.debug(
            "Fetched %d items from %s over %d page(s)",
            len(items),
            endpoint,
            page - 1,
        )
        return CollectionEnvelope(
            items=items,
            current_page=page - 1,
            total_pages=total_pages,
            total_items=total_items,
            headers=headers,
        )
