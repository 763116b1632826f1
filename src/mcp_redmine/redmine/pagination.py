"""Offset-based pagination over Redmine list endpoints."""

import logging
from collections.abc import Mapping
from typing import Any

from ..exceptions import MCPRedmineValidationError
from ..models.redmine import AggregatedResult, PagedCollection
from .client import QueryValue, RedmineClient
from .constants import DEFAULT_PAGE_SIZE

logger = logging.getLogger("mcp-redmine.redmine.pagination")


async def collect_all(
    client: RedmineClient,
    path: str,
    key: str,
    page_size: int = DEFAULT_PAGE_SIZE,
    params: Mapping[str, QueryValue] | None = None,
    limit: int | None = None,
) -> AggregatedResult:
    """
    Fetch every page of a Redmine collection, one request at a time.

    Args:
        client: Client used to send each page request
        path: Collection path (e.g. "/projects.json")
        key: Name of the collection inside each page (e.g. "projects")
        page_size: Number of items requested per page
        params: Extra query parameters sent with every page
        limit: Optional cap on the number of items collected

    Returns:
        AggregatedResult with the collected items

    Raises:
        MCPRedmineValidationError: If page_size or limit is not positive
        RedmineApiError: Propagated unchanged from the client
    """
    if page_size <= 0:
        raise MCPRedmineValidationError(
            f"page_size must be a positive integer, got {page_size}"
        )
    if limit is not None and limit <= 0:
        raise MCPRedmineValidationError(
            f"limit must be a positive integer, got {limit}"
        )

    items: list[Any] = []
    total_count = 0
    offset = 0

    while True:
        page_params: dict[str, QueryValue] = {
            **(params or {}),
            "limit": page_size,
            "offset": offset,
        }
        data = await client.send(path, params=page_params)
        page = PagedCollection.from_api_response(data, key=key)
        items.extend(page.items)

        # Without total_count the page just read is treated as the last one
        total_count = page.total_count if page.total_count is not None else len(items)
        offset += page_size

        if limit is not None and len(items) >= limit:
            items = items[:limit]
            break
        if not page.items or len(items) >= total_count:
            break

    logger.debug(
        f"Collected {len(items)} of {total_count} '{key}' from {path} "
        f"(last offset {offset - page_size})"
    )
    return AggregatedResult(items=items, count=len(items), total_count=total_count)
