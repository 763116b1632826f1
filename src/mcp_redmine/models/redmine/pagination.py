"""
Redmine pagination models.

Every Redmine list endpoint answers with the same envelope::

    {"<collection>": [...], "total_count": 250, "offset": 0, "limit": 100}
"""

import logging
from typing import Any

from pydantic import Field

from ..base import ApiModel

logger = logging.getLogger(__name__)


def _as_int(value: Any) -> int | None:
    try:
        return int(value) if value is not None else None
    except (ValueError, TypeError):
        return None


class PagedCollection(ApiModel):
    """
    One page of a Redmine collection.

    ``total_count`` is None when Redmine did not report it.
    """

    items: list[Any] = Field(default_factory=list)
    total_count: int | None = None
    offset: int = 0
    limit: int | None = None

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], key: str = "items", **kwargs: Any
    ) -> "PagedCollection":
        """
        Create a PagedCollection from a Redmine list response.

        Args:
            data: The raw page returned by the Redmine API
            key: Name of the collection inside the page (e.g. "projects")

        Returns:
            A PagedCollection instance
        """
        if not data or not isinstance(data, dict):
            logger.debug("Received empty or non-dictionary page for '%s'", key)
            return cls()

        items = data.get(key)
        if not isinstance(items, list):
            items = []

        return cls(
            items=items,
            total_count=_as_int(data.get("total_count")),
            offset=_as_int(data.get("offset")) or 0,
            limit=_as_int(data.get("limit")),
        )


class AggregatedResult(ApiModel):
    """Items collected across all pages of a Redmine collection."""

    items: list[Any] = Field(default_factory=list)
    count: int = 0
    total_count: int = 0

    def to_simplified_dict(self) -> dict[str, Any]:
        return {
            "items": self.items,
            "count": self.count,
            "total_count": self.total_count,
        }
