"""Module for Redmine user operations."""

import logging
from typing import Any

from ..models.redmine import AggregatedResult, RedmineUser
from .client import QueryValue, RedmineClient
from .pagination import collect_all

logger = logging.getLogger("mcp-redmine.redmine.users")


class UsersMixin(RedmineClient):
    """Mixin for Redmine user operations."""

    async def get_current_user(self, include: str | None = None) -> Any:
        """
        Get the account the API key belongs to.

        Args:
            include: Comma-separated associations (e.g. "memberships,groups")

        Returns:
            The raw Redmine response ({"user": {...}})
        """
        params = {"include": include} if include else None
        return await self.send("/users/current.json", params=params)

    async def get_users(
        self,
        name: str | None = None,
        status: int | None = None,
        group_id: int | None = None,
        limit: int | None = None,
    ) -> dict[str, Any]:
        """
        List users. Requires administrator privileges on most instances.

        Args:
            name: Filter on login, first name, last name or mail
            status: 1 active, 2 registered, 3 locked
            group_id: Only members of this group
            limit: Maximum number of users to return

        Returns:
            Aggregated result of simplified users
        """
        filters: dict[str, QueryValue | None] = {
            "status": status,
            "name": name,
            "group_id": group_id,
        }
        params = {key: value for key, value in filters.items() if value is not None}
        result = await collect_all(self, "/users.json", "users", params=params, limit=limit)
        return AggregatedResult(
            items=[RedmineUser.from_api_response(u).to_simplified_dict() for u in result.items],
            count=result.count,
            total_count=result.total_count,
        ).to_simplified_dict()
