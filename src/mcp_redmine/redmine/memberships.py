"""Module for Redmine project membership operations."""

import logging
from typing import Any
from urllib.parse import quote

from ..models.redmine import AggregatedResult, RedmineMembership
from .client import RedmineClient
from .pagination import collect_all

logger = logging.getLogger("mcp-redmine.redmine.memberships")


class MembershipsMixin(RedmineClient):
    """Mixin for Redmine project membership operations."""

    async def get_project_memberships(
        self, project_id: str, limit: int | None = None
    ) -> dict[str, Any]:
        """
        Get the users and groups that are members of a project.

        Args:
            project_id: Project id or identifier
            limit: Maximum number of memberships to return

        Returns:
            Aggregated memberships plus a ``members`` mapping of member name
            to user or group id
        """
        result = await collect_all(
            self,
            f"/projects/{quote(project_id, safe='')}/memberships.json",
            "memberships",
            limit=limit,
        )
        memberships = [RedmineMembership.from_api_response(m) for m in result.items]

        members: dict[str, int] = {}
        for membership in memberships:
            if membership.member:
                members[membership.member.name] = membership.member.id

        response = AggregatedResult(
            items=[m.to_simplified_dict() for m in memberships],
            count=result.count,
            total_count=result.total_count,
        ).to_simplified_dict()
        response["members"] = members
        return response
