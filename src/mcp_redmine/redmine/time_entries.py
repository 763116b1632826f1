"""Module for Redmine time tracking operations."""

import logging
from typing import Any
from urllib.parse import quote

from ..exceptions import MCPRedmineValidationError
from ..models.redmine import CustomFieldValue
from .client import QueryValue, RedmineClient

logger = logging.getLogger("mcp-redmine.redmine.time_entries")


class TimeEntriesMixin(RedmineClient):
    """Mixin for Redmine time entry and activity operations."""

    async def get_time_entries(
        self,
        project_id: str | None = None,
        issue_id: str | None = None,
        user_id: str | None = None,
        activity_id: str | None = None,
        from_date: str | None = None,
        to_date: str | None = None,
        spent_on: str | None = None,
        limit: int | None = None,
    ) -> Any:
        """
        Search time entries.

        ``from_date`` and ``to_date`` are sent as Redmine's ``from`` and ``to``.

        Returns:
            The raw Redmine response ({"time_entries": [...], ...})
        """
        filters: dict[str, QueryValue | None] = {
            "project_id": project_id,
            "issue_id": issue_id,
            "user_id": user_id,
            "activity_id": activity_id,
            "from": from_date,
            "to": to_date,
            "spent_on": spent_on,
            "limit": limit,
        }
        params = {key: value for key, value in filters.items() if value is not None}
        return await self.send("/time_entries.json", params=params)

    async def get_time_activities(self, project_id: str | None = None) -> dict[str, Any]:
        """
        Get the activities time can be logged against.

        Args:
            project_id: Project id or identifier. When given, the activities
                enabled for that project are returned instead of the global list.

        Returns:
            {"scope": "project"|"global", "project_id"?, "activities", "total"}
        """
        if project_id:
            data = await self.send(
                f"/projects/{quote(project_id, safe='')}.json",
                params={"include": "time_entry_activities"},
            )
            project = data.get("project") if isinstance(data, dict) else None
            activities = (project or {}).get("time_entry_activities") or []
            return {
                "scope": "project",
                "project_id": project_id,
                "activities": activities,
                "total": len(activities),
            }

        data = await self.send("/enumerations/time_entry_activities.json")
        activities = (data.get("time_entry_activities") if isinstance(data, dict) else None) or []
        return {"scope": "global", "activities": activities, "total": len(activities)}

    async def log_time(
        self,
        hours: float,
        activity_id: int,
        issue_id: int | None = None,
        project_id: int | None = None,
        comments: str | None = None,
        spent_on: str | None = None,
        custom_fields: list[CustomFieldValue] | None = None,
    ) -> dict[str, Any]:
        """
        Log time on an issue or a project.

        Args:
            hours: Time spent, must be positive
            activity_id: Activity id (see get_time_activities)
            issue_id: Issue to log time on
            project_id: Project to log time on; sent together with issue_id
                when both are given
            comments: Short description of the work
            spent_on: Date in YYYY-MM-DD format, defaults to today on the server
            custom_fields: Custom field values of the time entry

        Returns:
            {"message": ..., "time_entry": {...}}

        Raises:
            MCPRedmineValidationError: If hours or activity_id is not positive,
                or neither issue_id nor project_id is given
        """
        if hours <= 0:
            raise MCPRedmineValidationError("hours must be greater than 0")
        if activity_id <= 0:
            raise MCPRedmineValidationError("activity_id must be a positive integer")
        if issue_id is None and project_id is None:
            raise MCPRedmineValidationError(
                "Either issue_id or project_id must be provided"
            )

        entry: dict[str, Any] = {}
        if issue_id is not None:
            entry["issue_id"] = issue_id
        if project_id is not None:
            entry["project_id"] = project_id
        entry["hours"] = hours
        entry["activity_id"] = activity_id
        if comments is not None:
            entry["comments"] = comments
        if spent_on is not None:
            entry["spent_on"] = spent_on
        if custom_fields:
            entry["custom_fields"] = [field.to_payload() for field in custom_fields]

        data = await self.send(
            "/time_entries.json", method="POST", body={"time_entry": entry}
        )
        time_entry = data.get("time_entry") if isinstance(data, dict) else None
        logger.info(f"Logged {hours}h (activity {activity_id})")
        return {"message": "Time entry created successfully", "time_entry": time_entry}
