"""Module for Redmine issue operations."""

import logging
from typing import Any

from ..exceptions import MCPRedmineValidationError
from ..models.redmine import CustomFieldValue
from .client import QueryValue, RedmineClient
from .constants import (
    CONTAINS_OPERATOR,
    DEFAULT_ISSUE_SORT,
    DEFAULT_PRIORITY_ID,
    DEFAULT_STATUS_ID,
    DEFAULT_TRACKER_ID,
)

logger = logging.getLogger("mcp-redmine.redmine.issues")


def build_issue_payload(fields: dict[str, Any]) -> dict[str, Any]:
    """Convert supplied issue fields into the body of an ``{"issue": ...}`` request.

    Fields set to None are dropped; custom field values are serialized.
    """
    payload: dict[str, Any] = {}
    for name, value in fields.items():
        if value is None:
            continue
        if name == "custom_fields":
            payload[name] = [
                item.to_payload() if isinstance(item, CustomFieldValue) else item
                for item in value
            ]
        else:
            payload[name] = value
    return payload


class IssuesMixin(RedmineClient):
    """Mixin for Redmine issue operations."""

    async def get_issues(
        self,
        project_id: str | None = None,
        status_id: str | None = None,
        assigned_to_id: str | None = None,
        issue_id: str | None = None,
        parent_id: str | None = None,
        tracker_id: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
        subject: str | None = None,
        sort: str | None = None,
    ) -> Any:
        """
        Search issues with Redmine filters.

        Args:
            project_id: Project id or identifier
            status_id: Status id, or "open", "closed", "*"
            assigned_to_id: User id, or "me"
            issue_id: Single id or comma-separated ids
            parent_id: Parent issue id
            tracker_id: Tracker id
            limit: Page size requested from Redmine
            offset: Number of issues to skip
            subject: Text the subject must contain
            sort: Sort expression, e.g. "updated_on:desc"

        Returns:
            The raw Redmine response ({"issues": [...], "total_count": ...})
        """
        filters: dict[str, QueryValue | None] = {
            "project_id": project_id,
            "status_id": status_id,
            "assigned_to_id": assigned_to_id,
            "issue_id": issue_id,
            "parent_id": parent_id,
            "tracker_id": tracker_id,
            "limit": limit,
            "offset": offset,
            "subject": f"{CONTAINS_OPERATOR}{subject}" if subject else None,
            "sort": sort or DEFAULT_ISSUE_SORT,
        }
        params = {key: value for key, value in filters.items() if value is not None}
        return await self.send("/issues.json", params=params)

    async def get_issue_by_id(self, issue_id: int, include: str | None = None) -> Any:
        """
        Get a single issue.

        Args:
            issue_id: The issue id
            include: Comma-separated associations (e.g. "journals,children")

        Returns:
            The raw Redmine response ({"issue": {...}})
        """
        params = {"include": include} if include else None
        return await self.send(f"/issues/{issue_id}.json", params=params)

    async def create_issue(
        self,
        project_id: str,
        subject: str,
        tracker_id: int | None = None,
        status_id: int | None = None,
        priority_id: int | None = None,
        **fields: Any,
    ) -> dict[str, Any]:
        """
        Create a new issue.

        Tracker, status and priority fall back to the stock Redmine defaults
        (Bug, New, Normal) when not given.

        Args:
            project_id: Project id or identifier
            subject: Issue subject
            tracker_id: Tracker id
            status_id: Status id
            priority_id: Priority id
            **fields: Any other issue field (description, assigned_to_id,
                start_date, due_date, estimated_hours, done_ratio,
                custom_fields, ...)

        Returns:
            {"message": ..., "issue": {...}}
        """
        payload = build_issue_payload(
            {
                "project_id": project_id,
                "subject": subject,
                "tracker_id": tracker_id or DEFAULT_TRACKER_ID,
                "status_id": status_id or DEFAULT_STATUS_ID,
                "priority_id": priority_id or DEFAULT_PRIORITY_ID,
                **fields,
            }
        )
        data = await self.send("/issues.json", method="POST", body={"issue": payload})
        issue = data.get("issue") if isinstance(data, dict) else None
        logger.info(f"Created issue {issue.get('id') if issue else '?'} in {project_id}")
        return {"message": "Issue created successfully", "issue": issue}

    async def update_issue(self, issue_id: int, **fields: Any) -> dict[str, Any]:
        """
        Update an existing issue, sending only the supplied fields.

        Args:
            issue_id: The issue id
            **fields: Fields to change; ``notes`` adds a journal comment

        Returns:
            {"message": ..., "issue_id": ...}

        Raises:
            MCPRedmineValidationError: If no field is supplied
        """
        payload = build_issue_payload(fields)
        if not payload:
            raise MCPRedmineValidationError(
                f"No fields provided to update issue {issue_id}"
            )

        await self.send(f"/issues/{issue_id}.json", method="PUT", body={"issue": payload})
        logger.info(f"Updated issue {issue_id}: {', '.join(payload)}")
        return {"message": f"Issue #{issue_id} updated successfully", "issue_id": issue_id}
