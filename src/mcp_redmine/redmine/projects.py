"""Module for Redmine project operations."""

import logging
from typing import Any

from ..models.redmine import AggregatedResult, RedmineProject
from .client import RedmineClient
from .pagination import collect_all

logger = logging.getLogger("mcp-redmine.redmine.projects")


class ProjectsMixin(RedmineClient):
    """Mixin for Redmine project operations."""

    async def get_projects(
        self, name: str | None = None, limit: int | None = None
    ) -> dict[str, Any]:
        """
        Map project names to ids.

        With a name filter every page is collected first, then filtered
        (case-insensitive substring), then cut to ``limit``. When two
        projects share a name the later one wins.

        Args:
            name: Optional text the project name must contain
            limit: Maximum number of projects to return

        Returns:
            {"projects": {name: id}}
        """
        if name:
            result = await collect_all(self, "/projects.json", "projects")
            needle = name.lower()
            projects = [
                project
                for project in result.items
                if needle in str(project.get("name", "")).lower()
            ]
            if limit is not None:
                projects = projects[:limit]
        else:
            result = await collect_all(self, "/projects.json", "projects", limit=limit)
            projects = result.items

        mapping: dict[str, int] = {}
        for project in projects:
            model = RedmineProject.from_api_response(project)
            mapping[model.name] = model.id
        return {"projects": mapping}

    async def list_projects(self, limit: int | None = None) -> dict[str, Any]:
        """
        List projects with their main attributes.

        Args:
            limit: Maximum number of projects to return

        Returns:
            Aggregated result of simplified projects
        """
        result = await collect_all(self, "/projects.json", "projects", limit=limit)
        return AggregatedResult(
            items=[
                RedmineProject.from_api_response(project).to_simplified_dict()
                for project in result.items
            ],
            count=result.count,
            total_count=result.total_count,
        ).to_simplified_dict()
