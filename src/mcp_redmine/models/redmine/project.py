"""
Redmine project models.

This module provides Pydantic models for Redmine projects.
"""

import logging
from typing import Any

from ..base import ApiModel
from ..constants import EMPTY_STRING, REDMINE_DEFAULT_ID, UNKNOWN
from .common import RedmineNamedRef

logger = logging.getLogger(__name__)


class RedmineProject(ApiModel):
    """
    Model representing a Redmine project.
    """

    id: int = REDMINE_DEFAULT_ID
    name: str = UNKNOWN
    identifier: str = EMPTY_STRING
    description: str | None = None
    status: int | None = None
    is_public: bool | None = None
    created_on: str | None = None
    updated_on: str | None = None
    parent: RedmineNamedRef | None = None

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "RedmineProject":
        """
        Create a RedmineProject from a Redmine API response.

        Args:
            data: The project data from the Redmine API

        Returns:
            A RedmineProject instance
        """
        if not data:
            return cls()

        if not isinstance(data, dict):
            logger.debug("Received non-dictionary data, returning default instance")
            return cls()

        parent = None
        if parent_data := data.get("parent"):
            parent = RedmineNamedRef.from_api_response(parent_data)

        return cls(
            id=data.get("id", REDMINE_DEFAULT_ID),
            name=data.get("name", UNKNOWN),
            identifier=data.get("identifier", EMPTY_STRING),
            description=data.get("description"),
            status=data.get("status"),
            is_public=data.get("is_public"),
            created_on=data.get("created_on"),
            updated_on=data.get("updated_on"),
            parent=parent,
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        """Convert to simplified dictionary for API response."""
        result: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "identifier": self.identifier,
        }
        if self.description:
            result["description"] = self.description
        if self.status is not None:
            result["status"] = self.status
        if self.is_public is not None:
            result["is_public"] = self.is_public
        if self.parent:
            result["parent"] = self.parent.to_simplified_dict()
        if self.updated_on:
            result["updated_on"] = self.updated_on
        return result
