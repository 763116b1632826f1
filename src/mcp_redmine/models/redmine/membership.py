"""
Redmine project membership models.
"""

import logging
from typing import Any

from pydantic import Field

from ..base import ApiModel
from ..constants import REDMINE_DEFAULT_ID
from .common import RedmineNamedRef

logger = logging.getLogger(__name__)


class RedmineMembership(ApiModel):
    """
    Model representing a membership of a user or a group in a project.

    Exactly one of ``user`` and ``group`` is normally present.
    """

    id: int = REDMINE_DEFAULT_ID
    project: RedmineNamedRef | None = None
    user: RedmineNamedRef | None = None
    group: RedmineNamedRef | None = None
    roles: list[RedmineNamedRef] = Field(default_factory=list)

    @property
    def member(self) -> RedmineNamedRef | None:
        """The user or group this membership grants roles to."""
        return self.user or self.group

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "RedmineMembership":
        if not data:
            return cls()

        if not isinstance(data, dict):
            logger.debug("Received non-dictionary data, returning default instance")
            return cls()

        def _ref(key: str) -> RedmineNamedRef | None:
            value = data.get(key)
            return RedmineNamedRef.from_api_response(value) if value else None

        roles = [
            RedmineNamedRef.from_api_response(role)
            for role in data.get("roles") or []
            if role
        ]

        return cls(
            id=data.get("id", REDMINE_DEFAULT_ID),
            project=_ref("project"),
            user=_ref("user"),
            group=_ref("group"),
            roles=roles,
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"id": self.id}
        if self.user:
            result["user"] = self.user.to_simplified_dict()
        if self.group:
            result["group"] = self.group.to_simplified_dict()
        result["roles"] = [role.name for role in self.roles]
        return result
