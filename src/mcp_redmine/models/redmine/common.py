"""
Common Redmine models shared across entity types.
"""

import logging
from typing import Any

from ..base import ApiModel
from ..constants import EMPTY_STRING, REDMINE_DEFAULT_ID, UNKNOWN

logger = logging.getLogger(__name__)


class RedmineNamedRef(ApiModel):
    """
    Reference to another Redmine entity as embedded in payloads,
    e.g. ``{"id": 3, "name": "Support"}``.
    """

    id: int = REDMINE_DEFAULT_ID
    name: str = UNKNOWN

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "RedmineNamedRef":
        if not data or not isinstance(data, dict):
            return cls()
        return cls(
            id=data.get("id", REDMINE_DEFAULT_ID),
            name=data.get("name", UNKNOWN),
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}


class RedmineUser(ApiModel):
    """
    Model representing a Redmine user account.
    """

    id: int = REDMINE_DEFAULT_ID
    login: str = EMPTY_STRING
    firstname: str = EMPTY_STRING
    lastname: str = EMPTY_STRING
    mail: str | None = None
    admin: bool = False
    status: int | None = None
    created_on: str | None = None
    last_login_on: str | None = None

    @property
    def name(self) -> str:
        full = f"{self.firstname} {self.lastname}".strip()
        return full or self.login

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "RedmineUser":
        """
        Create a RedmineUser from a Redmine API response.

        Args:
            data: The user data from the Redmine API

        Returns:
            A RedmineUser instance
        """
        if not data:
            return cls()

        if not isinstance(data, dict):
            logger.debug("Received non-dictionary data, returning default instance")
            return cls()

        return cls(
            id=data.get("id", REDMINE_DEFAULT_ID),
            login=data.get("login", EMPTY_STRING),
            firstname=data.get("firstname", EMPTY_STRING),
            lastname=data.get("lastname", EMPTY_STRING),
            mail=data.get("mail"),
            admin=bool(data.get("admin", False)),
            status=data.get("status"),
            created_on=data.get("created_on"),
            last_login_on=data.get("last_login_on"),
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "login": self.login,
            "name": self.name,
        }
        if self.mail:
            result["mail"] = self.mail
        if self.status is not None:
            result["status"] = self.status
        if self.admin:
            result["admin"] = True
        return result
