"""
Base models for the MCP Redmine integration.

Every entity model derives from ApiModel and knows how to build itself from
a raw Redmine API payload and how to render a compact dictionary for tool
responses.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T", bound="ApiModel")


class ApiModel(BaseModel):
    """
    Base model for Redmine API entities.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @classmethod
    def from_api_response(cls: type[T], data: dict[str, Any], **kwargs: Any) -> T:
        """
        Create a model instance from a Redmine API response.

        Args:
            data: The raw entity data from the Redmine API
            **kwargs: Additional, model-specific options

        Returns:
            An instance of the model
        """
        raise NotImplementedError("Subclasses must implement from_api_response")

    def to_simplified_dict(self) -> dict[str, Any]:
        """Convert to simplified dictionary for API response."""
        return self.model_dump(exclude_none=True)
