"""
Response envelope models.

The envelope is the only shape handed back to the protocol layer: a list of
text items, an error flag and optional metadata.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ErrorRecord(BaseModel):
    """Normalized description of a failed operation."""

    kind: str
    message: str
    status_code: int | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message, "kind": self.kind}
        if self.status_code is not None:
            payload["status_code"] = self.status_code
        return payload


class TextContentItem(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ResponseEnvelope(BaseModel):
    """Uniform success/failure wrapper returned for every operation call."""

    model_config = ConfigDict(populate_by_name=True)

    content: list[TextContentItem] = Field(min_length=1)
    is_error: bool = Field(default=False, alias="isError")
    metadata: dict[str, Any] | None = None

    @property
    def text(self) -> str:
        """Concatenated text of all content items."""
        return "\n".join(item.text for item in self.content)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
