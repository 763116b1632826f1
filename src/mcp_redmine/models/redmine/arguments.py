"""
Argument models for Redmine operations.

Each operation accepts exactly one of these models. They are validated once
at the dispatch boundary, so the fetcher methods only ever see well-typed
values. Empty strings sent by MCP clients for optional parameters are
treated as "not supplied".
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RedmineArgs(BaseModel):
    """Base class for operation arguments."""

    # Ids may arrive as numbers where Redmine also accepts names ("me", "open")
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    @field_validator("*", mode="before")
    @classmethod
    def _empty_string_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and value.strip() == "":
            return None
        return value

    def to_kwargs(self) -> dict[str, Any]:
        """Supplied arguments only, keyed by field name."""
        return {
            name: getattr(self, name)
            for name in type(self).model_fields
            if getattr(self, name) is not None
        }


class CustomFieldValue(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    id: int = Field(gt=0)
    value: str | int | float | bool

    def to_payload(self) -> dict[str, Any]:
        return {"id": self.id, "value": self.value}


class LimitArgs(RedmineArgs):
    limit: int | None = Field(default=None, ge=1)


class GetIssuesArgs(LimitArgs):
    project_id: str | None = None
    status_id: str | None = None
    assigned_to_id: str | None = None
    tracker_id: str | None = None
    issue_id: str | None = None
    parent_id: str | None = None
    subject: str | None = None
    offset: int | None = Field(default=None, ge=0)
    sort: str | None = None


class GetIssueByIdArgs(RedmineArgs):
    issue_id: int = Field(gt=0)
    include: str | None = None


class _IssueFieldsArgs(RedmineArgs):
    subject: str | None = None
    description: str | None = None
    tracker_id: int | None = Field(default=None, gt=0)
    status_id: int | None = Field(default=None, gt=0)
    priority_id: int | None = Field(default=None, gt=0)
    assigned_to_id: int | None = Field(default=None, gt=0)
    category_id: int | None = Field(default=None, gt=0)
    fixed_version_id: int | None = Field(default=None, gt=0)
    parent_issue_id: int | None = Field(default=None, gt=0)
    start_date: str | None = None
    due_date: str | None = None
    estimated_hours: float | None = Field(default=None, ge=0)
    done_ratio: int | None = Field(default=None, ge=0, le=100)
    custom_fields: list[CustomFieldValue] | None = None


class CreateIssueArgs(_IssueFieldsArgs):
    project_id: str
    subject: str


class UpdateIssueArgs(_IssueFieldsArgs):
    issue_id: int = Field(gt=0)
    notes: str | None = None


class GetProjectsArgs(LimitArgs):
    name: str | None = None


class ListProjectsArgs(LimitArgs):
    pass


class GetProjectMembershipsArgs(LimitArgs):
    project_id: str


class GetUsersArgs(LimitArgs):
    name: str | None = None
    status: int | None = Field(default=None, ge=0)
    group_id: int | None = Field(default=None, gt=0)


class GetCurrentUserArgs(RedmineArgs):
    include: str | None = None


class GetTimeEntriesArgs(LimitArgs):
    project_id: str | None = None
    issue_id: str | None = None
    user_id: str | None = None
    activity_id: str | None = None
    from_date: str | None = None
    to_date: str | None = None
    spent_on: str | None = None


class GetTimeActivitiesArgs(RedmineArgs):
    project_id: str | None = None


class LogTimeArgs(RedmineArgs):
    hours: float
    activity_id: int
    issue_id: int | None = Field(default=None, gt=0)
    project_id: int | None = Field(default=None, gt=0)
    comments: str | None = None
    spent_on: str | None = None
    custom_fields: list[CustomFieldValue] | None = None
