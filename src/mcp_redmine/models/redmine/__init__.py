"""
Redmine data models for the MCP Redmine integration.

This package provides Pydantic models for Redmine API data structures and
for the arguments accepted by each operation.
"""

from .arguments import (
    CreateIssueArgs,
    CustomFieldValue,
    GetCurrentUserArgs,
    GetIssueByIdArgs,
    GetIssuesArgs,
    GetProjectMembershipsArgs,
    GetProjectsArgs,
    GetTimeActivitiesArgs,
    GetTimeEntriesArgs,
    GetUsersArgs,
    ListProjectsArgs,
    LogTimeArgs,
    RedmineArgs,
    UpdateIssueArgs,
)
from .common import RedmineNamedRef, RedmineUser
from .membership import RedmineMembership
from .pagination import AggregatedResult, PagedCollection
from .project import RedmineProject

__all__ = [
    "AggregatedResult",
    "CreateIssueArgs",
    "CustomFieldValue",
    "GetCurrentUserArgs",
    "GetIssueByIdArgs",
    "GetIssuesArgs",
    "GetProjectMembershipsArgs",
    "GetProjectsArgs",
    "GetTimeActivitiesArgs",
    "GetTimeEntriesArgs",
    "GetUsersArgs",
    "ListProjectsArgs",
    "LogTimeArgs",
    "PagedCollection",
    "RedmineArgs",
    "RedmineMembership",
    "RedmineNamedRef",
    "RedmineProject",
    "RedmineUser",
    "UpdateIssueArgs",
]
