"""Table of the operations exposed over MCP.

Each entry ties an operation name to its argument model, the fetcher method
implementing it and whether it changes data in Redmine.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from ..exceptions import MCPRedmineValidationError
from ..models.redmine import (
    CreateIssueArgs,
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


@dataclass(frozen=True)
class Operation:
    name: str
    args_model: type[RedmineArgs]
    method: str
    write: bool = False


OPERATIONS: dict[str, Operation] = {
    op.name: op
    for op in (
        Operation("get_issues", GetIssuesArgs, "get_issues"),
        Operation("get_issue_by_id", GetIssueByIdArgs, "get_issue_by_id"),
        Operation("create_issue", CreateIssueArgs, "create_issue", write=True),
        Operation("update_issue", UpdateIssueArgs, "update_issue", write=True),
        Operation("get_projects", GetProjectsArgs, "get_projects"),
        Operation("list_projects", ListProjectsArgs, "list_projects"),
        Operation(
            "get_project_memberships",
            GetProjectMembershipsArgs,
            "get_project_memberships",
        ),
        Operation("get_users", GetUsersArgs, "get_users"),
        Operation("get_current_user", GetCurrentUserArgs, "get_current_user"),
        Operation("get_time_entries", GetTimeEntriesArgs, "get_time_entries"),
        Operation("get_time_activities", GetTimeActivitiesArgs, "get_time_activities"),
        Operation("log_time", LogTimeArgs, "log_time", write=True),
    )
}


def get_operation(name: str) -> Operation:
    """Look up an operation by name.

    Raises:
        MCPRedmineValidationError: If no operation has that name
    """
    try:
        return OPERATIONS[name]
    except KeyError:
        raise MCPRedmineValidationError(f"Unknown operation: {name}") from None


def _format_validation_error(error: ValidationError) -> str:
    details = "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'arguments'}: {err['msg']}"
        for err in error.errors()
    )
    return f"Invalid arguments: {details}"


def parse_arguments(
    operation: Operation, arguments: Mapping[str, Any] | RedmineArgs | None
) -> RedmineArgs:
    """Validate raw arguments against the operation's model.

    Raises:
        MCPRedmineValidationError: If the arguments do not match the model
    """
    if isinstance(arguments, operation.args_model):
        return arguments
    if isinstance(arguments, RedmineArgs):
        arguments = arguments.model_dump(exclude_none=True)
    try:
        return operation.args_model.model_validate(dict(arguments or {}))
    except ValidationError as e:
        raise MCPRedmineValidationError(_format_validation_error(e)) from e
