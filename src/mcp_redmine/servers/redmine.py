"""Redmine FastMCP server instance and tool definitions."""

import logging
from typing import Annotated, Any

from fastmcp import Context, FastMCP
from fastmcp.exceptions import ResourceError, ToolError
from pydantic import Field

from mcp_redmine.redmine.constants import RECENT_ITEMS_LIMIT
from mcp_redmine.redmine.envelope import run_operation
from mcp_redmine.servers.dependencies import get_redmine_fetcher, is_read_only

logger = logging.getLogger("mcp-redmine.servers.redmine")

redmine_mcp = FastMCP(
    name="Redmine MCP Service",
    instructions="Provides tools for interacting with a Redmine issue tracker.",
)


async def _call(ctx: Context, operation: str, **arguments: Any) -> str:
    """Run an operation for a tool and return its JSON text.

    Raises:
        ToolError: With the JSON error payload when the operation fails.
    """
    try:
        redmine = await get_redmine_fetcher(ctx)
    except ValueError as e:
        raise ToolError(str(e)) from e
    envelope = await run_operation(
        redmine, operation, arguments, read_only=is_read_only(ctx)
    )
    if envelope.is_error:
        raise ToolError(envelope.text)
    return envelope.text


async def _read(ctx: Context, operation: str, **arguments: Any) -> str:
    try:
        redmine = await get_redmine_fetcher(ctx)
    except ValueError as e:
        raise ResourceError(str(e)) from e
    envelope = await run_operation(redmine, operation, arguments)
    if envelope.is_error:
        raise ResourceError(envelope.text)
    return envelope.text


# Tools


@redmine_mcp.tool(
    tags={"redmine", "read"},
    annotations={"title": "Get Issues", "readOnlyHint": True},
)
async def get_issues(
    ctx: Context,
    project_id: Annotated[
        str | None,
        Field(description="(Optional) Project id or identifier", default=None),
    ] = None,
    status_id: Annotated[
        str | None,
        Field(
            description="(Optional) Status id, or 'open', 'closed', '*' for all",
            default=None,
        ),
    ] = None,
    assigned_to_id: Annotated[
        str | None,
        Field(description="(Optional) Assignee user id, or 'me'", default=None),
    ] = None,
    tracker_id: Annotated[
        str | None, Field(description="(Optional) Tracker id", default=None)
    ] = None,
    issue_id: Annotated[
        str | None,
        Field(
            description="(Optional) Issue id or comma-separated ids (e.g. '1,2,3')",
            default=None,
        ),
    ] = None,
    parent_id: Annotated[
        str | None, Field(description="(Optional) Parent issue id", default=None)
    ] = None,
    subject: Annotated[
        str | None,
        Field(
            description="(Optional) Text the issue subject must contain",
            default=None,
        ),
    ] = None,
    limit: Annotated[
        int | None,
        Field(description="(Optional) Maximum number of issues", default=None),
    ] = None,
    offset: Annotated[
        int | None,
        Field(description="(Optional) Number of issues to skip", default=None),
    ] = None,
    sort: Annotated[
        str | None,
        Field(
            description=(
                "(Optional) Sort expression, e.g. 'updated_on:desc'. "
                "Defaults to 'priority:desc,updated_on:desc'"
            ),
            default=None,
        ),
    ] = None,
) -> str:
    """Search Redmine issues.

    Returns:
        JSON string with the issues and the total count.
    """
    return await _call(
        ctx,
        "get_issues",
        project_id=project_id,
        status_id=status_id,
        assigned_to_id=assigned_to_id,
        tracker_id=tracker_id,
        issue_id=issue_id,
        parent_id=parent_id,
        subject=subject,
        limit=limit,
        offset=offset,
        sort=sort,
    )


@redmine_mcp.tool(
    tags={"redmine", "read"},
    annotations={"title": "Get Issue", "readOnlyHint": True},
)
async def get_issue_by_id(
    ctx: Context,
    issue_id: Annotated[int, Field(description="Redmine issue id (e.g. 42)")],
    include: Annotated[
        str | None,
        Field(
            description=(
                "(Optional) Comma-separated associations: children, attachments, "
                "relations, changesets, journals, watchers, allowed_statuses"
            ),
            default=None,
        ),
    ] = None,
) -> str:
    """Get a single Redmine issue by id."""
    return await _call(ctx, "get_issue_by_id", issue_id=issue_id, include=include)


@redmine_mcp.tool(
    tags={"redmine", "write"},
    annotations={"title": "Create Issue", "destructiveHint": True},
)
async def create_issue(
    ctx: Context,
    project_id: Annotated[
        str,
        Field(
            description=(
                "Project id or identifier. Never assume it, use get_projects "
                "to look it up or ask the user."
            )
        ),
    ],
    subject: Annotated[str, Field(description="Subject/title of the issue")],
    description: Annotated[
        str | None, Field(description="(Optional) Issue description", default=None)
    ] = None,
    tracker_id: Annotated[
        int | None,
        Field(description="(Optional) Tracker id, defaults to 1", default=None),
    ] = None,
    status_id: Annotated[
        int | None,
        Field(description="(Optional) Status id, defaults to 1", default=None),
    ] = None,
    priority_id: Annotated[
        int | None,
        Field(description="(Optional) Priority id, defaults to 2", default=None),
    ] = None,
    assigned_to_id: Annotated[
        int | None, Field(description="(Optional) Assignee user id", default=None)
    ] = None,
    category_id: Annotated[
        int | None, Field(description="(Optional) Category id", default=None)
    ] = None,
    fixed_version_id: Annotated[
        int | None, Field(description="(Optional) Target version id", default=None)
    ] = None,
    parent_issue_id: Annotated[
        int | None, Field(description="(Optional) Parent issue id", default=None)
    ] = None,
    start_date: Annotated[
        str | None,
        Field(description="(Optional) Start date (YYYY-MM-DD)", default=None),
    ] = None,
    due_date: Annotated[
        str | None,
        Field(description="(Optional) Due date (YYYY-MM-DD)", default=None),
    ] = None,
    estimated_hours: Annotated[
        float | None, Field(description="(Optional) Estimated hours", default=None)
    ] = None,
    done_ratio: Annotated[
        int | None,
        Field(description="(Optional) Percent done, 0 to 100", default=None),
    ] = None,
    custom_fields: Annotated[
        list[dict[str, Any]] | None,
        Field(
            description=(
                "(Optional) Custom field values, e.g. "
                '[{"id": 1, "value": "foo"}]'
            ),
            default=None,
        ),
    ] = None,
) -> str:
    """Create a new Redmine issue.

    Returns:
        JSON string with a confirmation message and the created issue.
    """
    return await _call(
        ctx,
        "create_issue",
        project_id=project_id,
        subject=subject,
        description=description,
        tracker_id=tracker_id,
        status_id=status_id,
        priority_id=priority_id,
        assigned_to_id=assigned_to_id,
        category_id=category_id,
        fixed_version_id=fixed_version_id,
        parent_issue_id=parent_issue_id,
        start_date=start_date,
        due_date=due_date,
        estimated_hours=estimated_hours,
        done_ratio=done_ratio,
        custom_fields=custom_fields,
    )


@redmine_mcp.tool(
    tags={"redmine", "write"},
    annotations={"title": "Update Issue", "destructiveHint": True},
)
async def update_issue(
    ctx: Context,
    issue_id: Annotated[int, Field(description="Redmine issue id (e.g. 42)")],
    subject: Annotated[
        str | None, Field(description="(Optional) New subject", default=None)
    ] = None,
    description: Annotated[
        str | None, Field(description="(Optional) New description", default=None)
    ] = None,
    notes: Annotated[
        str | None,
        Field(description="(Optional) Comment added to the issue history", default=None),
    ] = None,
    tracker_id: Annotated[
        int | None, Field(description="(Optional) Tracker id", default=None)
    ] = None,
    status_id: Annotated[
        int | None, Field(description="(Optional) Status id", default=None)
    ] = None,
    priority_id: Annotated[
        int | None, Field(description="(Optional) Priority id", default=None)
    ] = None,
    assigned_to_id: Annotated[
        int | None, Field(description="(Optional) Assignee user id", default=None)
    ] = None,
    category_id: Annotated[
        int | None, Field(description="(Optional) Category id", default=None)
    ] = None,
    fixed_version_id: Annotated[
        int | None, Field(description="(Optional) Target version id", default=None)
    ] = None,
    parent_issue_id: Annotated[
        int | None, Field(description="(Optional) Parent issue id", default=None)
    ] = None,
    start_date: Annotated[
        str | None,
        Field(description="(Optional) Start date (YYYY-MM-DD)", default=None),
    ] = None,
    due_date: Annotated[
        str | None,
        Field(description="(Optional) Due date (YYYY-MM-DD)", default=None),
    ] = None,
    estimated_hours: Annotated[
        float | None, Field(description="(Optional) Estimated hours", default=None)
    ] = None,
    done_ratio: Annotated[
        int | None,
        Field(description="(Optional) Percent done, 0 to 100", default=None),
    ] = None,
    custom_fields: Annotated[
        list[dict[str, Any]] | None,
        Field(
            description=(
                "(Optional) Custom field values, e.g. "
                '[{"id": 1, "value": "foo"}]'
            ),
            default=None,
        ),
    ] = None,
) -> str:
    """Update an existing Redmine issue. Only the given fields are changed."""
    return await _call(
        ctx,
        "update_issue",
        issue_id=issue_id,
        subject=subject,
        description=description,
        notes=notes,
        tracker_id=tracker_id,
        status_id=status_id,
        priority_id=priority_id,
        assigned_to_id=assigned_to_id,
        category_id=category_id,
        fixed_version_id=fixed_version_id,
        parent_issue_id=parent_issue_id,
        start_date=start_date,
        due_date=due_date,
        estimated_hours=estimated_hours,
        done_ratio=done_ratio,
        custom_fields=custom_fields,
    )


@redmine_mcp.tool(
    tags={"redmine", "read"},
    annotations={"title": "Get Projects", "readOnlyHint": True},
)
async def get_projects(
    ctx: Context,
    name: Annotated[
        str | None,
        Field(
            description="(Optional) Only projects whose name contains this text",
            default=None,
        ),
    ] = None,
    limit: Annotated[
        int | None,
        Field(description="(Optional) Maximum number of projects", default=None),
    ] = None,
) -> str:
    """Map Redmine project names to project ids.

    Returns:
        JSON string of the form {"projects": {"<name>": <id>}}.
    """
    return await _call(ctx, "get_projects", name=name, limit=limit)


@redmine_mcp.tool(
    tags={"redmine", "read"},
    annotations={"title": "List Projects", "readOnlyHint": True},
)
async def list_projects(
    ctx: Context,
    limit: Annotated[
        int | None,
        Field(description="(Optional) Maximum number of projects", default=None),
    ] = None,
) -> str:
    """List Redmine projects with identifier, status and parent."""
    return await _call(ctx, "list_projects", limit=limit)


@redmine_mcp.tool(
    tags={"redmine", "read"},
    annotations={"title": "Get Project Memberships", "readOnlyHint": True},
)
async def get_project_memberships(
    ctx: Context,
    project_id: Annotated[str, Field(description="Project id or identifier")],
    limit: Annotated[
        int | None,
        Field(description="(Optional) Maximum number of memberships", default=None),
    ] = None,
) -> str:
    """Get the users and groups that are members of a project, with their roles."""
    return await _call(
        ctx, "get_project_memberships", project_id=project_id, limit=limit
    )


@redmine_mcp.tool(
    tags={"redmine", "read"},
    annotations={"title": "Get Users", "readOnlyHint": True},
)
async def get_users(
    ctx: Context,
    name: Annotated[
        str | None,
        Field(
            description="(Optional) Filter on login, first name, last name or mail",
            default=None,
        ),
    ] = None,
    status: Annotated[
        int | None,
        Field(
            description="(Optional) 1 active (default on the server), 2 registered, 3 locked",
            default=None,
        ),
    ] = None,
    group_id: Annotated[
        int | None,
        Field(description="(Optional) Only members of this group", default=None),
    ] = None,
    limit: Annotated[
        int | None,
        Field(description="(Optional) Maximum number of users", default=None),
    ] = None,
) -> str:
    """List Redmine users. Usually requires administrator privileges."""
    return await _call(
        ctx, "get_users", name=name, status=status, group_id=group_id, limit=limit
    )


@redmine_mcp.tool(
    tags={"redmine", "read"},
    annotations={"title": "Get Current User", "readOnlyHint": True},
)
async def get_current_user(
    ctx: Context,
    include: Annotated[
        str | None,
        Field(
            description="(Optional) Comma-separated associations: memberships, groups",
            default=None,
        ),
    ] = None,
) -> str:
    """Get the Redmine account the configured API key belongs to."""
    return await _call(ctx, "get_current_user", include=include)


@redmine_mcp.tool(
    tags={"redmine", "read"},
    annotations={"title": "Get Time Entries", "readOnlyHint": True},
)
async def get_time_entries(
    ctx: Context,
    project_id: Annotated[
        str | None,
        Field(description="(Optional) Project id or identifier", default=None),
    ] = None,
    issue_id: Annotated[
        str | None, Field(description="(Optional) Issue id", default=None)
    ] = None,
    user_id: Annotated[
        str | None, Field(description="(Optional) User id, or 'me'", default=None)
    ] = None,
    activity_id: Annotated[
        str | None, Field(description="(Optional) Activity id", default=None)
    ] = None,
    from_date: Annotated[
        str | None,
        Field(description="(Optional) Start date (YYYY-MM-DD)", default=None),
    ] = None,
    to_date: Annotated[
        str | None,
        Field(description="(Optional) End date (YYYY-MM-DD)", default=None),
    ] = None,
    spent_on: Annotated[
        str | None,
        Field(description="(Optional) Exact date (YYYY-MM-DD)", default=None),
    ] = None,
    limit: Annotated[
        int | None,
        Field(description="(Optional) Maximum number of entries", default=None),
    ] = None,
) -> str:
    """Search time entries logged in Redmine."""
    return await _call(
        ctx,
        "get_time_entries",
        project_id=project_id,
        issue_id=issue_id,
        user_id=user_id,
        activity_id=activity_id,
        from_date=from_date,
        to_date=to_date,
        spent_on=spent_on,
        limit=limit,
    )


@redmine_mcp.tool(
    tags={"redmine", "read"},
    annotations={"title": "Get Time Activities", "readOnlyHint": True},
)
async def get_time_activities(
    ctx: Context,
    project_id: Annotated[
        str | None,
        Field(
            description=(
                "(Optional) Project id or identifier. When given, only the "
                "activities enabled for that project are returned."
            ),
            default=None,
        ),
    ] = None,
) -> str:
    """Get the activities time can be logged against."""
    return await _call(ctx, "get_time_activities", project_id=project_id)


@redmine_mcp.tool(
    tags={"redmine", "write"},
    annotations={"title": "Log Time", "destructiveHint": True},
)
async def log_time(
    ctx: Context,
    hours: Annotated[float, Field(description="Hours spent (e.g. 1.5)")],
    activity_id: Annotated[
        int,
        Field(description="Activity id, see get_time_activities"),
    ],
    issue_id: Annotated[
        int | None,
        Field(
            description="(Optional) Issue to log time on. Either issue_id or project_id is required.",
            default=None,
        ),
    ] = None,
    project_id: Annotated[
        int | None,
        Field(
            description="(Optional) Project to log time on. Either issue_id or project_id is required.",
            default=None,
        ),
    ] = None,
    comments: Annotated[
        str | None,
        Field(description="(Optional) Description of the work", default=None),
    ] = None,
    spent_on: Annotated[
        str | None,
        Field(
            description="(Optional) Date (YYYY-MM-DD), defaults to today",
            default=None,
        ),
    ] = None,
    custom_fields: Annotated[
        list[dict[str, Any]] | None,
        Field(
            description=(
                "(Optional) Custom field values, e.g. "
                '[{"id": 1, "value": "foo"}]'
            ),
            default=None,
        ),
    ] = None,
) -> str:
    """Log time spent on a Redmine issue or project."""
    return await _call(
        ctx,
        "log_time",
        hours=hours,
        activity_id=activity_id,
        issue_id=issue_id,
        project_id=project_id,
        comments=comments,
        spent_on=spent_on,
        custom_fields=custom_fields,
    )


# Resources


@redmine_mcp.resource(
    "redmine://projects",
    name="projects",
    description="All Redmine projects visible to the configured account",
    mime_type="application/json",
)
async def projects_resource(ctx: Context) -> str:
    return await _read(ctx, "list_projects")


@redmine_mcp.resource(
    "redmine://issues/recent",
    name="recent_issues",
    description=f"The {RECENT_ITEMS_LIMIT} most recently updated issues",
    mime_type="application/json",
)
async def recent_issues_resource(ctx: Context) -> str:
    return await _read(
        ctx, "get_issues", sort="updated_on:desc", limit=RECENT_ITEMS_LIMIT
    )


@redmine_mcp.resource(
    "redmine://time_entries/recent",
    name="recent_time_entries",
    description=f"The {RECENT_ITEMS_LIMIT} most recent time entries",
    mime_type="application/json",
)
async def recent_time_entries_resource(ctx: Context) -> str:
    return await _read(ctx, "get_time_entries", limit=RECENT_ITEMS_LIMIT)


# Prompts


@redmine_mcp.prompt(
    name="issue_summary",
    description="Summarize the open issues of a Redmine project",
)
def issue_summary(project_id: str) -> str:
    return (
        f"Summarize the current state of Redmine project '{project_id}'.\n\n"
        f"1. Call get_issues with project_id='{project_id}' and status_id='open'.\n"
        "2. Group the issues by tracker and by status.\n"
        "3. List the high priority issues and the ones without an assignee.\n"
        "4. Point out issues whose due date has passed.\n"
        "Finish with a short overall assessment."
    )


@redmine_mcp.prompt(
    name="time_report",
    description="Report on time logged in Redmine",
)
def time_report(
    project_id: str | None = None,
    user_id: str | None = None,
    from_date: str | None = None,
    to_date: str | None = None,
) -> str:
    filters = {
        "project_id": project_id,
        "user_id": user_id,
        "from_date": from_date,
        "to_date": to_date,
    }
    supplied = ", ".join(f"{k}='{v}'" for k, v in filters.items() if v)
    call = f"get_time_entries with {supplied}" if supplied else "get_time_entries"
    return (
        "Prepare a time report from Redmine.\n\n"
        f"1. Call {call}.\n"
        "2. Call get_time_activities to resolve activity names.\n"
        "3. Total the hours per user, per activity and per issue.\n"
        "Present the totals as tables and mention entries without comments."
    )
