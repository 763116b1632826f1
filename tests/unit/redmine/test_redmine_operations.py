"""Tests for the Redmine operation translators."""

import json

import httpx
import pytest

from mcp_redmine.exceptions import MCPRedmineValidationError
from mcp_redmine.models.redmine import CustomFieldValue


def echo(key: str, payload):
    def respond(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={key: payload})

    return respond


class TestIssues:
    @pytest.mark.anyio
    async def test_get_issues_subject_uses_contains_operator(self, make_fetcher):
        fetcher, handler = make_fetcher(echo("issues", []))

        await fetcher.get_issues(project_id="demo", subject="foo")

        params = handler.last.url.params
        assert handler.last.url.path == "/issues.json"
        assert params["subject"] == "~foo"
        assert params["project_id"] == "demo"
        assert params["sort"] == "priority:desc,updated_on:desc"

    @pytest.mark.anyio
    async def test_get_issues_omits_absent_filters(self, make_fetcher):
        fetcher, handler = make_fetcher(echo("issues", []))

        await fetcher.get_issues(status_id="open", limit=5)

        assert list(handler.last.url.params.keys()) == ["status_id", "limit", "sort"]

    @pytest.mark.anyio
    async def test_get_issues_custom_sort(self, make_fetcher):
        fetcher, handler = make_fetcher(echo("issues", []))

        await fetcher.get_issues(sort="updated_on:desc")

        assert handler.last.url.params["sort"] == "updated_on:desc"

    @pytest.mark.anyio
    async def test_get_issue_by_id_with_include(self, make_fetcher):
        fetcher, handler = make_fetcher(echo("issue", {"id": 42}))

        result = await fetcher.get_issue_by_id(42, include="journals")

        assert result == {"issue": {"id": 42}}
        assert handler.last.url.path == "/issues/42.json"
        assert handler.last.url.params["include"] == "journals"

    @pytest.mark.anyio
    async def test_create_issue_applies_defaults(self, make_fetcher):
        fetcher, handler = make_fetcher(echo("issue", {"id": 5, "subject": "Crash"}))

        result = await fetcher.create_issue(project_id="demo", subject="Crash")

        body = json.loads(handler.last.content)
        assert handler.last.method == "POST"
        assert body == {
            "issue": {
                "project_id": "demo",
                "subject": "Crash",
                "tracker_id": 1,
                "status_id": 1,
                "priority_id": 2,
            }
        }
        assert result == {
            "message": "Issue created successfully",
            "issue": {"id": 5, "subject": "Crash"},
        }

    @pytest.mark.anyio
    async def test_create_issue_keeps_explicit_values(self, make_fetcher):
        fetcher, handler = make_fetcher(echo("issue", {"id": 6}))

        await fetcher.create_issue(
            project_id="demo",
            subject="Feature",
            tracker_id=2,
            priority_id=4,
            description="Details",
            custom_fields=[CustomFieldValue(id=3, value="x")],
        )

        issue = json.loads(handler.last.content)["issue"]
        assert issue["tracker_id"] == 2
        assert issue["status_id"] == 1
        assert issue["priority_id"] == 4
        assert issue["description"] == "Details"
        assert issue["custom_fields"] == [{"id": 3, "value": "x"}]

    @pytest.mark.anyio
    async def test_update_issue_sends_only_supplied_fields(self, make_fetcher):
        fetcher, handler = make_fetcher(lambda r: httpx.Response(204))

        result = await fetcher.update_issue(42, status_id=3, done_ratio=0, notes="Done")

        assert handler.last.method == "PUT"
        assert handler.last.url.path == "/issues/42.json"
        assert json.loads(handler.last.content) == {
            "issue": {"status_id": 3, "done_ratio": 0, "notes": "Done"}
        }
        assert result == {"message": "Issue #42 updated successfully", "issue_id": 42}

    @pytest.mark.anyio
    async def test_update_issue_without_fields_is_rejected(self, make_fetcher):
        fetcher, handler = make_fetcher(lambda r: httpx.Response(204))

        with pytest.raises(MCPRedmineValidationError):
            await fetcher.update_issue(42)

        assert handler.count == 0


class TestProjects:
    @pytest.mark.anyio
    async def test_get_projects_later_duplicate_wins(self, make_fetcher):
        projects = [{"id": 1, "name": "A"}, {"id": 2, "name": "A"}, {"id": 3, "name": "B"}]
        fetcher, _ = make_fetcher(
            lambda r: httpx.Response(200, json={"projects": projects, "total_count": 3})
        )

        result = await fetcher.get_projects()

        assert result == {"projects": {"A": 2, "B": 3}}

    @pytest.mark.anyio
    async def test_get_projects_filters_after_aggregation(
        self, make_fetcher, paged_collection, project_items
    ):
        items = project_items(150)
        items[120]["name"] = "Alpha Team"
        fetcher, handler = make_fetcher(paged_collection("projects", items))

        result = await fetcher.get_projects(name="alpha")

        assert handler.count == 2
        assert result == {"projects": {"Alpha Team": 121}}

    @pytest.mark.anyio
    async def test_get_projects_limit_applies_after_filter(
        self, make_fetcher, paged_collection, project_items
    ):
        fetcher, handler = make_fetcher(paged_collection("projects", project_items(150)))

        result = await fetcher.get_projects(name="project 1", limit=3)

        assert handler.count == 2
        assert result == {"projects": {"Project 1": 1, "Project 10": 10, "Project 11": 11}}

    @pytest.mark.anyio
    async def test_get_projects_limit_without_filter(
        self, make_fetcher, paged_collection, project_items
    ):
        fetcher, handler = make_fetcher(paged_collection("projects", project_items(150)))

        result = await fetcher.get_projects(limit=2)

        assert handler.count == 1
        assert result == {"projects": {"Project 1": 1, "Project 2": 2}}

    @pytest.mark.anyio
    async def test_list_projects_simplifies_items(self, make_fetcher):
        projects = [
            {
                "id": 1,
                "name": "Demo",
                "identifier": "demo",
                "status": 1,
                "parent": {"id": 9, "name": "Root"},
                "custom_fields": [],
            }
        ]
        fetcher, _ = make_fetcher(
            lambda r: httpx.Response(200, json={"projects": projects, "total_count": 1})
        )

        result = await fetcher.list_projects()

        assert result == {
            "items": [
                {
                    "id": 1,
                    "name": "Demo",
                    "identifier": "demo",
                    "status": 1,
                    "parent": {"id": 9, "name": "Root"},
                }
            ],
            "count": 1,
            "total_count": 1,
        }


class TestMembershipsAndUsers:
    @pytest.mark.anyio
    async def test_project_memberships_member_mapping(self, make_fetcher):
        memberships = [
            {
                "id": 1,
                "project": {"id": 1, "name": "Demo"},
                "user": {"id": 5, "name": "Jane Doe"},
                "roles": [{"id": 3, "name": "Manager"}],
            },
            {
                "id": 2,
                "project": {"id": 1, "name": "Demo"},
                "group": {"id": 8, "name": "Developers"},
                "roles": [{"id": 4, "name": "Developer"}],
            },
        ]
        fetcher, handler = make_fetcher(
            lambda r: httpx.Response(
                200, json={"memberships": memberships, "total_count": 2}
            )
        )

        result = await fetcher.get_project_memberships("demo")

        assert handler.last.url.path == "/projects/demo/memberships.json"
        assert result["members"] == {"Jane Doe": 5, "Developers": 8}
        assert result["count"] == 2
        assert result["items"][0]["roles"] == ["Manager"]

    @pytest.mark.anyio
    async def test_get_users_sends_filters(self, make_fetcher):
        users = [{"id": 1, "login": "jdoe", "firstname": "Jane", "lastname": "Doe"}]
        fetcher, handler = make_fetcher(
            lambda r: httpx.Response(200, json={"users": users, "total_count": 1})
        )

        result = await fetcher.get_users(name="jane", status=1)

        params = handler.last.url.params
        assert params["name"] == "jane"
        assert params["status"] == "1"
        assert "group_id" not in params
        assert result["items"] == [{"id": 1, "login": "jdoe", "name": "Jane Doe"}]

    @pytest.mark.anyio
    async def test_get_current_user(self, make_fetcher):
        fetcher, handler = make_fetcher(echo("user", {"id": 1, "login": "admin"}))

        result = await fetcher.get_current_user()

        assert handler.last.url.path == "/users/current.json"
        assert result == {"user": {"id": 1, "login": "admin"}}


class TestTimeEntries:
    @pytest.mark.anyio
    async def test_get_time_entries_uses_redmine_date_names(self, make_fetcher):
        fetcher, handler = make_fetcher(echo("time_entries", []))

        await fetcher.get_time_entries(
            user_id="me", from_date="2024-01-01", to_date="2024-01-31"
        )

        assert list(handler.last.url.params.items()) == [
            ("user_id", "me"),
            ("from", "2024-01-01"),
            ("to", "2024-01-31"),
        ]

    @pytest.mark.anyio
    async def test_project_time_activities(self, make_fetcher):
        activities = [{"id": 9, "name": "Development", "active": True}]
        fetcher, handler = make_fetcher(
            echo("project", {"id": 1, "time_entry_activities": activities})
        )

        result = await fetcher.get_time_activities(project_id="demo")

        assert handler.last.url.path == "/projects/demo.json"
        assert handler.last.url.params["include"] == "time_entry_activities"
        assert result == {
            "scope": "project",
            "project_id": "demo",
            "activities": activities,
            "total": 1,
        }

    @pytest.mark.anyio
    async def test_global_time_activities(self, make_fetcher):
        activities = [{"id": 9, "name": "Development"}, {"id": 10, "name": "Design"}]
        fetcher, handler = make_fetcher(echo("time_entry_activities", activities))

        result = await fetcher.get_time_activities()

        assert handler.last.url.path == "/enumerations/time_entry_activities.json"
        assert result == {"scope": "global", "activities": activities, "total": 2}

    @pytest.mark.anyio
    async def test_log_time_on_issue(self, make_fetcher):
        fetcher, handler = make_fetcher(echo("time_entry", {"id": 77}))

        result = await fetcher.log_time(
            hours=1.5, activity_id=9, issue_id=42, comments="Review"
        )

        assert json.loads(handler.last.content) == {
            "time_entry": {
                "issue_id": 42,
                "hours": 1.5,
                "activity_id": 9,
                "comments": "Review",
            }
        }
        assert result == {
            "message": "Time entry created successfully",
            "time_entry": {"id": 77},
        }

    @pytest.mark.anyio
    async def test_log_time_sends_both_issue_and_project(self, make_fetcher):
        fetcher, handler = make_fetcher(echo("time_entry", {"id": 78}))

        await fetcher.log_time(hours=1.0, activity_id=9, issue_id=5, project_id=3)

        body = json.loads(handler.last.content)["time_entry"]
        assert body["issue_id"] == 5
        assert body["project_id"] == 3

    @pytest.mark.anyio
    async def test_log_time_on_project(self, make_fetcher):
        fetcher, handler = make_fetcher(echo("time_entry", {"id": 79}))

        await fetcher.log_time(hours=2, activity_id=9, project_id=3)

        assert json.loads(handler.last.content) == {
            "time_entry": {"project_id": 3, "hours": 2, "activity_id": 9}
        }

    @pytest.mark.anyio
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"hours": 0, "activity_id": 9, "issue_id": 42},
            {"hours": -1, "activity_id": 9, "issue_id": 42},
            {"hours": 1, "activity_id": 0, "issue_id": 42},
            {"hours": 1, "activity_id": 9},
        ],
    )
    async def test_log_time_validation_sends_nothing(self, make_fetcher, kwargs):
        fetcher, handler = make_fetcher(echo("time_entry", {"id": 1}))

        with pytest.raises(MCPRedmineValidationError):
            await fetcher.log_time(**kwargs)

        assert handler.count == 0
