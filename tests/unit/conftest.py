"""
Shared fixtures for the Redmine unit tests.

The Redmine server is replaced by an ``httpx.MockTransport`` whose handler
records every request it receives.
"""

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from mcp_redmine.redmine import RedmineFetcher
from mcp_redmine.redmine.config import RedmineConfig

Handler = Callable[[httpx.Request], Any]


class RecordingHandler:
    """Mock transport handler that remembers the requests it served."""

    def __init__(self, responder: Handler) -> None:
        self.responder = responder
        self.requests: list[httpx.Request] = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responder(request)
        if hasattr(response, "__await__"):
            response = await response
        return response

    @property
    def count(self) -> int:
        return len(self.requests)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def paged_responder(key: str, items: list[dict[str, Any]], report_total: bool = True):
    """Serve ``items`` as a Redmine collection honouring limit/offset."""

    def respond(request: httpx.Request) -> httpx.Response:
        offset = int(request.url.params.get("offset", 0))
        limit = int(request.url.params.get("limit", 25))
        page: dict[str, Any] = {
            key: items[offset : offset + limit],
            "offset": offset,
            "limit": limit,
        }
        if report_total:
            page["total_count"] = len(items)
        return httpx.Response(200, json=page)

    return respond


def make_items(count: int, prefix: str = "Project") -> list[dict[str, Any]]:
    return [
        {"id": i + 1, "name": f"{prefix} {i + 1}", "identifier": f"p{i + 1}"}
        for i in range(count)
    ]


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def redmine_config() -> RedmineConfig:
    return RedmineConfig(
        url="https://redmine.example.com",
        api_key="test-api-key-1234",
        timeout=5.0,
    )


@pytest.fixture
def make_fetcher(redmine_config):
    """Factory building a RedmineFetcher wired to a recording mock transport."""

    def _make(
        responder: Handler, config: RedmineConfig | None = None
    ) -> tuple[RedmineFetcher, RecordingHandler]:
        handler = RecordingHandler(responder)
        fetcher = RedmineFetcher(
            config=config or redmine_config,
            transport=httpx.MockTransport(handler),
        )
        return fetcher, handler

    return _make


@pytest.fixture
def paged_collection():
    return paged_responder


@pytest.fixture
def project_items():
    return make_items
