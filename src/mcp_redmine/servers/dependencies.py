"""Dependency providers for tool, resource and prompt functions.

Provides get_app_context and get_redmine_fetcher, reading the state created by
the server lifespan.
"""

from __future__ import annotations

import logging

from fastmcp import Context

from mcp_redmine.redmine import RedmineFetcher
from mcp_redmine.servers.context import MainAppContext

logger = logging.getLogger("mcp-redmine.servers.dependencies")


def get_app_context(ctx: Context) -> MainAppContext | None:
    """Return the MainAppContext stored by the lifespan, if any."""
    lifespan_ctx_dict = ctx.request_context.lifespan_context  # type: ignore
    app_lifespan_ctx: MainAppContext | None = (
        lifespan_ctx_dict.get("app_lifespan_context")
        if isinstance(lifespan_ctx_dict, dict)
        else None
    )
    return app_lifespan_ctx


def is_read_only(ctx: Context) -> bool:
    app_lifespan_ctx = get_app_context(ctx)
    return bool(app_lifespan_ctx and app_lifespan_ctx.read_only)


async def get_redmine_fetcher(ctx: Context) -> RedmineFetcher:
    """Returns the RedmineFetcher shared by all requests.

    Raises:
        ValueError: If the server was started without a Redmine configuration.
    """
    app_lifespan_ctx = get_app_context(ctx)
    if app_lifespan_ctx and app_lifespan_ctx.redmine_fetcher:
        return app_lifespan_ctx.redmine_fetcher
    logger.error("Redmine fetcher is not available in lifespan context.")
    raise ValueError(
        "Redmine client (fetcher) not available. Ensure server is configured correctly."
    )
