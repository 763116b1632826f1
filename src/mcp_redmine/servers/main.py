"""Main FastMCP server setup for Redmine integration."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from mcp_redmine.logging_config import mask_sensitive
from mcp_redmine.redmine import RedmineFetcher
from mcp_redmine.redmine.config import RedmineConfig
from mcp_redmine.utils.io import is_read_only_mode

from .context import MainAppContext
from .redmine import redmine_mcp

logger = logging.getLogger("mcp-redmine.server.main")


async def health_check(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


@asynccontextmanager
async def main_lifespan(app: FastMCP[MainAppContext]) -> AsyncIterator[dict]:
    logger.info("Main Redmine MCP server lifespan starting...")
    read_only = is_read_only_mode()

    config = RedmineConfig.from_env()
    logger.info(
        f"Redmine configuration loaded: url={config.url}, "
        f"api_key={mask_sensitive(config.api_key)}, timeout={config.timeout}s, "
        f"ssl_verify={config.ssl_verify}"
    )
    fetcher = RedmineFetcher(config=config)

    app_context = MainAppContext(
        redmine_config=config,
        redmine_fetcher=fetcher,
        read_only=read_only,
    )
    logger.info(f"Read-only mode: {'ENABLED' if read_only else 'DISABLED'}")

    try:
        yield {"app_lifespan_context": app_context}
    except Exception as e:
        logger.error(f"Error during lifespan: {e}", exc_info=True)
        raise
    finally:
        logger.info("Main Redmine MCP server lifespan shutting down...")
        await fetcher.close()
        logger.info("Main Redmine MCP server lifespan shutdown complete.")


main_mcp = FastMCP(name="Redmine MCP", lifespan=main_lifespan)
main_mcp.mount(redmine_mcp)


@main_mcp.custom_route("/healthz", methods=["GET"], include_in_schema=False)
async def _health_check_route(request: Request) -> JSONResponse:
    return await health_check(request)
