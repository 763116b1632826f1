import asyncio
import os
import sys

import click
from dotenv import load_dotenv

__version__ = "0.1.0"

from .logging_config import log_operation, setup_logger

logger = setup_logger()


@click.command()
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (can be used multiple times)",
)
@click.option(
    "--env-file", type=click.Path(exists=True, dir_okay=False), help="Path to .env file"
)
@click.option(
    "--transport",
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    default="stdio",
    help="Transport type (stdio, sse or streamable-http)",
)
@click.option(
    "--host",
    default="127.0.0.1",
    help="Host to bind for HTTP transports",
)
@click.option(
    "--port",
    default=8000,
    help="Port to listen on for HTTP transports",
)
@click.option(
    "--log-dir",
    help="Directory to store log files",
)
@click.option(
    "--log-to-file/--no-log-to-file",
    default=False,
    help="Enable/disable file logging",
)
@click.option(
    "--redmine-url",
    help="Redmine URL (e.g., https://redmine.example.com)",
)
@click.option("--redmine-api-key", help="Redmine REST API key")
@click.option(
    "--redmine-timeout",
    type=int,
    help="Request timeout in milliseconds (default: 10000)",
)
@click.option(
    "--redmine-ssl-verify/--no-redmine-ssl-verify",
    default=None,
    help="Verify SSL certificates (default: verify)",
)
@click.option(
    "--read-only/--no-read-only",
    default=None,
    help="Reject operations that create or change Redmine data",
)
def main(
    verbose: int,
    env_file: str | None,
    transport: str,
    host: str,
    port: int,
    log_dir: str | None,
    log_to_file: bool,
    redmine_url: str | None,
    redmine_api_key: str | None,
    redmine_timeout: int | None,
    redmine_ssl_verify: bool | None,
    read_only: bool | None,
) -> None:
    """MCP Redmine Server - Redmine projects, issues and time tracking for MCP"""
    logging_level = None
    if verbose == 1:
        logging_level = "INFO"
    elif verbose >= 2:
        logging_level = "DEBUG"

    setup_logger(
        name="mcp-redmine",
        level=logging_level,
        log_to_file=log_to_file,
        log_dir=log_dir,
    )

    with log_operation(logger, "application_startup", app_version=__version__):
        if env_file:
            logger.info(f"Loading environment from file: {env_file}")
            load_dotenv(env_file)
        else:
            logger.debug("Attempting to load environment from default .env file")
            load_dotenv()

        # Command line arguments take precedence over the environment
        if redmine_url:
            os.environ["REDMINE_URL"] = redmine_url
        if redmine_api_key:
            os.environ["REDMINE_API_KEY"] = redmine_api_key
        if redmine_timeout is not None:
            os.environ["REDMINE_TIMEOUT"] = str(redmine_timeout)
        if redmine_ssl_verify is not None:
            os.environ["REDMINE_SSL_VERIFY"] = str(redmine_ssl_verify).lower()
        if read_only is not None:
            os.environ["READ_ONLY_MODE"] = str(read_only).lower()
        if log_dir:
            os.environ["LOG_DIR"] = log_dir

        from .redmine.config import validate_config

        _, errors = validate_config(os.environ)
        if errors:
            for error in errors:
                logger.error(f"Invalid configuration: {error}")
                click.echo(f"Configuration error: {error}", err=True)
            sys.exit(1)

        from .servers import main_mcp

        logger.info(f"Starting MCP Redmine v{__version__} with {transport} transport")

    if transport == "stdio":
        asyncio.run(main_mcp.run_async(transport="stdio"))
    else:
        asyncio.run(main_mcp.run_async(transport=transport, host=host, port=port))


__all__ = ["main", "__version__", "setup_logger", "log_operation"]

if __name__ == "__main__":
    main()
