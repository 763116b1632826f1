"""Unit tests for the mcp-redmine command line entry point."""

import os
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from mcp_redmine import main
from mcp_redmine.servers import main_mcp


@pytest.fixture
def mock_run():
    """Keep the server from starting and capture the transport arguments."""
    with (
        patch.object(main_mcp, "run_async", MagicMock()) as run_async,
        patch("mcp_redmine.asyncio.run") as asyncio_run,
        patch("mcp_redmine.load_dotenv"),
    ):
        yield run_async, asyncio_run


def test_stdio_is_default(mock_run):
    run_async, asyncio_run = mock_run
    with patch.dict(os.environ, {}, clear=True):
        result = CliRunner().invoke(
            main,
            ["--redmine-url", "https://redmine.example.com", "--redmine-api-key", "secret-key"],
        )

    assert result.exit_code == 0, result.output
    run_async.assert_called_once_with(transport="stdio")
    asyncio_run.assert_called_once()


def test_http_transport_passes_host_and_port(mock_run):
    run_async, _ = mock_run
    env = {"REDMINE_URL": "https://redmine.example.com", "REDMINE_API_KEY": "secret-key"}
    with patch.dict(os.environ, env, clear=True):
        result = CliRunner().invoke(
            main, ["--transport", "streamable-http", "--host", "0.0.0.0", "--port", "9001"]
        )

    assert result.exit_code == 0, result.output
    run_async.assert_called_once_with(
        transport="streamable-http", host="0.0.0.0", port=9001
    )


def test_cli_flags_override_environment(mock_run):
    env = {"REDMINE_URL": "https://old.example.com", "REDMINE_API_KEY": "secret-key"}
    with patch.dict(os.environ, env, clear=True):
        result = CliRunner().invoke(
            main,
            [
                "--redmine-url",
                "https://new.example.com",
                "--redmine-timeout",
                "2500",
                "--read-only",
            ],
        )
        assert os.environ["REDMINE_URL"] == "https://new.example.com"
        assert os.environ["REDMINE_TIMEOUT"] == "2500"
        assert os.environ["READ_ONLY_MODE"] == "true"

    assert result.exit_code == 0, result.output


def test_invalid_configuration_exits_before_starting(mock_run):
    run_async, asyncio_run = mock_run
    with patch.dict(os.environ, {}, clear=True):
        result = CliRunner().invoke(main, ["--redmine-timeout", "0"])

    assert result.exit_code == 1
    assert "REDMINE_URL" in result.output
    assert "REDMINE_TIMEOUT" in result.output
    run_async.assert_not_called()
    asyncio_run.assert_not_called()
