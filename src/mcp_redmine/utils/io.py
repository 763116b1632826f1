"""I/O utility functions for MCP Redmine."""

from .env import is_env_extended_truthy


def is_read_only_mode() -> bool:
    """Check if the server is running in read-only mode.

    Read-only mode rejects every operation that creates or changes data in
    Redmine (issues, time entries) while allowing all read operations.

    Returns:
        True if read-only mode is enabled, False otherwise
    """
    return is_env_extended_truthy("READ_ONLY_MODE", "false")
