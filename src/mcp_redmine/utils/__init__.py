"""
Utility functions for the MCP Redmine integration.
"""

from .env import is_env_extended_truthy, is_env_ssl_verify
from .io import is_read_only_mode

__all__ = [
    "is_env_extended_truthy",
    "is_env_ssl_verify",
    "is_read_only_mode",
]
