"""Shared default values for Redmine models."""

from typing import Final

EMPTY_STRING: Final[str] = ""
UNKNOWN: Final[str] = "Unknown"
REDMINE_DEFAULT_ID: Final[int] = 0
