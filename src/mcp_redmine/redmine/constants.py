"""Constants for Redmine integration."""

from typing import Final

# Environment variable names
ENV_REDMINE_URL: Final[str] = "REDMINE_URL"
ENV_REDMINE_API_KEY: Final[str] = "REDMINE_API_KEY"
ENV_REDMINE_TIMEOUT: Final[str] = "REDMINE_TIMEOUT"
ENV_REDMINE_SSL_VERIFY: Final[str] = "REDMINE_SSL_VERIFY"

# HTTP
API_KEY_HEADER: Final[str] = "X-Redmine-API-Key"
JSON_CONTENT_TYPE: Final[str] = "application/json"

# Default values
DEFAULT_TIMEOUT_MS: Final[int] = 10000
DEFAULT_PAGE_SIZE: Final[int] = 100
RECENT_ITEMS_LIMIT: Final[int] = 10

# Issue defaults applied on creation when the caller omits them
# (stock Redmine: tracker 1 "Bug", status 1 "New", priority 2 "Normal")
DEFAULT_TRACKER_ID: Final[int] = 1
DEFAULT_STATUS_ID: Final[int] = 1
DEFAULT_PRIORITY_ID: Final[int] = 2

DEFAULT_ISSUE_SORT: Final[str] = "priority:desc,updated_on:desc"

# Redmine "contains" operator for text filters
CONTAINS_OPERATOR: Final[str] = "~"
