from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mcp_redmine.redmine import RedmineFetcher
    from mcp_redmine.redmine.config import RedmineConfig


@dataclass(frozen=True)
class MainAppContext:
    """Context holding the Redmine configuration, the shared fetcher and server settings."""

    redmine_config: RedmineConfig | None = None
    redmine_fetcher: RedmineFetcher | None = None
    read_only: bool = False
