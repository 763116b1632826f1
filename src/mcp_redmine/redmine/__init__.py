"""Redmine API integration module.

This module provides access to a Redmine instance through the Model Context
Protocol.
"""

from .client import RedmineClient
from .config import RedmineConfig
from .issues import IssuesMixin
from .memberships import MembershipsMixin
from .projects import ProjectsMixin
from .time_entries import TimeEntriesMixin
from .users import UsersMixin


class RedmineFetcher(
    IssuesMixin,
    ProjectsMixin,
    MembershipsMixin,
    UsersMixin,
    TimeEntriesMixin,
):
    """
    The main Redmine client class providing access to all Redmine operations.

    This class inherits from multiple mixins that provide specific functionality:
    - IssuesMixin: Issue search, retrieval, creation and updates
    - ProjectsMixin: Project listing and name lookup
    - MembershipsMixin: Project members
    - UsersMixin: Users and the current account
    - TimeEntriesMixin: Time entries, activities and time logging
    """

    pass


__all__ = ["RedmineFetcher", "RedmineConfig", "RedmineClient"]
