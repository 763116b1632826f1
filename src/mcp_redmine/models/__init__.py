"""
Pydantic models for MCP Redmine.

- ApiModel: base class for Redmine entities
- ResponseEnvelope / ErrorRecord: the uniform result handed to MCP clients
- redmine: entity, pagination and argument models
"""

from .base import ApiModel
from .envelope import ErrorRecord, ResponseEnvelope, TextContentItem

__all__ = ["ApiModel", "ErrorRecord", "ResponseEnvelope", "TextContentItem"]
