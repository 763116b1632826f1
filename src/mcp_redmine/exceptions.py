from mcp_redmine.models.envelope import ErrorRecord


class MCPRedmineError(Exception):
    """Base exception for MCP-Redmine errors."""

    kind = "internal"

    def to_record(self) -> ErrorRecord:
        return ErrorRecord(kind=self.kind, message=str(self))


class MCPRedmineValidationError(MCPRedmineError, ValueError):
    """Raised when tool arguments are malformed or insufficient.

    Always raised before any request reaches Redmine.
    """

    kind = "validation"


class RedmineApiError(MCPRedmineError):
    """Raised when the Redmine API answers with a non-success status,
    returns an unparseable body or cannot be reached."""

    kind = "transport"

    def __init__(
        self, message: str, status_code: int | None = None, text: str | None = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.text = text

    def to_record(self) -> ErrorRecord:
        return ErrorRecord(
            kind=self.kind, message=str(self), status_code=self.status_code
        )


class RedmineAuthenticationError(RedmineApiError):
    """Raised when Redmine rejects the API key (401/403)."""

    kind = "authentication"


class RedmineTimeoutError(RedmineApiError):
    """Raised when a request exceeds the configured timeout."""

    kind = "timeout"
