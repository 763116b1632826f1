"""Base client module for Redmine API interactions."""

import logging
from collections.abc import Mapping
from typing import Any

import anyio
import httpx

from ..exceptions import (
    RedmineApiError,
    RedmineAuthenticationError,
    RedmineTimeoutError,
)
from .config import RedmineConfig
from .constants import API_KEY_HEADER, JSON_CONTENT_TYPE

logger = logging.getLogger("mcp-redmine.redmine.client")

QueryValue = str | int | float | bool


class RedmineClient:
    """Base client for Redmine REST API interactions.

    One call to :meth:`send` is exactly one HTTP request. The client keeps
    no per-call state, so concurrent calls can share an instance.
    """

    def __init__(
        self,
        config: RedmineConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the Redmine client with a given configuration.

        Args:
            config: Redmine configuration. If None, it is loaded from the
                environment.
            transport: Optional httpx transport, used by tests to stand in
                for the remote server

        Raises:
            ValueError: If configuration is missing or invalid
        """
        self.config = config or RedmineConfig.from_env()
        self.session = self._create_session(transport)

    def _create_session(
        self, transport: httpx.AsyncBaseTransport | None
    ) -> httpx.AsyncClient:
        """Create the pooled HTTP session carrying the API key header."""
        return httpx.AsyncClient(
            base_url=self.config.url,
            headers={
                API_KEY_HEADER: self.config.api_key,
                "Content-Type": JSON_CONTENT_TYPE,
            },
            verify=self.config.ssl_verify,
            timeout=httpx.Timeout(self.config.timeout),
            transport=transport,
        )

    @property
    def timeout_ms(self) -> int:
        """Configured request timeout in milliseconds."""
        return int(self.config.timeout * 1000)

    async def send(
        self,
        path: str,
        method: str = "GET",
        params: Mapping[str, QueryValue] | None = None,
        body: Any = None,
    ) -> Any:
        """Send a single request to the Redmine API.

        Args:
            path: API path relative to the base URL (e.g. "/issues.json")
            method: HTTP method
            params: Query parameters, encoded in insertion order
            body: JSON body; omitted from the request when None

        Returns:
            Parsed JSON for JSON responses, an empty dict otherwise

        Raises:
            RedmineTimeoutError: If the request does not finish within the
                configured timeout
            RedmineAuthenticationError: If Redmine answers 401 or 403
            RedmineApiError: For any other non-success status, an invalid
                JSON body or a network failure
        """
        request_kwargs: dict[str, Any] = {}
        if params:
            request_kwargs["params"] = list(params.items())
        if body is not None:
            request_kwargs["json"] = body

        logger.debug(f"Sending {method} request to {path}")

        try:
            with anyio.fail_after(self.config.timeout):
                response = await self.session.request(method, path, **request_kwargs)
        except (TimeoutError, httpx.TimeoutException) as e:
            logger.warning(f"{method} {path} timed out after {self.timeout_ms}ms")
            raise RedmineTimeoutError(
                f"Request timeout after {self.timeout_ms}ms"
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Request error for {method} {path}: {e}")
            raise RedmineApiError(f"Request error: {e}") from e

        return self._handle_response(method, path, response)

    def _handle_response(self, method: str, path: str, response: httpx.Response) -> Any:
        if not response.is_success:
            text = response.text or response.reason_phrase
            message = f"Redmine API error: {response.status_code} {text}"
            logger.error(f"HTTP error {response.status_code} for {method} {path}")
            if response.status_code in (401, 403):
                raise RedmineAuthenticationError(
                    message, status_code=response.status_code, text=text
                )
            raise RedmineApiError(message, status_code=response.status_code, text=text)

        content_type = response.headers.get("content-type", "")
        if JSON_CONTENT_TYPE in content_type:
            try:
                return response.json()
            except ValueError as e:
                logger.error(f"Invalid JSON body from {method} {path}: {e}")
                raise RedmineApiError(
                    f"Invalid JSON in Redmine response: {e}",
                    status_code=response.status_code,
                ) from e

        # e.g. 204 No Content after an update
        return {}

    async def close(self) -> None:
        """Close HTTP session."""
        await self.session.aclose()
