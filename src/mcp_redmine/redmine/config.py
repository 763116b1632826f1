"""Configuration module for Redmine API interactions."""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from urllib.parse import urlparse

from ..utils.env import is_env_ssl_verify
from .constants import (
    DEFAULT_TIMEOUT_MS,
    ENV_REDMINE_API_KEY,
    ENV_REDMINE_SSL_VERIFY,
    ENV_REDMINE_TIMEOUT,
    ENV_REDMINE_URL,
)


@dataclass(frozen=True)
class ConfigFieldError:
    """A single problem found while validating configuration."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


@dataclass(frozen=True)
class RedmineConfig:
    """Redmine API configuration.

    Immutable for the lifetime of the process. The API key is never part of
    the repr so the config can be logged safely.
    """

    url: str  # Base URL, without trailing slash
    api_key: str
    timeout: float = DEFAULT_TIMEOUT_MS / 1000  # Seconds
    ssl_verify: bool = True

    def __repr__(self) -> str:
        return (
            f"RedmineConfig(url={self.url!r}, api_key='***', "
            f"timeout={self.timeout!r}, ssl_verify={self.ssl_verify!r})"
        )

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "RedmineConfig":
        """Create configuration from environment variables.

        Args:
            env: Mapping to read from, defaults to the process environment

        Returns:
            RedmineConfig with values from environment variables

        Raises:
            ValueError: If required environment variables are missing or invalid
        """
        config, errors = validate_config(os.environ if env is None else env)
        if errors or config is None:
            details = "\n".join(str(error) for error in errors)
            raise ValueError(f"Configuration validation failed:\n{details}")
        return config


def _validate_required(
    env: Mapping[str, str], name: str
) -> tuple[str | None, ConfigFieldError | None]:
    value = (env.get(name) or "").strip()
    if not value:
        return None, ConfigFieldError(name, "is required and cannot be empty")
    return value, None


def _validate_url(url: str) -> tuple[str | None, ConfigFieldError | None]:
    normalized = url.rstrip("/")
    parsed = urlparse(normalized)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return None, ConfigFieldError(ENV_REDMINE_URL, "must be a valid URL")
    return normalized, None


def _validate_timeout(raw: str | None) -> tuple[float, ConfigFieldError | None]:
    default = DEFAULT_TIMEOUT_MS / 1000
    if raw is None or raw.strip() == "":
        return default, None
    try:
        parsed = int(raw.strip())
    except ValueError:
        parsed = 0
    if parsed <= 0:
        return default, ConfigFieldError(
            ENV_REDMINE_TIMEOUT, "must be a positive number of milliseconds"
        )
    return parsed / 1000, None


def validate_config(
    env: Mapping[str, str],
) -> tuple[RedmineConfig | None, list[ConfigFieldError]]:
    """Validate Redmine settings without touching global state.

    Every problem is reported, not only the first one.

    Args:
        env: Mapping of environment variable names to values

    Returns:
        A tuple of the configuration (None when invalid) and the list of
        field errors (empty when valid)
    """
    errors: list[ConfigFieldError] = []

    url, error = _validate_required(env, ENV_REDMINE_URL)
    if error:
        errors.append(error)
    elif url:
        url, error = _validate_url(url)
        if error:
            errors.append(error)

    api_key, error = _validate_required(env, ENV_REDMINE_API_KEY)
    if error:
        errors.append(error)

    timeout, error = _validate_timeout(env.get(ENV_REDMINE_TIMEOUT))
    if error:
        errors.append(error)

    if errors or url is None or api_key is None:
        return None, errors

    return (
        RedmineConfig(
            url=url,
            api_key=api_key,
            timeout=timeout,
            ssl_verify=is_env_ssl_verify(env, ENV_REDMINE_SSL_VERIFY),
        ),
        [],
    )
