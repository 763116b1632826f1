"""Logging configuration for MCP Redmine."""

import contextvars
import logging
import os
import sys
import time
import types
import uuid
from collections.abc import Mapping
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, cast

# Default logger configuration
DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] [%(context)s] %(message)s"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_LOG_DIRECTORY = "logs"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB
LOG_BACKUP_COUNT = 5

# Context shared by every ContextualLogger; a ContextVar keeps concurrent
# tool calls on the same event loop apart.
_log_context: contextvars.ContextVar[dict[str, Any]] = contextvars.ContextVar(
    "mcp_redmine_log_context", default={}
)


def mask_sensitive(value: str | None, keep_chars: int = 4) -> str:
    """Mask a secret for logging, keeping only the last few characters.

    Args:
        value: The secret to mask
        keep_chars: Number of trailing characters left visible

    Returns:
        The masked value, or "Not Provided" when empty
    """
    if not value:
        return "Not Provided"
    if len(value) <= keep_chars * 2:
        return "*" * len(value)
    return "*" * (len(value) - keep_chars) + value[-keep_chars:]


def _get_context_str() -> str:
    context_data = _log_context.get()
    if not context_data:
        return "no-context"

    # Format context as: operation=X,trace_id=Y,...
    return ",".join(f"{k}={v}" for k, v in context_data.items())


class ContextFilter(logging.Filter):
    """Adds the context attribute to records from plain (non-contextual) loggers."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "context"):
            record.context = _get_context_str()
        return True


class ContextualLogger(logging.Logger):
    """Logger that tags every record with the current operation context."""

    @staticmethod
    def _get_context_str() -> str:
        return _get_context_str()

    def _log(
        self,
        level: int,
        msg: object,
        args: tuple[object, ...] | Mapping[str, object],
        exc_info: Any = None,
        extra: Mapping[str, object] | None = None,
        stack_info: bool = False,
        stacklevel: int = 1,
    ) -> None:
        extra = dict(extra or {})
        extra.setdefault("context", self._get_context_str())
        super()._log(level, msg, args, exc_info, extra, stack_info, stacklevel + 1)


class LoggingContextManager:
    """Context manager that times an operation and scopes its log context."""

    def __init__(self, logger: logging.Logger, operation: str, **context: Any) -> None:
        """
        Initializes the logging context manager.

        Args:
            logger: Logger to report start and end of the operation on
            operation: Name of the operation being executed
            **context: Additional context data
        """
        self.logger = logger
        self.operation = operation
        self.context = context.copy()
        self.trace_id = context.get("trace_id", str(uuid.uuid4())[:8])
        self.start_time = 0.0
        self._token: contextvars.Token[dict[str, Any]] | None = None

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self.start_time) * 1000

    def __enter__(self) -> "LoggingContextManager":
        self.start_time = time.perf_counter()
        self.context["operation"] = self.operation
        self.context["trace_id"] = self.trace_id
        self._token = _log_context.set({**_log_context.get(), **self.context})
        self.logger.debug(f"Operation started: {self.operation}")
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        duration = self.elapsed_ms / 1000
        if exc_type:
            self.logger.error(
                f"Operation failed: {self.operation} after {duration:.3f}s - {exc_val}"
            )
        else:
            self.logger.debug(
                f"Operation completed: {self.operation} in {duration:.3f}s"
            )
        if self._token is not None:
            _log_context.reset(self._token)
            self._token = None


def setup_logger(
    name: str = "mcp-redmine",
    level: str | None = None,
    log_to_file: bool = False,
    log_dir: str | None = None,
    log_format: str | None = None,
) -> ContextualLogger:
    """
    Configures and returns a contextual logger.

    Console output goes to stderr: stdout carries the MCP stdio transport.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, etc.)
        log_to_file: If True, also logs to a rotating file
        log_dir: Directory to store log files
        log_format: Log format

    Returns:
        Configured contextual logger
    """
    logging.setLoggerClass(ContextualLogger)
    logger = logging.getLogger(name)

    log_level = level or os.getenv("MCP_LOG_LEVEL", DEFAULT_LOG_LEVEL)
    logger.setLevel(getattr(logging, log_level.upper(), logging.WARNING))

    formatter = logging.Formatter(log_format or os.getenv("LOG_FORMAT", DEFAULT_FORMAT))

    # Re-running setup (e.g. from the CLI after import) must not duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(ContextFilter())
    logger.addHandler(console_handler)

    if log_to_file:
        log_directory = log_dir or os.getenv("LOG_DIR", DEFAULT_LOG_DIRECTORY)
        Path(log_directory).mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            Path(log_directory) / f"{name}.log",
            maxBytes=MAX_LOG_SIZE,
            backupCount=LOG_BACKUP_COUNT,
        )
        file_handler.setFormatter(formatter)
        file_handler.addFilter(ContextFilter())
        logger.addHandler(file_handler)

    # Child loggers ("mcp-redmine.*") propagate here; stop at this level
    logger.propagate = False

    return cast(ContextualLogger, logger)


def log_operation(
    logger: logging.Logger, operation: str, **context: Any
) -> LoggingContextManager:
    """
    Creates a context manager for operation logging.

    Args:
        logger: Logger to report on
        operation: Name of the operation
        **context: Additional context data

    Returns:
        Context manager configured for operation logging
    """
    return LoggingContextManager(logger, operation, **context)
