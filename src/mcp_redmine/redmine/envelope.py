"""Run operations and wrap their outcome in a response envelope.

This is the one place where exceptions raised while serving an operation are
turned into data. Callers always get a ResponseEnvelope back.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

from ..exceptions import (
    MCPRedmineError,
    MCPRedmineValidationError,
    RedmineApiError,
)
from ..logging_config import log_operation
from ..models.envelope import ErrorRecord, ResponseEnvelope, TextContentItem
from ..models.redmine import RedmineArgs
from .operations import get_operation, parse_arguments

logger = logging.getLogger("mcp-redmine.redmine.envelope")


def success_envelope(
    result: Any, metadata: dict[str, Any] | None = None
) -> ResponseEnvelope:
    text = json.dumps(result, indent=2, ensure_ascii=False)
    return ResponseEnvelope(
        content=[TextContentItem(text=text)], is_error=False, metadata=metadata
    )


def failure_envelope(
    record: ErrorRecord, metadata: dict[str, Any] | None = None
) -> ResponseEnvelope:
    payload = record.to_payload()
    return ResponseEnvelope(
        content=[TextContentItem(text=json.dumps(payload, indent=2, ensure_ascii=False))],
        is_error=True,
        metadata={**(metadata or {}), "error": payload},
    )


async def run_operation(
    fetcher: Any,
    name: str,
    arguments: Mapping[str, Any] | RedmineArgs | None = None,
    read_only: bool = False,
) -> ResponseEnvelope:
    """
    Validate arguments, call the operation and wrap the outcome.

    Args:
        fetcher: A RedmineFetcher (or anything exposing the same methods)
        name: Operation name, see ``OPERATIONS``
        arguments: Raw arguments or an already validated argument model
        read_only: Reject operations that change data

    Returns:
        A success envelope with the pretty-printed JSON result, or a failure
        envelope describing the error. Never raises for operation failures.
    """
    with log_operation(logger, name) as op:
        try:
            operation = get_operation(name)
            if operation.write and read_only:
                raise MCPRedmineValidationError(
                    f"Cannot {name.replace('_', ' ')} in read-only mode."
                )
            args = parse_arguments(operation, arguments)
            result = await getattr(fetcher, operation.method)(**args.to_kwargs())
            return success_envelope(
                result,
                {"operation": name, "duration_ms": round(op.elapsed_ms, 2)},
            )
        except MCPRedmineValidationError as e:
            logger.warning(f"{name} rejected: {e}")
            record = e.to_record()
        except RedmineApiError as e:
            logger.error(f"{name} failed ({e.kind}): {e}")
            record = e.to_record()
        except MCPRedmineError as e:
            logger.error(f"{name} failed: {e}")
            record = e.to_record()
        except Exception as e:
            logger.exception(f"Unexpected error in {name}:")
            record = ErrorRecord(kind="internal", message=f"Unexpected error: {e}")

        return failure_envelope(
            record, {"operation": name, "duration_ms": round(op.elapsed_ms, 2)}
        )
