"""Tests for the logging helpers."""

import logging

import pytest

from mcp_redmine.logging_config import (
    ContextFilter,
    log_operation,
    mask_sensitive,
    setup_logger,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, "Not Provided"),
        ("", "Not Provided"),
        ("short", "*****"),
        ("abcdefghijkl", "********ijkl"),
    ],
)
def test_mask_sensitive(value, expected):
    assert mask_sensitive(value) == expected


def test_setup_logger_does_not_duplicate_handlers(tmp_path):
    logger = setup_logger("mcp-redmine.test", level="DEBUG")
    logger = setup_logger("mcp-redmine.test", level="INFO")

    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO
    assert logger.propagate is False


def test_setup_logger_file_handler(tmp_path):
    logger = setup_logger(
        "mcp-redmine.filetest", level="INFO", log_to_file=True, log_dir=str(tmp_path)
    )
    logger.info("written to file")
    for handler in logger.handlers:
        handler.flush()

    log_file = tmp_path / "mcp-redmine.filetest.log"
    assert "written to file" in log_file.read_text()


def test_log_operation_scopes_context():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
    context_filter = ContextFilter()
    logger = logging.getLogger("mcp-redmine.test.operation")

    with log_operation(logger, "get_issues", trace_id="abc123") as op:
        context_filter.filter(record)
        assert op.elapsed_ms >= 0

    assert record.context == "trace_id=abc123,operation=get_issues"

    after = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
    context_filter.filter(after)
    assert after.context == "no-context"
