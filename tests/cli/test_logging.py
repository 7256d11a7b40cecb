"""
Tests for logging setup and formatters.
"""

import json
import logging
import sys

import pytest

from jirate.cli.logging import JSONFormatter, TextFormatter, setup_logging


def make_record(msg="Test message", level=logging.INFO, exc_info=None, **extra):
    record = logging.LogRecord(
        name="CommentGateway",
        level=level,
        pathname="gateway.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestJSONFormatter:
    """Tests for the JSON log formatter."""

    def test_basic_format(self):
        data = json.loads(JSONFormatter().format(make_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "CommentGateway"
        assert data["message"] == "Test message"
        assert data["timestamp"].endswith("Z")
        assert "location" not in data

    def test_static_fields_and_location(self):
        formatter = JSONFormatter(static_fields={"service": "jirate"}, include_location=True)

        data = json.loads(formatter.format(make_record()))

        assert data["service"] == "jirate"
        assert data["location"] == {"file": "gateway.py", "line": 42, "function": None}

    def test_extra_fields_become_context(self):
        data = json.loads(JSONFormatter().format(make_record(issue_key="ABC-42")))
        assert data["context"] == {"issue_key": "ABC-42"}

    def test_exception(self):
        try:
            raise ValueError("bad value")
        except ValueError:
            record = make_record(level=logging.ERROR, exc_info=sys.exc_info())

        data = json.loads(JSONFormatter().format(record))

        assert data["exception"]["type"] == "ValueError"
        assert data["exception"]["message"] == "bad value"
        assert "Traceback" in data["exception"]["traceback"]

    def test_optional_fields_disabled(self):
        formatter = JSONFormatter(include_timestamp=False, include_level=False, include_logger=False)
        assert json.loads(formatter.format(make_record())) == {"message": "Test message"}


class TestTextFormatter:
    """Tests for the human-readable formatter."""

    def test_basic_format(self):
        line = TextFormatter(use_colors=False).format(make_record())
        assert "INFO" in line
        assert "CommentGateway: Test message" in line

    def test_colors(self):
        line = TextFormatter(use_colors=True).format(make_record(level=logging.ERROR))
        assert "\033[31mERROR\033[0m" in line

    def test_context(self):
        line = TextFormatter(use_colors=False, include_context=True).format(make_record(issue_key="ABC-42"))
        assert line.endswith("issue_key='ABC-42'")


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_replaces_root_handlers(self, restore_root_logger):
        setup_logging(level=logging.DEBUG, log_format="json")

        root = restore_root_logger
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
        assert logging.getLogger("urllib3").level == logging.WARNING

    def test_log_file(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "jirate.log"

        setup_logging(level=logging.INFO, log_file=str(log_file))
        logging.getLogger("QueryEngine").info("Searching my issues")
        for handler in restore_root_logger.handlers:
            handler.flush()

        assert len(restore_root_logger.handlers) == 2
        assert "QueryEngine: Searching my issues" in log_file.read_text()
