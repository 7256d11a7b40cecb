"""
Logging setup for the jirate CLI.

Two output formats:
- text: human-readable, optionally colored, for interactive use
- json: one JSON object per line, for log aggregation

Components log through ``logging.getLogger("<ClassName>")``; this module only
installs handlers and formatters on the root logger.
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any


# Attributes every LogRecord has; anything else was passed via ``extra``.
STANDARD_RECORD_ATTRS = frozenset({
    "args", "asctime", "created", "exc_info", "exc_text", "filename",
    "funcName", "levelname", "levelno", "lineno", "message", "module",
    "msecs", "msg", "name", "pathname", "process", "processName",
    "relativeCreated", "stack_info", "taskName", "thread", "threadName",
})

NOISY_LOGGERS = ("urllib3", "requests")

LEVEL_COLORS = {
    logging.DEBUG: "\033[2m",
    logging.INFO: "\033[36m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;31m",
}
RESET = "\033[0m"


def _context(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in STANDARD_RECORD_ATTRS and not key.startswith("_")
    }


class JSONFormatter(logging.Formatter):
    """
    Formats records as single-line JSON objects.

    Extra fields passed with ``extra={...}`` are collected under ``context``.
    """

    def __init__(
        self,
        static_fields: dict[str, Any] | None = None,
        include_timestamp: bool = True,
        include_level: bool = True,
        include_logger: bool = True,
        include_location: bool = False,
    ):
        super().__init__()
        self.static_fields = dict(static_fields or {})
        self.include_timestamp = include_timestamp
        self.include_level = include_level
        self.include_logger = include_logger
        self.include_location = include_location

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {}

        if self.include_timestamp:
            created = datetime.fromtimestamp(record.created, tz=timezone.utc)
            entry["timestamp"] = created.strftime("%Y-%m-%dT%H:%M:%S.") + f"{int(record.msecs):03d}Z"
        if self.include_level:
            entry["level"] = record.levelname
        if self.include_logger:
            entry["logger"] = record.name

        entry["message"] = record.getMessage()
        entry.update(self.static_fields)

        if self.include_location:
            entry["location"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        context = _context(record)
        if context:
            entry["context"] = context

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, exc_tb = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": "".join(traceback.format_exception(exc_type, exc_value, exc_tb)),
            }

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable ``time level logger: message`` lines."""

    def __init__(self, use_colors: bool | None = None, include_context: bool = False):
        super().__init__(datefmt="%H:%M:%S")
        if use_colors is None:
            use_colors = sys.stderr.isatty()
        self.use_colors = use_colors
        self.include_context = include_context

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, self.datefmt)
        level = record.levelname
        if self.use_colors:
            level = f"{LEVEL_COLORS.get(record.levelno, '')}{level}{RESET}"

        line = f"{timestamp} {level:<8} {record.name}: {record.getMessage()}"

        if self.include_context:
            context = _context(record)
            if context:
                line += " " + " ".join(f"{k}={v!r}" for k, v in context.items())

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)

        return line


def setup_logging(
    level: int = logging.WARNING,
    log_format: str = "text",
    log_file: str | None = None,
    static_fields: dict[str, Any] | None = None,
    use_colors: bool | None = None,
) -> None:
    """
    Configure the root logger.

    Existing root handlers are replaced. Logs go to stderr, and additionally
    to ``log_file`` when given.

    Args:
        level: Root log level
        log_format: "text" or "json"
        log_file: Optional path of a file to append logs to
        static_fields: Fields added to every JSON record
        use_colors: Color text output (defaults to stderr being a TTY)
    """
    if log_format == "json":
        formatter: logging.Formatter = JSONFormatter(static_fields=static_fields)
    else:
        formatter = TextFormatter(use_colors=use_colors)

    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        if log_format == "json":
            file_handler.setFormatter(JSONFormatter(static_fields=static_fields))
        else:
            file_handler.setFormatter(TextFormatter(use_colors=False))
        root.addHandler(file_handler)

    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
