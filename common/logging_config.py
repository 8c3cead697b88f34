# -*- coding: utf-8 -*-
"""
Centralized logging configuration for the bootstrapper.

Console output is human readable with colored levels (green info, yellow
warnings, red errors); records at ERROR and above go to stderr, everything
else to stdout. An optional log file receives one JSON object per record.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Optional, TextIO

ANSI_RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[2m",
    logging.INFO: "\033[1;32m",
    logging.WARNING: "\033[1;33m",
    logging.ERROR: "\033[1;31m",
    logging.CRITICAL: "\033[1;31m",
}

# Attributes present on every LogRecord; anything else came from `extra=`.
_RESERVED_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for the optional log file.

    Each record becomes one line holding the timestamp, level, service
    name, logger, message, source location and any extra fields.
    """

    def __init__(self, service_name: str = "ansible-bootstrap"):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "service": self.service_name,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        extra_fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_RECORD_ATTRS
        }
        if extra_fields:
            log_entry["extra"] = extra_fields

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class ColorFormatter(logging.Formatter):
    """Wraps each console line in the ANSI color of its level."""

    def __init__(self, fmt: str, use_color: bool = True):
        super().__init__(fmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if not self.use_color:
            return message
        color = LEVEL_COLORS.get(record.levelno, "")
        return f"{color}{message}{ANSI_RESET}" if color else message


class MaxLevelFilter(logging.Filter):
    """Passes records strictly below the given level."""

    def __init__(self, max_level: int):
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.max_level


def stream_supports_color(stream: TextIO) -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def resolve_log_level(log_level: Optional[str]) -> int:
    """Maps a level name (or LOG_LEVEL from the environment) to a number."""
    if log_level is None:
        log_level = os.environ.get("LOG_LEVEL", "INFO")
    numeric_level = getattr(logging, str(log_level).upper(), None)
    if not isinstance(numeric_level, int):
        return logging.INFO
    return numeric_level


def setup_logging(
    service_name: str,
    log_level: Optional[str] = None,
    enable_console: bool = True,
    enable_file: bool = False,
    log_file_path: Optional[str] = None,
) -> logging.Logger:
    """
    Set up logging for the bootstrapper.

    Args:
        service_name: Name of the top-level logger (e.g. "ansible-bootstrap")
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            falls back to the LOG_LEVEL environment variable, then INFO
        enable_console: Whether to enable console logging
        enable_file: Whether to enable JSON file logging
        log_file_path: Path to log file (if file logging enabled)

    Returns:
        Configured logger instance
    """
    numeric_level = resolve_log_level(log_level)
    console_format = "%(message)s"
    if numeric_level <= logging.DEBUG:
        console_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        stdout_handler = logging.StreamHandler(sys.stdout)
        stdout_handler.setLevel(numeric_level)
        stdout_handler.addFilter(MaxLevelFilter(logging.ERROR))
        stdout_handler.setFormatter(
            ColorFormatter(console_format, stream_supports_color(sys.stdout))
        )
        root_logger.addHandler(stdout_handler)

        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(max(numeric_level, logging.ERROR))
        stderr_handler.setFormatter(
            ColorFormatter(console_format, stream_supports_color(sys.stderr))
        )
        root_logger.addHandler(stderr_handler)

    if enable_file and log_file_path:
        file_handler = logging.FileHandler(log_file_path, encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(JSONFormatter(service_name))
        root_logger.addHandler(file_handler)

    logger = logging.getLogger(service_name)
    logger.debug(
        "Logging initialized",
        extra={
            "log_level": logging.getLevelName(numeric_level),
            "console_enabled": enable_console,
            "file_enabled": bool(enable_file and log_file_path),
        },
    )
    return logger
