# -*- coding: utf-8 -*-
"""
Centralized logging configuration for the syscgo installer.

Console output is either human-readable or JSON-structured. The installer
never writes log files: the only files it touches are the binaries it
installs or removes.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

LOG_FORMATS = ("text", "json")

# Attributes every LogRecord carries; anything else came in through ``extra``.
_STANDARD_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Formats log records as JSON with a consistent structure: timestamp (ISO
    format), level, service name, logger, message, source location and any
    extra fields passed to the logging call.
    """

    def __init__(self, service_name: str = "syscgo-installer"):
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
            "thread": record.threadName,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        extra_fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _STANDARD_RECORD_ATTRS
        }
        if extra_fields:
            log_entry["extra"] = extra_fields

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def setup_logging(
    service_name: str,
    log_level: Optional[str] = None,
    log_format: str = "text",
) -> logging.Logger:
    """
    Set up console logging for the installer.

    Args:
        service_name: Name of the service, used as the returned logger's name.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Unknown values fall back to INFO.
        log_format: "text" for human-readable lines, "json" for structured.

    Returns:
        Configured logger instance
    """
    numeric_level = getattr(logging, (log_level or "INFO").upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    if log_format == "json":
        formatter: logging.Formatter = JSONFormatter(service_name)
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logger = logging.getLogger(service_name)
    logger.debug(
        "Logging initialized",
        extra={"log_level": logging.getLevelName(numeric_level), "log_format": log_format},
    )
    return logger
