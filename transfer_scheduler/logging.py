"""Logging setup for transfer-scheduler.

Modules log through ``get_logger(__name__)`` and attach transfer context
with the standard ``extra`` argument::

    logger.warning("Transfer service rejected request", extra={"status_code": 400})

Only the names in ``CONTEXT_FIELDS`` are picked up. The JSON format emits
them as top-level keys; the standard format appends them as ``key=value``.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

CONTEXT_FIELDS = ("transfer_id", "status_code", "method", "path", "fields")

LOG_FORMATS = ("standard", "json")

# Third-party loggers that are noisy below WARNING
QUIET_LOGGERS = ("httpx", "httpcore", "faker")


def log_context(record: logging.LogRecord) -> dict[str, Any]:
    """Transfer context attached to a record, skipping unset fields."""
    context = {}
    for name in CONTEXT_FIELDS:
        value = getattr(record, name, None)
        if value is not None:
            context[name] = value
    return context


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
) -> None:
    """Configure the root logger with a single stdout handler.

    Parameters
    ----------
    level : str
        Log level name; unknown names fall back to INFO.
    format_type : str
        "standard" or "json"; anything else is treated as "standard".
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter = JsonFormatter() if format_type == "json" else ContextFormatter()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger("transfer_scheduler").setLevel(log_level)

    # httpx logs every request at INFO
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


class ContextFormatter(logging.Formatter):
    """Plain-text formatter that appends transfer context as ``key=value``."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = log_context(record)
        if context:
            line += " | " + " ".join(f"{key}={value}" for key, value in context.items())
        return line


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with transfer context as top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_data.update(log_context(record))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a transfer_scheduler module."""
    return logging.getLogger(name)
