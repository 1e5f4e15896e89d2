"""Logging configuration for the heap ingestion tooling."""

import json
import logging
import sys
from typing import Any, Dict, Optional

from heap_ingestion.config import get_settings

_RESERVED_ATTRS = {
    "name",
    "msg",
    "args",
    "created",
    "filename",
    "funcName",
    "levelname",
    "levelno",
    "lineno",
    "module",
    "msecs",
    "message",
    "pathname",
    "process",
    "processName",
    "relativeCreated",
    "thread",
    "threadName",
    "taskName",
    "exc_info",
    "exc_text",
    "stack_info",
}

# Logger instance
_logger: Optional[logging.Logger] = None


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Fields passed through ``extra=``
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=str)


class StandardFormatter(logging.Formatter):
    """Standard formatter for development (human-readable)."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def setup_logging() -> logging.Logger:
    """Set up logging configuration based on environment."""
    global _logger

    if _logger is not None:
        return _logger

    settings = get_settings()

    logger = logging.getLogger("heap_ingestion")
    logger.setLevel(getattr(logging, settings.log_level))

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, settings.log_level))

    if settings.is_production:
        formatter = JSONFormatter()
    else:
        formatter = StandardFormatter()

    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    logging.getLogger("httpx").setLevel(logging.INFO if settings.debug else logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logger.propagate = False

    _logger = logger
    logger.debug(
        f"Logging configured: level={settings.log_level}, "
        f"environment={settings.environment.value}, "
        f"format={'JSON' if settings.is_production else 'Standard'}"
    )

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance."""
    if name:
        return logging.getLogger(f"heap_ingestion.{name}")
    return logging.getLogger("heap_ingestion")
