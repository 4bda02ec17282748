"""
Logging configuration and utilities for deskbind.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from rich.console import Console
from rich.logging import RichHandler

from deskbind.config.settings import get_settings

# Extra record attributes copied into JSON output when present.
CONTEXT_FIELDS = (
    "title",
    "text",
    "capability",
    "error",
    "command",
    "returncode",
    "window_id",
)


class JSONFormatter(logging.Formatter):
    """JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ContextLogAdapter(logging.LoggerAdapter):
    """Log adapter that stamps a fixed context (e.g. a window identity) on records."""

    def process(
        self, msg: str, kwargs: Dict[str, Any]
    ) -> tuple[str, Dict[str, Any]]:
        """Add adapter context to log records."""
        kwargs["extra"] = {**kwargs.get("extra", {}), **self.extra}
        return msg, kwargs


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Set up logging configuration.

    Args:
        log_level: Logging level (defaults to settings)
        log_format: Log format 'json' or 'text' (defaults to settings)
        log_file: Optional log file path (defaults to settings)

    Returns:
        Root logger instance
    """
    settings = get_settings()

    level = log_level or settings.log_level
    format_type = log_format or settings.log_format
    file_path = log_file or settings.log_file

    numeric_level = getattr(logging, level.upper())

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if format_type == "json":
        console_handler: logging.Handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(JSONFormatter())
    else:
        console = Console(stderr=True)
        console_handler = RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
        )

    console_handler.setLevel(numeric_level)
    root_logger.addHandler(console_handler)

    if file_path:
        file_handler = logging.FileHandler(file_path)
        file_handler.setLevel(numeric_level)

        if format_type == "json":
            file_handler.setFormatter(JSONFormatter())
        else:
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
                )
            )

        root_logger.addHandler(file_handler)

    root_logger.setLevel(numeric_level)

    logger = logging.getLogger("deskbind")
    logger.debug(
        "deskbind logging initialized",
        extra={
            "log_level": level,
            "log_format": format_type,
            "log_file": file_path,
        },
    )

    return root_logger


def get_logger(name: str, **context: Any) -> logging.Logger:
    """
    Get a logger instance with optional context.

    Args:
        name: Logger name
        **context: Additional context to include in logs

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)

    if context:
        return ContextLogAdapter(logger, context)

    return logger
