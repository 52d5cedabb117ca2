"""
Logging configuration for quotegateway.

Features:
- Log level control via environment variable or config
- Human-readable console output, or structured JSON lines
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone

DEFAULT_LOG_LEVEL = os.getenv("QUOTEGATEWAY_LOG_LEVEL", "INFO")

_current_log_level = DEFAULT_LOG_LEVEL.upper()


class StructuredFormatter(logging.Formatter):
    """Formatter that outputs structured JSON logs."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if getattr(record, "error_details", None):
            log_data["error_details"] = record.error_details

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class HumanFormatter(logging.Formatter):
    """Human-readable formatter for console output."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = True) -> None:
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "") if self.use_color else ""
        reset = self.RESET if color else ""
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]

        base_msg = f"[{timestamp}] {color}{record.levelname:8}{reset} | {record.name:30} | {record.getMessage()}"

        if getattr(record, "error_details", None):
            base_msg += f" | details={json.dumps(record.error_details, ensure_ascii=False, default=str)}"

        if record.exc_info:
            base_msg += f"\n{self.formatException(record.exc_info)}"

        return base_msg


def setup_logging(
    level: str | None = None,
    structured: bool = False,
    logger_name: str = "quotegateway",
) -> None:
    """
    Attach a console handler to the package logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        structured: Emit JSON lines instead of human-readable output
        logger_name: Logger to configure
    """
    global _current_log_level

    if level:
        _current_log_level = level.upper()

    numeric_level = getattr(logging, _current_log_level, logging.INFO)

    package_logger = logging.getLogger(logger_name)
    package_logger.setLevel(numeric_level)

    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    if structured:
        console_handler.setFormatter(StructuredFormatter())
    else:
        console_handler.setFormatter(HumanFormatter(use_color=sys.stdout.isatty()))
    console_handler.setLevel(numeric_level)
    package_logger.addHandler(console_handler)

    logging.getLogger("aiohttp").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (usually __name__)
    """
    return logging.getLogger(name)


def set_log_level(level: str, logger_name: str = "quotegateway") -> None:
    """Dynamically set the log level."""
    global _current_log_level
    _current_log_level = level.upper()

    package_logger = logging.getLogger(logger_name)
    package_logger.setLevel(getattr(logging, _current_log_level, logging.INFO))

    for handler in package_logger.handlers:
        handler.setLevel(getattr(logging, _current_log_level, logging.INFO))


def get_log_level() -> str:
    """Get the current log level."""
    return _current_log_level
