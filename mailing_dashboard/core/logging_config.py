"""
Logging configuration for the Mailing Dashboard API.
Human-readable console output with coloured levels.
"""
import logging
import sys
from datetime import datetime
from typing import Optional

ROOT_LOGGER_NAME = "mailing_dashboard"


class ConsoleFormatter(logging.Formatter):
    """Format log records for human-readable console output."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
        "RESET": "\033[0m",
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
        reset = self.COLORS["RESET"]
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")

        log_parts = [
            f"{color}{record.levelname:8}{reset}",
            f"[{timestamp}]",
            f"{record.name}:",
            record.getMessage(),
        ]

        if record.exc_info:
            log_parts.append(f"\n{self.formatException(record.exc_info)}")

        return " ".join(log_parts)


def setup_logging(log_level: str = "INFO", stream: Optional[object] = None) -> logging.Logger:
    """
    Configure the application logger with a console handler.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        stream: Output stream (default: stdout)

    Returns:
        Configured root application logger
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(ConsoleFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    logger.debug(f"Logging configured: level={log_level}")
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger of the application logger."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
