"""
Logging setup for the template helper.

Modules log through ``logging.getLogger(__name__)``; applications and the
CLI call ``configure_logging`` once to attach a handler. Console output uses
rich formatting unless plain output is requested.
"""

import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from ..exceptions import ConfigurationError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER_NAME = "template_helper"


def _level(level: str) -> int:
    if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
        raise ConfigurationError("Invalid log level", repr(level))
    return getattr(logging, level.upper())


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance for module.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    if not name or not isinstance(name, str):
        raise ValueError("Logger name must be a non-empty string")

    logger = logging.getLogger(name)

    if not logger.handlers and not logging.getLogger(ROOT_LOGGER_NAME).handlers:
        logger.setLevel(logging.INFO)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT))
        logger.addHandler(console_handler)

    return logger


def configure_logging(level: str = "INFO", rich: bool = True,
                      stream=None) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        rich: Use a rich console handler instead of a plain stream handler
        stream: Target stream (defaults to stderr)

    Returns:
        The configured package logger
    """
    numeric_level = _level(level)
    stream = stream or sys.stderr

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(numeric_level)
    logger.handlers.clear()

    if rich:
        handler: logging.Handler = RichHandler(
            console=Console(file=stream),
            show_time=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    else:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT))

    handler.setLevel(numeric_level)
    logger.addHandler(handler)

    return logger


def set_log_level(level: str, logger_name: Optional[str] = None) -> None:
    """
    Set log level on a logger and its handlers.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        logger_name: Logger to update (defaults to the package logger)
    """
    numeric_level = _level(level)
    logger = logging.getLogger(logger_name or ROOT_LOGGER_NAME)
    logger.setLevel(numeric_level)
    for handler in logger.handlers:
        handler.setLevel(numeric_level)
