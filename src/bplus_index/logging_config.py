"""Centralized logging configuration for the bplus-index project."""

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "bplus_index"


def setup_logging(
    level: int = logging.WARNING,
    format_string: Optional[str] = None,
    stream=None,
) -> logging.Logger:
    """
    Set up the package logger.

    Records go to stderr by default so they never interleave with the
    interactive shell's stdout.

    Args:
        level: Logging level (default: WARNING)
        format_string: Custom format string (optional)
        stream: Stream for the handler (default: sys.stderr)

    Returns:
        Configured logger instance
    """
    if format_string is None:
        format_string = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'

    logger = logging.getLogger(ROOT_LOGGER_NAME)

    # Avoid duplicate configuration, but honour a new level
    if logger.handlers:
        logger.setLevel(level)
        return logger

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(format_string))
    logger.addHandler(handler)

    logger.setLevel(level)
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Args:
        name: Module name (usually __name__)

    Returns:
        Logger instance
    """
    if not logging.getLogger(ROOT_LOGGER_NAME).handlers:
        setup_logging()

    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def get_test_logger(name: str) -> logging.Logger:
    """Get a logger for tests, independent of the package logger."""
    logger = logging.getLogger(f"Tests.{name}")

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('%(asctime)s [%(levelname)s] %(message)s'))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False

    return logger
