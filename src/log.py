"""Logging helpers for the step library."""

import logging
import os
import sys

from rich.logging import RichHandler

from constants import (
    REST_API_STEPS_LOG_LEVEL_ENV_VAR,
    DEFAULT_LOG_LEVEL,
    DEFAULT_LOG_FORMAT,
)


def resolve_log_level() -> int:
    """
    Resolve and validate the log level from environment variable.

    Reads the REST_API_STEPS_LOG_LEVEL environment variable and validates it
    against Python's logging module. Unset means DEFAULT_LOG_LEVEL; an
    unknown level name prints a warning and falls back to DEFAULT_LOG_LEVEL.

    Returns:
        int: A valid logging level constant (e.g., logging.INFO, logging.DEBUG).
    """
    level_str = os.environ.get(REST_API_STEPS_LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL)

    validated_level = getattr(logging, level_str.upper(), None)
    if not isinstance(validated_level, int):
        # Loggers are created at import time of the step modules, before any
        # handler exists, so the warning goes straight to stderr.
        print(
            f"WARNING: Invalid log level '{level_str}', "
            f"falling back to {DEFAULT_LOG_LEVEL}",
            file=sys.stderr,
        )
        validated_level = getattr(logging, DEFAULT_LOG_LEVEL)

    return validated_level


def create_log_handler() -> logging.Handler:
    """
    Create a log handler suited to the current output stream.

    Behave runs interactively in a terminal most of the time, where a
    RichHandler is used. In CI logs (no TTY) a plain StreamHandler with
    DEFAULT_LOG_FORMAT keeps lines greppable.

    Returns:
        logging.Handler: RichHandler for a TTY, StreamHandler otherwise.
    """
    if sys.stderr.isatty():
        return RichHandler()

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
    return handler


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger configured for console output.

    The logger level comes from REST_API_STEPS_LOG_LEVEL (INFO by default),
    its handlers are replaced with a single handler from create_log_handler()
    and propagation to ancestor loggers is disabled, so behave's own output
    capture does not print each record twice.

    Parameters:
        name (str): Name of the logger to retrieve or create.

    Returns:
        logging.Logger: The configured logger instance.
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    logger.handlers = [create_log_handler()]
    logger.propagate = False
    logger.setLevel(resolve_log_level())
    return logger
