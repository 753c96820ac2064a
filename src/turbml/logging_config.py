"""Logging setup for the turbml namespace.

Library modules only create ``logging.getLogger(__name__)`` loggers. The
embedding solver calls :func:`setup_logging` once on the process that
reports, or again to redirect output.
"""

import logging
import sys
from typing import Optional

LOGGER_NAME = "turbml"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def _remove_handlers(logger: logging.Logger) -> None:
    """Detach and close the handlers installed by an earlier setup."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Send turbml log records to stdout and optionally to a file.

    Args:
        level: Threshold for the turbml logger and its handlers
        log_file: Path of a log file, truncated on each setup

    Returns:
        The configured ``turbml`` logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    _remove_handlers(logger)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
