"""Logging configuration for the stattaker CLI.

Engine transitions log at DEBUG under ``stattaker.application.engine``;
submissions log at INFO under ``stattaker.application.submission``.
"""

from __future__ import annotations

import logging
import os

# Loggers of the HTTP client stack behind HttpEventStore
HTTP_LOGGERS = ("urllib3", "requests")

CONSOLE_FORMAT = "%(levelname)-8s | %(name)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(
    logger_name: str = "stattaker",
    log_file: str | None = None,
    verbose: bool = False,
) -> logging.Logger:
    """
    Attach console and optional file handlers to the package logger.

    Args:
        logger_name: Package logger; module loggers below it inherit handlers
        log_file: Path to a DEBUG log of every transition (None for no file)
        verbose: Show engine transitions on the console

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(logging.DEBUG)
    # Repeated CLI invocations in one process must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    # Connection pool chatter is only useful while debugging the store
    http_level = logging.DEBUG if verbose else logging.WARNING
    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)

    return logger
