"""Logging configuration shared by the CLI and the long-running service."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

LOGGER_NAME = "rooster_ranch"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a rich console handler to the package logger.

    Calling this more than once replaces the handler rather than stacking them.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    logger.addHandler(RichHandler(show_path=False, rich_tracebacks=True))
    return logger
