"""Logging helpers."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"
ROOT_LOGGER_NAME = "resilient_lookup"


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure application logging once for CLI usage."""
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)


def get_logger(component: str | None = None) -> logging.Logger:
    """Return the package logger, or a child logger for one component."""
    if component:
        return logging.getLogger(f"{ROOT_LOGGER_NAME}.{component}")
    return logging.getLogger(ROOT_LOGGER_NAME)
