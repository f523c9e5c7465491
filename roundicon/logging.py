"""Logging utilities for roundicon."""

from __future__ import annotations

import logging

_LOGGER_NAME = "roundicon"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the roundicon hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(*, verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Configure the roundicon logger with a single console handler.

    ``quiet`` wins over ``verbose``: only errors are printed.
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI is invoked repeatedly.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("[roundicon] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)
    return logger


__all__ = ["configure_logging", "get_logger"]
