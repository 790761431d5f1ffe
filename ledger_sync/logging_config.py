"""Logging setup for the application."""

import logging

from ledger_sync.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> logging.Logger:
    """
    Attach a single stream handler to the package logger.

    Safe to call more than once: the handler is only added the
    first time, later calls just adjust the level.
    """
    logger = logging.getLogger("ledger_sync")
    logger.setLevel(level or get_settings().LOG_LEVEL)

    if not any(getattr(h, "_ledger_sync", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._ledger_sync = True
        logger.addHandler(handler)

    return logger
