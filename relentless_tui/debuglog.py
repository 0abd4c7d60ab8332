"""Debug logging to a file, never to the terminal being drawn."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

DEBUG_ENV = "RELENTLESS_TUI_DEBUG"
LOG_PATH_ENV = "RELENTLESS_TUI_LOG"
LOGGER_NAME = "relentless_tui"


def debug_enabled() -> bool:
    return os.environ.get(DEBUG_ENV, "").lower() in ("1", "true", "yes", "on")


def log_path() -> Path:
    configured = os.environ.get(LOG_PATH_ENV)
    if configured:
        return Path(configured)
    return Path(tempfile.gettempdir()) / "relentless-tui.log"


def configure_debug_logging() -> logging.Logger:
    """Attach a file handler to the package logger when debugging is enabled.

    When disabled the package logger gets a ``NullHandler`` and stops
    propagating, so nothing leaks onto the dashboard through the root logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.propagate = False

    if not debug_enabled():
        if not logger.handlers:
            logger.addHandler(logging.NullHandler())
        return logger

    if not any(isinstance(handler, logging.FileHandler) for handler in logger.handlers):
        handler = logging.FileHandler(log_path(), mode="a", encoding="utf-8")
        handler.setFormatter(logging.Formatter("[%(asctime)s] [%(name)s] %(levelname)s %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return logger
