"""Daemon logger writing to a rotating file in the user log directory.

stdout is the status bar's, so nothing is ever logged there.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

from .settings import APP_NAME, LOG_FILE

_MAX_BYTES = 1024 * 1024  # 1 MB
_BACKUP_COUNT = 3

_logger: logging.Logger | None = None


def get_logger() -> logging.Logger:
    """Return the ``pomod`` logger, attaching the file handler on first call.

    Modules log through ``logging.getLogger(__name__)``; those loggers are
    children of this one and end up in the same file.
    """
    global _logger
    if _logger is not None:
        return _logger

    logger = logging.getLogger(APP_NAME)
    logger.setLevel(logging.INFO)
    # Other handlers (test capture, a debugger) may already be attached
    if not any(
        isinstance(h, logging.handlers.RotatingFileHandler)
        for h in logger.handlers
    ):
        logger.addHandler(_file_handler())
    logger.propagate = False

    _logger = logger
    return _logger


def _file_handler() -> logging.Handler:
    log_dir = Path(user_log_dir(APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_dir / LOG_FILE,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    return handler
