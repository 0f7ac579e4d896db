"""File logging for todo-tui.

The terminal belongs to the TUI, so records only ever go to a rotating file
under platformdirs' ``user_log_dir``.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

LOGGER_NAME = "todo_tui"
LOG_FILE_NAME = "todo-tui.log"
LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"
MAX_BYTES = 5 * 1024 * 1024  # 5 MB
BACKUP_COUNT = 3

_logger: logging.Logger | None = None


def log_file_path() -> Path:
    """Where the application log is written."""
    return Path(user_log_dir(LOGGER_NAME)) / LOG_FILE_NAME


def _file_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def get_logger() -> logging.Logger:
    """Return the application logger, attaching the file handler on first use."""
    global _logger
    if _logger is None:
        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        if not logger.handlers:
            logger.addHandler(_file_handler(log_file_path()))
        _logger = logger
    return _logger


def set_level(level: str) -> None:
    """Apply a configured level name (e.g. "INFO")."""
    get_logger().setLevel(level.upper())
