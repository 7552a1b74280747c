"""Application logger.

One ``taskflow`` logger writing to a rotating file. Level and location come
from ``LoggingConfig``; the file defaults to platformdirs' user_log_dir.
Nothing is written to stdout, which the MCP stdio transport owns.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path
from typing import TYPE_CHECKING

from platformdirs import user_log_dir

if TYPE_CHECKING:
    from taskflow.config import LoggingConfig

_APP_NAME = "taskflow"
_LOG_FILE = "taskflow.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3
_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

_logger: logging.Logger | None = None


def _resolve_level(name: str) -> int | None:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else None


def _file_handler(logger: logging.Logger) -> logging.handlers.RotatingFileHandler | None:
    # Other handlers (e.g. pytest's capture handlers) may be attached too
    for handler in logger.handlers:
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            return handler
    return None


def _attach_file_handler(logger: logging.Logger, log_dir: Path) -> None:
    log_file = log_dir / _LOG_FILE
    current = _file_handler(logger)
    if current is not None:
        if current.baseFilename == os.path.abspath(log_file):
            return
        logger.removeHandler(current)
        current.close()

    log_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    logger.addHandler(handler)


def configure_logging(settings: LoggingConfig) -> logging.Logger:
    """Apply logging settings to the application logger.

    Args:
        settings: Level and optional log directory

    Returns:
        The configured ``taskflow`` logger
    """
    global _logger
    logger = logging.getLogger(_APP_NAME)
    logger.propagate = False

    log_dir = Path(settings.directory) if settings.directory else Path(user_log_dir(_APP_NAME))
    _attach_file_handler(logger, log_dir)

    level = _resolve_level(settings.level)
    logger.setLevel(level if level is not None else logging.INFO)
    if level is None:
        logger.warning("ignoring unknown log level %r, using INFO", settings.level)

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """Return the application logger, configuring it from settings on first call."""
    if _logger is not None:
        return _logger

    from taskflow.config import get_config_manager

    return configure_logging(get_config_manager().effective_config().logging)
