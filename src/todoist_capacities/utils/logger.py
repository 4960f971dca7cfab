"""Application-wide logger: stderr plus a rotating file in user_log_dir.

Serverless hosts usually have a read-only filesystem; there the file
handler is skipped and only stderr (which the host collects) is used.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "todoist_capacities"
_LOG_FILE = "relay.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3
_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"
_HANDLER_PREFIX = f"{_APP_NAME}."

_logger: logging.Logger | None = None


def _file_handler() -> logging.Handler | None:
    try:
        log_dir = Path(user_log_dir(_APP_NAME))
        log_dir.mkdir(parents=True, exist_ok=True)
        return logging.handlers.RotatingFileHandler(
            log_dir / _LOG_FILE,
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError:
        return None


def _owned_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [h for h in logger.handlers if (h.get_name() or "").startswith(_HANDLER_PREFIX)]


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the application logger (or a child of it), set up on first call.

    Handlers attached by someone else (a host runtime, pytest's capture)
    do not stop ours from being installed.
    """
    global _logger
    if _logger is None:
        formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT)
        logger = logging.getLogger(_APP_NAME)
        logger.setLevel(logging.INFO)
        if not _owned_handlers(logger):
            stream_handler = logging.StreamHandler(sys.stderr)
            stream_handler.set_name(f"{_HANDLER_PREFIX}stderr")
            handlers: list[logging.Handler] = [stream_handler]
            file_handler = _file_handler()
            if file_handler is not None:
                file_handler.set_name(f"{_HANDLER_PREFIX}file")
                handlers.append(file_handler)
            for handler in handlers:
                handler.setFormatter(formatter)
                logger.addHandler(handler)
        logger.propagate = False
        _logger = logger

    if name:
        return _logger.getChild(name)
    return _logger


def configure_level(level: str | int) -> None:
    """Set the application log level, e.g. from ``LOG_LEVEL``."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    get_logger().setLevel(level)
