"""Logging helpers for the gcloud MCP server.

stdout carries the JSON-RPC stream, so every handler writes to stderr or
to the optional log file. The ``gcloud_mcp.execution`` logger can be tuned
on its own (``GCLOUD_LOG_LEVEL``) to trace the gcloud command lines without
turning on DEBUG everywhere.
"""

from __future__ import annotations

import logging
import sys
import threading
from pathlib import Path

from gcloud_mcp.config import LoggingSettings, load_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"
EXECUTION_LOGGER = "gcloud_mcp.execution"

_logging_configured = False
_logging_lock = threading.Lock()

_logger = logging.getLogger(__name__)


def _level(name: str | None, default: int) -> int:
    if not name:
        return default
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else default


def _build_handlers(settings: LoggingSettings) -> tuple[list[logging.Handler], OSError | None]:
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    handlers: list[logging.Handler] = [stream_handler]

    if not settings.file:
        return handlers, None
    try:
        Path(settings.file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(settings.file)
    except OSError as exc:
        return handlers, exc
    file_handler.setFormatter(formatter)
    handlers.append(file_handler)
    return handlers, None


def configure_logging() -> None:
    """Configure root logging from settings, replacing earlier handlers."""
    global _logging_configured

    settings = load_settings().logging
    root_level = _level(settings.level, logging.INFO)
    handlers, file_error = _build_handlers(settings)

    logging.basicConfig(level=root_level, handlers=handlers, force=True)
    # Unset means the execution logger follows the root level.
    logging.getLogger(EXECUTION_LOGGER).setLevel(
        _level(settings.execution_level, logging.NOTSET)
    )
    if file_error is not None:
        _logger.warning("Failed to open log file %s: %s", settings.file, file_error)

    _logging_configured = True


def get_logger(name: str) -> logging.Logger:
    if not _logging_configured:
        with _logging_lock:
            if not _logging_configured:
                configure_logging()
    return logging.getLogger(name)
