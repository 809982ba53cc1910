"""Logging setup for processes embedding inilayer.

inilayer modules log through ``logging.getLogger(__name__)``; nothing is
emitted unless the host process configures handlers. ``configure_logging``
is a convenience that routes the ``inilayer`` logger to a file.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from inilayer.core.settings import Settings
from inilayer.core.utils.io import ensure_parent_dir

PACKAGE_LOGGER = "inilayer"

_CONFIGURED_LOG_PATH: Optional[str] = None
_FILE_HANDLER: Optional[logging.Handler] = None


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(settings: Settings) -> logging.Logger:
    """Apply ``settings.log_level`` and, if ``settings.log_file`` is set,
    install a file handler on the package logger.

    Idempotent per-process: if already configured for the same file, only
    the level is updated.
    """
    global _CONFIGURED_LOG_PATH, _FILE_HANDLER

    logger = logging.getLogger(PACKAGE_LOGGER)
    level = _level_from_name(settings.log_level)
    logger.setLevel(level)

    if settings.log_file is None:
        return logger

    resolved = str(Path(settings.log_file).resolve())
    if _CONFIGURED_LOG_PATH == resolved and _FILE_HANDLER is not None:
        _FILE_HANDLER.setLevel(level)
        return logger

    # Replace the handler installed for a previous path.
    if _FILE_HANDLER is not None:
        logger.removeHandler(_FILE_HANDLER)
        _FILE_HANDLER.close()
        _FILE_HANDLER = None

    ensure_parent_dir(resolved)
    fh = logging.FileHandler(resolved, encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(fh)

    _FILE_HANDLER = fh
    _CONFIGURED_LOG_PATH = resolved
    return logger


def reset_logging_for_tests() -> None:
    """Test-only: remove the handler installed by ``configure_logging``."""
    global _CONFIGURED_LOG_PATH, _FILE_HANDLER
    logger = logging.getLogger(PACKAGE_LOGGER)
    if _FILE_HANDLER is not None:
        logger.removeHandler(_FILE_HANDLER)
        _FILE_HANDLER.close()
    logger.setLevel(logging.NOTSET)
    _CONFIGURED_LOG_PATH = None
    _FILE_HANDLER = None


__all__ = ["PACKAGE_LOGGER", "configure_logging", "reset_logging_for_tests"]
