"""
Package logging for uvdrafts.

All module loggers hang off the ``uvdrafts`` logger. One stream handler is
attached there the first time a logger is requested, unless the host has
already configured the root logger, in which case records just propagate.
Level comes from ``UVDRAFTS_LOG_LEVEL`` (default INFO).
"""

from __future__ import annotations

import logging
import os
from typing import Final

PACKAGE_LOGGER: Final[str] = "uvdrafts"

_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

_handler: logging.Handler | None = None


def _resolve_level(level: int | str | None = None) -> int:
    if isinstance(level, int):
        return level
    level_name = (level or os.getenv("UVDRAFTS_LOG_LEVEL", "INFO")).upper()
    return getattr(logging, level_name, logging.INFO)


def _package_logger() -> logging.Logger:
    global _handler

    package = logging.getLogger(PACKAGE_LOGGER)
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
        package.setLevel(_resolve_level())
        if not logging.getLogger().handlers:
            package.addHandler(_handler)
    return package


def set_log_level(level: int | str | None = None) -> None:
    """Change the package level; None re-reads ``UVDRAFTS_LOG_LEVEL``."""
    _package_logger().setLevel(_resolve_level(level))


def get_logger(name: str) -> logging.Logger:
    """
    Module logger under the ``uvdrafts`` hierarchy.

    Names outside the package (e.g. ``__main__``) are nested under it so they
    share the handler and level.
    """
    _package_logger()
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
