"""Logging setup for the ``sol`` command line tool.

Modules only ever ask for a logger through `get_logger`. Handlers are
installed by `sol.cli.main`; code embedding the version manager is free to
configure the root logger on its own terms.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "SOL_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_LEVEL_MAP = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "NOTSET": logging.NOTSET,
}


def _resolve_level(level: str | int | None) -> int:
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        # Unknown names fall back to INFO instead of failing the command.
        return _LEVEL_MAP.get(level.strip().upper(), logging.INFO)
    return level


def configure_logging(level: str | int | None = None, *, force: bool = False) -> None:
    """Install the stderr handler used by the ``sol`` CLI.

    ``level`` wins when given; otherwise ``SOL_LOG_LEVEL`` is read, and
    anything missing or unrecognised means ``INFO``. ``force`` replaces
    handlers left over from an earlier call, which ``-v`` relies on.
    """
    logging.basicConfig(
        level=_resolve_level(level),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        force=force,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return ``name``'s logger, or the package logger ``sol``."""
    return logging.getLogger(name or "sol")


__all__ = ["configure_logging", "get_logger"]
