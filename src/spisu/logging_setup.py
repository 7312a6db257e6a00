"""Centralized logging configuration for the ``spisu`` package.

- ``configure_logging(...)`` attaches a single ``RichHandler`` to the package
  root logger (``"spisu"``). Entrypoints such as the CLI call it once.
- ``get_logger(name)`` returns a module logger and makes sure the package root
  logger has a ``NullHandler`` while nothing has been configured.

Library modules never attach handlers themselves.
"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

_PKG_LOGGER_NAME = "spisu"
_ENV_LEVEL = "SPISU_LOG_LEVEL"
_CONFIGURED = False


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
        return logging.WARNING
    env_val = os.getenv(_ENV_LEVEL)
    if env_val:
        return _parse_level(env_val)
    return logging.WARNING


def configure_logging(level: int | str | None = None, *, console: Console | None = None) -> None:
    """Configure the package root logger exactly once.

    ``level`` accepts an ``int`` or a level name. When ``None`` the
    ``SPISU_LOG_LEVEL`` environment variable is used, falling back to WARNING.
    Records go to stderr unless a rich ``console`` is supplied.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    resolved = _parse_level(level)
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter("%(name)s %(message)s"))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger by name with a silent default until configured."""
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
