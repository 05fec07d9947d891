"""
Inventory Agent - Logging
==========================
Pre-configured logger factory for consistent log output across the
seeder, the provisioner and the chat server.

Verbosity comes from ``settings.LOG_LEVEL`` when it is set, otherwise
from ``settings.ENV``:
  • ``"dev"``  → DEBUG level  (maximum detail)
  • ``"prod"`` → WARNING level (errors & warnings only)

Secrets never reach a log line: callers log the Mongo host and a masked
API key at most.

Usage:
    from inventory_agent.src.utils.logger import get_logger
    logger = get_logger(__name__)
    logger.info("Something happened")
"""

import logging
import sys

from inventory_agent.config.settings import settings

_ENV_LEVEL_MAP = {
    "dev": logging.DEBUG,
    "prod": logging.WARNING,
}

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(env: str, log_level: str | None = None) -> int:
    """Numeric level for *log_level* if given, else the default for *env* (INFO when unknown)."""
    if log_level:
        return logging.getLevelName(log_level.upper())
    return _ENV_LEVEL_MAP.get(env, logging.INFO)


_DEFAULT_LEVEL = resolve_level(settings.ENV, settings.LOG_LEVEL)


def get_logger(name: str, level: int | None = None) -> logging.Logger:
    """
    Create and return a named logger writing to stdout.

    Args:
        name:  Typically ``__name__`` of the calling module.
        level: Explicit logging level override.
               If *None*, the level comes from settings (see module docstring).
    """
    resolved_level = level if level is not None else _DEFAULT_LEVEL
    logger = logging.getLogger(name)

    # Handlers are attached once per name; repeat calls return the same logger
    if not logger.handlers:
        logger.setLevel(resolved_level)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(resolved_level)
        console_handler.setFormatter(logging.Formatter(fmt=_LOG_FORMAT, datefmt=_DATE_FORMAT))
        logger.addHandler(console_handler)

        logger.propagate = False

    return logger
