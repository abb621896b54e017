"""Centralized logging for spellnet.

All package modules obtain loggers through :func:`get_logger` so that a single
handler on the ``spellnet`` root logger controls formatting and level. The
initial level may be set with the ``SPELLNET_LOG_LEVEL`` environment variable
(``DEBUG``, ``INFO``, ``WARNING`` ...); it defaults to ``INFO``.
"""

from __future__ import annotations

import logging
import os
import sys
from contextlib import contextmanager
from time import perf_counter
from typing import Iterator, Optional

ROOT_LOGGER_NAME = "spellnet"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LEVEL_ENV_VAR = "SPELLNET_LOG_LEVEL"

_configured = False


def _level_from_env(default: int = logging.INFO) -> int:
    """Resolve the starting log level from ``SPELLNET_LOG_LEVEL``.

    Unknown names fall back to ``default``.
    """
    raw = os.environ.get(LEVEL_ENV_VAR, "").strip().upper()
    if not raw:
        return default
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else default


def setup_root_logger(
    level: Optional[int] = None,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Attach one handler to the ``spellnet`` logger.

    Calling this more than once is a no-op until :func:`reset_logging` runs.

    Args:
        level: Logging level. Defaults to the environment level or INFO.
        format_string: Record format. Defaults to ``DEFAULT_FORMAT``.
        handler: Destination handler. Defaults to a stdout stream handler.
    """
    global _configured

    if _configured:
        return

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(_level_from_env() if level is None else level)
    root.handlers.clear()

    handler = handler or logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    root.addHandler(handler)

    # Propagate so pytest's caplog sees records.
    root.propagate = True

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a child logger of ``spellnet``.

    Args:
        name: Logger name, normally ``__name__`` of the calling module.

    Returns:
        Logger that inherits level and handler from the package root.
    """
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Set the level of the package root logger and its handlers."""
    setup_root_logger()
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)
    for handler in root.handlers:
        handler.setLevel(level)


def enable_debug_logging() -> None:
    """Switch the package to DEBUG."""
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    """Switch the package back to INFO."""
    set_global_log_level(logging.INFO)


def reset_logging() -> None:
    """Drop handlers and forget configuration (used by tests)."""
    global _configured
    _configured = False

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.handlers.clear()
    root.setLevel(logging.NOTSET)


@contextmanager
def log_duration(logger: logging.Logger, label: str) -> Iterator[None]:
    """Log the wall-clock duration of a block at DEBUG level.

    Args:
        logger: Logger to write to.
        label: Short description of the timed block.
    """
    start = perf_counter()
    try:
        yield
    finally:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s took %.3f ms", label, (perf_counter() - start) * 1000.0)


setup_root_logger()
