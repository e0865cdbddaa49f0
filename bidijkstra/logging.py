"""Package-wide logging for bidijkstra.

Every module obtains its logger through `get_logger(__name__)`. Those loggers
stay at NOTSET and defer to the "bidijkstra" logger, which owns the only
handler. The CLI adjusts verbosity through `set_global_log_level`.
"""

import logging
import sys
from typing import Optional, Union

ROOT_LOGGER_NAME = "bidijkstra"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Handler installed by setup_root_logger(), None until then
_installed_handler: Optional[logging.Handler] = None


def _package_logger() -> logging.Logger:
    return logging.getLogger(ROOT_LOGGER_NAME)


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Install the package handler on the "bidijkstra" logger.

    Only the first call has an effect; later calls return immediately until
    `reset_logging()` removes the handler again.

    Args:
        level: Level for the package logger.
        format_string: Record format, DEFAULT_FORMAT when omitted.
        handler: Destination handler, a stdout StreamHandler when omitted.
    """
    global _installed_handler

    if _installed_handler is not None:
        return

    new_handler = handler if handler is not None else logging.StreamHandler(sys.stdout)
    new_handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))

    package_logger = _package_logger()
    package_logger.handlers.clear()
    package_logger.addHandler(new_handler)
    package_logger.setLevel(level)
    # caplog attaches to the Python root logger
    package_logger.propagate = True

    _installed_handler = new_handler


def get_logger(name: str) -> logging.Logger:
    """Return the logger `name`, deferring its level to the package logger."""
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: Union[int, str]) -> None:
    """Change the level of the package logger and its handler.

    Args:
        level: A numeric level such as logging.DEBUG, or a level name such as
            "debug" (case-insensitive).

    Raises:
        ValueError: If `level` is a string that names no logging level.
    """
    if isinstance(level, str):
        numeric = logging.getLevelName(level.strip().upper())
        if not isinstance(numeric, int):
            raise ValueError(f"Unknown log level: {level!r}")
        level = numeric

    setup_root_logger()
    package_logger = _package_logger()
    package_logger.setLevel(level)
    for handler in package_logger.handlers:
        handler.setLevel(level)


def enable_debug_logging() -> None:
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    set_global_log_level(logging.INFO)


def reset_logging() -> None:
    """Drop the package handler and level, mainly between tests."""
    global _installed_handler
    _installed_handler = None

    package_logger = _package_logger()
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)


setup_root_logger()
