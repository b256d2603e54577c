"""Logging configuration for x-ui."""

from __future__ import annotations

import logging

from xui.config import LogLevel

LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# The stdlib has no NOTICE level; it is reported as INFO
_LEVELS: dict[str, int] = {
    LogLevel.DEBUG.value: logging.DEBUG,
    LogLevel.INFO.value: logging.INFO,
    LogLevel.NOTICE.value: logging.INFO,
    LogLevel.WARNING.value: logging.WARNING,
    LogLevel.ERROR.value: logging.ERROR,
}


def to_logging_level(level: LogLevel | str) -> int | None:
    """Map an x-ui log level to a stdlib logging level.

    Returns:
        The stdlib level, or None if the level is not recognised.
    """
    key = level.value if isinstance(level, LogLevel) else str(level).lower()
    return _LEVELS.get(key)


def setup_logging(level: LogLevel | str) -> int:
    """Configure the root logger for the given x-ui level.

    Unknown levels fall back to INFO.

    Args:
        level: Level as reported by ``config.get_log_level()``.

    Returns:
        The stdlib level that was applied.
    """
    resolved = to_logging_level(level)
    logging.basicConfig(level=resolved or logging.INFO, format=LOG_FORMAT, force=True)
    if resolved is None:
        logging.getLogger(__name__).warning("Unknown log level %r, using info", level)
        return logging.INFO
    return resolved
