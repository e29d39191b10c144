r"""Process-wide verbosity of the ``fluenthttp`` loggers."""

from __future__ import annotations

__all__ = ["LOG_LEVELS", "OFF", "TRACE", "set_log_level"]

import logging

PACKAGE_LOGGER = "fluenthttp"

TRACE = 5
OFF = logging.CRITICAL + 10

logging.addLevelName(TRACE, "TRACE")

LOG_LEVELS = {
    "TRACE": TRACE,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "OFF": OFF,
}


def set_log_level(level: str) -> None:
    """Set the verbosity of every ``fluenthttp`` logger.

    At ``debug`` (or ``trace``) the logging interceptor records the
    request and response of every call. No handler is installed; output
    goes wherever the application routes the ``fluenthttp`` logger.

    Args:
        level: One of ``trace``, ``debug``, ``info``, ``warn``, ``error``
            or ``off``, case-insensitive.

    Raises:
        ValueError: If the level is not recognized.

    Example:
        ```pycon
        >>> import logging
        >>> from fluenthttp import set_log_level
        >>> set_log_level("Debug")
        >>> logging.getLogger("fluenthttp").level == logging.DEBUG
        True
        >>> set_log_level("off")

        ```
    """
    if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
        msg = f"Unsupported log level: {level}"
        raise ValueError(msg)
    logging.getLogger(PACKAGE_LOGGER).setLevel(LOG_LEVELS[level.upper()])
