r"""Structured (JSON) rendering of the request/response log records.

The logging interceptor attaches the fields of each exchange (method,
URL, status code, elapsed time) to its log records. Applications that
ship logs to an aggregator can render them as JSON with
``StructuredFormatter`` and tag every call made while handling one
incoming request with a correlation ID.

Example:
    ```python
    import logging

    import fluenthttp
    from fluenthttp.utils.structured_logging import (
        StructuredFormatter,
        clear_correlation_id,
        set_correlation_id,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    logging.getLogger("fluenthttp").addHandler(handler)
    fluenthttp.set_log_level("debug")

    set_correlation_id("request-123")
    try:
        fluenthttp.get("https://api.example.com/data").execute()
    finally:
        clear_correlation_id()
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "get_correlation_id",
    "log_structured",
    "set_correlation_id",
]

import contextvars
import json
import logging
import time
from typing import Any

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "fluenthttp_correlation_id", default=None
)

# Attributes every LogRecord carries; anything else came from ``extra``
_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
}


def get_correlation_id() -> str | None:
    """Return the correlation ID of the current context, if any."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID for the current context.

    The value is stored in a context variable, so each thread and each
    asyncio task sees its own.

    Args:
        correlation_id: The correlation ID (e.g. an inbound request ID).
    """
    _correlation_id.set(correlation_id)


def clear_correlation_id() -> None:
    """Clear the correlation ID for the current context."""
    _correlation_id.set(None)


class StructuredFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    Standard fields: ``timestamp`` (ISO 8601, UTC), ``level``,
    ``logger``, ``message``, ``module``, ``function``, ``line``,
    ``thread``. The correlation ID, exception text and any ``extra``
    fields are added when present.

    Example:
        ```pycon
        >>> import json
        >>> import logging
        >>> from fluenthttp.utils.structured_logging import StructuredFormatter
        >>> record = logging.LogRecord("fluenthttp", logging.INFO, "", 1, "sent", None, None)
        >>> record.status_code = 200
        >>> data = json.loads(StructuredFormatter().format(record))
        >>> data["message"], data["status_code"]
        ('sent', 200)

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "thread": record.threadName,
        }

        correlation_id = get_correlation_id()
        if correlation_id is not None:
            log_data["correlation_id"] = correlation_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=str)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(
    logger: logging.Logger,
    level: int,
    message: str,
    **extra: Any,
) -> None:
    """Log ``message`` with ``extra`` attached as structured fields.

    Args:
        logger: Logger to use.
        level: Log level (e.g. ``logging.DEBUG``).
        message: Log message.
        **extra: Fields rendered by ``StructuredFormatter``.
    """
    logger.log(level, message, extra=extra)
