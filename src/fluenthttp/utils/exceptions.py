r"""Translate transport exceptions into the package error taxonomy.

``httpx`` reports network failures with its own exception hierarchy.
These helpers map them onto ``HttpTimeoutError`` and
``HttpTransportError`` while keeping the original exception as the
cause, and log the failure once.
"""

from __future__ import annotations

__all__ = ["classify_request_error", "handle_missing_body_async"]

import logging

import httpx

from fluenthttp.exceptions import (
    HttpRequestError,
    HttpTimeoutError,
    HttpTransportError,
    ResponseBodyMissingError,
)

logger: logging.Logger = logging.getLogger(__name__)


def classify_request_error(exc: httpx.RequestError, method: str, url: str) -> HttpRequestError:
    """Map an ``httpx.RequestError`` to the matching package error.

    Args:
        exc: The exception raised by the transport.
        method: The HTTP method of the failed request.
        url: The URL of the failed request.

    Returns:
        An ``HttpTimeoutError`` for any expired timeout, otherwise an
        ``HttpTransportError``. The caller is expected to raise it
        chained to ``exc``.

    Example:
        ```pycon
        >>> import httpx
        >>> from fluenthttp.utils.exceptions import classify_request_error
        >>> error = classify_request_error(
        ...     httpx.ReadTimeout("timed out"), method="GET", url="https://api.example.com"
        ... )
        >>> type(error).__name__
        'HttpTimeoutError'

        ```
    """
    error_type = type(exc).__name__
    if isinstance(exc, httpx.TimeoutException):
        logger.error(f"{method} request to {url} timed out ({error_type}): {exc}")
        return HttpTimeoutError(
            method=method,
            url=url,
            message=f"{method} request to {url} timed out ({error_type})",
            cause=exc,
        )
    logger.error(f"{method} request to {url} failed with {error_type}: {exc}")
    return HttpTransportError(
        method=method,
        url=url,
        message=f"{method} request to {url} failed: {exc}",
        cause=exc,
    )


def handle_missing_body_async(exc: ResponseBodyMissingError) -> HttpTransportError:
    """Convert a missing-body failure into an I/O error for futures.

    Future-based calls report every fault that happens after dispatch as
    a transport error; the protocol error is kept as the cause.

    Args:
        exc: The protocol-state failure raised while buffering.

    Returns:
        The ``HttpTransportError`` to resolve the future with.
    """
    return HttpTransportError(
        method=exc.method,
        url=exc.url,
        message=str(exc),
        status_code=exc.status_code,
        cause=exc,
    )
