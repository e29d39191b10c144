r"""Define the exceptions raised when an HTTP call cannot complete.

Invalid arguments (empty URL, unknown log level, unsupported method,
negative timeout) are reported with the built-in ``ValueError`` at the
point where they are passed. The classes below cover failures that
happen once a request has been dispatched.
"""

from __future__ import annotations

__all__ = [
    "HttpRequestError",
    "HttpTimeoutError",
    "HttpTransportError",
    "ResponseBodyMissingError",
]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


class HttpRequestError(RuntimeError):
    r"""Base class for errors raised while executing an HTTP request.

    Args:
        method: The HTTP method of the failed request.
        url: The URL of the failed request.
        message: A human-readable description of the failure.
        status_code: The HTTP status code, if a response was received.
        response: The response object, if one was received.
        cause: The lower-level exception that triggered this error.

    Example:
        ```pycon
        >>> from fluenthttp.exceptions import HttpRequestError
        >>> error = HttpRequestError(
        ...     method="GET", url="https://api.example.com", message="boom"
        ... )
        >>> error.method
        'GET'
        >>> str(error)
        'boom'

        ```
    """

    def __init__(
        self,
        method: str,
        url: str,
        message: str,
        status_code: int | None = None,
        response: httpx.Response | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.status_code = status_code
        self.response = response
        self.cause = cause


class HttpTransportError(HttpRequestError):
    r"""Raised when the network phase of a request fails.

    Covers refused connections, name resolution failures and any other
    I/O fault reported by the transport.
    """


class HttpTimeoutError(HttpTransportError):
    r"""Raised when the connect, read, write or pool timeout of a request
    expires."""


class ResponseBodyMissingError(HttpRequestError):
    r"""Raised when a response arrives without a body stream."""
