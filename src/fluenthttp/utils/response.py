r"""Response buffering.

Responses are always handed to callers fully read into memory, so the
underlying connection can go back to the pool before the caller touches
the body.
"""

from __future__ import annotations

__all__ = ["buffer_response"]

import logging

import httpx

from fluenthttp.exceptions import ResponseBodyMissingError

logger: logging.Logger = logging.getLogger(__name__)


def buffer_response(response: httpx.Response, method: str, url: str) -> httpx.Response:
    """Read the whole response body and swap in an in-memory stream.

    The caller stays responsible for closing ``response``; once this
    function returns, closing it only releases the connection and the
    body remains readable.

    Args:
        response: The streaming response returned by the transport.
        method: The HTTP method of the request, used in error messages.
        url: The URL of the request, used in error messages.

    Returns:
        The same response object, now backed by an ``httpx.ByteStream``.

    Raises:
        ResponseBodyMissingError: If the response has no body stream.
        httpx.RequestError: If reading the body fails (e.g. read timeout).

    Example:
        ```pycon
        >>> import httpx
        >>> from fluenthttp.utils.response import buffer_response
        >>> response = httpx.Response(200, content=b"Hello World")
        >>> buffer_response(response, method="GET", url="https://api.example.com").text
        'Hello World'

        ```
    """
    # Only a transport that hands back a response without a stream gets here
    if getattr(response, "stream", None) is None:
        logger.error(f"{method} request to {url} returned a response without body")
        raise ResponseBodyMissingError(
            method=method,
            url=url,
            message=f"{method} request to {url} returned a response without body",
            status_code=response.status_code,
        )
    content = response.read()
    response.stream = httpx.ByteStream(content)
    return response
