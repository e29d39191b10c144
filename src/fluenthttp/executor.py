r"""Blocking and future-based execution of an assembled request.

Both paths make a single attempt, read the whole body into memory and
close the response before returning or raising, so the connection goes
back to the pool whether or not the caller ever reads the body.
"""

from __future__ import annotations

__all__ = ["execute_request", "execute_request_async"]

import logging

import httpx

from fluenthttp.exceptions import ResponseBodyMissingError
from fluenthttp.utils import buffer_response, classify_request_error, handle_missing_body_async

logger: logging.Logger = logging.getLogger(__name__)


def execute_request(client: httpx.Client, request: httpx.Request) -> httpx.Response:
    """Send ``request`` through ``client`` and return the buffered response.

    Args:
        client: The client used to send the request.
        request: The fully assembled request.

    Returns:
        The response, with its body already read into memory.

    Raises:
        HttpTimeoutError: If the connect, read, write or pool timeout expires,
            including while the body is being read.
        HttpTransportError: If the network phase fails for any other reason.
        ResponseBodyMissingError: If the response has no body stream.
    """
    method = request.method
    url = str(request.url)
    logger.debug(f"Sending {method} request to {url}")
    try:
        response = client.send(request, stream=True)
        try:
            buffer_response(response, method=method, url=url)
        finally:
            response.close()
    except httpx.RequestError as exc:
        raise classify_request_error(exc, method=method, url=url) from exc
    logger.debug(f"{method} request to {url} completed with status {response.status_code}")
    return response


def execute_request_async(client: httpx.Client, request: httpx.Request) -> httpx.Response:
    """Worker-side variant of ``execute_request`` used by future-based calls.

    Runs on a thread of the shared worker pool; its return value or
    exception resolves the future returned to the caller. A response
    without a body is reported as an ``HttpTransportError`` whose cause
    is the ``ResponseBodyMissingError``.

    Args:
        client: The client used to send the request.
        request: The fully assembled request.

    Returns:
        The response, with its body already read into memory.

    Raises:
        HttpTimeoutError: If a timeout expires.
        HttpTransportError: If the network phase fails or the response
            has no body.
    """
    try:
        return execute_request(client, request)
    except ResponseBodyMissingError as exc:
        raise handle_missing_body_async(exc) from exc
