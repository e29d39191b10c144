r"""Interceptor chain placed in front of the shared transport.

An interceptor is an ``httpx.BaseTransport`` that wraps the next
transport of the chain. It receives each outgoing request, may observe
or adjust it, and hands it on through ``proceed``. The shared client
uses the chain::

    LoggingInterceptor -> TimeoutInterceptor -> httpx.HTTPTransport

``TimeoutInterceptor`` is what lets a single pooled client honour a
different timeout configuration on every call: the ``TimeoutConfig`` of
a call travels in the request extensions and is turned into the
transport's ``timeout`` extension just before the network phase.
"""

from __future__ import annotations

__all__ = [
    "Interceptor",
    "LoggingInterceptor",
    "TimeoutInterceptor",
    "build_interceptor_chain",
]

import logging
import time
from typing import TYPE_CHECKING

import httpx

from fluenthttp.config import TIMEOUT_CONFIG_EXTENSION, TimeoutConfig
from fluenthttp.utils.log_level import TRACE
from fluenthttp.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

logger: logging.Logger = logging.getLogger(__name__)


class Interceptor(httpx.BaseTransport):
    """Base class of the chain stages.

    Args:
        transport: The next transport of the chain.
    """

    def __init__(self, transport: httpx.BaseTransport) -> None:
        self._transport = transport

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        return self.intercept(request, self._transport.handle_request)

    def intercept(
        self,
        request: httpx.Request,
        proceed: Callable[[httpx.Request], httpx.Response],
    ) -> httpx.Response:
        """Process one request.

        Args:
            request: The outgoing request.
            proceed: Sends the request to the rest of the chain and
                returns its response.

        Returns:
            The response handed back to the previous stage.
        """
        raise NotImplementedError

    def close(self) -> None:
        self._transport.close()


class LoggingInterceptor(Interceptor):
    """Log each request and response when ``DEBUG`` is enabled.

    Headers and bodies are logged in full. The request body is read into
    memory to be logged; the response body is collected while the caller
    reads it and logged once the response is closed, so the response
    leaves the chain unread. Below ``DEBUG`` the interceptor only
    forwards the request.
    """

    def intercept(
        self,
        request: httpx.Request,
        proceed: Callable[[httpx.Request], httpx.Response],
    ) -> httpx.Response:
        if not logger.isEnabledFor(logging.DEBUG):
            return proceed(request)

        method = request.method
        url = str(request.url)
        body = request.read()
        log_structured(
            logger,
            logging.DEBUG,
            f"--> {method} {url}\n{_format_headers(request.headers)}\n{_format_body(body)}",
            method=method,
            url=url,
        )

        start = time.perf_counter()
        response = proceed(request)

        def log_response(content: bytes) -> None:
            elapsed_ms = int((time.perf_counter() - start) * 1000)
            log_structured(
                logger,
                logging.DEBUG,
                f"<-- {response.status_code} {response.reason_phrase} {url} ({elapsed_ms}ms)\n"
                f"{_format_headers(response.headers)}\n{_format_body(content)}",
                method=method,
                url=url,
                status_code=response.status_code,
                elapsed_ms=elapsed_ms,
            )

        if response.is_closed:
            # Already read by the transport
            log_response(response.content)
        else:
            response.stream = _LoggedResponseStream(response.stream, log_response)
        return response


class _LoggedResponseStream(httpx.SyncByteStream):
    """Response stream collecting the body as it is read.

    ``on_complete`` receives the whole body when the stream is closed
    after being read to the end; a partially read body is not reported.
    """

    def __init__(
        self, stream: httpx.SyncByteStream, on_complete: Callable[[bytes], None]
    ) -> None:
        self._stream = stream
        self._on_complete = on_complete
        self._chunks: list[bytes] = []
        self._complete = False

    def __iter__(self) -> Iterator[bytes]:
        for chunk in self._stream:
            self._chunks.append(chunk)
            yield chunk
        self._complete = True

    def close(self) -> None:
        self._stream.close()
        if self._complete:
            self._on_complete(b"".join(self._chunks))


class TimeoutInterceptor(Interceptor):
    """Apply the ``TimeoutConfig`` carried by the request.

    Falls back to the 60-second defaults when the request carries no
    configuration.
    """

    def intercept(
        self,
        request: httpx.Request,
        proceed: Callable[[httpx.Request], httpx.Response],
    ) -> httpx.Response:
        config = request.extensions.get(TIMEOUT_CONFIG_EXTENSION) or TimeoutConfig()
        timeout = config.to_httpx()
        request.extensions = {**request.extensions, "timeout": timeout.as_dict()}
        if logger.isEnabledFor(TRACE):
            logger.log(TRACE, f"{request.method} {request.url} using {timeout}")
        return proceed(request)


def build_interceptor_chain(transport: httpx.BaseTransport) -> httpx.BaseTransport:
    """Wrap ``transport`` with the logging and timeout interceptors.

    Args:
        transport: The transport performing the network I/O.

    Returns:
        The outermost stage of the chain.

    Example:
        ```pycon
        >>> import httpx
        >>> from fluenthttp.interceptors import build_interceptor_chain
        >>> chain = build_interceptor_chain(httpx.MockTransport(lambda r: httpx.Response(204)))
        >>> type(chain).__name__
        'LoggingInterceptor'

        ```
    """
    return LoggingInterceptor(TimeoutInterceptor(transport))


def _format_headers(headers: httpx.Headers) -> str:
    return "\n".join(f"{name}: {value}" for name, value in headers.multi_items())


def _format_body(body: bytes) -> str:
    if not body:
        return "(empty body)"
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError:
        return f"({len(body)}-byte binary body omitted)"
