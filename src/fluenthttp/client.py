r"""Process-wide shared HTTP client.

One ``SharedClient`` serves every call made through the request
builders. It owns the connection pool (an ``httpx.Client`` whose
transport is the interceptor chain) and the worker pool that runs
future-based calls. It is built lazily on first use, exactly once, and
is immutable afterwards, so any number of threads can use it
concurrently without locking.
"""

from __future__ import annotations

__all__ = ["SharedClient", "ensure_initialized"]

import atexit
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING

import httpx

from fluenthttp.config import (
    DEFAULT_MAX_CONNECTIONS,
    DEFAULT_MAX_KEEPALIVE_CONNECTIONS,
    DEFAULT_MAX_WORKERS,
    FOLLOW_REDIRECTS,
)
from fluenthttp.executor import execute_request, execute_request_async
from fluenthttp.interceptors import build_interceptor_chain

if TYPE_CHECKING:
    from types import TracebackType
    from typing import Self

logger: logging.Logger = logging.getLogger(__name__)

_instance: SharedClient | None = None
_instance_lock = threading.Lock()


class SharedClient:
    r"""Connection-pooled client wrapping the interceptor chain.

    Args:
        transport: The transport performing the network I/O. Defaults to
            an ``httpx.HTTPTransport`` with the default pool limits.
        max_workers: Number of worker threads for ``submit``.

    Example:
        ```pycon
        >>> import httpx
        >>> from fluenthttp.client import SharedClient
        >>> transport = httpx.MockTransport(lambda request: httpx.Response(200, text="ok"))
        >>> with SharedClient(transport=transport) as client:
        ...     response = client.send(httpx.Request("GET", "https://api.example.com"))
        ...
        >>> response.text
        'ok'

        ```
    """

    def __init__(
        self,
        *,
        transport: httpx.BaseTransport | None = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        transport = transport or httpx.HTTPTransport(
            limits=httpx.Limits(
                max_connections=DEFAULT_MAX_CONNECTIONS,
                max_keepalive_connections=DEFAULT_MAX_KEEPALIVE_CONNECTIONS,
            )
        )
        self._client = httpx.Client(
            transport=build_interceptor_chain(transport),
            follow_redirects=FOLLOW_REDIRECTS,
        )
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="fluenthttp"
        )

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    def send(self, request: httpx.Request) -> httpx.Response:
        """Send ``request`` and block until its body is buffered.

        Args:
            request: The fully assembled request.

        Returns:
            The buffered response.

        Raises:
            HttpTimeoutError: If a timeout expires.
            HttpTransportError: If the network phase fails.
            ResponseBodyMissingError: If the response has no body.
        """
        return execute_request(self._client, request)

    def submit(self, request: httpx.Request) -> Future[httpx.Response]:
        """Send ``request`` on a worker thread.

        Args:
            request: The fully assembled request.

        Returns:
            A future resolved with the buffered response, or failed with
            ``HttpTimeoutError`` or ``HttpTransportError``.
        """
        return self._executor.submit(execute_request_async, self._client, request)

    def close(self) -> None:
        """Stop accepting calls and release pooled connections."""
        self._executor.shutdown(wait=True)
        self._client.close()


def ensure_initialized() -> SharedClient:
    r"""Return the process-wide ``SharedClient``, building it on first
    use.

    Once built, the instance is returned without locking. Construction
    happens under a lock, so concurrent first callers all receive the
    same, fully constructed instance. If construction fails, the
    exception propagates to the caller and the next call tries again;
    once built, the instance is never replaced.

    Returns:
        The shared client.

    Example:
        ```pycon
        >>> from fluenthttp.client import ensure_initialized
        >>> ensure_initialized() is ensure_initialized()
        True

        ```
    """
    global _instance  # noqa: PLW0603
    if _instance is not None:
        return _instance
    with _instance_lock:
        if _instance is None:
            logger.debug("Initializing shared HTTP client")
            client = SharedClient()
            atexit.register(client.close)
            _instance = client
            logger.debug("Shared HTTP client initialized")
        return _instance
