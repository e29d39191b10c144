r"""fluenthttp - Fluent HTTP requests over one shared, pooled client.

This package builds HTTP calls with a chainable builder and sends them
through a single process-wide ``httpx`` client. Every call can carry its
own connect/read/write timeouts without creating a new client, and every
response is returned fully buffered, with the connection already back in
the pool.

Key Features:
    - Builders for GET, POST, PUT, DELETE and multipart uploads
    - Headers and query parameters accumulated across calls
    - Form-encoded, raw JSON and multipart bodies
    - Per-call timeouts applied by an interceptor on the shared client
    - Blocking (``execute``), future-based (``execute_async``) and
      asyncio (``aexecute``) execution
    - Request/response logging toggled with ``set_log_level``

Example:
    ```pycon
    >>> import fluenthttp
    >>> response = (
    ...     fluenthttp.get("https://api.example.com/data")
    ...     .param("type", "test")
    ...     .header({"Authorization": "Bearer token"})
    ...     .read_timeout_seconds(5)
    ...     .execute()
    ... )  # doctest: +SKIP
    >>> future = fluenthttp.put("https://api.example.com/item").body('{"name":"John"}').execute_async()  # doctest: +SKIP
    >>> future.result().status_code  # doctest: +SKIP
    200

    ```
"""

from __future__ import annotations

__all__ = [
    "HttpMethod",
    "HttpRequestError",
    "HttpTimeoutError",
    "HttpTransportError",
    "RequestBuilder",
    "ResponseBodyMissingError",
    "TimeoutConfig",
    "UploadFile",
    "__version__",
    "delete",
    "get",
    "post",
    "put",
    "set_log_level",
    "upload_file",
]

from importlib.metadata import PackageNotFoundError, version

from fluenthttp.api import delete, get, post, put, upload_file
from fluenthttp.builder import HttpMethod, RequestBuilder
from fluenthttp.config import TimeoutConfig
from fluenthttp.exceptions import (
    HttpRequestError,
    HttpTimeoutError,
    HttpTransportError,
    ResponseBodyMissingError,
)
from fluenthttp.upload import UploadFile
from fluenthttp.utils.log_level import set_log_level

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
