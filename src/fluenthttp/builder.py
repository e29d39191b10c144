r"""Fluent builder accumulating the state of one HTTP call.

A ``RequestBuilder`` is created bound to a method and a URL, collects
headers, query parameters, a body and timeout overrides through chained
calls, and turns them into an ``httpx.Request`` only when ``execute``,
``execute_async`` or ``aexecute`` is called. A builder belongs to the
call site that created it and must not be shared between threads.
"""

from __future__ import annotations

__all__ = ["HttpMethod", "RequestBuilder"]

import asyncio
import enum
import logging
from typing import TYPE_CHECKING, Any

import httpx
from urllib3 import encode_multipart_formdata

from fluenthttp.client import ensure_initialized
from fluenthttp.config import TIMEOUT_CONFIG_EXTENSION, TimeoutConfig
from fluenthttp.utils.validation import validate_timeout_seconds, validate_url

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from concurrent.futures import Future

    from fluenthttp.upload import UploadFile

logger: logging.Logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


class HttpMethod(str, enum.Enum):
    r"""HTTP methods a ``RequestBuilder`` can send."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class RequestBuilder:
    r"""Accumulate the method, URL, headers, query parameters, body and
    timeouts of one HTTP call.

    Args:
        url: The request URL, possibly with a query string already.
        method: The HTTP method. Unsupported methods are rejected when
            the request is assembled.

    Raises:
        ValueError: If the URL is ``None``, empty or not a valid
            ``http``/``https`` URL.

    Example:
        ```pycon
        >>> from fluenthttp import get
        >>> builder = get("https://api.example.com/items").param("page", 1).header({"X-Id": "1"})
        >>> builder.url
        'https://api.example.com/items?page=1'
        >>> response = builder.read_timeout_seconds(5).execute()  # doctest: +SKIP

        ```
    """

    def __init__(self, url: str, method: HttpMethod | str) -> None:
        self._url = str(validate_url(url))
        self._method = method.value if isinstance(method, HttpMethod) else str(method).upper()
        self._headers: list[tuple[str, str]] = []
        self._body: dict[str, Any] = {}
        self._timeout_config = TimeoutConfig()

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(method={self._method!r}, url={self._url!r})"

    @property
    def method(self) -> str:
        return self._method

    @property
    def url(self) -> str:
        return self._url

    @property
    def timeout_config(self) -> TimeoutConfig:
        return self._timeout_config

    def header(self, headers: Mapping[str, Any] | None) -> RequestBuilder:
        """Append headers to the request.

        Repeated calls add to the existing headers; a name given twice
        is sent twice.

        Args:
            headers: Header names and values. Values are converted with
                ``str``. ``None`` is ignored.

        Returns:
            This builder.
        """
        if headers is not None:
            self._headers.extend((key, str(value)) for key, value in headers.items())
        return self

    def param(self, key: str, value: Any) -> RequestBuilder:
        """Append one query parameter to the URL.

        Args:
            key: The parameter name.
            value: The parameter value, converted with ``str``.

        Returns:
            This builder.
        """
        return self.params({key: value})

    def params(self, params: Mapping[str, Any] | None) -> RequestBuilder:
        """Append query parameters to the URL, in mapping order.

        Existing parameters are kept, including ones with the same name.

        Args:
            params: Parameter names and values. Values are converted with
                ``str``. ``None`` or an empty mapping leaves the URL as is.

        Returns:
            This builder.
        """
        if not params:
            return self
        url = httpx.URL(self._url)
        # Appended to the raw query; QueryParams would regroup repeated keys
        added = str(httpx.QueryParams({key: str(value) for key, value in params.items()}))
        query = f"{url.query.decode('ascii')}&{added}" if url.query else added
        self._url = str(url.copy_with(query=query.encode("ascii")))
        return self

    def form(self, form: Mapping[str, Any]) -> RequestBuilder:
        """Use an ``application/x-www-form-urlencoded`` body.

        Replaces any body assigned before.

        Args:
            form: Field names and values, converted with ``str``.

        Returns:
            This builder.
        """
        self._body = {"data": {key: str(value) for key, value in form.items()}}
        return self

    def form_data(
        self, form: Mapping[str, Any], files: Sequence[UploadFile]
    ) -> RequestBuilder:
        """Use a ``multipart/form-data`` body.

        The body holds one part per file, in the given order, followed by
        one part per form field. Every file part carries a ``filename``
        parameter, empty names included, and no content type. Replaces any
        body assigned before.

        Args:
            form: Field names and values, converted with ``str``.
            files: The files to upload.

        Returns:
            This builder.

        Raises:
            ValueError: If both ``form`` and ``files`` are empty.
        """
        parts: list[tuple[str, str | tuple[str, bytes, None]]] = [
            (upload.name, (upload.file_name, upload.file_data, None)) for upload in files
        ]
        parts.extend((key, str(value)) for key, value in form.items())
        if not parts:
            msg = "multipart body must have at least one part"
            raise ValueError(msg)
        content, content_type = encode_multipart_formdata(parts)
        self._body = {"content": content, "headers": {"Content-Type": content_type}}
        return self

    def body(self, body: str) -> RequestBuilder:
        """Use a raw JSON body, sent unmodified.

        Replaces any body assigned before.

        Args:
            body: The serialized JSON document.

        Returns:
            This builder.
        """
        self._body = {
            "content": body.encode("utf-8"),
            "headers": {"Content-Type": JSON_CONTENT_TYPE},
        }
        return self

    def connect_timeout_seconds(self, seconds: int) -> RequestBuilder:
        """Override the connect timeout of this call.

        Args:
            seconds: The timeout in seconds; ``0`` disables it.

        Returns:
            This builder.

        Raises:
            ValueError: If ``seconds`` is negative.
        """
        validate_timeout_seconds("connect_timeout_seconds", seconds)
        self._timeout_config.connect_timeout_seconds = seconds
        return self

    def read_timeout_seconds(self, seconds: int) -> RequestBuilder:
        """Override the read timeout of this call.

        Args:
            seconds: The timeout in seconds; ``0`` disables it.

        Returns:
            This builder.

        Raises:
            ValueError: If ``seconds`` is negative.
        """
        validate_timeout_seconds("read_timeout_seconds", seconds)
        self._timeout_config.read_timeout_seconds = seconds
        return self

    def write_timeout_seconds(self, seconds: int) -> RequestBuilder:
        """Override the write timeout of this call.

        Args:
            seconds: The timeout in seconds; ``0`` disables it.

        Returns:
            This builder.

        Raises:
            ValueError: If ``seconds`` is negative.
        """
        validate_timeout_seconds("write_timeout_seconds", seconds)
        self._timeout_config.write_timeout_seconds = seconds
        return self

    def build_request(self) -> httpx.Request:
        """Assemble the request from the accumulated state.

        A GET request never carries a body. The timeout configuration is
        attached to the request extensions for the timeout interceptor.

        Returns:
            The assembled request.

        Raises:
            ValueError: If the method is not supported.
        """
        try:
            method = HttpMethod(self._method)
        except ValueError:
            msg = f"http method not supported: {self._method}"
            raise ValueError(msg) from None

        body = {} if method is HttpMethod.GET else dict(self._body)
        body_headers = body.pop("headers", {})
        request = httpx.Request(
            method.value,
            self._url,
            headers=self._headers,
            extensions={TIMEOUT_CONFIG_EXTENSION: self._timeout_config},
            **body,
        )
        # The declared content type of a raw body wins over a user header
        for name, value in body_headers.items():
            request.headers[name] = value
        return request

    def execute(self) -> httpx.Response:
        """Send the request and wait for the buffered response.

        Returns:
            The response, with its body already read into memory. Error
            statuses (4xx, 5xx) are returned, not raised.

        Raises:
            ValueError: If the method is not supported.
            HttpTimeoutError: If a timeout expires.
            HttpTransportError: If the network phase fails.
            ResponseBodyMissingError: If the response has no body.
        """
        request = self.build_request()
        return ensure_initialized().send(request)

    def execute_async(self) -> Future[httpx.Response]:
        """Send the request on the shared worker pool.

        Returns immediately. The request is assembled before returning,
        so assembly errors are raised here rather than through the future.

        Returns:
            A future resolved with the buffered response, or failed with
            ``HttpTimeoutError`` or ``HttpTransportError``.

        Raises:
            ValueError: If the method is not supported.
        """
        request = self.build_request()
        return ensure_initialized().submit(request)

    async def aexecute(self) -> httpx.Response:
        """Await the result of ``execute_async`` from asyncio code.

        Returns:
            The buffered response.

        Raises:
            ValueError: If the method is not supported.
            HttpTimeoutError: If a timeout expires.
            HttpTransportError: If the network phase fails.
        """
        return await asyncio.wrap_future(self.execute_async())
