r"""Entry points returning a ``RequestBuilder`` bound to a method and URL."""

from __future__ import annotations

__all__ = ["delete", "get", "post", "put", "upload_file"]

from fluenthttp.builder import HttpMethod, RequestBuilder


def get(url: str) -> RequestBuilder:
    r"""Create a builder for a GET request.

    Args:
        url: The URL to send the request to.

    Returns:
        The request builder.

    Raises:
        ValueError: If the URL is ``None`` or empty.

    Example:
        ```pycon
        >>> from fluenthttp import get
        >>> response = get("https://api.example.com/data").param("page", 1).execute()  # doctest: +SKIP

        ```
    """
    return RequestBuilder(url, HttpMethod.GET)


def post(url: str) -> RequestBuilder:
    r"""Create a builder for a POST request.

    Args:
        url: The URL to send the request to.

    Returns:
        The request builder.

    Raises:
        ValueError: If the URL is ``None`` or empty.

    Example:
        ```pycon
        >>> from fluenthttp import post
        >>> response = post("https://api.example.com/data").form({"key": "value"}).execute()  # doctest: +SKIP

        ```
    """
    return RequestBuilder(url, HttpMethod.POST)


def put(url: str) -> RequestBuilder:
    r"""Create a builder for a PUT request.

    Args:
        url: The URL to send the request to.

    Returns:
        The request builder.

    Raises:
        ValueError: If the URL is ``None`` or empty.
    """
    return RequestBuilder(url, HttpMethod.PUT)


def delete(url: str) -> RequestBuilder:
    r"""Create a builder for a DELETE request.

    Args:
        url: The URL to send the request to.

    Returns:
        The request builder.

    Raises:
        ValueError: If the URL is ``None`` or empty.
    """
    return RequestBuilder(url, HttpMethod.DELETE)


def upload_file(url: str) -> RequestBuilder:
    r"""Create a builder for a multipart upload, sent as POST.

    Args:
        url: The URL to send the request to.

    Returns:
        The request builder, to be given a body with ``form_data``.

    Raises:
        ValueError: If the URL is ``None`` or empty.

    Example:
        ```pycon
        >>> from fluenthttp import UploadFile, upload_file
        >>> upload = UploadFile(name="file", file_name="test.txt", file_data=b"Hello, World!")
        >>> response = (
        ...     upload_file("https://api.example.com/upload")
        ...     .form_data({"description": "Test file"}, [upload])
        ...     .execute()
        ... )  # doctest: +SKIP

        ```
    """
    return RequestBuilder(url, HttpMethod.POST)
