r"""Argument validation for request builders and timeout settings.

Every check here raises ``ValueError`` synchronously, at the point the
invalid argument is supplied, so that no network activity happens for a
request that can never be valid.
"""

from __future__ import annotations

__all__ = ["validate_timeout_seconds", "validate_url"]

import httpx

SUPPORTED_SCHEMES = ("http", "https")


def validate_url(url: str | None) -> httpx.URL:
    """Validate and parse a request URL.

    Args:
        url: The URL to validate.

    Returns:
        The parsed URL.

    Raises:
        ValueError: If the URL is ``None``, empty, malformed, or does not
            use the ``http`` or ``https`` scheme.

    Example:
        ```pycon
        >>> from fluenthttp.utils.validation import validate_url
        >>> validate_url("https://api.example.com/data?page=1")
        URL('https://api.example.com/data?page=1')
        >>> validate_url("")  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: request url is null or empty

        ```
    """
    if url is None or url == "":
        msg = "request url is null or empty"
        raise ValueError(msg)
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as exc:
        msg = f"invalid request url {url!r}: {exc}"
        raise ValueError(msg) from exc
    if parsed.scheme not in SUPPORTED_SCHEMES:
        msg = f"unsupported url scheme {parsed.scheme!r} in {url!r}, expected http or https"
        raise ValueError(msg)
    if not parsed.host:
        msg = f"request url {url!r} has no host"
        raise ValueError(msg)
    return parsed


def validate_timeout_seconds(name: str, value: int) -> None:
    """Validate a timeout expressed in whole seconds.

    Args:
        name: The name of the timeout, used in the error message.
        value: The timeout value. ``0`` means no limit.

    Raises:
        ValueError: If the value is negative or not an integer.

    Example:
        ```pycon
        >>> from fluenthttp.utils.validation import validate_timeout_seconds
        >>> validate_timeout_seconds("read_timeout_seconds", 30)
        >>> validate_timeout_seconds("read_timeout_seconds", 0)

        ```
    """
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"{name} must be an int, got {type(value).__name__}"
        raise ValueError(msg)
    if value < 0:
        msg = f"{name} must be >= 0, got {value}"
        raise ValueError(msg)
