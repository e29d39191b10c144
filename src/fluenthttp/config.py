r"""Default configuration and the per-call timeout configuration.

The shared client is built once with the pool and dispatcher settings
below. Timeouts are configured per call through ``TimeoutConfig``,
which travels with the request and is applied by the timeout
interceptor right before the network phase.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_MAX_CONNECTIONS",
    "DEFAULT_MAX_KEEPALIVE_CONNECTIONS",
    "DEFAULT_MAX_WORKERS",
    "DEFAULT_TIMEOUT_SECONDS",
    "FOLLOW_REDIRECTS",
    "TIMEOUT_CONFIG_EXTENSION",
    "TimeoutConfig",
]

from dataclasses import dataclass, replace
from typing import Any

import httpx

from fluenthttp.utils.validation import validate_timeout_seconds

# Default connect/read/write timeout in seconds for every call
DEFAULT_TIMEOUT_SECONDS = 60

# Number of worker threads that run future-based calls
DEFAULT_MAX_WORKERS = 64

# Connection pool limits of the shared transport
DEFAULT_MAX_CONNECTIONS = 100
DEFAULT_MAX_KEEPALIVE_CONNECTIONS = 20

# Redirects are followed natively by the transport
FOLLOW_REDIRECTS = True

# Request extension key under which the TimeoutConfig of a call is stored
TIMEOUT_CONFIG_EXTENSION = "fluenthttp.timeout_config"


@dataclass
class TimeoutConfig:
    """Connect, read and write timeouts of a single call.

    Each value is expressed in whole seconds. ``0`` disables the
    corresponding limit.

    Args:
        connect_timeout_seconds: Maximum time to establish a connection.
        read_timeout_seconds: Maximum time to wait for data from the server.
        write_timeout_seconds: Maximum time to send data to the server.

    Example:
        ```pycon
        >>> from fluenthttp.config import TimeoutConfig
        >>> config = TimeoutConfig()
        >>> config.read_timeout_seconds
        60
        >>> config.merge(read_timeout_seconds=5).read_timeout_seconds
        5
        >>> config.to_httpx()
        Timeout(timeout=60.0)

        ```
    """

    connect_timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    read_timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    write_timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        """Validate the timeout values.

        Raises:
            ValueError: If any timeout is negative.
        """
        validate_timeout_seconds("connect_timeout_seconds", self.connect_timeout_seconds)
        validate_timeout_seconds("read_timeout_seconds", self.read_timeout_seconds)
        validate_timeout_seconds("write_timeout_seconds", self.write_timeout_seconds)

    def merge(self, **overrides: Any) -> TimeoutConfig:
        """Create a new config with the non-``None`` overrides applied.

        Args:
            **overrides: Timeout values to override.

        Returns:
            A new ``TimeoutConfig``; the current one is left unchanged.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_httpx(self) -> httpx.Timeout:
        """Convert the configuration to an ``httpx.Timeout``.

        The pool timeout (waiting for a free connection) follows the
        connect timeout.

        Returns:
            The equivalent ``httpx.Timeout``.
        """
        connect = _seconds_or_none(self.connect_timeout_seconds)
        return httpx.Timeout(
            connect=connect,
            read=_seconds_or_none(self.read_timeout_seconds),
            write=_seconds_or_none(self.write_timeout_seconds),
            pool=connect,
        )


def _seconds_or_none(seconds: int) -> float | None:
    # 0 means no limit
    return float(seconds) if seconds > 0 else None
