from __future__ import annotations

import logging
import socket
from typing import TYPE_CHECKING
from unittest.mock import Mock

import httpx
import pytest

from tests.helpers import MockWebServer

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def _restore_log_level() -> Generator[None, None, None]:
    """Restore the ``fluenthttp`` logger level after each test."""
    package_logger = logging.getLogger("fluenthttp")
    level = package_logger.level
    yield
    package_logger.setLevel(level)


@pytest.fixture
def mock_server() -> Generator[MockWebServer, None, None]:
    """Start a local mock web server for the duration of a test."""
    with MockWebServer() as server:
        yield server


@pytest.fixture
def unused_url() -> str:
    """Return a URL on a local port nothing listens on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}/"


@pytest.fixture
def mock_client() -> httpx.Client:
    """Create a mock httpx.Client for testing."""
    return Mock(spec=httpx.Client)


@pytest.fixture
def mock_response() -> httpx.Response:
    """Create a mock streaming httpx.Response for testing."""
    return Mock(spec=httpx.Response, status_code=200, stream=Mock(), read=Mock(return_value=b"ok"))
