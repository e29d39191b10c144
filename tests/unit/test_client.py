r"""Unit tests for SharedClient and its lazy, initialize-once
construction."""

from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING
from unittest.mock import MagicMock, Mock, patch

import httpx
import pytest

from fluenthttp import client as client_module
from fluenthttp.client import SharedClient, ensure_initialized
from fluenthttp.config import TIMEOUT_CONFIG_EXTENSION, TimeoutConfig
from fluenthttp.exceptions import HttpTransportError

if TYPE_CHECKING:
    from collections.abc import Generator

TEST_URL = "https://api.example.com/data"


@pytest.fixture
def fresh_singleton() -> Generator[None, None, None]:
    """Run a test with no shared client built yet."""
    with (
        patch.object(client_module, "_instance", None),
        patch("fluenthttp.client.atexit.register"),
    ):
        yield


##################################
#     Tests for SharedClient     #
##################################


def test_shared_client_send_buffers_response() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="Hello World"))
    with SharedClient(transport=transport) as client:
        response = client.send(httpx.Request("GET", TEST_URL))

    assert response.status_code == 200
    assert response.text == "Hello World"


def test_shared_client_applies_request_timeouts() -> None:
    seen: list[dict[str, float | None]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.extensions["timeout"])
        return httpx.Response(200)

    config = TimeoutConfig(connect_timeout_seconds=3, read_timeout_seconds=4, write_timeout_seconds=5)
    with SharedClient(transport=httpx.MockTransport(handler)) as client:
        client.send(httpx.Request("GET", TEST_URL, extensions={TIMEOUT_CONFIG_EXTENSION: config}))

    assert seen == [{"connect": 3.0, "read": 4.0, "write": 5.0, "pool": 3.0}]


def test_shared_client_follows_redirects() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/old":
            return httpx.Response(302, headers={"Location": "/new"})
        return httpx.Response(200, text=request.url.path)

    with SharedClient(transport=httpx.MockTransport(handler)) as client:
        response = client.send(httpx.Request("GET", "https://api.example.com/old"))

    assert response.text == "/new"


def test_shared_client_submit_runs_on_worker_thread() -> None:
    threads: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        threads.append(threading.current_thread().name)
        return httpx.Response(200, text="response body")

    with SharedClient(transport=httpx.MockTransport(handler)) as client:
        response = client.submit(httpx.Request("GET", TEST_URL)).result(timeout=5)

    assert response.text == "response body"
    assert threads[0].startswith("fluenthttp")
    assert threads[0] != threading.current_thread().name


def test_shared_client_submit_failure_resolves_future() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    with SharedClient(transport=httpx.MockTransport(handler)) as client:
        future = client.submit(httpx.Request("GET", TEST_URL))
        with pytest.raises(HttpTransportError, match=r"Connection refused"):
            future.result(timeout=5)


def test_shared_client_close() -> None:
    client = SharedClient(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
    assert not client.is_closed
    client.close()
    assert client.is_closed
    with pytest.raises(RuntimeError):
        client.submit(httpx.Request("GET", TEST_URL))


########################################
#     Tests for ensure_initialized     #
########################################


@pytest.mark.usefixtures("fresh_singleton")
def test_ensure_initialized_returns_same_instance() -> None:
    first = ensure_initialized()
    assert isinstance(first, SharedClient)
    assert ensure_initialized() is first


@pytest.mark.usefixtures("fresh_singleton")
def test_ensure_initialized_concurrent_first_use() -> None:
    instances: list[object] = []

    def slow_constructor() -> Mock:
        time.sleep(0.05)
        return Mock()

    with patch("fluenthttp.client.SharedClient", side_effect=slow_constructor) as constructor:
        barrier = threading.Barrier(16)

        def worker() -> None:
            barrier.wait()
            instances.append(ensure_initialized())

        threads = [threading.Thread(target=worker) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

    constructor.assert_called_once_with()
    assert len(instances) == 16
    assert all(instance is instances[0] for instance in instances)


@pytest.mark.usefixtures("fresh_singleton")
def test_ensure_initialized_propagates_construction_failure() -> None:
    with patch("fluenthttp.client.SharedClient", side_effect=OSError("no sockets")):
        with pytest.raises(OSError, match=r"no sockets"):
            ensure_initialized()
    assert client_module._instance is None
    assert isinstance(ensure_initialized(), SharedClient)


@pytest.mark.usefixtures("fresh_singleton")
def test_ensure_initialized_registers_close_at_exit() -> None:
    instance = ensure_initialized()
    client_module.atexit.register.assert_called_once_with(instance.close)


def test_ensure_initialized_skips_lock_once_built() -> None:
    instance = Mock(spec=SharedClient)
    lock = MagicMock()
    with (
        patch.object(client_module, "_instance", instance),
        patch.object(client_module, "_instance_lock", lock),
    ):
        assert ensure_initialized() is instance
    lock.__enter__.assert_not_called()
