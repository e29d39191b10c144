r"""Shared test helpers.

``MockWebServer`` is a local HTTP/1.1 server that replays queued
responses and records the requests it receives, so integration tests
can exercise the real transport without leaving the machine.
"""

from __future__ import annotations

__all__ = ["MockResponse", "MockWebServer", "RecordedRequest"]

import logging
import queue
import threading
import time
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

logger: logging.Logger = logging.getLogger(__name__)


@dataclass
class MockResponse:
    """A response to replay.

    Attributes:
        status_code: The status code to send.
        body: The body to send.
        headers: Extra response headers.
        body_delay: Seconds to wait between the headers and the body.
    """

    status_code: int = 200
    body: str | bytes = b""
    headers: dict[str, str] = field(default_factory=dict)
    body_delay: float = 0.0


@dataclass
class RecordedRequest:
    """A request received by the server."""

    method: str
    path: str
    headers: dict[str, str]
    body: bytes

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")


class _Handler(BaseHTTPRequestHandler):
    protocol_version = "HTTP/1.1"
    server: _Server

    def _handle(self) -> None:
        length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(length) if length else b""
        self.server.requests.put(
            RecordedRequest(
                method=self.command,
                path=self.path,
                headers=dict(self.headers.items()),
                body=body,
            )
        )
        try:
            response = self.server.responses.get_nowait()
        except queue.Empty:
            response = MockResponse(status_code=404, body=b"no response enqueued")

        payload = response.body.encode("utf-8") if isinstance(response.body, str) else response.body
        self.send_response(response.status_code)
        for name, value in response.headers.items():
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.flush()
        if response.body_delay:
            time.sleep(response.body_delay)
        self.wfile.write(payload)

    do_GET = do_POST = do_PUT = do_DELETE = _handle  # noqa: N815

    def log_message(self, format: str, *args: object) -> None:  # noqa: A002
        logger.debug(format, *args)


class _Server(ThreadingHTTPServer):
    daemon_threads = True
    block_on_close = False

    def __init__(self) -> None:
        super().__init__(("127.0.0.1", 0), _Handler)
        self.responses: queue.Queue[MockResponse] = queue.Queue()
        self.requests: queue.Queue[RecordedRequest] = queue.Queue()

    def handle_error(self, request: object, client_address: object) -> None:
        # Clients that give up on a delayed body close the socket early
        logger.debug(f"mock server connection from {client_address} ended abruptly")


class MockWebServer:
    """Local HTTP server replaying ``MockResponse`` objects in order.

    Example:
        ```python
        with MockWebServer() as server:
            server.enqueue(MockResponse(body="Hello World"))
            url = server.url("/add")
        ```
    """

    def __init__(self) -> None:
        self._server = _Server()
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)

    def __enter__(self) -> MockWebServer:
        self.start()
        return self

    def __exit__(self, *args: object) -> None:
        self.shutdown()

    @property
    def host(self) -> str:
        return self._server.server_address[0]

    @property
    def port(self) -> int:
        return self._server.server_address[1]

    def start(self) -> None:
        self._thread.start()

    def shutdown(self) -> None:
        self._server.shutdown()
        self._server.server_close()

    def url(self, path: str) -> str:
        return f"http://{self.host}:{self.port}{path}"

    def enqueue(self, response: MockResponse) -> None:
        self._server.responses.put(response)

    def take_request(self, timeout: float = 5.0) -> RecordedRequest:
        return self._server.requests.get(timeout=timeout)
