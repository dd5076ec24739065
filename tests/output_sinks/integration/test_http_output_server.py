"""HTTP sink integration tests against a local HTTP server."""

from __future__ import annotations

import socket
import threading
import time
from collections.abc import Iterator
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest
from cuke_message_formatter.output_sinks import (
    HttpStatusError,
    RedirectLoopError,
    SinkTransportError,
    open_output,
)

SENT_BODY = "X" * 10_000_000


@dataclass
class _ReceivingServer:
    base_url: str
    received_body: bytearray = field(default_factory=bytearray)
    methods: list[str] = field(default_factory=list)
    content_types: list[str | None] = field(default_factory=list)
    lock: threading.Lock = field(default_factory=threading.Lock)

    def received_length(self) -> int:
        with self.lock:
            return len(self.received_body)


def _build_handler(state: _ReceivingServer) -> type[BaseHTTPRequestHandler]:
    class _Handler(BaseHTTPRequestHandler):
        def do_PUT(self) -> None:
            self._handle()

        def do_POST(self) -> None:
            self._handle()

        def log_message(self, format: str, *args: object) -> None:
            return None

        def _handle(self) -> None:
            path = self.path.split("?", 1)[0]
            if path == "/":
                with state.lock:
                    state.methods.append(self.command)
                    state.content_types.append(self.headers.get("Content-Type"))
                self._read_body(state.received_body)
                self._respond(200)
            elif path == "/404":
                self._read_body(bytearray())
                self._respond(404)
            elif path == "/redirect":
                self._read_body(bytearray())
                self._respond(307, location="/")
            elif path == "/loop_redirect":
                self._read_body(bytearray())
                self._respond(307, location="/loop_redirect")
            else:
                self._read_body(bytearray())
                self._respond(500)

        def _respond(self, status: int, location: str | None = None) -> None:
            self.send_response(status)
            if location:
                self.send_header("Location", location)
            self.send_header("Content-Length", "0")
            self.end_headers()

        def _read_body(self, sink: bytearray) -> None:
            if self.headers.get("Transfer-Encoding", "").lower() != "chunked":
                data = self.rfile.read(int(self.headers.get("Content-Length") or 0))
                with state.lock:
                    sink.extend(data)
                return
            while True:
                size = int(self.rfile.readline().split(b";", 1)[0].strip(), 16)
                if size == 0:
                    while self.rfile.readline() not in (b"\r\n", b"\n", b""):
                        pass
                    return
                data = self.rfile.read(size)
                with state.lock:
                    sink.extend(data)
                self.rfile.readline()

    return _Handler


@pytest.fixture
def server() -> Iterator[_ReceivingServer]:
    state = _ReceivingServer(base_url="")
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), _build_handler(state))
    httpd.daemon_threads = True
    state.base_url = f"http://127.0.0.1:{httpd.server_address[1]}"
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    try:
        yield state
    finally:
        httpd.shutdown()
        httpd.server_close()
        thread.join(timeout=5)


def _unused_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
        probe.bind(("127.0.0.1", 0))
        return probe.getsockname()[1]


def test_puts_large_body_by_default(server: _ReceivingServer) -> None:
    output = open_output(f"{server.base_url}/")
    output.write(SENT_BODY)
    output.flush()
    output.close()

    assert server.methods == ["PUT"]
    assert bytes(server.received_body) == SENT_BODY.encode()


def test_posts_large_body_when_method_is_overridden(server: _ReceivingServer) -> None:
    output = open_output(f"{server.base_url}/?http-method=POST")
    output.write(SENT_BODY)
    output.close()

    assert server.methods == ["POST"]
    assert bytes(server.received_body) == SENT_BODY.encode()


def test_content_type_parameter_is_sent_as_header(server: _ReceivingServer) -> None:
    output = open_output(f"{server.base_url}/?http-content-type=text/plain")
    output.write("line\n")
    output.close()

    assert server.content_types == ["text/plain"]
    assert bytes(server.received_body) == b"line\n"


def test_streams_body_before_close(server: _ReceivingServer) -> None:
    output = open_output(f"{server.base_url}/?http-method=POST")
    try:
        output.write(SENT_BODY)
        output.flush()
        deadline = time.monotonic() + 10
        while server.received_length() == 0 and time.monotonic() < deadline:
            time.sleep(0.05)
        assert server.received_length() > 0
    finally:
        output.close()


def test_follows_redirect_with_full_body(server: _ReceivingServer) -> None:
    output = open_output(f"{server.base_url}/redirect?http-method=POST")
    output.write(SENT_BODY)
    output.flush()
    output.close()

    assert bytes(server.received_body) == SENT_BODY.encode()


def test_self_redirect_fails_with_too_many_redirections(server: _ReceivingServer) -> None:
    output = open_output(f"{server.base_url}/loop_redirect?http-method=POST")

    with pytest.raises(RedirectLoopError) as excinfo:
        output.close()

    assert str(excinfo.value) == (
        f"request to {server.base_url}/loop_redirect failed (too many redirections)"
    )


def test_error_status_names_url_and_status(server: _ReceivingServer) -> None:
    output = open_output(f"{server.base_url}/404?http-method=POST")

    with pytest.raises(HttpStatusError) as excinfo:
        output.close()

    assert str(excinfo.value) == (
        f"request to {server.base_url}/404?http-method=POST failed with status 404"
    )


def test_unreachable_server_names_host_and_port() -> None:
    port = _unused_port()
    output = open_output(f"http://127.0.0.1:{port}")

    with pytest.raises(SinkTransportError, match=f"Failed to open TCP connection to 127.0.0.1:{port}"):
        output.close()
