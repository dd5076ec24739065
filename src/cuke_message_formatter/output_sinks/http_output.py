"""Streaming HTTP(S) sink delivering the whole message stream as one request body."""

from __future__ import annotations

import logging
import queue
import tempfile
import threading
from collections.abc import Iterator
from concurrent.futures import Future
from typing import IO

import httpx

from .destination import DestinationKind, OutputDestination
from .file_output import _as_bytes, _ManagedOutput
from .sink_errors import HttpStatusError, RedirectLoopError, SinkTransportError

_LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_REDIRECTS = 5
REPLAY_SPOOL_BYTES = 8 * 1024 * 1024
_REPLAY_CHUNK_BYTES = 64 * 1024
_END_OF_BODY = None


class HttpOutput(_ManagedOutput):  # pylint: disable=too-many-instance-attributes
    """Sink that streams writes into an in-flight HTTP request.

    A single background worker owns the request: it connects as soon as the
    sink is created and sends each write as it is queued. Everything sent is
    kept in a spooled replay buffer so a redirect can re-issue the full body.
    Delivery errors are raised by `close()`.
    """

    def __init__(
        self,
        destination: OutputDestination,
        *,
        verify_tls: bool = True,
        timeout_seconds: float | None = None,
        max_redirects: int = DEFAULT_MAX_REDIRECTS,
        client: httpx.Client | None = None,
    ) -> None:
        if destination.kind is not DestinationKind.HTTP or destination.url is None:
            raise ValueError("HttpOutput requires an HTTP destination.")
        self.destination = destination
        self._max_redirects = max_redirects
        self._client = client or httpx.Client(
            verify=verify_tls,
            timeout=timeout_seconds,
            follow_redirects=False,
        )
        self._owns_client = client is None
        self._chunks: queue.Queue[bytes | None] = queue.Queue()
        self._body_complete = threading.Event()
        self._replay: IO[bytes] = tempfile.SpooledTemporaryFile(max_size=REPLAY_SPOOL_BYTES)
        self._closed = False
        self._delivery: Future[None] = Future()
        # Daemon so an aborted run that never reaches close() can still exit.
        self._worker = threading.Thread(target=self._run_delivery, name="http-output", daemon=True)
        self._worker.start()

    @property
    def url(self) -> str:
        return self.destination.url or ""

    def write(self, data: bytes | str) -> None:
        if self._closed:
            raise ValueError("I/O operation on closed output.")
        if self._delivery.done():
            # The request already failed; the error is reported by close().
            return
        payload = _as_bytes(data)
        if payload:
            self._chunks.put(payload)

    def flush(self) -> None:
        """Writes are handed to the sender immediately; nothing is buffered here."""

    def close(self) -> None:
        """Finish the body and block until the destination has answered."""
        if self._closed:
            return
        self._closed = True
        self._chunks.put(_END_OF_BODY)
        try:
            self._delivery.result()
        finally:
            self._worker.join()
            self._replay.close()
            if self._owns_client:
                self._client.close()

    def _run_delivery(self) -> None:
        if not self._delivery.set_running_or_notify_cancel():
            return
        try:
            self._deliver()
        except Exception as exc:  # pylint: disable=broad-exception-caught
            self._delivery.set_exception(exc)
        else:
            self._delivery.set_result(None)

    def _deliver(self) -> None:
        request_url = self.url
        response = self._send(request_url, self._streamed_body())
        hops = 0
        while 300 <= response.status_code < 400 and "location" in response.headers:
            hops += 1
            if hops > self._max_redirects:
                raise RedirectLoopError(self.url)
            self._drain_pending_body()
            request_url = str(httpx.URL(request_url).join(response.headers["location"]))
            _LOGGER.debug(
                "Redirect %d (%d) from %s to %s", hops, response.status_code, self.url, request_url
            )
            response = self._send(request_url, self._replayed_body())
        if not response.is_success:
            reported_url = request_url if hops else self.destination.requested_url or request_url
            raise HttpStatusError(reported_url, response.status_code)
        _LOGGER.debug("Message stream delivered to %s (%d)", request_url, response.status_code)

    def _send(self, url: str, body: Iterator[bytes]) -> httpx.Response:
        try:
            return self._client.request(
                self.destination.method,
                url,
                content=body,
                headers=dict(self.destination.headers),
            )
        except (httpx.ConnectError, httpx.ConnectTimeout) as exc:
            target = httpx.URL(url)
            port = target.port or (443 if target.scheme == "https" else 80)
            raise SinkTransportError(
                f"Failed to open TCP connection to {target.host}:{port} ({exc})",
                host=target.host,
                port=port,
            ) from exc
        except httpx.HTTPError as exc:
            raise SinkTransportError(f"request to {url} failed: {exc}") from exc

    def _streamed_body(self) -> Iterator[bytes]:
        while True:
            chunk = self._chunks.get()
            if chunk is _END_OF_BODY:
                self._body_complete.set()
                return
            self._replay.write(chunk)
            yield chunk

    def _drain_pending_body(self) -> None:
        if self._body_complete.is_set():
            return
        for _ in self._streamed_body():
            pass

    def _replayed_body(self) -> Iterator[bytes]:
        self._replay.seek(0)
        while chunk := self._replay.read(_REPLAY_CHUNK_BYTES):
            yield chunk
