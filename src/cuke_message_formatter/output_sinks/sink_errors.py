"""Output sink errors."""

from __future__ import annotations


class OutputSinkError(Exception):
    """Base class for failures delivering the message stream."""


class SinkTransportError(OutputSinkError):
    """Raised when the connection to the destination cannot be established or breaks."""

    def __init__(self, message: str, *, host: str | None = None, port: int | None = None) -> None:
        super().__init__(message)
        self.host = host
        self.port = port


class HttpStatusError(OutputSinkError):
    """Raised when the destination answers with a non-success status."""

    def __init__(self, url: str, status_code: int) -> None:
        super().__init__(f"request to {url} failed with status {status_code}")
        self.url = url
        self.status_code = status_code


class RedirectLoopError(OutputSinkError):
    """Raised when the redirect hop limit is exceeded."""

    def __init__(self, url: str) -> None:
        super().__init__(f"request to {url} failed (too many redirections)")
        self.url = url
