"""Local file and already-open stream sinks."""

from __future__ import annotations

import io
import sys
from pathlib import Path
from typing import IO, Any, Protocol


class MessageOutput(Protocol):
    """Open once, write many times, close once."""

    def write(self, data: bytes | str) -> None: ...

    def flush(self) -> None: ...

    def close(self) -> None: ...


class _ManagedOutput:
    """Context manager support shared by concrete sinks."""

    def close(self) -> None:  # pragma: no cover - overridden
        raise NotImplementedError

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, traceback) -> None:
        self.close()


def _as_bytes(data: bytes | str) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else bytes(data)


class FileOutput(_ManagedOutput):
    """Writes the message stream to a local file, truncating it first."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = self.path.open("wb")

    def write(self, data: bytes | str) -> None:
        self._handle.write(_as_bytes(data))

    def flush(self) -> None:
        self._handle.flush()

    def close(self) -> None:
        if not self._handle.closed:
            self._handle.close()


class StreamOutput(_ManagedOutput):
    """Binds an already-open stream such as standard output."""

    def __init__(self, stream: IO[Any] | None = None, *, close_stream: bool = False) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._text_mode = isinstance(self._stream, io.TextIOBase)
        self._close_stream = close_stream
        self._closed = False

    def write(self, data: bytes | str) -> None:
        if self._closed:
            raise ValueError("I/O operation on closed output.")
        if self._text_mode:
            self._stream.write(data.decode("utf-8") if isinstance(data, bytes) else data)
        else:
            self._stream.write(_as_bytes(data))

    def flush(self) -> None:
        self._stream.flush()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.flush()
        if self._close_stream:
            self._stream.close()
