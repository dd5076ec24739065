"""Attachment payload sources and their encoding."""

from __future__ import annotations

import base64
from dataclasses import dataclass
from enum import Enum
from typing import IO

TEXT_MEDIA_TYPE = "text/plain"


class PayloadKind(str, Enum):
    """Declared shape of an attachment payload."""

    BUFFER = "buffer"
    STREAM = "stream"


@dataclass(frozen=True)
class AttachmentSource:
    """Attachment payload: an in-memory buffer or a readable stream."""

    kind: PayloadKind
    data: str | bytes | IO[bytes]

    @staticmethod
    def buffer(data: str | bytes) -> AttachmentSource:
        return AttachmentSource(kind=PayloadKind.BUFFER, data=data)

    @staticmethod
    def stream(handle: IO[bytes]) -> AttachmentSource:
        return AttachmentSource(kind=PayloadKind.STREAM, data=handle)


def encode_payload(source: AttachmentSource, media_type: str) -> dict[str, str]:
    """Return either `{"text": ...}` or `{"binary": <base64>}` for the attachment.

    Plain text buffers are embedded as text unless the bytes are not valid UTF-8.
    Every other media type, and any stream payload, is read fully and
    base64-encoded.
    """
    if source.kind is PayloadKind.STREAM:
        raw = source.data.read()  # type: ignore[union-attr]
        return {"binary": _base64(raw)}
    if media_type == TEXT_MEDIA_TYPE:
        data = source.data
        if not isinstance(data, bytes):
            return {"text": str(data)}
        try:
            return {"text": data.decode("utf-8")}
        except UnicodeDecodeError:
            return {"binary": _base64(data)}
    return {"binary": _base64(source.data)}  # type: ignore[arg-type]


def _base64(raw: str | bytes) -> str:
    payload = raw.encode("utf-8") if isinstance(raw, str) else bytes(raw)
    return base64.b64encode(payload).decode("ascii")
