"""Attachment payload encoding tests."""

from __future__ import annotations

import base64
import io

from cuke_message_formatter.message_formatting import AttachmentSource, PayloadKind, encode_payload


def test_plain_text_buffer_is_embedded_as_text() -> None:
    assert encode_payload(AttachmentSource.buffer("hello"), "text/plain") == {"text": "hello"}


def test_plain_text_bytes_are_decoded_as_utf8() -> None:
    payload = AttachmentSource.buffer("grüße".encode())

    assert encode_payload(payload, "text/plain") == {"text": "grüße"}


def test_other_media_types_are_base64_encoded_without_line_breaks() -> None:
    data = bytes(range(256)) * 4

    encoded = encode_payload(AttachmentSource.buffer(data), "application/octet-stream")

    assert "\n" not in encoded["binary"]
    assert base64.b64decode(encoded["binary"]) == data


def test_text_with_non_plain_media_type_is_base64_encoded() -> None:
    encoded = encode_payload(AttachmentSource.buffer('{"a": 1}'), "application/json")

    assert base64.b64decode(encoded["binary"]) == b'{"a": 1}'


def test_stream_payload_is_read_and_base64_encoded_even_for_plain_text() -> None:
    source = AttachmentSource.stream(io.BytesIO(b"streamed text"))

    assert source.kind is PayloadKind.STREAM
    assert encode_payload(source, "text/plain") == {
        "binary": base64.b64encode(b"streamed text").decode("ascii")
    }


def test_plain_text_bytes_that_are_not_utf8_fall_back_to_base64() -> None:
    data = b"\xff\xfe log"

    encoded = encode_payload(AttachmentSource.buffer(data), "text/plain")

    assert "text" not in encoded
    assert base64.b64decode(encoded["binary"]) == data
