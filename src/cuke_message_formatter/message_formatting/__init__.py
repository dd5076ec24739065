"""Message formatting exports."""

from .attachment_payloads import TEXT_MEDIA_TYPE, AttachmentSource, PayloadKind, encode_payload
from .message_formatter import MessageFormatter

__all__ = [
    "TEXT_MEDIA_TYPE",
    "AttachmentSource",
    "PayloadKind",
    "encode_payload",
    "MessageFormatter",
]
