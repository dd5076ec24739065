"""Message stream publishing exports."""

from .publish_contracts import PublishOutcome, PublishRequest
from .publish_use_case import PublishError, publish_message_stream

__all__ = [
    "PublishRequest",
    "PublishOutcome",
    "PublishError",
    "publish_message_stream",
]
