"""Correlation exports."""

from .correlation_store import (
    ATTEMPT,
    CorrelationStore,
    ProtocolViolationError,
    started_id_for,
)

__all__ = [
    "ATTEMPT",
    "CorrelationStore",
    "ProtocolViolationError",
    "started_id_for",
]
