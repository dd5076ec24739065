"""Message stream publishing entities."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PublishRequest:
    """Input contract for publishing one NDJSON message stream."""

    input_path: str
    config_path: str | None = None
    destination: str | None = None


@dataclass(frozen=True)
class PublishOutcome:
    """Output contract for one completed publication."""

    destination: str
    envelope_count: int
