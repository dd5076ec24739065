"""NDJSON rendering and parsing of message envelopes."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any

from .envelopes import Envelope

ENVELOPE_VARIANT_KEYS = (
    "source",
    "testRunStarted",
    "testCase",
    "testCaseStarted",
    "testStepStarted",
    "testStepFinished",
    "testCaseFinished",
    "testRunFinished",
    "attachment",
)


class SerializationError(Exception):
    """Raised when an envelope does not hold exactly one message variant."""


def render_envelope(envelope: Envelope) -> str:
    """Render one envelope as a single NDJSON line, newline included."""
    populated = envelope.variant_names()
    if len(populated) != 1:
        raise SerializationError(
            f"Envelope must hold exactly one message variant, found {len(populated)}"
            + (f": {', '.join(populated)}" if populated else ".")
        )
    return json.dumps(_to_wire(envelope), separators=(",", ":"), ensure_ascii=False) + "\n"


def parse_envelope(line: str) -> dict[str, Any]:
    """Decode one NDJSON line and reject anything that is not a single-variant envelope."""
    try:
        decoded = json.loads(line)
    except json.JSONDecodeError as exc:
        raise SerializationError(f"Envelope is not valid JSON: {exc}") from exc
    if not isinstance(decoded, Mapping):
        raise SerializationError("Envelope must be a JSON object.")
    unknown = sorted(key for key in decoded if key not in ENVELOPE_VARIANT_KEYS)
    if unknown:
        raise SerializationError(f"Envelope contains unknown message variants: {', '.join(unknown)}")
    populated = [key for key in ENVELOPE_VARIANT_KEYS if decoded.get(key) is not None]
    if len(populated) != 1:
        raise SerializationError(
            f"Envelope must hold exactly one message variant, found {len(populated)}."
        )
    return dict(decoded)


def _to_wire(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        rendered: dict[str, Any] = {}
        for item in fields(value):
            attribute = getattr(value, item.name)
            if attribute is None:
                continue
            rendered[_camel_case(item.name)] = _to_wire(attribute)
        return rendered
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Mapping):
        return {str(key): _to_wire(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_wire(item) for item in value]
    return value


def _camel_case(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part.capitalize() for part in tail)
