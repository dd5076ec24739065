"""Message schema exports."""

from .envelopes import (
    GHERKIN_MEDIA_TYPE,
    Attachment,
    Duration,
    Envelope,
    Source,
    TestCase,
    TestCaseFinished,
    TestCaseStarted,
    TestRunFinished,
    TestRunStarted,
    TestStep,
    TestStepFinished,
    TestStepResult,
    TestStepResultStatus,
    TestStepStarted,
    Timestamp,
)
from .ndjson_codec import ENVELOPE_VARIANT_KEYS, SerializationError, parse_envelope, render_envelope

__all__ = [
    "GHERKIN_MEDIA_TYPE",
    "ENVELOPE_VARIANT_KEYS",
    "Attachment",
    "Duration",
    "Envelope",
    "Source",
    "TestCase",
    "TestCaseFinished",
    "TestCaseStarted",
    "TestRunFinished",
    "TestRunStarted",
    "TestStep",
    "TestStepFinished",
    "TestStepResult",
    "TestStepResultStatus",
    "TestStepStarted",
    "Timestamp",
    "SerializationError",
    "parse_envelope",
    "render_envelope",
]
