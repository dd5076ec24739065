"""Re-publish an existing NDJSON message stream to a file or HTTP destination."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path

from cuke_message_formatter.configuration import (
    ConfigurationError,
    OutputSettings,
    load_configuration,
)
from cuke_message_formatter.message_schema import SerializationError, parse_envelope
from cuke_message_formatter.output_sinks import MessageOutput, OutputSinkError, open_output

from .publish_contracts import PublishOutcome, PublishRequest

_LOGGER = logging.getLogger(__name__)

OutputFactory = Callable[..., MessageOutput]


class PublishError(Exception):
    """Raised when a message stream cannot be published."""


def publish_message_stream(
    request: PublishRequest,
    *,
    output_factory: OutputFactory | None = None,
) -> PublishOutcome:
    """Validate every envelope of the input stream, then stream it through one sink."""
    resolved_output_factory = output_factory or open_output
    settings = _resolve_output_settings(request)
    lines = _read_validated_lines(request.input_path)

    try:
        output = resolved_output_factory(settings.destination, settings=settings)
        _write_all(output, lines)
    except (OutputSinkError, OSError, ValueError) as exc:
        raise PublishError(str(exc)) from exc

    _LOGGER.info("Published %d envelopes to %s", len(lines), settings.destination)
    return PublishOutcome(destination=settings.destination, envelope_count=len(lines))


def _write_all(output: MessageOutput, lines: list[str]) -> None:
    """Write every line and close the sink, reporting the first failure."""
    try:
        for line in lines:
            output.write(line)
    except Exception:
        try:
            output.close()
        except (OutputSinkError, OSError, ValueError) as close_exc:
            _LOGGER.warning("Closing the output after a failed write also failed: %s", close_exc)
        raise
    output.close()


def _resolve_output_settings(request: PublishRequest) -> OutputSettings:
    settings: OutputSettings | None = None
    if request.config_path:
        try:
            configuration = load_configuration(request.config_path)
        except ConfigurationError as exc:
            raise PublishError(str(exc)) from exc
        settings = configuration.output
        logging.getLogger("cuke_message_formatter").setLevel(configuration.logging.level)
    if request.destination:
        settings = (
            replace(settings, destination=request.destination)
            if settings
            else OutputSettings(destination=request.destination)
        )
    if settings is None:
        raise PublishError("An output destination or a configuration file is required.")
    return settings


def _read_validated_lines(input_path: str) -> list[str]:
    try:
        if input_path == "-":
            raw_lines = sys.stdin.read().splitlines()
        else:
            raw_lines = Path(input_path).read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as exc:
        raise PublishError(f"Failed to read message stream: {exc}") from exc

    lines: list[str] = []
    for line_number, raw_line in enumerate(raw_lines, start=1):
        if not raw_line.strip():
            continue
        try:
            parse_envelope(raw_line)
        except SerializationError as exc:
            raise PublishError(f"Line {line_number}: {exc}") from exc
        lines.append(raw_line + "\n")
    return lines
