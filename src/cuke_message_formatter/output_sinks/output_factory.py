"""Destination-to-sink resolution."""

from __future__ import annotations

import logging
from typing import Any

from cuke_message_formatter.configuration.runtime_settings import OutputSettings

from .destination import DestinationKind, parse_destination
from .file_output import FileOutput, MessageOutput, StreamOutput
from .http_output import HttpOutput

_LOGGER = logging.getLogger(__name__)


def open_output(target: Any, *, settings: OutputSettings | None = None) -> MessageOutput:
    """Open the sink for a path, `-`, an HTTP(S) URL or an already-open writable stream."""
    if hasattr(target, "write"):
        return StreamOutput(target)

    resolved_settings = settings or OutputSettings(destination=str(target))
    destination = parse_destination(str(target))
    _LOGGER.debug("Opening %s output for %s", destination.kind.value, target)
    if destination.kind is DestinationKind.STREAM:
        return StreamOutput()
    if destination.kind is DestinationKind.FILE:
        assert destination.path is not None
        return FileOutput(destination.path)
    return HttpOutput(
        destination,
        verify_tls=resolved_settings.verify_tls,
        timeout_seconds=resolved_settings.timeout_seconds,
        max_redirects=resolved_settings.max_redirects,
    )
