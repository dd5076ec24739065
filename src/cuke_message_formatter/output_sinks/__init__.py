"""Output sink exports."""

from .destination import (
    DEFAULT_HTTP_METHOD,
    DestinationKind,
    OutputDestination,
    parse_destination,
)
from .file_output import FileOutput, MessageOutput, StreamOutput
from .http_output import DEFAULT_MAX_REDIRECTS, HttpOutput
from .output_factory import open_output
from .sink_errors import HttpStatusError, OutputSinkError, RedirectLoopError, SinkTransportError

__all__ = [
    "DEFAULT_HTTP_METHOD",
    "DEFAULT_MAX_REDIRECTS",
    "DestinationKind",
    "OutputDestination",
    "parse_destination",
    "FileOutput",
    "MessageOutput",
    "StreamOutput",
    "HttpOutput",
    "open_output",
    "OutputSinkError",
    "SinkTransportError",
    "HttpStatusError",
    "RedirectLoopError",
]
