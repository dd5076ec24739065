"""Output destination descriptor parsing."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from urllib.parse import parse_qsl, unquote_plus, urlsplit, urlunsplit

STANDARD_STREAM_SENTINEL = "-"
DEFAULT_HTTP_METHOD = "PUT"
HTTP_METHOD_PARAMETER = "http-method"
HTTP_CONTENT_TYPE_PARAMETER = "http-content-type"

_TRANSPORT_PARAMETERS = (HTTP_METHOD_PARAMETER, HTTP_CONTENT_TYPE_PARAMETER)


class DestinationKind(str, Enum):
    """Transport family selected for a destination."""

    FILE = "file"
    STREAM = "stream"
    HTTP = "http"


@dataclass(frozen=True)
class OutputDestination:
    """Destination resolved once when a sink is constructed."""

    kind: DestinationKind
    path: Path | None = None
    url: str | None = None
    method: str = DEFAULT_HTTP_METHOD
    headers: Mapping[str, str] = field(default_factory=dict)
    requested_url: str | None = None


def parse_destination(value: str) -> OutputDestination:
    """Classify a destination string as standard stream, file path or HTTP(S) URL.

    For URLs the `http-method` and `http-content-type` query parameters are
    consumed and removed from the effective request URL.
    """
    candidate = value.strip()
    if not candidate:
        raise ValueError("Output destination must not be empty.")
    if candidate == STANDARD_STREAM_SENTINEL:
        return OutputDestination(kind=DestinationKind.STREAM)
    if urlsplit(candidate).scheme.lower() in ("http", "https"):
        return _parse_http_destination(candidate)
    return OutputDestination(kind=DestinationKind.FILE, path=Path(candidate))


def _parse_http_destination(raw_url: str) -> OutputDestination:
    parts = urlsplit(raw_url)
    transport_options: dict[str, str] = {}
    kept_segments: list[str] = []
    for segment in parts.query.split("&") if parts.query else []:
        name = unquote_plus(segment.split("=", 1)[0])
        if name in _TRANSPORT_PARAMETERS:
            parsed = parse_qsl(segment, keep_blank_values=True)
            transport_options[name] = parsed[0][1] if parsed else ""
            continue
        kept_segments.append(segment)

    method = transport_options.get(HTTP_METHOD_PARAMETER) or DEFAULT_HTTP_METHOD
    headers: dict[str, str] = {}
    if HTTP_CONTENT_TYPE_PARAMETER in transport_options:
        headers["content-type"] = transport_options[HTTP_CONTENT_TYPE_PARAMETER]
    url = urlunsplit(parts._replace(query="&".join(kept_segments)))
    return OutputDestination(
        kind=DestinationKind.HTTP,
        url=url,
        method=method.upper(),
        headers=headers,
        requested_url=raw_url,
    )
