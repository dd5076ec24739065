"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_MAX_REDIRECTS = 5
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class OutputSettings:
    """Message stream destination and transport options."""

    destination: str
    verify_tls: bool = True
    timeout_seconds: float | None = None
    max_redirects: int = DEFAULT_MAX_REDIRECTS


@dataclass(frozen=True)
class LoggingSettings:
    """Log verbosity for the command line."""

    level: str = DEFAULT_LOG_LEVEL


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    output: OutputSettings
    logging: LoggingSettings
