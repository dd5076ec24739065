"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_REDIRECTS,
    Configuration,
    LoggingSettings,
    OutputSettings,
)

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    output = _parse_output_section(parsed.get("output"), path.parent)
    logging_settings = _parse_logging_section(parsed.get("logging"))
    return Configuration(path=path, output=output, logging=logging_settings)


def _parse_output_section(value: Any, base_path: Path) -> OutputSettings:
    section = _require_mapping(value, "output")
    destination = _require_non_empty_string(section.get("destination"), "output.destination")
    verify_tls = _require_bool(section.get("verify_tls", True), "output.verify_tls")
    timeout_seconds = _optional_positive_number(
        section.get("timeout_seconds"), "output.timeout_seconds"
    )
    max_redirects = _require_non_negative_int(
        section.get("max_redirects", DEFAULT_MAX_REDIRECTS), "output.max_redirects"
    )
    return OutputSettings(
        destination=_resolve_destination(base_path, destination),
        verify_tls=verify_tls,
        timeout_seconds=timeout_seconds,
        max_redirects=max_redirects,
    )


def _parse_logging_section(value: Any) -> LoggingSettings:
    if value is None:
        return LoggingSettings()
    section = _require_mapping(value, "logging")
    level = _require_non_empty_string(section.get("level", DEFAULT_LOG_LEVEL), "logging.level")
    normalized = level.upper()
    if normalized not in _LOG_LEVELS:
        raise ConfigurationError(f"logging.level must be one of {', '.join(_LOG_LEVELS)}.")
    return LoggingSettings(level=normalized)


def _resolve_destination(base_path: Path, destination: str) -> str:
    if destination == "-" or "://" in destination:
        return destination
    candidate = Path(destination)
    if not candidate.is_absolute():
        return str((base_path / candidate).resolve())
    return destination


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be true or false.")
    return value


def _optional_positive_number(value: Any, field_name: str) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{field_name} must be a number.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return float(value)


def _require_non_negative_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value < 0:
        raise ConfigurationError(f"{field_name} must not be negative.")
    return value
