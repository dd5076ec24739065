"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "message-formatter.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Output configuration template for cuke-message-formatter.
# Replace every <REQUIRED> placeholder before running publish.
# Remove or fill <OPTIONAL> entries only when your setup needs them.

output:
  # A file path, "-" for standard output, or an http(s) URL.
  # URLs accept the http-method (default PUT) and http-content-type query parameters,
  # e.g. https://reports.example.com/upload?http-method=POST&http-content-type=application/x-ndjson
  destination: "<REQUIRED>"
  # verify_tls: true
  # timeout_seconds: <OPTIONAL>
  # max_redirects: 5

logging:
  # One of CRITICAL, ERROR, WARNING, INFO, DEBUG.
  level: WARNING
"""


def build_placeholder_configuration() -> str:
    """Build a YAML output configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder output configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
