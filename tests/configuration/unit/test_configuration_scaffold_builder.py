"""Configuration scaffold builder tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from cuke_message_formatter.configuration import load_configuration
from cuke_message_formatter.configuration.config_scaffold_builder import (
    build_placeholder_configuration,
    write_placeholder_configuration,
)


def test_build_placeholder_configuration_contains_all_supported_sections() -> None:
    scaffold = build_placeholder_configuration()

    assert "Output configuration template" in scaffold
    assert "output:" in scaffold
    assert "destination:" in scaffold
    assert "http-method" in scaffold
    assert "http-content-type" in scaffold
    assert "logging:" in scaffold
    assert "<REQUIRED>" in scaffold
    assert "<OPTIONAL>" in scaffold


def test_write_placeholder_configuration_writes_loadable_file(tmp_path: Path) -> None:
    output_path = tmp_path / "config.yaml"

    written_path = write_placeholder_configuration(output_path)

    assert written_path == output_path.resolve()
    configuration = load_configuration(output_path)
    assert configuration.output.destination.endswith("<REQUIRED>")
    assert configuration.logging.level == "WARNING"


def test_write_placeholder_configuration_fails_when_file_exists(tmp_path: Path) -> None:
    output_path = tmp_path / "config.yaml"
    output_path.write_text("existing", encoding="utf-8")

    with pytest.raises(FileExistsError):
        write_placeholder_configuration(output_path)

    assert output_path.read_text(encoding="utf-8") == "existing"
