"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from cuke_message_formatter.configuration import (
    DEFAULT_CONFIG_FILENAME,
    write_placeholder_configuration,
)
from cuke_message_formatter.stream_publishing import (
    PublishError,
    PublishRequest,
    publish_message_stream,
)

_QUIET_CLIENT_LOGGERS = ("httpx", "httpcore")


class CliError(Exception):
    """Custom CLI error."""


def configure_logging(verbose: bool) -> None:
    """Configure root logging; HTTP client chatter stays at WARNING unless verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    for name in _QUIET_CLIENT_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="cuke-message-formatter")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Cucumber message stream formatter utility."""
    configure_logging(verbose)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML output configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML output configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="publish")
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="NDJSON message stream to publish, or '-' for standard input",
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON output configuration file",
)
@click.option(
    "--out",
    "destination",
    required=False,
    help="File path, '-' or http(s) URL; overrides output.destination from --config",
)
def publish(input_path: str, config_path: str | None, destination: str | None) -> None:
    """Validate a message stream and send it to a file or HTTP endpoint."""
    try:
        outcome = publish_message_stream(
            PublishRequest(
                input_path=input_path,
                config_path=config_path,
                destination=destination,
            )
        )
    except PublishError as exc:
        raise CliError(str(exc)) from exc
    if outcome.destination != "-":
        click.echo(f"{outcome.envelope_count} envelopes published to {outcome.destination}")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
