"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from synapse_codegen.configuration import (
    DEFAULT_CONFIG_FILENAME,
    write_placeholder_configuration,
)
from synapse_codegen.diagnostics import format_diagnostics
from synapse_codegen.generation_run import (
    GenerationFailedError,
    GenerationRunError,
    RunOutcome,
    RunRequest,
    execute_generation_run,
)
from synapse_codegen.output_writing import WriteStatus

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class CliError(Exception):
    """Custom CLI error."""


def _source_options(command):
    command = click.option(
        "--output",
        "output_path",
        required=False,
        type=click.Path(dir_okay=False, path_type=str),
        help="Swift file to generate (overrides the configuration file)",
    )(command)
    command = click.option(
        "--source",
        "sources",
        multiple=True,
        type=click.Path(path_type=str),
        help="Rust file or directory to scan; repeatable (overrides the configuration file)",
    )(command)
    command = click.option(
        "--config",
        "config_path",
        required=False,
        type=click.Path(dir_okay=False, path_type=str),
        help=f"Path to YAML generator configuration (defaults to ./{DEFAULT_CONFIG_FILENAME})",
    )(command)
    return command


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="synapse-codegen")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Generate Swift bindings from Rust structures marked for export."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING, format=_LOG_FORMAT, force=True
    )


@cli.command(name="generate")
@_source_options
def generate(config_path: str | None, sources: tuple[str, ...], output_path: str | None) -> None:
    """Generate the Swift file; it is only rewritten when its content changes."""
    outcome = _run(RunRequest(config_path=config_path, sources=sources, output_path=output_path))
    state = "updated" if outcome.status == WriteStatus.WRITTEN else "unchanged"
    click.echo(f"{outcome.output_path} ({state}, {len(outcome.schema_names)} structure(s))")


@cli.command(name="check")
@_source_options
def check(config_path: str | None, sources: tuple[str, ...], output_path: str | None) -> None:
    """Verify that the generated Swift file is up to date without writing it."""
    outcome = _run(
        RunRequest(config_path=config_path, sources=sources, output_path=output_path, check=True)
    )
    if outcome.status == WriteStatus.DRIFT:
        if outcome.diff:
            click.echo(outcome.diff)
        raise CliError(
            f"Generated file is out of date: {outcome.output_path}. Run `synapse-codegen generate`."
        )
    click.echo(f"{outcome.output_path} is up to date")


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML generator configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a YAML generator configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


def _run(request: RunRequest) -> RunOutcome:
    try:
        outcome = execute_generation_run(request)
    except GenerationFailedError as exc:
        click.echo(format_diagnostics(exc.report.diagnostics), err=True)
        raise CliError(str(exc)) from exc
    except GenerationRunError as exc:
        raise CliError(str(exc)) from exc
    if outcome.warnings:
        click.echo(format_diagnostics(outcome.warnings), err=True)
    return outcome


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), prog_name="synapse-codegen", standalone_mode=False)
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
