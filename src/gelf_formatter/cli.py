"""Click command group exposing the formatter on the command line.

Purpose
-------
Convert JSON-lines log records into GELF lines from a shell pipeline, inspect
the severity scale, and print package metadata.

Contents
--------
* :func:`cli` - root group with traceback and ``.env`` toggles.
* ``info`` / ``format`` / ``levels`` subcommands.
* :func:`main` - entry point wrapping :func:`lib_cli_exit_tools.run_cli`.
"""

from __future__ import annotations

import json
import os
from typing import IO, Sequence

import click
import lib_cli_exit_tools
from rich.console import Console
from rich.table import Table

from . import __init__conf__
from . import config as formatter_config
from .composition import formatter_from_settings
from .config import SUPPORTED_VERSIONS, FormatterSettings
from .domain import InvalidSeverity, SeverityLevel

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=False,
    help="Load GELF_* settings from the nearest .env before running commands.",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool) -> None:
    """Root command storing global flags for subcommands."""

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback

    explicit: bool | None = None
    if ctx.get_parameter_source("use_dotenv") is not click.core.ParameterSource.DEFAULT:
        explicit = use_dotenv
    env_toggle = os.getenv(formatter_config.DOTENV_ENV_VAR)
    if formatter_config.should_use_dotenv(explicit=explicit, env_value=env_toggle):
        formatter_config.enable_dotenv()

    if ctx.invoked_subcommand is None:
        click.echo(__init__conf__.summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print resolved metadata so users can inspect installation details."""

    click.echo(__init__conf__.summary_info(), nl=False)


def _resolve_settings(**overrides: object) -> FormatterSettings:
    try:
        return formatter_config.load_settings().replace(**overrides)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc


@cli.command("format", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--system-name", default=None, help="GELF host field (default: GELF_SYSTEM_NAME or the hostname).")
@click.option("--gelf-version", type=click.Choice(SUPPORTED_VERSIONS), default=None, help="GELF protocol version.")
@click.option("--extra-prefix", default=None, help="Prefix for additional fields taken from 'extra'.")
@click.option("--context-prefix", default=None, help="Prefix for additional fields taken from 'context'.")
@click.option("--max-length", type=click.IntRange(min=1), default=None, help="Length budget per oversized field.")
def cli_format(
    source: IO[str],
    system_name: str | None,
    gelf_version: str | None,
    extra_prefix: str | None,
    context_prefix: str | None,
    max_length: int | None,
) -> None:
    """Read JSON-lines records from SOURCE (default stdin) and print GELF lines."""

    settings = _resolve_settings(
        system_name=system_name,
        version=gelf_version,
        extra_prefix=extra_prefix,
        context_prefix=context_prefix,
        max_length=max_length,
    )
    formatter = formatter_from_settings(settings)
    for number, raw in enumerate(source, start=1):
        if not raw.strip():
            continue
        try:
            record = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise click.ClickException(f"line {number}: invalid JSON ({exc.msg})") from exc
        if not isinstance(record, dict):
            raise click.ClickException(f"line {number}: expected a JSON object")
        try:
            click.echo(formatter.format(record), nl=False)
        except InvalidSeverity as exc:
            raise click.ClickException(f"line {number}: {exc}") from exc


@cli.command("levels", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_levels() -> None:
    """Show the syslog severity scale used for the GELF level field."""

    table = Table(title="Syslog severities")
    table.add_column("Level", justify="right")
    table.add_column("Name")
    for level in SeverityLevel:
        table.add_row(str(int(level)), level.severity)
    Console(highlight=False).print(table)


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with error handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]
