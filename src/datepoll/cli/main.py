"""CLI entry point for datepoll.

This module provides the `datepoll` command-line interface. It defines
global options and registers command groups.

Usage:
    datepoll [OPTIONS] COMMAND [ARGS]...

Examples:
    datepoll --help
    datepoll groups generate --from 2025-01-18 --to 2025-01-26 --pattern weekend
    datepoll groups count --from 2025-01-01 --to 2025-03-31 --pattern fri-mon
    datepoll config set max_range_days 730
"""

from __future__ import annotations

import signal
import sys
from typing import Annotated

import typer

import datepoll
from datepoll.cli.utils import ExitCode, configure_logging, err_console

app = typer.Typer(
    name="datepoll",
    help="Date poll CLI - turn date ranges into voting options.",
    epilog="""[dim]Patterns:[/dim]
  [cyan]Weekday-aligned:[/cyan] weekend, fri-sun, fri-mon, weekday-range:S-E
  [cyan]Fixed chunks:[/cyan]    week, two-weeks, long-weekend:N, custom:N
  [cyan]Every day:[/cyan]       flexible""",
    no_args_is_help=True,
    add_completion=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        print(f"datepoll version {datepoll.__version__}")
        raise typer.Exit()


def _handle_interrupt(_signum: int, _frame: object) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    err_console.print("\n[yellow]Interrupted[/yellow]")
    sys.exit(ExitCode.INTERRUPTED)


signal.signal(signal.SIGINT, _handle_interrupt)


@app.callback()
def main(
    ctx: typer.Context,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress progress output.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug output.",
        ),
    ] = False,
    _version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Date poll CLI - turn date ranges into voting options.

    Preview how a date pattern splits a range into groups before
    committing a poll to it, and manage the limits and defaults used
    when polls are created.
    """
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["verbose"] = verbose
    ctx.obj["config"] = None
    ctx.obj["settings"] = None


def _register_commands() -> None:
    """Register all command groups with the main app."""
    from datepoll.cli.commands.config import config_app
    from datepoll.cli.commands.groups import groups_app

    app.add_typer(groups_app, name="groups", help="Generate and inspect date groups.")
    app.add_typer(config_app, name="config", help="Show and change settings.")


_register_commands()


if __name__ == "__main__":
    app()
