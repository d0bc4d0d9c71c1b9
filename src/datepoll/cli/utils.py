"""CLI utility functions and error handling.

This module provides shared utilities for the CLI:
- ExitCode enum for standardized exit codes
- handle_errors decorator for exception-to-exit-code mapping
- Console instances for stdout/stderr separation
- Lazy config/settings initialization helpers
- configure_logging for --verbose
"""

from __future__ import annotations

import functools
import logging
import os
from collections.abc import Callable
from enum import IntEnum
from typing import TYPE_CHECKING, Any, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler

from datepoll.exceptions import (
    ConfigError,
    DatePollError,
    DateRangeTooLargeError,
    InvalidDateError,
    InvalidPatternError,
    InvalidResponseError,
    UnhandledPatternError,
)

if TYPE_CHECKING:
    from datepoll._internal.config import ConfigManager, Settings

# Data output goes to stdout; progress/errors go to stderr
console = Console()
err_console = Console(stderr=True, no_color=bool(os.environ.get("NO_COLOR")))


class ExitCode(IntEnum):
    """Standardized exit codes for CLI commands.

    Exit codes follow Unix conventions:
    - 0: Success
    - 1, 3: Application-specific errors (2 is left to Click usage errors)
    - 130: Interrupted by SIGINT (Ctrl+C)
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    INVALID_ARGS = 3
    INTERRUPTED = 130


F = TypeVar("F", bound=Callable[..., Any])


def handle_errors(func: F) -> F:
    """Decorator to convert library exceptions to CLI exit codes.

    Maps DatePollError subclasses to appropriate exit codes and
    displays formatted error messages to stderr.

    Usage:
        @handle_errors
        def my_command(ctx: typer.Context):
            settings = get_settings(ctx)
            output_result(ctx, data)
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except InvalidPatternError as e:
            err_console.print(f"[red]Invalid pattern:[/red] {e.message}")
            for err in e.errors[1:]:
                loc = ".".join(err["loc"])
                err_console.print(f"  [dim]{loc}:[/dim] {err['msg']}")
            raise typer.Exit(ExitCode.INVALID_ARGS) from None
        except InvalidDateError as e:
            err_console.print(f"[red]Invalid date:[/red] {e.message}")
            raise typer.Exit(ExitCode.INVALID_ARGS) from None
        except DateRangeTooLargeError as e:
            err_console.print(f"[red]Date range too large:[/red] {e.message}")
            err_console.print(
                "Narrow the range or raise the limit with "
                "'datepoll config set max_range_days N'."
            )
            raise typer.Exit(ExitCode.INVALID_ARGS) from None
        except InvalidResponseError as e:
            err_console.print(f"[red]Invalid response:[/red] {e.message}")
            raise typer.Exit(ExitCode.INVALID_ARGS) from None
        except ConfigError as e:
            err_console.print(f"[red]Configuration error:[/red] {e.message}")
            raise typer.Exit(ExitCode.GENERAL_ERROR) from None
        except UnhandledPatternError as e:
            err_console.print(f"[red]Internal error:[/red] {e.message}")
            raise typer.Exit(ExitCode.GENERAL_ERROR) from None
        except DatePollError as e:
            err_console.print(f"[red]Error:[/red] {e.message}")
            raise typer.Exit(ExitCode.GENERAL_ERROR) from None
        except ValueError as e:
            err_console.print(f"[red]Invalid argument:[/red] {e}")
            raise typer.Exit(ExitCode.INVALID_ARGS) from None

    return wrapper  # type: ignore[return-value]


def configure_logging(verbose: bool) -> None:
    """Route datepoll debug logging to stderr when verbose.

    Installs a single RichHandler on the ``datepoll`` logger. Calling it
    again (as the test runner does per invocation) replaces the handler
    rather than stacking another one.
    """
    logger = logging.getLogger("datepoll")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    if not verbose:
        logger.setLevel(logging.NOTSET)
        return

    handler = RichHandler(console=err_console, show_path=False, show_time=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


def get_config(ctx: typer.Context) -> ConfigManager:
    """Get or create ConfigManager from context.

    Lazily initializes a ConfigManager instance. The instance is
    cached in the context for reuse.

    Args:
        ctx: Typer context with global options in obj dict.

    Returns:
        ConfigManager instance.
    """
    from datepoll._internal.config import ConfigManager

    if "config" not in ctx.obj or ctx.obj["config"] is None:
        ctx.obj["config"] = ConfigManager()
    config: ConfigManager = ctx.obj["config"]
    return config


def get_settings(ctx: typer.Context) -> Settings:
    """Load settings once per invocation and cache them in the context.

    Raises:
        ConfigError: If the config file or an environment override is
            invalid.
    """
    if ctx.obj.get("settings") is None:
        ctx.obj["settings"] = get_config(ctx).load()
    settings: Settings = ctx.obj["settings"]
    return settings


def output_result(
    ctx: typer.Context,
    data: dict[str, Any] | list[Any],
    columns: list[str] | None = None,
    *,
    format: str | None = None,
) -> None:
    """Output data in the requested format.

    Routes data to the appropriate formatter based on the --format
    option. Supports json, jsonl, table, csv, and plain formats.

    Args:
        ctx: Typer context with global options in obj dict.
        data: Data to output (dict or list).
        columns: Column names for table format (auto-detected if None).
        format: Output format. If None, falls back to ctx.obj["format"] or "json".
    """
    from datepoll.cli.formatters import (
        format_csv,
        format_json,
        format_jsonl,
        format_plain,
        format_table,
    )

    fmt = format if format is not None else ctx.obj.get("format", "json")

    if fmt == "jsonl":
        console.print(format_jsonl(data), highlight=False)
    elif fmt == "table":
        console.print(format_table(data, columns))
    elif fmt == "csv":
        console.print(format_csv(data), highlight=False, end="")
    elif fmt == "plain":
        console.print(format_plain(data), highlight=False)
    else:
        console.print(format_json(data), highlight=False)


def status(ctx: typer.Context, message: str) -> None:
    """Print a progress note to stderr unless --quiet was given."""
    if not ctx.obj.get("quiet", False):
        err_console.print(f"[dim]{message}[/dim]")
