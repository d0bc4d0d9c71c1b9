"""Settings management commands.

This module provides commands for the persisted configuration:
- show: Display the resolved settings
- set: Change one setting
- reset: Remove the config file
"""

from __future__ import annotations

from typing import Annotated

import typer

from datepoll.cli.options import FormatOption
from datepoll.cli.utils import (
    get_config,
    handle_errors,
    output_result,
    status,
)
from datepoll.cli.validators import parse_setting_value
from datepoll.patterns import pattern_from_name

config_app = typer.Typer(
    name="config",
    help="Show and change settings.",
    no_args_is_help=True,
    rich_markup_mode="markdown",
)


@config_app.command("show")
@handle_errors
def show(
    ctx: typer.Context,
    format: FormatOption = "json",
) -> None:
    """Display the resolved settings.

    Values come from DATEPOLL_MAX_RANGE_DAYS, then the config file, then
    the built-in defaults.

    Examples:

        datepoll config show
        datepoll config show --format plain
    """
    config = get_config(ctx)
    data = config.load().to_dict()
    data["config_path"] = str(config.config_path)
    output_result(ctx, data, format=format)


@config_app.command("set")
@handle_errors
def set_value(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Setting name.")],
    value: Annotated[str, typer.Argument(help="New value.")],
    format: FormatOption = "json",
) -> None:
    """Change one setting in the config file.

    default_pattern accepts the same names as --pattern.

    Examples:

        datepoll config set max_range_days 730
        datepoll config set allow_maybe false
        datepoll config set default_pattern fri-mon
    """
    parsed = parse_setting_value(value)
    if key == "default_pattern" and isinstance(parsed, str):
        parsed = pattern_from_name(parsed).to_dict()

    config = get_config(ctx)
    settings = config.set_value(key, parsed)
    status(ctx, f"Saved {key} to {config.config_path}")
    output_result(ctx, settings.to_dict(), format=format)


@config_app.command("reset")
@handle_errors
def reset(ctx: typer.Context) -> None:
    """Remove the config file, reverting to defaults.

    Examples:

        datepoll config reset
    """
    config = get_config(ctx)
    config.reset()
    status(ctx, f"Removed {config.config_path}")
