"""Date group commands.

This module provides commands for previewing how a pattern partitions
a date range:
- generate: List the groups a pattern produces
- count: Summarize group count, span and leftover days
- options: Show the voting options a poll would persist
- label: Show the label of the Nth group
- range: Format days as a compact display range
"""

from __future__ import annotations

from typing import Annotated

import typer

from datepoll._internal.date_utils import check_range_width
from datepoll.cli.options import (
    FormatOption,
    FromDateOption,
    PatternOption,
    ToDateOption,
)
from datepoll.cli.utils import (
    get_settings,
    handle_errors,
    output_result,
    status,
)
from datepoll.cli.validators import resolve_pattern, resolve_range
from datepoll.groups import (
    format_group_range,
    generate_date_groups,
    get_group_label,
    preview_groups,
)
from datepoll.patterns import pattern_from_name
from datepoll.poll import build_poll_dates, voting_options

groups_app = typer.Typer(
    name="groups",
    help="Generate and inspect date groups.",
    no_args_is_help=True,
    rich_markup_mode="markdown",
)


@groups_app.command("generate")
@handle_errors
def generate(
    ctx: typer.Context,
    from_date: FromDateOption,
    to_date: ToDateOption,
    pattern: PatternOption = None,
    format: FormatOption = "json",
) -> None:
    """List the groups a pattern produces over a date range.

    Groups are chronological; trailing periods that do not fit the
    range are dropped.

    Examples:

        datepoll groups generate --from 2025-01-18 --to 2025-01-26 -p weekend
        datepoll groups generate --from 2025-01-01 --to 2025-01-31 -p custom:5 -f table
    """
    settings = get_settings(ctx)
    date_pattern = resolve_pattern(pattern, settings)
    date_range = resolve_range(from_date, to_date)
    check_range_width(date_range, settings.max_range_days)

    groups = generate_date_groups(date_pattern, date_range)
    status(ctx, f"{len(groups)} {date_pattern.type} groups")

    data = [
        {
            "index": index,
            "label": group.label,
            "range": group.range,
            "days": len(group),
            "dates": list(group.dates),
        }
        for index, group in enumerate(groups, start=1)
    ]
    output_result(
        ctx, data, columns=["index", "label", "range", "days"], format=format
    )


@groups_app.command("count")
@handle_errors
def count(
    ctx: typer.Context,
    from_date: FromDateOption,
    to_date: ToDateOption,
    pattern: PatternOption = None,
    format: FormatOption = "json",
) -> None:
    """Summarize what a pattern would produce over a date range.

    Reports the number of groups, the nominal days per group, the
    leftover days of fixed-size chunks, and every day no group covers.

    Examples:

        datepoll groups count --from 2025-01-01 --to 2025-03-31 -p fri-mon
        datepoll groups count --from 2025-01-01 --to 2025-01-31 -p week -f table
    """
    settings = get_settings(ctx)
    date_pattern = resolve_pattern(pattern, settings)
    date_range = resolve_range(from_date, to_date)
    check_range_width(date_range, settings.max_range_days)

    preview = preview_groups(date_pattern, date_range)
    output_result(ctx, preview.to_dict(), format=format)


@groups_app.command("options")
@handle_errors
def options(
    ctx: typer.Context,
    from_date: FromDateOption,
    to_date: ToDateOption,
    pattern: PatternOption = None,
    exclude: Annotated[
        list[int] | None,
        typer.Option(
            "--exclude",
            "-x",
            help="Zero-based index of a generated group to leave out (repeatable).",
        ),
    ] = None,
    format: FormatOption = "json",
) -> None:
    """Show the voting options a new poll would persist.

    Option keys are the ISO date for flexible polls and the zero-based
    position for pattern polls. Excluded groups are dropped before the
    remaining ones are numbered.

    Examples:

        datepoll groups options --from 2025-01-18 --to 2025-02-02 -p weekend
        datepoll groups options --from 2025-01-18 --to 2025-02-02 -p weekend -x 1
    """
    settings = get_settings(ctx)
    date_pattern = resolve_pattern(pattern, settings)
    date_range = resolve_range(from_date, to_date)

    dates = build_poll_dates(
        date_pattern,
        date_range,
        exclude or (),
        max_range_days=settings.max_range_days,
    )
    data = [option.to_dict() for option in voting_options(dates, date_pattern)]
    output_result(ctx, data, columns=["key", "label", "sublabel"], format=format)


@groups_app.command("label")
@handle_errors
def label(
    ctx: typer.Context,
    index: Annotated[int, typer.Argument(help="1-based group position.", min=1)],
    pattern: Annotated[
        str,
        typer.Option("--pattern", "-p", help="Pattern name or JSON object."),
    ],
    format: FormatOption = "json",
) -> None:
    """Show the label of the INDEX-th group of a pattern.

    Examples:

        datepoll groups label 2 -p weekend
        datepoll groups label 1 -p weekday-range:5-1 -f plain
    """
    date_pattern = pattern_from_name(pattern)
    output_result(
        ctx,
        {"index": index, "label": get_group_label(date_pattern, index)},
        format=format,
    )


@groups_app.command("range")
@handle_errors
def range_(
    ctx: typer.Context,
    dates: Annotated[
        list[str],
        typer.Argument(help="Chronological days (YYYY-MM-DD); ends are used."),
    ],
    format: FormatOption = "json",
) -> None:
    """Format days as a compact display range.

    Examples:

        datepoll groups range 2025-01-20 2025-01-25
        datepoll groups range 2025-01-28 2025-02-03 -f plain
    """
    output_result(
        ctx,
        {"days": len(dates), "range": format_group_range(dates)},
        format=format,
    )
