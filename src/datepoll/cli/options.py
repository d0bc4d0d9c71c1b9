"""Shared CLI option definitions.

Provides reusable Annotated type aliases for common CLI options
to avoid duplication across commands.
"""

from __future__ import annotations

from typing import Annotated, Literal

import typer

# Output format type for formatting command output
OutputFormat = Literal["json", "jsonl", "table", "csv", "plain"]

FormatOption = Annotated[
    OutputFormat,
    typer.Option(
        "--format",
        "-f",
        help="Output format: json, jsonl, table, csv, plain.",
    ),
]

FromDateOption = Annotated[
    str,
    typer.Option("--from", help="First day of the range (YYYY-MM-DD)."),
]

ToDateOption = Annotated[
    str,
    typer.Option("--to", help="Last day of the range, inclusive (YYYY-MM-DD)."),
]

PatternOption = Annotated[
    str | None,
    typer.Option(
        "--pattern",
        "-p",
        help=(
            "Pattern name (flexible, weekend, week, two-weeks, fri-sun, fri-mon, "
            "long-weekend:N, custom:N, weekday-range:S-E) or a JSON object. "
            "Defaults to the configured default_pattern."
        ),
    ),
]
