"""Output formatters for CLI commands.

This module provides formatting functions for different output formats:
- JSON: Pretty-printed JSON
- JSONL: Newline-delimited JSON (one object per line)
- Table: Rich table
- CSV: Comma-separated values with headers
- Plain: Minimal text output (one item per line)

Records produced by the commands are flat dicts whose values are strings,
numbers, booleans or lists of ISO dates. Lists are joined with spaces in
table and CSV cells so a row stays on one line.
"""

from __future__ import annotations

import csv
import io
import json
from typing import Any

from rich.table import Table

# Keys tried in order when reducing a record to a single plain-text line
_PLAIN_KEYS = ("label", "range", "key", "value")


def format_json(data: dict[str, Any] | list[Any]) -> str:
    """Format data as pretty-printed JSON with 2-space indentation."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def format_jsonl(data: dict[str, Any] | list[Any]) -> str:
    """Format data as newline-delimited JSON (JSONL).

    For lists, outputs one JSON object per line.
    For dicts, outputs a single JSON object.
    """
    if isinstance(data, list):
        return "\n".join(json.dumps(item, ensure_ascii=False) for item in data)
    return json.dumps(data, ensure_ascii=False)


def _rows(data: dict[str, Any] | list[Any]) -> list[Any]:
    """Treat a single record as a one-row list."""
    return [data] if isinstance(data, dict) else data


def _cell(value: Any) -> str:
    """Render one value for a table or CSV cell."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, list | tuple):
        return " ".join(str(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def format_table(
    data: dict[str, Any] | list[Any],
    columns: list[str] | None = None,
) -> Table:
    """Format data as a Rich table.

    Args:
        data: A record or a list of records.
        columns: Column keys to display. If None, taken from the first row.

    Returns:
        Rich Table object ready for printing.
    """
    table = Table(show_header=True, header_style="bold")
    rows = _rows(data)
    if not rows:
        return table

    if columns is None:
        first = rows[0]
        columns = list(first.keys()) if isinstance(first, dict) else ["value"]

    for col in columns:
        table.add_column(col.upper().replace("_", " "))

    for item in rows:
        if isinstance(item, dict):
            table.add_row(*[_cell(item.get(col)) for col in columns])
        else:
            table.add_row(_cell(item))
    return table


def format_csv(data: dict[str, Any] | list[Any]) -> str:
    """Format data as comma-separated values with a header row.

    Returns:
        CSV text, or an empty string when there are no rows.
    """
    rows = _rows(data)
    if not rows:
        return ""

    output = io.StringIO()
    first = rows[0]
    if isinstance(first, dict):
        writer = csv.DictWriter(output, fieldnames=list(first), extrasaction="ignore")
        writer.writeheader()
        for item in rows:
            writer.writerow({k: _cell(v) for k, v in item.items()})
    else:
        list_writer = csv.writer(output)
        list_writer.writerow(["value"])
        for item in rows:
            list_writer.writerow([_cell(item)])
    return output.getvalue()


def _plain_line(item: Any) -> str:
    if not isinstance(item, dict):
        return str(item)
    for key in _PLAIN_KEYS:
        if key in item:
            return _cell(item[key])
    return _cell(next(iter(item.values()))) if item else ""


def format_plain(data: dict[str, Any] | list[Any]) -> str:
    """Format data as minimal plain text.

    Lists give one line per item: the label of a record when it has one,
    otherwise its range, key or value. A single record without any of
    those keys is printed as ``key=value`` lines.
    """
    if isinstance(data, list):
        return "\n".join(_plain_line(item) for item in data)
    if any(key in data for key in _PLAIN_KEYS):
        return _plain_line(data)
    return "\n".join(f"{k}={_cell(v)}" for k, v in data.items())
