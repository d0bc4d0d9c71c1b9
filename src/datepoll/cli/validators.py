"""CLI parameter validators.

Turns raw option strings into library values. Failures raise the
library's own exceptions so handle_errors reports them with the same
exit codes as errors raised deeper in a command.
"""

from __future__ import annotations

import json
from typing import Any

from datepoll._internal.config import Settings
from datepoll.patterns import DatePattern, pattern_from_name
from datepoll.types import DateRange


def resolve_pattern(value: str | None, settings: Settings) -> DatePattern:
    """Parse a --pattern value, falling back to the configured default.

    Raises:
        InvalidPatternError: If the name or JSON is not a valid pattern.
    """
    if value is None:
        return settings.default_pattern
    return pattern_from_name(value)


def resolve_range(from_date: str, to_date: str) -> DateRange:
    """Build the inclusive range given by --from and --to.

    Raises:
        InvalidDateError: If either value is not a ``YYYY-MM-DD`` date.
    """
    return DateRange.from_strings(from_date.strip(), to_date.strip())


def parse_setting_value(raw: str) -> Any:
    """Interpret a ``config set`` value.

    Integers, ``true``/``false`` and JSON objects or arrays are decoded.
    Anything else stays a string, so pattern names like ``weekend`` go
    through pattern_from_name by the caller.
    """
    text = raw.strip()
    lowered = text.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if text.startswith(("{", "[")):
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"'{raw}' is not valid JSON: {e.msg}") from e
    try:
        return int(text)
    except ValueError:
        return text
