"""Date pattern model.

A DatePattern describes how a date range is partitioned into voting
options. It is a closed tagged union discriminated by ``type``; each
variant is a frozen Pydantic model that validates its own fields, so a
pattern that reaches the generator is always well-formed.

Two families are modeled:

- Weekday-aligned patterns (``weekend``, ``weekday-range``) produce one
  option per weekly occurrence of a span of weekdays.
- Fixed-chunk patterns (``week``, ``two-weeks``, ``long-weekend``,
  ``custom``) cut consecutive N-day blocks from the start of the range,
  regardless of weekday.

``flexible`` makes every day its own option.

Example:
    ```python
    pattern = parse_pattern({"type": "weekday-range", "startDay": 5, "endDay": 1})
    pattern.to_dict()  # {"type": "weekday-range", "startDay": 5, "endDay": 1}
    ```
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from datepoll._internal.weekdays import weekday_range_name
from datepoll.exceptions import InvalidPatternError

Weekday = Annotated[int, Field(strict=True, ge=0, le=6)]
"""Sunday-first weekday number (0=Sunday .. 6=Saturday)."""


class _PatternModel(BaseModel):
    """Shared configuration for pattern variants."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted JSON shape (camelCase field names)."""
        return self.model_dump(by_alias=True)


class FlexiblePattern(_PatternModel):
    """Every calendar day in the range is its own option."""

    type: Literal["flexible"] = "flexible"


class WeekendPattern(_PatternModel):
    """Every complete Saturday-Sunday pair is one option."""

    type: Literal["weekend"] = "weekend"


class WeekdayRangePattern(_PatternModel):
    """Every weekly occurrence of a weekday span is one option.

    The span is closed and may wrap past Saturday: ``start_day=5,
    end_day=1`` is Friday through Monday.
    """

    type: Literal["weekday-range"] = "weekday-range"

    start_day: Weekday = Field(alias="startDay")
    """First weekday of the span."""

    end_day: Weekday = Field(alias="endDay")
    """Last weekday of the span."""

    @property
    def name(self) -> str:
        """Short span name, e.g. ``"Fri-Mon"``."""
        return weekday_range_name(self.start_day, self.end_day)


class WeekPattern(_PatternModel):
    """Consecutive 7-day chunks from the start of the range."""

    type: Literal["week"] = "week"


class TwoWeeksPattern(_PatternModel):
    """Consecutive 14-day chunks from the start of the range."""

    type: Literal["two-weeks"] = "two-weeks"


class LongWeekendPattern(_PatternModel):
    """Consecutive 3- or 4-day chunks from the start of the range."""

    type: Literal["long-weekend"] = "long-weekend"

    days: Literal[3, 4]
    """Chunk length in days."""


class CustomPattern(_PatternModel):
    """Consecutive N-day chunks from the start of the range."""

    type: Literal["custom"] = "custom"

    days: Annotated[int, Field(strict=True, ge=1, le=31)]
    """Chunk length in days (1-31)."""


DatePattern = Annotated[
    Union[
        FlexiblePattern,
        WeekendPattern,
        WeekdayRangePattern,
        WeekPattern,
        TwoWeeksPattern,
        LongWeekendPattern,
        CustomPattern,
    ],
    Field(discriminator="type"),
]
"""Any date pattern variant, discriminated by ``type``."""

_PATTERN_ADAPTER: TypeAdapter[DatePattern] = TypeAdapter(DatePattern)

_PATTERN_CLASSES = (
    FlexiblePattern,
    WeekendPattern,
    WeekdayRangePattern,
    WeekPattern,
    TwoWeeksPattern,
    LongWeekendPattern,
    CustomPattern,
)

WEEKDAY_RANGE_PRESETS: dict[str, WeekdayRangePattern] = {
    "fri-sun": WeekdayRangePattern(start_day=5, end_day=0),
    "fri-mon": WeekdayRangePattern(start_day=5, end_day=1),
}
"""Named weekday-range presets offered to organizers."""


def parse_pattern(data: Mapping[str, Any] | str | DatePattern) -> DatePattern:
    """Validate raw pattern data into a DatePattern variant.

    Args:
        data: A mapping in the persisted shape, its JSON text, or an
            already-constructed pattern (returned unchanged).

    Returns:
        The concrete pattern variant.

    Raises:
        InvalidPatternError: If the type is unknown or a field is out of
            bounds.

    Example:
        ```python
        parse_pattern('{"type": "custom", "days": 5}')
        # CustomPattern(type='custom', days=5)
        ```
    """
    if isinstance(data, _PATTERN_CLASSES):
        return data
    try:
        if isinstance(data, str):
            return _PATTERN_ADAPTER.validate_json(data)
        return _PATTERN_ADAPTER.validate_python(dict(data))
    except ValidationError as e:
        errors = [
            {
                "loc": [str(part) for part in err["loc"]],
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in e.errors()
        ]
        first = errors[0]["msg"] if errors else "Invalid pattern"
        raise InvalidPatternError(f"Invalid date pattern: {first}", errors) from e
    except TypeError as e:
        raise InvalidPatternError(
            f"Invalid date pattern: expected a mapping or JSON text, "
            f"got {type(data).__name__}"
        ) from e


def pattern_from_name(name: str) -> DatePattern:
    """Build a pattern from its short command-line name.

    Accepted forms:
        - ``flexible``, ``weekend``, ``week``, ``two-weeks``
        - a preset name from WEEKDAY_RANGE_PRESETS (``fri-sun``, ``fri-mon``)
        - ``long-weekend:N`` and ``custom:N``
        - ``weekday-range:S-E`` with Sunday-first weekday numbers
        - a JSON object in the persisted shape

    Raises:
        InvalidPatternError: If the name is not recognized or the
            resulting pattern is invalid.
    """
    text = name.strip()
    if text.startswith("{"):
        return parse_pattern(text)

    lowered = text.lower()
    if lowered in WEEKDAY_RANGE_PRESETS:
        return WEEKDAY_RANGE_PRESETS[lowered]

    kind, _, arg = lowered.partition(":")
    data: dict[str, Any]
    if not arg:
        data = {"type": kind}
    elif kind in ("long-weekend", "custom"):
        data = {"type": kind, "days": _int_arg(name, arg)}
    elif kind == "weekday-range":
        start, sep, end = arg.partition("-")
        if not sep:
            raise InvalidPatternError(
                f"Invalid date pattern {name!r}: expected weekday-range:START-END"
            )
        data = {
            "type": kind,
            "startDay": _int_arg(name, start),
            "endDay": _int_arg(name, end),
        }
    else:
        raise InvalidPatternError(f"Unknown date pattern {name!r}")
    return parse_pattern(data)


def _int_arg(name: str, value: str) -> int:
    """Parse the numeric part of a short pattern name."""
    try:
        return int(value)
    except ValueError as e:
        raise InvalidPatternError(
            f"Invalid date pattern {name!r}: {value!r} is not a number"
        ) from e


def dump_pattern(pattern: DatePattern) -> str:
    """Serialize a pattern to compact JSON text for storage."""
    return json.dumps(pattern.to_dict(), separators=(",", ":"))
