"""Expansion of date patterns into voting options.

Given a DatePattern and an inclusive DateRange, generate_date_groups
produces the ordered list of DateGroup voting options. Companion functions
label a group from (pattern, index), format a compact display range, and
count groups or leftover days without building the groups.

Ordering is the contract callers rely on: groups are emitted in strictly
chronological order and labeled 1..n, and the zero-based position of a
group is what the surrounding application uses as its vote key. Trailing
incomplete periods are always dropped, never truncated.

All functions are pure and allocate only local data; they are safe to call
concurrently without locking.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from datetime import date, timedelta
from typing import NoReturn

from datepoll._internal.date_utils import (
    DateLike,
    format_iso,
    inclusive_days,
    iter_days,
    to_day,
)
from datepoll._internal.weekdays import (
    SATURDAY,
    next_weekday_on_or_after,
    weekday_range_name,
    weekday_span,
)
from datepoll.exceptions import UnhandledPatternError
from datepoll.patterns import (
    CustomPattern,
    DatePattern,
    FlexiblePattern,
    LongWeekendPattern,
    TwoWeeksPattern,
    WeekdayRangePattern,
    WeekendPattern,
    WeekPattern,
)
from datepoll.types import DateGroup, DateRange, GroupPreview

_logger = logging.getLogger(__name__)

_MONTH_NAMES = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

_WEEKEND_SPAN = 2


def _unhandled_pattern(pattern: object) -> NoReturn:
    """Fail loudly when a dispatcher meets a variant it does not handle."""
    raise UnhandledPatternError(pattern)


# =============================================================================
# Generation
# =============================================================================


def generate_date_groups(pattern: DatePattern, date_range: DateRange) -> list[DateGroup]:
    """Expand a pattern over a date range into voting options.

    Args:
        pattern: Validated date pattern.
        date_range: Inclusive range of days. An inverted range yields no
            groups.

    Returns:
        Groups in chronological order. Each carries the label for its
        1-based position and its compact display range.

    Raises:
        UnhandledPatternError: If the pattern is not a known variant.

    Example:
        ```python
        groups = generate_date_groups(
            WeekendPattern(), DateRange.from_strings("2025-01-18", "2025-01-26")
        )
        [g.label for g in groups]  # ["Weekend 1", "Weekend 2"]
        ```
    """
    match pattern:
        case FlexiblePattern():
            spans = ((day, day) for day in iter_days(date_range.start, date_range.end))
        case WeekendPattern():
            spans = _weekly_spans(date_range, SATURDAY, _WEEKEND_SPAN)
        case WeekdayRangePattern(start_day=start_day, end_day=end_day):
            spans = _weekly_spans(
                date_range, start_day, weekday_span(start_day, end_day)
            )
        case WeekPattern() | TwoWeeksPattern() | LongWeekendPattern() | CustomPattern():
            spans = _chunk_spans(date_range, get_pattern_days(pattern))
        case _:
            _unhandled_pattern(pattern)

    groups = [
        _build_group(pattern, index, first, last)
        for index, (first, last) in enumerate(spans, start=1)
    ]
    _logger.debug(
        "Generated %d %s groups for %s..%s",
        len(groups),
        pattern.type,
        format_iso(date_range.start),
        format_iso(date_range.end),
    )
    return groups


def _weekly_spans(
    date_range: DateRange, first_weekday: int, span: int
) -> Iterator[tuple[date, date]]:
    """Yield (first, last) days of each weekly occurrence that fits.

    Occurrences start on ``first_weekday`` and cover ``span`` days. An
    occurrence whose last day falls after the range end is dropped, and
    since every later one ends later still, iteration stops there.
    """
    current = next_weekday_on_or_after(date_range.start, first_weekday)
    length = timedelta(days=span - 1)
    week = timedelta(days=7)
    while current <= date_range.end:
        last = current + length
        if last > date_range.end:
            break
        yield current, last
        current += week


def _chunk_spans(date_range: DateRange, chunk_size: int) -> Iterator[tuple[date, date]]:
    """Yield (first, last) days of consecutive chunks from the range start.

    Only chunks that fit entirely within the range are produced.
    """
    current = date_range.start
    length = timedelta(days=chunk_size - 1)
    step = timedelta(days=chunk_size)
    while current <= date_range.end:
        last = current + length
        if last > date_range.end:
            break
        yield current, last
        current += step


def _build_group(pattern: DatePattern, index: int, first: date, last: date) -> DateGroup:
    """Materialize the group covering ``first`` through ``last``."""
    dates = tuple(format_iso(day) for day in iter_days(first, last))
    return DateGroup(
        dates=dates,
        label=get_group_label(pattern, index),
        range=format_group_range(dates),
    )


# =============================================================================
# Pattern Metadata
# =============================================================================


def get_pattern_days(pattern: DatePattern) -> int:
    """Return the nominal number of days in one group of ``pattern``.

    Args:
        pattern: Validated date pattern.

    Returns:
        2 for weekend, the weekday span for weekday-range, 1 for flexible,
        7 for week, 14 for two-weeks, and ``days`` for long-weekend and
        custom.
    """
    match pattern:
        case WeekendPattern():
            return _WEEKEND_SPAN
        case WeekdayRangePattern(start_day=start_day, end_day=end_day):
            return weekday_span(start_day, end_day)
        case FlexiblePattern():
            return 1
        case WeekPattern():
            return 7
        case TwoWeeksPattern():
            return 14
        case LongWeekendPattern(days=days) | CustomPattern(days=days):
            return days
        case _:
            _unhandled_pattern(pattern)


def get_group_label(pattern: DatePattern, index: int) -> str:
    """Return the display label of the ``index``-th group (1-based).

    Example:
        ```python
        get_group_label(WeekendPattern(), 2)  # "Weekend 2"
        get_group_label(WeekdayRangePattern(start_day=5, end_day=1), 1)  # "Fri-Mon 1"
        ```
    """
    match pattern:
        case WeekendPattern():
            return f"Weekend {index}"
        case WeekdayRangePattern(start_day=start_day, end_day=end_day):
            return get_weekday_range_label(start_day, end_day, index)
        case FlexiblePattern():
            return f"Day {index}"
        case WeekPattern():
            return f"Week {index}"
        case TwoWeeksPattern():
            return f"Fortnight {index}"
        case LongWeekendPattern():
            return f"Long Weekend {index}"
        case CustomPattern():
            return f"Period {index}"
        case _:
            _unhandled_pattern(pattern)


def get_weekday_range_label(start_day: int, end_day: int, index: int) -> str:
    """Return a weekday-range label such as ``"Fri-Sun 1"``."""
    return f"{weekday_range_name(start_day, end_day)} {index}"


# =============================================================================
# Formatting
# =============================================================================


def _month_day(day: date) -> str:
    """Format as ``"Jan 20"`` independent of locale."""
    return f"{_MONTH_NAMES[day.month - 1]} {day.day}"


def format_group_range(dates: Sequence[DateLike]) -> str:
    """Format a sequence of days as a compact display range.

    Only the first and last entries are consulted. Dates, datetimes and
    ``YYYY-MM-DD`` strings are all accepted and give identical output.

    Args:
        dates: Chronological days of a group.

    Returns:
        ``""`` for no dates, ``"Jan 20"`` for one, ``"Jan 20 - 25"`` when
        first and last share a month, otherwise ``"Jan 28 - Feb 3"``.

    Raises:
        InvalidDateError: If an endpoint cannot be interpreted as a date.
    """
    if len(dates) == 0:
        return ""

    first = to_day(dates[0])
    if len(dates) == 1:
        return _month_day(first)

    last = to_day(dates[-1])
    if first.month == last.month:
        return f"{_month_day(first)} - {last.day}"
    return f"{_month_day(first)} - {_month_day(last)}"


# =============================================================================
# Counting
# =============================================================================


def count_possible_groups(pattern: DatePattern, date_range: DateRange) -> int:
    """Count the groups generate_date_groups would produce, without building them.

    Args:
        pattern: Validated date pattern.
        date_range: Inclusive range of days.

    Returns:
        Number of complete groups; always equal to
        ``len(generate_date_groups(pattern, date_range))``.
    """
    match pattern:
        case WeekendPattern():
            count = _count_weekly(date_range, SATURDAY, _WEEKEND_SPAN)
        case WeekdayRangePattern(start_day=start_day, end_day=end_day):
            count = _count_weekly(date_range, start_day, weekday_span(start_day, end_day))
        case FlexiblePattern():
            count = inclusive_days(date_range.start, date_range.end)
        case WeekPattern() | TwoWeeksPattern() | LongWeekendPattern() | CustomPattern():
            total = inclusive_days(date_range.start, date_range.end)
            count = total // get_pattern_days(pattern)
        case _:
            _unhandled_pattern(pattern)
    return count


def _count_weekly(date_range: DateRange, first_weekday: int, span: int) -> int:
    """Count weekly occurrences of a span that fit within the range."""
    first = next_weekday_on_or_after(date_range.start, first_weekday)
    latest_start = date_range.end - timedelta(days=span - 1)
    if first > latest_start:
        return 0
    return (latest_start - first).days // 7 + 1


def get_remaining_days(pattern: DatePattern, date_range: DateRange) -> int:
    """Return leftover days that do not fill a whole fixed-size chunk.

    Weekday-aligned patterns and flexible have no remainder concept and
    always return 0; days outside complete weekly periods are reported by
    uncovered_days instead.
    """
    match pattern:
        case WeekendPattern() | WeekdayRangePattern() | FlexiblePattern():
            return 0
        case WeekPattern() | TwoWeeksPattern() | LongWeekendPattern() | CustomPattern():
            total = inclusive_days(date_range.start, date_range.end)
            return total % get_pattern_days(pattern)
        case _:
            _unhandled_pattern(pattern)


def uncovered_days(groups: Sequence[DateGroup], date_range: DateRange) -> list[str]:
    """Return ISO days inside the range that no group covers.

    This is the actual gap left by a pattern, including leading days
    before the first weekly occurrence and trailing incomplete periods.
    """
    covered = {day for group in groups for day in group.dates}
    return [
        iso
        for iso in (format_iso(day) for day in iter_days(date_range.start, date_range.end))
        if iso not in covered
    ]


def preview_groups(pattern: DatePattern, date_range: DateRange) -> GroupPreview:
    """Summarize what a pattern would produce over a range.

    Args:
        pattern: Validated date pattern.
        date_range: Inclusive range of days.

    Returns:
        GroupPreview with count, nominal span, remainder and uncovered days.
    """
    groups = generate_date_groups(pattern, date_range)
    return GroupPreview(
        pattern_type=pattern.type,
        group_count=count_possible_groups(pattern, date_range),
        pattern_days=get_pattern_days(pattern),
        remaining_days=get_remaining_days(pattern, date_range),
        uncovered_days=tuple(uncovered_days(groups, date_range)),
    )
