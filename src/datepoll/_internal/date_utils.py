"""Date utilities for day-granularity calendar arithmetic.

Everything in datepoll works on whole calendar days. Inputs may arrive as
``date``, ``datetime`` or ISO ``YYYY-MM-DD`` strings; they are normalized
to ``date`` here before any arithmetic so that time-of-day and DST shifts
can never move a boundary by a day.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING

from datepoll.exceptions import DateRangeTooLargeError, InvalidDateError

if TYPE_CHECKING:
    from datepoll.types import DateRange

DateLike = date | datetime | str
"""Anything that can be normalized to a calendar day."""

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

ONE_DAY = timedelta(days=1)


def parse_iso_date(value: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` string.

    Args:
        value: Date string, zero-padded, dash-separated.

    Returns:
        The calendar date.

    Raises:
        InvalidDateError: If the string is not a valid ``YYYY-MM-DD`` date.
    """
    if not _ISO_DATE_RE.match(value):
        raise InvalidDateError(value)
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise InvalidDateError(value) from e


def is_iso_date(value: str) -> bool:
    """Return True if ``value`` is a valid ``YYYY-MM-DD`` date string."""
    try:
        parse_iso_date(value)
    except InvalidDateError:
        return False
    return True


def to_day(value: DateLike) -> date:
    """Normalize a date-like value to a plain calendar date.

    ``datetime`` values are truncated to their own calendar day (midnight),
    strings are parsed as ``YYYY-MM-DD``.

    Raises:
        InvalidDateError: If ``value`` cannot be interpreted.
    """
    # datetime is a subclass of date, so check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_iso_date(value)
    raise InvalidDateError(value)


def format_iso(day: date) -> str:
    """Format a date as ``YYYY-MM-DD``."""
    return day.strftime("%Y-%m-%d")


def inclusive_days(start: date, end: date) -> int:
    """Number of days in ``[start, end]``, or 0 when the range is inverted."""
    return max((end - start).days + 1, 0)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every day from ``start`` through ``end`` inclusive.

    Yields nothing when ``start`` is after ``end``.
    """
    current = start
    while current <= end:
        yield current
        current += ONE_DAY


def check_range_width(date_range: DateRange, max_days: int) -> None:
    """Reject a range wider than ``max_days``.

    Generation is linear in the width of the range, so callers that accept
    ranges from users guard with this before expanding them.

    Args:
        date_range: Range to check.
        max_days: Widest allowed range, in days.

    Raises:
        DateRangeTooLargeError: If the range spans more than ``max_days``.
    """
    days = inclusive_days(date_range.start, date_range.end)
    if days > max_days:
        raise DateRangeTooLargeError(
            format_iso(date_range.start),
            format_iso(date_range.end),
            days_requested=days,
            max_days=max_days,
        )
