"""Weekday arithmetic for weekly-recurring patterns.

Weekdays are numbered Sunday-first (0=Sunday .. 6=Saturday), which is how
patterns are persisted. Python's ``date.weekday()`` is Monday-first, so all
conversions go through :func:`sunday_first_weekday`.
"""

from __future__ import annotations

from datetime import date, timedelta

WEEKDAY_NAMES: tuple[str, ...] = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
"""Weekday abbreviations indexed by Sunday-first weekday number."""

SUNDAY = 0
SATURDAY = 6


def sunday_first_weekday(day: date) -> int:
    """Return the weekday of ``day`` as 0=Sunday .. 6=Saturday."""
    return (day.weekday() + 1) % 7


def weekday_span(start_day: int, end_day: int) -> int:
    """Count the days from start_day to end_day inclusive.

    Wraps forward through the end of the week when ``end_day`` comes before
    ``start_day``, so Fri-Mon (5, 1) covers four days.

    Args:
        start_day: First weekday of the span (0=Sunday .. 6=Saturday).
        end_day: Last weekday of the span (0=Sunday .. 6=Saturday).

    Returns:
        Number of days in the span, between 1 and 7.

    Example:
        ```python
        weekday_span(1, 5)  # Mon-Fri -> 5
        weekday_span(5, 0)  # Fri-Sun -> 3
        weekday_span(3, 3)  # Wed-Wed -> 1
        ```
    """
    if end_day >= start_day:
        return end_day - start_day + 1
    return (7 - start_day) + end_day + 1


def next_weekday_on_or_after(day: date, weekday: int) -> date:
    """Return the first date on or after ``day`` falling on ``weekday``.

    A ``day`` that already falls on ``weekday`` is returned unchanged.

    Args:
        day: Date to search from.
        weekday: Target weekday (0=Sunday .. 6=Saturday).

    Returns:
        The matching date, at most six days after ``day``.
    """
    offset = (weekday - sunday_first_weekday(day)) % 7
    return day + timedelta(days=offset)


def weekday_range_name(start_day: int, end_day: int) -> str:
    """Return the short name of a weekday span, e.g. ``"Fri-Mon"``."""
    return f"{WEEKDAY_NAMES[start_day]}-{WEEKDAY_NAMES[end_day]}"
