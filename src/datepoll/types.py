"""Value types for datepoll operations.

All types are immutable frozen dataclasses with:
- JSON serialization via the `to_dict()` method (all values JSON-serializable)
- Full type hints for IDE/mypy support

Immutability: These dataclasses are frozen, meaning their attributes cannot be
modified after construction. This makes them safe to share between threads
and requests. If you need a modified value, create a new instance.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from datepoll._internal.date_utils import (
    format_iso,
    inclusive_days,
    iter_days,
    to_day,
)
from datepoll._literal_types import PatternType, VoteResponse


# =============================================================================
# Ranges and Groups
# =============================================================================


@dataclass(frozen=True)
class DateRange:
    """An inclusive range of calendar days.

    Both ends are normalized to plain dates on construction, so a
    ``datetime`` carrying a time of day (or a DST offset) cannot shift
    any boundary. A range whose start is after its end is allowed and
    simply contains no days.

    Attributes:
        start: First day of the range.
        end: Last day of the range (inclusive).

    Example:
        ```python
        r = DateRange.from_strings("2025-01-20", "2025-01-26")
        r.days  # 7
        ```
    """

    start: date
    """First day of the range."""

    end: date
    """Last day of the range (inclusive)."""

    def __post_init__(self) -> None:
        """Normalize both ends to day granularity."""
        object.__setattr__(self, "start", to_day(self.start))
        object.__setattr__(self, "end", to_day(self.end))

    @classmethod
    def from_strings(cls, start: str, end: str) -> DateRange:
        """Build a range from two ``YYYY-MM-DD`` strings.

        Raises:
            InvalidDateError: If either string is not a valid date.
        """
        return cls(to_day(start), to_day(end))

    @property
    def days(self) -> int:
        """Inclusive number of days (0 for an inverted range)."""
        return inclusive_days(self.start, self.end)

    @property
    def is_empty(self) -> bool:
        """True when start is after end."""
        return self.start > self.end

    def __iter__(self) -> Iterator[date]:
        """Iterate over every day in the range."""
        return iter_days(self.start, self.end)

    def __contains__(self, item: object) -> bool:
        """Return True if a date falls within the range."""
        if not isinstance(item, date):
            return False
        return self.start <= to_day(item) <= self.end

    def to_dict(self) -> dict[str, Any]:
        """Serialize range for JSON output.

        Returns:
            Dictionary with ISO start, end and inclusive day count.
        """
        return {
            "start": format_iso(self.start),
            "end": format_iso(self.end),
            "days": self.days,
        }


@dataclass(frozen=True)
class DateGroup:
    """One voting option produced by expanding a pattern over a range.

    Attributes:
        dates: ISO ``YYYY-MM-DD`` days, chronological, never empty.
        label: Display label such as "Weekend 2" or "Fri-Mon 1".
        range: Compact display range such as "Jan 28 - Feb 3".
    """

    dates: tuple[str, ...]
    """ISO days covered by this option."""

    label: str
    """Display label derived from (pattern, 1-based index)."""

    range: str
    """Compact display range of the first and last day."""

    @property
    def first(self) -> str:
        """First day of the group."""
        return self.dates[0]

    @property
    def last(self) -> str:
        """Last day of the group."""
        return self.dates[-1]

    def __len__(self) -> int:
        """Return number of days in the group."""
        return len(self.dates)

    def to_dict(self) -> dict[str, Any]:
        """Serialize group for JSON output.

        Returns:
            Dictionary with dates (as a list), label and range.
        """
        return {
            "dates": list(self.dates),
            "label": self.label,
            "range": self.range,
        }


@dataclass(frozen=True)
class GroupPreview:
    """Aggregate statistics for a (pattern, range) pair.

    Backs "how many options would this produce" hints before the
    organizer commits to a pattern. The counts come from the counting
    utilities; only uncovered_days is derived from generated groups.
    """

    pattern_type: PatternType
    """Discriminator of the pattern."""

    group_count: int
    """Number of complete groups the range yields."""

    pattern_days: int
    """Nominal days per group."""

    remaining_days: int
    """Leftover days for fixed-chunk patterns (0 otherwise)."""

    uncovered_days: tuple[str, ...] = field(default_factory=tuple)
    """Days in the range that no group covers."""

    def to_dict(self) -> dict[str, Any]:
        """Serialize preview for JSON output."""
        return {
            "pattern_type": self.pattern_type,
            "group_count": self.group_count,
            "pattern_days": self.pattern_days,
            "remaining_days": self.remaining_days,
            "uncovered_days": list(self.uncovered_days),
        }


# =============================================================================
# Poll Types
# =============================================================================


@dataclass(frozen=True)
class VotingOption:
    """A persisted poll option as presented to voters.

    Attributes:
        key: Response key: the ISO date in flat mode, or the zero-based
            group index as a string in grouped mode.
        label: Primary display label.
        sublabel: Secondary display text (the compact date range).
        dates: ISO days the option covers.
    """

    key: str
    label: str
    sublabel: str
    dates: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        """Serialize option for JSON output."""
        return {
            "key": self.key,
            "label": self.label,
            "sublabel": self.sublabel,
            "dates": list(self.dates),
        }


@dataclass(frozen=True)
class OptionTally:
    """Response counts for one voting option."""

    key: str
    """Response key of the option."""

    label: str
    """Display label of the option."""

    yes: int = 0
    maybe: int = 0
    no: int = 0

    @property
    def responded(self) -> int:
        """Number of participants who answered this option."""
        return self.yes + self.maybe + self.no

    def to_dict(self) -> dict[str, Any]:
        """Serialize tally for JSON output."""
        return {
            "key": self.key,
            "label": self.label,
            "yes": self.yes,
            "maybe": self.maybe,
            "no": self.no,
        }


@dataclass(frozen=True)
class PollResults:
    """Aggregated responses for a poll.

    Attributes:
        tallies: One tally per option, in option order.
        voters: Number of ballots counted.
    """

    tallies: tuple[OptionTally, ...]
    voters: int

    def best(self) -> OptionTally | None:
        """Return the leading option.

        Ranks by most "yes", then most "maybe"; ties go to the earliest
        option. Returns None when there are no options or no ballots.
        """
        if not self.tallies or self.voters == 0:
            return None
        # max() keeps the first of equal keys, i.e. the earliest option
        return max(self.tallies, key=lambda t: (t.yes, t.maybe))

    def __len__(self) -> int:
        """Return number of options."""
        return len(self.tallies)

    def __iter__(self) -> Iterator[OptionTally]:
        """Iterate over option tallies."""
        return iter(self.tallies)

    def to_dict(self) -> dict[str, Any]:
        """Serialize results for JSON output."""
        best = self.best()
        return {
            "voters": self.voters,
            "tallies": [t.to_dict() for t in self.tallies],
            "best": best.key if best is not None else None,
        }
