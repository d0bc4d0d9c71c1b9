"""Poll-level operations over generated date groups.

Bridges the group generator and the surrounding application:

- build_poll_dates decides what gets persisted for a (pattern, range)
  pair, honoring per-group exclusions chosen by the organizer.
- voting_options turns persisted dates back into keyed, labeled options.
- validate_responses and tally_responses check and aggregate ballots.

Response keys are the ISO date in flat (flexible) mode and the zero-based
group index as a string in grouped mode. Both are derived from the same
ordering generate_date_groups produces, so keys stay stable between
generation and redisplay.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import TypeGuard, cast, get_args

from pydantic import BaseModel, ConfigDict

from datepoll._internal.config import DEFAULT_MAX_RANGE_DAYS, Settings
from datepoll._internal.date_utils import (
    check_range_width,
    format_iso,
    iter_days,
    parse_iso_date,
)
from datepoll._internal.weekdays import WEEKDAY_NAMES, sunday_first_weekday
from datepoll._literal_types import VoteResponse
from datepoll.exceptions import InvalidResponseError
from datepoll.groups import format_group_range, generate_date_groups, get_group_label
from datepoll.patterns import DatePattern, FlexiblePattern, WeekdayRangePattern
from datepoll.types import (
    DateRange,
    OptionTally,
    PollResults,
    VotingOption,
)

_logger = logging.getLogger(__name__)

PollDates = list[str] | list[list[str]]
"""Persisted poll dates: flat ISO days, or one list of ISO days per group."""

VOTE_RESPONSES: tuple[str, ...] = get_args(VoteResponse)

# Grouped dates persisted without a pattern are labeled as Mon-Sun weeks
_FALLBACK_GROUP_PATTERN = WeekdayRangePattern(start_day=1, end_day=0)


class PollSettings(BaseModel):
    """Per-poll voting and visibility settings.

    Defaults match a newly created poll: maybe answers allowed, partial
    ballots accepted, participants and scores visible to everyone.
    """

    model_config = ConfigDict(frozen=True)

    require_all_dates: bool = False
    """Voters must answer every option."""

    allow_maybe: bool = True
    """Accept "maybe" as a response."""

    hide_participants: bool = False
    """Hide who voted until the viewer has voted."""

    hide_scores: bool = False
    """Hide tallies until the viewer has voted."""

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: bool) -> PollSettings:
        """Build poll settings seeded from the configured defaults."""
        values = {
            "allow_maybe": settings.allow_maybe,
            "require_all_dates": settings.require_all_dates,
        }
        values.update(overrides)
        return cls(**values)


def is_grouped_dates(
    dates: Sequence[str] | Sequence[Sequence[str]],
) -> TypeGuard[Sequence[Sequence[str]]]:
    """Return True if persisted dates are in grouped (pattern) form."""
    return len(dates) > 0 and not isinstance(dates[0], str)


def build_poll_dates(
    pattern: DatePattern,
    date_range: DateRange,
    exclude: Iterable[int] = (),
    *,
    max_range_days: int = DEFAULT_MAX_RANGE_DAYS,
) -> PollDates:
    """Compute the dates to persist for a new poll.

    Args:
        pattern: Validated date pattern.
        date_range: Inclusive range selected by the organizer.
        exclude: Zero-based indices of generated groups the organizer
            deselected. Ignored in flexible mode.
        max_range_days: Widest range accepted.

    Returns:
        A flat list of ISO days for flexible, otherwise one list of ISO
        days per kept group, in chronological order.

    Raises:
        DateRangeTooLargeError: If the range is wider than max_range_days.
    """
    check_range_width(date_range, max_range_days)

    if isinstance(pattern, FlexiblePattern):
        return [format_iso(day) for day in iter_days(date_range.start, date_range.end)]

    excluded = set(exclude)
    groups = generate_date_groups(pattern, date_range)
    kept = [list(g.dates) for i, g in enumerate(groups) if i not in excluded]
    _logger.debug(
        "Persisting %d of %d %s groups", len(kept), len(groups), pattern.type
    )
    return kept


def _flat_label(iso: str) -> str:
    """Label a single day as ``"Mon, Jan 20"``."""
    day = parse_iso_date(iso)
    return f"{WEEKDAY_NAMES[sunday_first_weekday(day)]}, {format_group_range([day])}"


def voting_options(
    dates: Sequence[str] | Sequence[Sequence[str]],
    pattern: DatePattern | None = None,
) -> list[VotingOption]:
    """Build keyed, labeled voting options from persisted dates.

    Labels are re-derived from (pattern, position) rather than stored,
    so groups left after exclusions are numbered 1..n in order.

    Args:
        dates: Persisted poll dates (flat or grouped).
        pattern: Pattern that produced grouped dates. Grouped dates
            without a pattern are labeled as Mon-Sun ranges.

    Returns:
        One option per persisted entry, in stored order.

    Raises:
        InvalidDateError: If a stored date is malformed.
    """
    if is_grouped_dates(dates):
        label_pattern = pattern if pattern is not None else _FALLBACK_GROUP_PATTERN
        return [
            VotingOption(
                key=str(index),
                label=get_group_label(label_pattern, index + 1),
                sublabel=format_group_range(group),
                dates=tuple(group),
            )
            for index, group in enumerate(dates)
        ]

    flat = cast(Sequence[str], dates)
    return [
        VotingOption(
            key=iso,
            label=_flat_label(iso),
            sublabel=format_group_range([iso]),
            dates=(iso,),
        )
        for iso in flat
    ]


def validate_responses(
    options: Sequence[VotingOption],
    responses: Mapping[str, str | None],
    settings: PollSettings | None = None,
) -> dict[str, VoteResponse]:
    """Check a ballot against a poll's options and settings.

    Unanswered options may be present with a None value; they are dropped
    from the result.

    Args:
        options: The poll's voting options.
        responses: Option key to "yes", "maybe", "no" or None.
        settings: Poll settings. Defaults to PollSettings().

    Returns:
        The cleaned ballot, containing only answered options.

    Raises:
        InvalidResponseError: For unknown keys or values, a disallowed
            "maybe", an empty ballot, or a partial ballot when every
            option must be answered.
    """
    settings = settings or PollSettings()
    valid_keys = {option.key for option in options}

    unknown = sorted(key for key in responses if key not in valid_keys)
    if unknown:
        raise InvalidResponseError(
            f"Unknown voting options: {', '.join(unknown)}",
            reason="unknown_keys",
            keys=unknown,
        )

    cleaned: dict[str, VoteResponse] = {}
    for key, value in responses.items():
        if value is None:
            continue
        if value not in VOTE_RESPONSES:
            raise InvalidResponseError(
                f"Invalid response {value!r} for option {key}",
                reason="invalid_value",
                keys=[key],
            )
        cleaned[key] = cast(VoteResponse, value)

    maybes = [key for key, value in cleaned.items() if value == "maybe"]
    if maybes and not settings.allow_maybe:
        raise InvalidResponseError(
            "This poll does not accept 'maybe' responses",
            reason="maybe_not_allowed",
            keys=maybes,
        )

    if not cleaned:
        raise InvalidResponseError(
            "Respond to at least one option", reason="empty"
        )

    if settings.require_all_dates:
        missing = [option.key for option in options if option.key not in cleaned]
        if missing:
            raise InvalidResponseError(
                "Respond to every option before submitting",
                reason="incomplete",
                keys=missing,
            )

    return cleaned


def tally_responses(
    options: Sequence[VotingOption],
    ballots: Iterable[Mapping[str, str | None]],
) -> PollResults:
    """Count yes/maybe/no answers per option.

    Responses for keys that are not among ``options`` are ignored, which
    keeps old ballots countable after a poll's options change.

    Args:
        options: The poll's voting options.
        ballots: One response mapping per participant.

    Returns:
        PollResults with a tally per option, in option order.
    """
    counts = {option.key: {"yes": 0, "maybe": 0, "no": 0} for option in options}
    voters = 0
    for ballot in ballots:
        voters += 1
        for key, value in ballot.items():
            if key in counts and value in VOTE_RESPONSES:
                counts[key][value] += 1

    tallies = tuple(
        OptionTally(key=option.key, label=option.label, **counts[option.key])
        for option in options
    )
    return PollResults(tallies=tallies, voters=voters)


def results_visible(settings: PollSettings, viewer_has_voted: bool) -> dict[str, bool]:
    """Decide which parts of the results a viewer may see.

    Participants and scores hidden by the poll settings become visible
    once the viewer has cast a vote.

    Returns:
        Mapping with "participants" and "scores" visibility flags.
    """
    return {
        "participants": not settings.hide_participants or viewer_has_voted,
        "scores": not settings.hide_scores or viewer_has_voted,
    }
