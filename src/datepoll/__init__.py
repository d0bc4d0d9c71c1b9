"""
datepoll - Expand scheduling-poll date patterns into voting options.

Organizers pick a date range and a recurrence pattern (every day, every
weekend, every Fri-Mon, consecutive N-day blocks); datepoll turns that into
an ordered list of labeled voting options and aggregates the responses.
"""

from datepoll._internal.weekdays import WEEKDAY_NAMES, weekday_span
from datepoll._literal_types import PatternType, VoteResponse
from datepoll.exceptions import (
    ConfigError,
    DatePollError,
    DateRangeTooLargeError,
    InvalidDateError,
    InvalidPatternError,
    InvalidResponseError,
    UnhandledPatternError,
)
from datepoll.groups import (
    count_possible_groups,
    format_group_range,
    generate_date_groups,
    get_group_label,
    get_pattern_days,
    get_remaining_days,
    get_weekday_range_label,
    preview_groups,
    uncovered_days,
)
from datepoll.patterns import (
    WEEKDAY_RANGE_PRESETS,
    CustomPattern,
    DatePattern,
    FlexiblePattern,
    LongWeekendPattern,
    TwoWeeksPattern,
    WeekdayRangePattern,
    WeekendPattern,
    WeekPattern,
    dump_pattern,
    parse_pattern,
    pattern_from_name,
)
from datepoll.poll import (
    PollDates,
    PollSettings,
    build_poll_dates,
    is_grouped_dates,
    results_visible,
    tally_responses,
    validate_responses,
    voting_options,
)
from datepoll.types import (
    DateGroup,
    DateRange,
    GroupPreview,
    OptionTally,
    PollResults,
    VotingOption,
)

__version__ = "0.1.0"

__all__ = [
    # Generation
    "generate_date_groups",
    "get_group_label",
    "get_weekday_range_label",
    "format_group_range",
    "get_pattern_days",
    "count_possible_groups",
    "get_remaining_days",
    "uncovered_days",
    "preview_groups",
    "weekday_span",
    "WEEKDAY_NAMES",
    # Patterns
    "DatePattern",
    "PatternType",
    "FlexiblePattern",
    "WeekendPattern",
    "WeekdayRangePattern",
    "WeekPattern",
    "TwoWeeksPattern",
    "LongWeekendPattern",
    "CustomPattern",
    "WEEKDAY_RANGE_PRESETS",
    "parse_pattern",
    "dump_pattern",
    "pattern_from_name",
    # Poll
    "PollDates",
    "PollSettings",
    "build_poll_dates",
    "is_grouped_dates",
    "voting_options",
    "validate_responses",
    "tally_responses",
    "results_visible",
    # Types
    "DateRange",
    "DateGroup",
    "GroupPreview",
    "VotingOption",
    "OptionTally",
    "PollResults",
    "VoteResponse",
    # Exceptions
    "DatePollError",
    "ConfigError",
    "InvalidPatternError",
    "InvalidDateError",
    "DateRangeTooLargeError",
    "UnhandledPatternError",
    "InvalidResponseError",
]
