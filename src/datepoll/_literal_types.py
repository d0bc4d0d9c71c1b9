"""Shared Literal type aliases for parameter validation.

These types are exported from the public API and can be used by
library consumers for their own type hints.

Example:
    from datepoll import VoteResponse

    def record(key: str, answer: VoteResponse) -> None:
        ...
"""

from __future__ import annotations

from typing import Literal

# Discriminator values of DatePattern
PatternType = Literal[
    "flexible",
    "weekend",
    "weekday-range",
    "week",
    "two-weeks",
    "long-weekend",
    "custom",
]

# A participant's answer for one voting option
VoteResponse = Literal["yes", "maybe", "no"]

__all__ = ["PatternType", "VoteResponse"]
