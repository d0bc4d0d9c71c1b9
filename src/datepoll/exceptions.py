"""Exception hierarchy for datepoll.

All library exceptions inherit from DatePollError, enabling callers to
catch all library errors with a single except clause while still allowing
fine-grained exception handling when needed.

Each exception carries a machine-readable code and structured details so
that a surrounding application can turn it into a form error or JSON
response without parsing the message.
"""

from __future__ import annotations

from typing import Any


class DatePollError(Exception):
    """Base exception for all datepoll errors.

    All library exceptions inherit from this class, allowing callers to:
    - Catch all library errors: except DatePollError
    - Handle specific errors: except InvalidPatternError
    - Serialize errors: error.to_dict()
    """

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize exception.

        Args:
            message: Human-readable error message.
            code: Machine-readable error code for programmatic handling.
            details: Additional structured data about the error.
        """
        super().__init__(message)
        self._message = message
        self._code = code
        self._details = details or {}

    @property
    def code(self) -> str:
        """Machine-readable error code."""
        return self._code

    @property
    def message(self) -> str:
        """Human-readable error message."""
        return self._message

    @property
    def details(self) -> dict[str, Any]:
        """Additional structured error data."""
        return self._details

    def to_dict(self) -> dict[str, Any]:
        """Serialize exception for logging/JSON output.

        Returns:
            Dictionary with keys: code, message, details.
            All values are JSON-serializable.
        """
        return {
            "code": self._code,
            "message": self._message,
            "details": self._details,
        }

    def __str__(self) -> str:
        """Return human-readable error message."""
        return self._message

    def __repr__(self) -> str:
        """Return detailed string representation."""
        return (
            f"{self.__class__.__name__}(message={self._message!r}, code={self._code!r})"
        )


# Configuration Exceptions


class ConfigError(DatePollError):
    """Configuration file or environment value is invalid.

    Raised when the TOML config cannot be parsed, a stored value fails
    validation, or an environment override is malformed.
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ConfigError.

        Args:
            message: Human-readable error message.
            details: Additional structured data.
        """
        super().__init__(message, code="CONFIG_ERROR", details=details)


# Input Validation Exceptions


class InvalidPatternError(DatePollError):
    """A date pattern failed validation.

    Raised by parse_pattern when the discriminator is unknown or a
    variant's fields are out of bounds (weekday outside 0..6, custom days
    outside 1..31, long-weekend days other than 3 or 4).

    Example:
        ```python
        try:
            pattern = parse_pattern({"type": "custom", "days": 40})
        except InvalidPatternError as e:
            for err in e.errors:
                print(err["loc"], err["msg"])
        ```
    """

    def __init__(
        self,
        message: str,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        """Initialize InvalidPatternError.

        Args:
            message: Human-readable error message.
            errors: Per-field validation errors (loc, msg, type).
        """
        super().__init__(
            message,
            code="INVALID_PATTERN",
            details={"errors": errors or []},
        )

    @property
    def errors(self) -> list[dict[str, Any]]:
        """Per-field validation errors."""
        errors = self._details.get("errors")
        return errors if isinstance(errors, list) else []


class InvalidDateError(DatePollError):
    """A date value could not be interpreted as a calendar day."""

    def __init__(self, value: object) -> None:
        """Initialize InvalidDateError.

        Args:
            value: The offending input.
        """
        message = f"Invalid date {value!r}. Expected YYYY-MM-DD."
        super().__init__(message, code="INVALID_DATE", details={"value": str(value)})

    @property
    def value(self) -> str:
        """String form of the rejected input."""
        return str(self._details.get("value", ""))


class DateRangeTooLargeError(DatePollError):
    """Date range is wider than the configured maximum.

    Generation is linear in the number of days, so the application
    boundary rejects ranges wider than Settings.max_range_days before
    expanding them.

    Example:
        ```python
        try:
            check_range_width(DateRange.from_strings("2020-01-01", "2030-01-01"), 366)
        except DateRangeTooLargeError as e:
            print(f"Range is {e.days_requested} days, max is {e.max_days}")
        ```
    """

    def __init__(
        self,
        start: str,
        end: str,
        days_requested: int,
        max_days: int,
    ) -> None:
        """Initialize DateRangeTooLargeError.

        Args:
            start: First day of the requested range.
            end: Last day of the requested range.
            days_requested: Number of days in the requested range.
            max_days: Maximum allowed days.
        """
        self._start = start
        self._end = end
        self._days_requested = days_requested
        self._max_days = max_days

        message = (
            f"Date range from {start} to {end} spans {days_requested} days, "
            f"but maximum is {max_days} days."
        )

        details: dict[str, Any] = {
            "start": start,
            "end": end,
            "days_requested": days_requested,
            "max_days": max_days,
        }

        super().__init__(message, code="DATE_RANGE_TOO_LARGE", details=details)

    @property
    def start(self) -> str:
        """First day of the requested range."""
        return self._start

    @property
    def end(self) -> str:
        """Last day of the requested range."""
        return self._end

    @property
    def days_requested(self) -> int:
        """Number of days in the requested range."""
        return self._days_requested

    @property
    def max_days(self) -> int:
        """Maximum allowed days."""
        return self._max_days


class UnhandledPatternError(DatePollError):
    """A pattern variant reached a dispatcher that has no branch for it.

    This is a programming error: a new variant was added to DatePattern
    without updating every dispatcher in datepoll.groups.
    """

    def __init__(self, pattern: object) -> None:
        """Initialize UnhandledPatternError.

        Args:
            pattern: The value that fell through the dispatcher.
        """
        type_name = type(pattern).__name__
        message = f"Unhandled date pattern variant: {type_name}"
        super().__init__(
            message,
            code="UNHANDLED_PATTERN",
            details={"pattern_class": type_name, "pattern": repr(pattern)},
        )


class InvalidResponseError(DatePollError):
    """A participant's ballot does not fit the poll.

    Raised for unknown option keys, a "maybe" on a poll that disallows it,
    an empty ballot, or a partial ballot when every option must be answered.
    """

    def __init__(
        self,
        message: str,
        *,
        reason: str,
        keys: list[str] | None = None,
    ) -> None:
        """Initialize InvalidResponseError.

        Args:
            message: Human-readable error message.
            reason: Short machine-readable reason (unknown_keys,
                invalid_value, maybe_not_allowed, empty, incomplete).
            keys: Option keys involved in the failure.
        """
        super().__init__(
            message,
            code="INVALID_RESPONSE",
            details={"reason": reason, "keys": keys or []},
        )

    @property
    def reason(self) -> str:
        """Short machine-readable reason."""
        return str(self._details.get("reason", ""))

    @property
    def keys(self) -> list[str]:
        """Option keys involved in the failure."""
        keys = self._details.get("keys")
        return keys if isinstance(keys, list) else []
