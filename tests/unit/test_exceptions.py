"""Unit tests for the datepoll exception hierarchy."""

from __future__ import annotations

import json

import pytest

from datepoll.exceptions import (
    ConfigError,
    DatePollError,
    DateRangeTooLargeError,
    InvalidDateError,
    InvalidPatternError,
    InvalidResponseError,
    UnhandledPatternError,
)


class TestDatePollError:
    """Tests for the base exception class."""

    def test_basic_initialization(self) -> None:
        """Test basic exception creation."""
        exc = DatePollError("Something went wrong")
        assert str(exc) == "Something went wrong"
        assert exc.message == "Something went wrong"
        assert exc.code == "UNKNOWN_ERROR"
        assert exc.details == {}

    def test_to_dict_serializable(self) -> None:
        """Test that to_dict output is JSON serializable."""
        exc = DatePollError("Test error", code="TEST_ERROR", details={"n": [1, 2]})
        result = exc.to_dict()

        assert result == {
            "code": "TEST_ERROR",
            "message": "Test error",
            "details": {"n": [1, 2]},
        }
        assert "TEST_ERROR" in json.dumps(result)

    def test_repr(self) -> None:
        """Test string representation."""
        exc = DatePollError("Test error", code="TEST")
        assert repr(exc) == "DatePollError(message='Test error', code='TEST')"


class TestSubclasses:
    """Tests for specific error classes."""

    @pytest.mark.parametrize(
        ("exc", "code"),
        [
            (ConfigError("bad"), "CONFIG_ERROR"),
            (InvalidPatternError("bad"), "INVALID_PATTERN"),
            (InvalidDateError("2025-13-01"), "INVALID_DATE"),
            (DateRangeTooLargeError("a", "b", 2, 1), "DATE_RANGE_TOO_LARGE"),
            (UnhandledPatternError(object()), "UNHANDLED_PATTERN"),
            (InvalidResponseError("bad", reason="empty"), "INVALID_RESPONSE"),
        ],
    )
    def test_codes_and_base(self, exc: DatePollError, code: str) -> None:
        """Every subclass has its code and is catchable as DatePollError."""
        assert exc.code == code
        assert isinstance(exc, DatePollError)
        json.dumps(exc.to_dict())

    def test_invalid_pattern_errors(self) -> None:
        """Field errors are exposed and default to an empty list."""
        errors = [{"loc": ["custom", "days"], "msg": "too big", "type": "le"}]
        assert InvalidPatternError("bad", errors).errors == errors
        assert InvalidPatternError("bad").errors == []

    def test_invalid_date_value(self) -> None:
        """The rejected input is kept as a string."""
        exc = InvalidDateError(20250120)
        assert exc.value == "20250120"
        assert "YYYY-MM-DD" in exc.message

    def test_date_range_too_large(self) -> None:
        """Range details are exposed as properties and details."""
        exc = DateRangeTooLargeError("2020-01-01", "2030-01-01", 3654, 366)

        assert exc.start == "2020-01-01"
        assert exc.end == "2030-01-01"
        assert exc.days_requested == 3654
        assert exc.max_days == 366
        assert exc.details["max_days"] == 366
        assert "3654 days" in str(exc)

    def test_unhandled_pattern_names_class(self) -> None:
        """The unexpected value's type is named."""
        exc = UnhandledPatternError("weekend")
        assert exc.details["pattern_class"] == "str"
        assert "str" in exc.message

    def test_invalid_response(self) -> None:
        """Reason and keys are exposed."""
        exc = InvalidResponseError("nope", reason="incomplete", keys=["1", "2"])
        assert exc.reason == "incomplete"
        assert exc.keys == ["1", "2"]
        assert InvalidResponseError("nope", reason="empty").keys == []
