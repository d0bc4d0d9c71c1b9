"""Shared fixtures for CLI tests."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a CLI runner for testing commands."""
    return CliRunner()


@pytest.fixture
def group_rows() -> list[dict[str, object]]:
    """Rows shaped like `datepoll groups generate` output."""
    return [
        {
            "index": 1,
            "label": "Weekend 1",
            "range": "Jan 18 - 19",
            "days": 2,
            "dates": ["2025-01-18", "2025-01-19"],
        },
        {
            "index": 2,
            "label": "Weekend 2",
            "range": "Jan 25 - 26",
            "days": 2,
            "dates": ["2025-01-25", "2025-01-26"],
        },
    ]
