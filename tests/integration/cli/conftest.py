"""Shared fixtures for CLI integration tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a CLI runner for testing commands."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(
    clean_env: None, config_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Point every command at a throwaway config file."""
    monkeypatch.setenv("DATEPOLL_CONFIG_PATH", str(config_path))
    return config_path
