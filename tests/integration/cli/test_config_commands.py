"""Integration tests for config CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from datepoll.cli.main import app
from datepoll.cli.utils import ExitCode


class TestConfigShow:
    """Tests for datepoll config show."""

    def test_defaults(self, cli_runner: CliRunner, isolated_config: Path) -> None:
        """Without a file the defaults are shown."""
        result = cli_runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["max_range_days"] == 366
        assert data["default_pattern"] == {"type": "flexible"}
        assert data["config_path"] == str(isolated_config)

    def test_env_override(
        self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """DATEPOLL_MAX_RANGE_DAYS is reflected."""
        monkeypatch.setenv("DATEPOLL_MAX_RANGE_DAYS", "45")
        result = cli_runner.invoke(app, ["config", "show"])

        assert json.loads(result.stdout)["max_range_days"] == 45

    def test_invalid_file(self, cli_runner: CliRunner, isolated_config: Path) -> None:
        """A broken config file is a GENERAL_ERROR."""
        isolated_config.write_text("max_range_days = = 1\n")
        result = cli_runner.invoke(app, ["config", "show"])

        assert result.exit_code == ExitCode.GENERAL_ERROR


class TestConfigSet:
    """Tests for datepoll config set."""

    def test_set_integer(self, cli_runner: CliRunner) -> None:
        """Integers are stored and echoed back."""
        result = cli_runner.invoke(app, ["-q", "config", "set", "max_range_days", "730"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["max_range_days"] == 730

        shown = cli_runner.invoke(app, ["config", "show"])
        assert json.loads(shown.stdout)["max_range_days"] == 730

    def test_set_boolean(self, cli_runner: CliRunner) -> None:
        """true/false are decoded."""
        result = cli_runner.invoke(app, ["-q", "config", "set", "allow_maybe", "false"])

        assert json.loads(result.stdout)["allow_maybe"] is False

    def test_set_pattern_by_name(self, cli_runner: CliRunner) -> None:
        """default_pattern accepts --pattern names."""
        result = cli_runner.invoke(
            app, ["-q", "config", "set", "default_pattern", "fri-mon"]
        )

        assert result.exit_code == 0
        assert json.loads(result.stdout)["default_pattern"] == {
            "type": "weekday-range",
            "startDay": 5,
            "endDay": 1,
        }

    def test_unknown_key(self, cli_runner: CliRunner) -> None:
        """Unknown settings fail without writing."""
        result = cli_runner.invoke(app, ["config", "set", "colour", "blue"])
        assert result.exit_code == ExitCode.GENERAL_ERROR

    def test_out_of_range(self, cli_runner: CliRunner, isolated_config: Path) -> None:
        """Invalid values fail and leave no file behind."""
        result = cli_runner.invoke(app, ["config", "set", "max_range_days", "0"])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        assert not isolated_config.exists()

    def test_invalid_pattern_name(self, cli_runner: CliRunner) -> None:
        """Unknown pattern names are INVALID_ARGS."""
        result = cli_runner.invoke(
            app, ["config", "set", "default_pattern", "monthly"]
        )
        assert result.exit_code == ExitCode.INVALID_ARGS


class TestConfigReset:
    """Tests for datepoll config reset."""

    def test_reset_removes_file(
        self, cli_runner: CliRunner, isolated_config: Path
    ) -> None:
        """reset deletes the config file."""
        cli_runner.invoke(app, ["-q", "config", "set", "max_range_days", "30"])
        assert isolated_config.exists()

        result = cli_runner.invoke(app, ["-q", "config", "reset"])

        assert result.exit_code == 0
        assert not isolated_config.exists()
