"""Unit tests for Settings and ConfigManager."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from datepoll._internal.config import (
    DEFAULT_MAX_RANGE_DAYS,
    ConfigManager,
    Settings,
)
from datepoll.exceptions import ConfigError
from datepoll.patterns import FlexiblePattern, WeekdayRangePattern, WeekendPattern


class TestSettings:
    """Tests for the Settings model."""

    def test_defaults(self) -> None:
        """Defaults match a fresh install."""
        settings = Settings()
        assert settings.max_range_days == DEFAULT_MAX_RANGE_DAYS
        assert settings.default_pattern == FlexiblePattern()
        assert settings.allow_maybe is True
        assert settings.require_all_dates is False

    @pytest.mark.parametrize("value", [0, -1, 3661])
    def test_max_range_days_bounds(self, value: int) -> None:
        """max_range_days must stay within 1..3660."""
        with pytest.raises(ValidationError):
            Settings(max_range_days=value)

    def test_default_pattern_from_table(self) -> None:
        """A pattern table is validated into a variant."""
        settings = Settings(
            default_pattern={"type": "weekday-range", "startDay": 5, "endDay": 1}
        )
        assert settings.default_pattern == WeekdayRangePattern(start_day=5, end_day=1)

    def test_default_pattern_from_json(self) -> None:
        """A pattern given as JSON text is parsed."""
        settings = Settings(default_pattern='{"type": "weekend"}')
        assert settings.default_pattern == WeekendPattern()

    def test_invalid_default_pattern(self) -> None:
        """Invalid pattern JSON is a validation error."""
        with pytest.raises(ValidationError):
            Settings(default_pattern='{"type": "monthly"}')

    def test_unknown_field_rejected(self) -> None:
        """Unknown settings are rejected."""
        with pytest.raises(ValidationError):
            Settings(colour="blue")  # type: ignore[call-arg]

    def test_to_dict(self) -> None:
        """Patterns serialize in their persisted shape."""
        data = Settings(default_pattern=WeekendPattern()).to_dict()
        assert data["default_pattern"] == {"type": "weekend"}


class TestConfigManagerPaths:
    """Tests for config path resolution."""

    def test_explicit_path(self, config_path: Path) -> None:
        """An explicit path wins."""
        assert ConfigManager(config_path=config_path).config_path == config_path

    def test_env_path(self, config_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """DATEPOLL_CONFIG_PATH is honored."""
        monkeypatch.setenv("DATEPOLL_CONFIG_PATH", str(config_path))
        assert ConfigManager().config_path == config_path

    def test_default_path(self) -> None:
        """Without overrides the home directory default is used."""
        assert ConfigManager().config_path == ConfigManager.DEFAULT_CONFIG_PATH


class TestConfigManagerLoad:
    """Tests for ConfigManager.load."""

    def test_missing_file_gives_defaults(self, config_manager: ConfigManager) -> None:
        """No file means built-in defaults."""
        assert config_manager.load() == Settings()

    def test_reads_file(self, config_manager: ConfigManager, config_path: Path) -> None:
        """Values and pattern tables are read from TOML."""
        config_path.write_text(
            "max_range_days = 90\n"
            "allow_maybe = false\n"
            "\n"
            "[default_pattern]\n"
            'type = "custom"\n'
            "days = 3\n"
        )
        settings = config_manager.load()

        assert settings.max_range_days == 90
        assert settings.allow_maybe is False
        assert settings.default_pattern.to_dict() == {"type": "custom", "days": 3}

    def test_env_overrides_file(
        self,
        config_manager: ConfigManager,
        config_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """DATEPOLL_MAX_RANGE_DAYS beats the config file."""
        config_path.write_text("max_range_days = 90\n")
        monkeypatch.setenv("DATEPOLL_MAX_RANGE_DAYS", "30")
        assert config_manager.load().max_range_days == 30

    def test_env_not_integer(
        self, config_manager: ConfigManager, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A non-integer override is a ConfigError."""
        monkeypatch.setenv("DATEPOLL_MAX_RANGE_DAYS", "lots")
        with pytest.raises(ConfigError, match="DATEPOLL_MAX_RANGE_DAYS"):
            config_manager.load()

    def test_invalid_toml(self, config_manager: ConfigManager, config_path: Path) -> None:
        """Broken TOML is a ConfigError naming the file."""
        config_path.write_text("max_range_days = = 3\n")
        with pytest.raises(ConfigError) as exc_info:
            config_manager.load()
        assert exc_info.value.details["path"] == str(config_path)

    def test_invalid_value(self, config_manager: ConfigManager, config_path: Path) -> None:
        """An out-of-bounds value is a ConfigError naming the field."""
        config_path.write_text("max_range_days = 0\n")
        with pytest.raises(ConfigError, match="max_range_days") as exc_info:
            config_manager.load()
        assert exc_info.value.details["field"] == "max_range_days"


class TestConfigManagerWrite:
    """Tests for save, set_value and reset."""

    def test_save_and_load(self, config_manager: ConfigManager) -> None:
        """Saved settings load back unchanged."""
        settings = Settings(
            max_range_days=120,
            default_pattern=WeekdayRangePattern(start_day=5, end_day=0),
            require_all_dates=True,
        )
        config_manager.save(settings)
        assert config_manager.load() == settings

    def test_save_creates_directory(self, temp_dir: Path) -> None:
        """Parent directories are created on save."""
        manager = ConfigManager(config_path=temp_dir / "nested" / "config.toml")
        manager.save(Settings())
        assert manager.config_path.exists()

    def test_set_value(self, config_manager: ConfigManager) -> None:
        """set_value updates one field and keeps the rest."""
        config_manager.set_value("max_range_days", 45)
        settings = config_manager.set_value("allow_maybe", False)

        assert settings.max_range_days == 45
        assert settings.allow_maybe is False
        assert config_manager.load() == settings

    def test_set_pattern(self, config_manager: ConfigManager) -> None:
        """Patterns are stored as tables."""
        config_manager.set_value("default_pattern", {"type": "weekend"})
        assert config_manager.load().default_pattern == WeekendPattern()

    def test_set_unknown_key(self, config_manager: ConfigManager) -> None:
        """Unknown keys are rejected with the valid names."""
        with pytest.raises(ConfigError, match="Valid settings: max_range_days"):
            config_manager.set_value("colour", "blue")

    def test_set_invalid_value_not_written(
        self, config_manager: ConfigManager, config_path: Path
    ) -> None:
        """A rejected value leaves the file untouched."""
        with pytest.raises(ConfigError):
            config_manager.set_value("max_range_days", 99999)
        assert not config_path.exists()

    def test_reset(self, config_manager: ConfigManager, config_path: Path) -> None:
        """reset removes the file and is safe to repeat."""
        config_manager.set_value("max_range_days", 45)
        config_manager.reset()
        assert not config_path.exists()
        config_manager.reset()
        assert config_manager.load() == Settings()
