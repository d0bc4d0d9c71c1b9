"""Configuration management for datepoll.

Holds the application-boundary limits and poll defaults. Configuration is
stored in TOML format at ~/.datepoll/config.toml by default.
"""

from __future__ import annotations

import logging
import os
import sys

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from pathlib import Path
from typing import Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from datepoll.exceptions import ConfigError, InvalidPatternError
from datepoll.patterns import DatePattern, FlexiblePattern, parse_pattern

_logger = logging.getLogger(__name__)

DEFAULT_MAX_RANGE_DAYS = 366
MAX_RANGE_DAYS_LIMIT = 3660

MAX_RANGE_DAYS_ENV = "DATEPOLL_MAX_RANGE_DAYS"
CONFIG_PATH_ENV = "DATEPOLL_CONFIG_PATH"


class Settings(BaseModel):
    """Immutable datepoll settings.

    This is a frozen Pydantic model that ensures:
    - All fields are validated on construction
    - The object cannot be modified after creation
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_range_days: int = Field(
        default=DEFAULT_MAX_RANGE_DAYS, ge=1, le=MAX_RANGE_DAYS_LIMIT
    )
    """Widest date range accepted at the application boundary."""

    default_pattern: DatePattern = Field(default_factory=FlexiblePattern)
    """Pattern used when none is given."""

    allow_maybe: bool = True
    """Default for new polls: whether "maybe" is an accepted response."""

    require_all_dates: bool = False
    """Default for new polls: whether voters must answer every option."""

    @field_validator("default_pattern", mode="before")
    @classmethod
    def validate_default_pattern(cls, v: Any) -> Any:
        """Accept the pattern as JSON text as well as a table."""
        if isinstance(v, str):
            try:
                return parse_pattern(v)
            except InvalidPatternError as e:
                raise ValueError(e.message) from e
        return v

    def to_dict(self) -> dict[str, Any]:
        """Serialize settings for TOML/JSON output."""
        return {
            "max_range_days": self.max_range_days,
            "default_pattern": self.default_pattern.to_dict(),
            "allow_maybe": self.allow_maybe,
            "require_all_dates": self.require_all_dates,
        }


class ConfigManager:
    """Loads, resolves and persists datepoll settings.

    Config file location (in priority order):
    1. Explicit config_path parameter
    2. DATEPOLL_CONFIG_PATH environment variable
    3. Default: ~/.datepoll/config.toml

    Value resolution (in priority order):
    1. DATEPOLL_MAX_RANGE_DAYS environment variable (max_range_days only)
    2. Config file
    3. Built-in defaults
    """

    DEFAULT_CONFIG_PATH = Path.home() / ".datepoll" / "config.toml"

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize ConfigManager.

        Args:
            config_path: Override config file location.
                         Default: ~/.datepoll/config.toml
        """
        if config_path is not None:
            self._config_path = config_path
        elif CONFIG_PATH_ENV in os.environ:
            self._config_path = Path(os.environ[CONFIG_PATH_ENV])
        else:
            self._config_path = self.DEFAULT_CONFIG_PATH

    @property
    def config_path(self) -> Path:
        """Return the config file path."""
        return self._config_path

    def _read_config(self) -> dict[str, Any]:
        """Read and parse the config file.

        Returns:
            Parsed config dictionary, or empty dict if file doesn't exist.
        """
        if not self._config_path.exists():
            return {}

        try:
            with self._config_path.open("rb") as f:
                return dict(tomllib.load(f))
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(
                f"Invalid TOML in config file: {e}",
                details={"path": str(self._config_path)},
            ) from e

    def _write_config(self, config: dict[str, Any]) -> None:
        """Write config to file, creating directory if needed.

        Args:
            config: Configuration dictionary to write.
        """
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        with self._config_path.open("wb") as f:
            tomli_w.dump(config, f)

    def _build(self, values: dict[str, Any]) -> Settings:
        """Validate raw values into Settings."""
        try:
            return Settings(**values)
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first["loc"])
            raise ConfigError(
                f"Invalid setting {field}: {first['msg']}",
                details={"path": str(self._config_path), "field": field},
            ) from e

    def load(self) -> Settings:
        """Resolve settings from environment, config file and defaults.

        Returns:
            Immutable Settings object.

        Raises:
            ConfigError: If the config file or an environment override is
                invalid.
        """
        values = self._read_config()

        env_max = os.environ.get(MAX_RANGE_DAYS_ENV)
        if env_max:
            try:
                values["max_range_days"] = int(env_max)
            except ValueError as e:
                raise ConfigError(
                    f"Invalid {MAX_RANGE_DAYS_ENV}: '{env_max}'. Must be an integer."
                ) from e
            _logger.debug("max_range_days=%s from %s", env_max, MAX_RANGE_DAYS_ENV)

        settings = self._build(values)
        _logger.debug("Loaded settings from %s: %s", self._config_path, settings)
        return settings

    def save(self, settings: Settings) -> None:
        """Persist settings to the config file.

        Args:
            settings: Settings to write.
        """
        self._write_config(settings.to_dict())

    def set_value(self, key: str, value: Any) -> Settings:
        """Update a single setting in the config file.

        Args:
            key: Settings field name.
            value: New value; validated like a freshly loaded file.

        Returns:
            The settings as stored after the update.

        Raises:
            ConfigError: If the key is unknown or the value is invalid.
        """
        if key not in Settings.model_fields:
            valid = ", ".join(Settings.model_fields)
            raise ConfigError(
                f"Unknown setting '{key}'. Valid settings: {valid}",
                details={"key": key},
            )

        config = self._read_config()
        config[key] = value
        settings = self._build(config)
        self.save(settings)
        return settings

    def reset(self) -> None:
        """Remove the config file, reverting to defaults."""
        if self._config_path.exists():
            self._config_path.unlink()
