"""Shared fixtures for datepoll tests."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Generator
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from hypothesis import Phase, Verbosity, settings

# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "default",
    max_examples=100,
    verbosity=Verbosity.normal,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.target, Phase.shrink],
)

settings.register_profile(
    "ci",
    max_examples=200,
    verbosity=Verbosity.normal,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.target, Phase.shrink],
    derandomize=True,
)

settings.register_profile(
    "dev",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.target, Phase.shrink],
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.target, Phase.shrink],
    report_multiple_bugs=False,
)

# Load profile from HYPOTHESIS_PROFILE env var, default to "default"
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "default"))

if TYPE_CHECKING:
    from datepoll._internal.config import ConfigManager


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config_path(temp_dir: Path) -> Path:
    """Return path for a temporary config file."""
    return temp_dir / "config.toml"


@pytest.fixture
def config_manager(config_path: Path) -> ConfigManager:
    """Create a ConfigManager with a temporary config file."""
    from datepoll._internal.config import ConfigManager

    return ConfigManager(config_path=config_path)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep DATEPOLL_* variables from the developer's shell out of tests."""
    monkeypatch.delenv("DATEPOLL_CONFIG_PATH", raising=False)
    monkeypatch.delenv("DATEPOLL_MAX_RANGE_DAYS", raising=False)
