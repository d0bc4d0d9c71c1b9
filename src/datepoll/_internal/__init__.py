"""Internal implementation modules. Not part of the public API."""

from datepoll._internal.config import ConfigManager, Settings

__all__ = ["ConfigManager", "Settings"]
