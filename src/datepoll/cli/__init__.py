"""CLI package for datepoll.

This module provides the `datepoll` command-line interface for previewing
date patterns and managing settings. All commands delegate to the library
functions or ConfigManager, adding only I/O formatting.
"""

from datepoll.cli.main import app

__all__ = ["app"]
