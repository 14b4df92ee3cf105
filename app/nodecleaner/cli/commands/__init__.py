"""CLI commands for nodecleaner.

This package contains all subcommand implementations.
"""

from nodecleaner.cli.commands import clean, config, scan

__all__ = ["clean", "config", "scan"]
