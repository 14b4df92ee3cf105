"""CLI package for nodecleaner.

This package contains the Typer application and all subcommands.
"""

from nodecleaner.cli.main import app

__all__ = ["app"]
