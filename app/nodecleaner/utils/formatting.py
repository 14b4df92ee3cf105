"""Console output helpers shared by all commands.

Regular output goes to ``console`` (stdout). Warnings and errors go to
``err_console`` (stderr), which keeps ``--format json`` output parseable.
"""

import sys
from datetime import datetime

from rich.console import Console

from nodecleaner.core.theme import get_theme

_SIZE_UNITS: tuple[str, ...] = ("B", "KB", "MB", "GB", "TB")

# Hex theme colors need truecolor; terminals often under-report support
_COLOR_SYSTEM = "truecolor" if sys.stdout.isatty() else "auto"

console = Console(theme=get_theme(), color_system=_COLOR_SYSTEM)
err_console = Console(theme=get_theme(), color_system=_COLOR_SYSTEM, stderr=True)


def format_size(size_bytes: int | None) -> str:
    """Format a byte count as a human-readable string.

    Uses 1024-based units with at most two decimals and no trailing
    zeros, e.g. ``1536 -> "1.5 KB"`` and ``3072 -> "3 KB"``.

    Args:
        size_bytes: Byte count (None is treated as 0).

    Returns:
        Human-readable size string.
    """
    if not size_bytes:
        return "0 B"

    size = float(size_bytes)
    order = 0
    while abs(size) >= 1024 and order < len(_SIZE_UNITS) - 1:
        size /= 1024
        order += 1

    number = f"{size:.2f}".rstrip("0").rstrip(".")
    return f"{number} {_SIZE_UNITS[order]}"


def format_date(value: datetime) -> str:
    """Format a timestamp as a local YYYY-MM-DD date."""
    return value.astimezone().strftime("%Y-%m-%d")


def print_info(message: str) -> None:
    """Print an informational line to stdout."""
    console.print(message, style="info")


def print_success(message: str) -> None:
    """Print a success line to stdout."""
    console.print(message, style="success")


def print_warning(message: str) -> None:
    """Print a labeled warning to stderr."""
    err_console.print("[warning]Warning:[/]", message)


def print_error(message: str) -> None:
    """Print a labeled error to stderr."""
    err_console.print("[error]Error:[/]", message)
