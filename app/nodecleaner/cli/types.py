"""Shared types and utilities for CLI commands.

This module provides the output format enum, the scan runner used by
both ``scan`` and ``clean``, and the parser for interactive selections.
"""

from enum import Enum
from pathlib import Path

import typer
from rich.markup import escape

from nodecleaner.core.config import resolve_targets
from nodecleaner.scanner.models import RootNotFoundError, ScanParameters, ScanResult
from nodecleaner.scanner.orchestrator import ScanOrchestrator
from nodecleaner.utils.formatting import console, format_size, print_error


class OutputFormat(str, Enum):
    """Output format options for scan results."""

    TABLE = "table"
    JSON = "json"


def run_scan(
    root: Path,
    max_depth: int | None,
    min_size: int | None,
    folders: list[str] | None,
    show_progress: bool = True,
) -> list[ScanResult]:
    """Scan a root directory and return measured results, largest first.

    Folder overrides replace the configured targets for this run only.
    A missing root is reported and ends the command with exit code 1.

    Args:
        root: Directory to scan.
        max_depth: Depth limit for matches, or None.
        min_size: Minimum result size in bytes, or None.
        folders: Folder names overriding the configured targets.
        show_progress: Show a spinner and one line per match.

    Returns:
        Filtered scan results, largest first.
    """
    targets = resolve_targets(folders)
    params = ScanParameters(root=root, max_depth=max_depth, min_size=min_size, targets=targets)
    orchestrator = ScanOrchestrator()

    def on_match(result: ScanResult) -> None:
        console.print(f"[dim]Found: {escape(result.path)} ({format_size(result.size_bytes)})[/dim]")

    try:
        if not show_progress:
            return orchestrator.run(params)
        with console.status(f"Scanning for {escape(targets.label())} folders..."):
            return orchestrator.run(params, on_match=on_match)
    except RootNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def parse_selection(raw: str, count: int) -> list[int]:
    """Parse a selection like ``"1,3-5"`` or ``"all"`` into zero-based indices.

    Args:
        raw: User input. Numbers are 1-based; ranges are inclusive.
        count: Number of selectable items.

    Returns:
        Sorted, de-duplicated zero-based indices. Empty input selects nothing.

    Raises:
        ValueError: If a token is not a number or range, or is out of bounds.
    """
    text = raw.strip().lower()
    if not text:
        return []
    if text in ("all", "*"):
        return list(range(count))

    selected: set[int] = set()
    for token in text.replace(" ", "").split(","):
        if not token:
            continue
        start_text, sep, end_text = token.partition("-")
        if not start_text.isdigit() or (sep and not end_text.isdigit()):
            msg = f"Invalid selection: '{token}'"
            raise ValueError(msg)

        start = int(start_text)
        end = int(end_text) if sep else start
        if start > end:
            start, end = end, start
        if start < 1 or end > count:
            msg = f"Selection out of range (1-{count}): '{token}'"
            raise ValueError(msg)

        selected.update(range(start - 1, end))

    return sorted(selected)
