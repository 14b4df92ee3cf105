"""Shared Rich display functions for scan results and deletions.

Provides reusable table builders and summary printers used by the
``scan`` and ``clean`` commands.
"""

import json

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from nodecleaner.scanner.models import DeletionResult, DeletionSummary, ScanResult
from nodecleaner.utils.formatting import console, format_date, format_size

# Results at or above this size are highlighted
LARGE_SIZE_BYTES = 500 * 1024 * 1024


def create_results_table(results: list[ScanResult], show_index: bool = False) -> Table:
    """Create a Rich table displaying scan results.

    Rows keep the order of ``results`` (largest first when they come
    from the orchestrator).

    Args:
        results: Scan results to display.
        show_index: Add a 1-based "#" column for interactive selection.

    Returns:
        Rich Table configured for scan result display.
    """
    table = Table(
        title="Scan Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    if show_index:
        table.add_column("#", justify="right", style="muted")
    table.add_column("Path", style="path", overflow="fold")
    table.add_column("Size", justify="right")
    table.add_column("Last Modified", style="muted")

    for index, result in enumerate(results, start=1):
        size_style = "size_large" if result.size_bytes >= LARGE_SIZE_BYTES else "size"
        row = [
            escape(result.path),
            f"[{size_style}]{format_size(result.size_bytes)}[/]",
            format_date(result.last_modified),
        ]
        if show_index:
            row.insert(0, str(index))
        table.add_row(*row)

    return table


def print_results_total(results: list[ScanResult]) -> None:
    """Print the folder count and total size of scan results."""
    total = sum(r.size_bytes for r in results)
    console.print(f"\n[bold]Total:[/] {len(results)} folder(s), {format_size(total)}")


def results_to_json(results: list[ScanResult]) -> str:
    """Serialize scan results to an indented JSON array."""
    return json.dumps([r.to_dict() for r in results], indent=2)


def print_deletion_line(result: DeletionResult) -> None:
    """Print a single ✓/✗ line for a finished deletion."""
    path = escape(result.path)
    if result.dry_run:
        console.print(f"[info]~[/] Would delete: {path}")
    elif result.success:
        console.print(f"[success]✓[/] Deleted: {path}")
    else:
        console.print(f"[error]✗[/] Failed: {path}")
        console.print(f"[dim]  {escape(result.reason or 'Unknown error')}[/dim]")


def create_summary_panel(summary: DeletionSummary, dry_run: bool = False) -> Panel:
    """Create a Rich panel summarizing a deletion run.

    Args:
        summary: Aggregated deletion results.
        dry_run: Whether nothing was actually deleted.

    Returns:
        Panel with success/failure counts and space freed.
    """
    if dry_run:
        would_free = sum(r.size_bytes for r in summary.results if r.success)
        body = (
            f"[info]Would delete:[/] {summary.success_count} folder(s)\n"
            f"[error]Missing:[/] {summary.failure_count} folder(s)\n"
            f"[bold]Would free:[/] {format_size(would_free)}"
        )
        title = "[bold]Deletion Results (dry-run)[/]"
    else:
        body = (
            f"[success]Deleted:[/] {summary.success_count} folder(s)\n"
            f"[error]Failed:[/] {summary.failure_count} folder(s)\n"
            f"[bold]Space freed:[/] {format_size(summary.bytes_freed)}"
        )
        title = "[bold]Deletion Results[/]"

    return Panel(body, title=title, border_style="border", expand=False)
