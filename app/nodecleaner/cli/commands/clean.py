"""Clean command.

Scans for target folders, lets the user pick which ones to delete,
and deletes them one at a time with per-folder reporting.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn

from nodecleaner.cli.display import create_results_table, create_summary_panel, print_deletion_line
from nodecleaner.cli.types import parse_selection, run_scan
from nodecleaner.scanner.cleaner import DirectoryCleaner
from nodecleaner.scanner.models import DeletionResult, DeletionSummary, ScanResult
from nodecleaner.utils.formatting import console, format_size, print_error, print_info, print_warning


def clean(
    path: Annotated[
        Path,
        typer.Argument(help="Root directory to scan."),
    ],
    depth: Annotated[
        int | None,
        typer.Option("--depth", "-d", min=0, help="Deepest folder level to report (root's children are 1)."),
    ] = None,
    min_size: Annotated[
        int | None,
        typer.Option("--min-size", "-m", min=0, help="Only offer folders of at least this many bytes."),
    ] = None,
    folders: Annotated[
        list[str] | None,
        typer.Option(
            "--folder",
            "-F",
            help="Folder name to search for instead of the configured targets (repeatable).",
        ),
    ] = None,
    select_all: Annotated[
        bool,
        typer.Option("--all", "-a", help="Select every folder found instead of prompting."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
) -> None:
    """Scan a directory and interactively delete selected target folders."""
    results = run_scan(path, depth, min_size, folders)

    if not results:
        print_warning("No matching folders found.")
        return

    console.print()
    console.print(create_results_table(results, show_index=True))
    console.print()

    selected = results if select_all else _prompt_selection(results)
    if not selected:
        print_info("Nothing selected.")
        return

    # Confirm unless --yes or --dry-run
    if not dry_run and not yes:
        total = sum(r.size_bytes for r in selected)
        confirmed = typer.confirm(
            f"Delete {len(selected)} folder(s) ({format_size(total)})?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    summary = _delete_with_progress(selected, dry_run)

    console.print()
    console.print(create_summary_panel(summary, dry_run=dry_run))

    # Exit with error if any deletion failed
    if summary.failure_count:
        raise typer.Exit(code=1)


# === Private helper functions ===


def _prompt_selection(results: list[ScanResult]) -> list[ScanResult]:
    """Ask which folders to delete until the answer parses."""
    while True:
        raw = typer.prompt(
            "Folders to delete (e.g. 1,3-5 or 'all', empty for none)",
            default="",
            show_default=False,
        )
        try:
            indices = parse_selection(raw, len(results))
        except ValueError as e:
            print_error(str(e))
            continue
        return [results[i] for i in indices]


def _delete_with_progress(selected: list[ScanResult], dry_run: bool) -> DeletionSummary:
    """Delete folders sequentially behind a progress bar."""
    cleaner = DirectoryCleaner(dry_run=dry_run)

    with Progress(
        SpinnerColumn(),
        TextColumn("[info]{task.description}[/]"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Deleting...", total=len(selected))

        def on_result(result: DeletionResult) -> None:
            print_deletion_line(result)
            progress.advance(task)

        return cleaner.delete(selected, on_result=on_result)
