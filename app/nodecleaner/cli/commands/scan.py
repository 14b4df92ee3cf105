"""Scan command.

Finds target folders beneath a directory and reports their sizes
without deleting anything.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from nodecleaner.cli.display import create_results_table, print_results_total, results_to_json
from nodecleaner.cli.types import OutputFormat, run_scan
from nodecleaner.scanner.models import ScanResult
from nodecleaner.utils.formatting import console, print_error, print_info, print_warning


def scan(
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
        typer.Option("--min-size", "-m", min=0, help="Only show folders of at least this many bytes."),
    ] = None,
    folders: Annotated[
        list[str] | None,
        typer.Option(
            "--folder",
            "-F",
            help="Folder name to search for instead of the configured targets (repeatable).",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    export_path: Annotated[
        Path | None,
        typer.Option(
            "--export",
            "-e",
            help="Export results to JSON file.",
        ),
    ] = None,
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-l",
            min=1,
            help="Limit number of results shown.",
        ),
    ] = None,
) -> None:
    """Scan a directory for target folders and show their sizes."""
    as_json = output_format == OutputFormat.JSON
    results = run_scan(path, depth, min_size, folders, show_progress=not as_json)

    if not results:
        if as_json:
            console.print_json("[]")
        else:
            print_warning("No matching folders found.")
        return

    display_results = results[:limit] if limit else results

    if export_path is not None:
        _export_results(results, export_path)  # Export ALL, not limited

    if as_json:
        console.print_json(results_to_json(display_results))
        return

    console.print()
    console.print(create_results_table(display_results))
    print_results_total(results)
    if limit and len(display_results) < len(results):
        console.print(f"[dim](showing {len(display_results)} of {len(results)}, limited to {limit})[/dim]")


def _export_results(results: list[ScanResult], export_path: Path) -> None:
    """Export scan results to a JSON file."""
    export_path = export_path.resolve()
    if export_path.is_dir():
        print_error(f"Export path is a directory: {export_path}")
        raise typer.Exit(code=1)

    try:
        export_path.parent.mkdir(parents=True, exist_ok=True)
        export_path.write_text(json.dumps([r.to_dict() for r in results], indent=2))
        print_info(f"Results exported to {export_path}")
    except OSError as e:
        print_error(f"Failed to export: {e}")
        raise typer.Exit(code=1) from e
