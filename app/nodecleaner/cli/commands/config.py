"""Target folder configuration commands.

Provides commands to list, add, remove and reset the folder names
that ``scan`` and ``clean`` search for when no --folder override is given.
"""

from typing import Annotated

import typer
from rich.markup import escape

from nodecleaner.core.config import ConfigService
from nodecleaner.utils.formatting import console, print_error, print_success, print_warning

app = typer.Typer(
    help="Manage the target folder names.",
    no_args_is_help=True,
)


@app.command("list")
def list_targets() -> None:
    """Show the configured target folder names."""
    service = ConfigService()
    config = service.load()

    console.print(f"[dim]Config: {escape(str(service.config_path))}[/dim]")
    console.print("[bold]Target folders:[/]")
    for name in config.targets:
        console.print(f"  [info]{escape(name)}[/]")


@app.command("add")
def add_targets(
    names: Annotated[list[str], typer.Argument(help="Folder names to add.")],
) -> None:
    """Add target folder names."""
    service = ConfigService()
    try:
        added = service.add_targets(names)
    except (OSError, RuntimeError) as e:
        print_error(f"Could not save config: {e}")
        raise typer.Exit(code=1) from e

    if added:
        print_success(f"✓ Added: {escape(', '.join(added))}")
    else:
        print_warning("Already configured, nothing added.")


@app.command("remove")
def remove_targets(
    names: Annotated[list[str], typer.Argument(help="Folder names to remove.")],
) -> None:
    """Remove target folder names."""
    service = ConfigService()
    try:
        removed = service.remove_targets(names)
    except (OSError, RuntimeError) as e:
        print_error(f"Could not save config: {e}")
        raise typer.Exit(code=1) from e

    print_success(f"✓ Removed {removed} target(s)")


@app.command("reset")
def reset_targets() -> None:
    """Reset the target folder names to the default (node_modules)."""
    service = ConfigService()
    try:
        service.reset()
    except (OSError, RuntimeError) as e:
        print_error(f"Could not save config: {e}")
        raise typer.Exit(code=1) from e

    print_success("✓ Reset to defaults")


@app.command("path")
def show_path() -> None:
    """Print the config file location."""
    typer.echo(str(ConfigService().config_path))
