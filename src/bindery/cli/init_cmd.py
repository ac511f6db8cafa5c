"""Init command for Bindery.

Creates an empty binder file in a directory.
"""

from pathlib import Path

import typer
from rich.console import Console

from bindery.cli.utils import get_store

console = Console()


def init(
    directory: Path = typer.Argument(
        Path("."),
        help="Directory to initialize (defaults to current directory).",
    ),
    mode: str | None = typer.Option(
        None,
        "--mode",
        "-m",
        help="Default display mode recorded in the binder.",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing binder with an empty one.",
    ),
):
    """Initialize a new binder.

    Example:
        bindery init --mode markdown
    """
    store = get_store()
    descriptor = store.init(Path(directory), default_mode=mode, force=force)

    console.print(f"[green]Created binder[/green] [dim]{descriptor.root / store.filename}[/dim]")
    console.print()
    console.print("Next steps:")
    console.print("  1. Run [bold]bindery add <files>[/bold] to add files")
    console.print("  2. Run [bold]bindery sidebar[/bold] to see the reading order")
