"""Status command for Bindery.

Shows a summary of the binder reachable from a directory.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from bindery.cli.utils import open_binder
from bindery.sidebar import ItemStatus, SidebarProjector

console = Console()


def status(
    directory: Path = typer.Option(
        Path("."),
        "--dir",
        "-d",
        help="Project directory.",
    ),
):
    """Show binder status.

    Displays:
    - Binder location and default mode
    - Item counts (missing files, items with notes)
    - Tags in use
    """
    store, descriptor = open_binder(directory)
    structure = descriptor.structure
    listing = SidebarProjector().render(structure, descriptor.root)

    console.print(f"[bold]Binder: {escape(descriptor.root.name)}[/bold]")
    console.print(f"  Location: {escape(str(descriptor.root / store.filename))}")
    if descriptor.default_mode:
        console.print(f"  Default mode: {escape(descriptor.default_mode)}")
    console.print()

    if not len(structure):
        console.print("[yellow]No items in binder.[/yellow]")
        console.print("Run 'bindery add <files>' to add items.")
        return

    counts = {s: 0 for s in ItemStatus}
    for line in listing.lines:
        counts[line.status] += 1

    console.print("[bold]Items:[/bold]")
    console.print(f"  Total: {len(structure)}")
    console.print(f"  With notes: {counts[ItemStatus.HAS_NOTES]}")
    if counts[ItemStatus.MISSING]:
        console.print(f"  [red]Missing files: {counts[ItemStatus.MISSING]}[/red]")

    tags = structure.all_tags()
    if tags:
        console.print(f"  Tags: {escape(', '.join(tags))}")
