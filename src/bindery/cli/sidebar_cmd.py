"""Sidebar command for Bindery.

Lists the binder in reading order with a status glyph per item.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from bindery.cli.utils import open_binder
from bindery.sidebar import SidebarProjector

console = Console()


def sidebar(
    directory: Path = typer.Option(
        Path("."),
        "--dir",
        "-d",
        help="Project directory.",
    ),
    mark: list[int] | None = typer.Option(
        None,
        "--mark",
        "-m",
        help="Line number to mark (repeatable).",
    ),
    tag: str | None = typer.Option(
        None,
        "--tag",
        "-t",
        help="Only list items with this tag.",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Print one line per item instead of a table.",
    ),
):
    """List binder items.

    Glyphs: '?' missing file, '*' has notes. Marked lines are flagged '>'.

    Example:
        bindery sidebar -m 1 -m 3
    """
    _store, descriptor = open_binder(directory)
    projector = SidebarProjector()
    listing = projector.render(descriptor.structure, descriptor.root, tag=tag)
    for number in mark or []:
        listing = projector.mark(listing, number)

    if not listing.lines:
        console.print("[yellow]No items to list.[/yellow]")
        return

    if plain:
        for line in listing.lines:
            console.print(escape(projector.line_text(line)), highlight=False)
        return

    console.print(projector.to_table(listing, title=descriptor.root.name))
    marked = projector.marked_ids(listing)
    if marked:
        console.print(f"[dim]Marked: {escape(' '.join(marked))}[/dim]")
