"""Multiview command for Bindery.

Concatenates binder items into one text on stdout or in a file.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from bindery.cli.utils import open_binder
from bindery.multiview import MultiviewComposer

console = Console(stderr=True)


def multiview(
    item_ids: list[str] | None = typer.Argument(
        None,
        help="Item ids in output order. Defaults to the whole binder.",
    ),
    tag: str | None = typer.Option(
        None,
        "--tag",
        "-t",
        help="Compose every item with this tag, in binder order.",
    ),
    separator: str | None = typer.Option(
        None,
        "--separator",
        help="Text appended after each item (\\n and \\t are expanded).",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write to this file instead of stdout.",
    ),
    directory: Path = typer.Option(
        Path("."),
        "--dir",
        "-d",
        help="Project directory.",
    ),
):
    """Show several items as one text.

    Example:
        bindery multiview chapter-1.txt chapter-2.txt -o draft.txt
        bindery multiview --tag draft
    """
    _store, descriptor = open_binder(directory)
    structure = descriptor.structure

    if item_ids:
        ids = list(item_ids)
    elif tag:
        ids = [item.id for item in structure.filter_by_tag(tag)]
    else:
        ids = structure.ids()

    if separator is not None:
        separator = separator.replace("\\n", "\n").replace("\\t", "\t")

    text = MultiviewComposer().compose(structure, descriptor.root, ids, separator=separator)

    if output:
        output.write_text(text, encoding="utf-8")
        console.print(f"[green]Wrote {len(ids)} items to {escape(str(output))}[/green]")
    else:
        typer.echo(text, nl=False)
