"""Reorder and navigation commands for Bindery."""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from bindery.cli.utils import open_binder, save_binder
from bindery.exceptions import EndOfSequence

console = Console()

DIR_OPTION = typer.Option(Path("."), "--dir", "-d", help="Project directory.")


def move(
    item_id: str = typer.Argument(..., help="Item id."),
    delta: int = typer.Argument(..., help="Positions to move (negative moves up)."),
    directory: Path = DIR_OPTION,
):
    """Swap an item with the one DELTA positions away.

    Example:
        bindery move chapter-3.txt -- -1
    """
    store, descriptor = open_binder(directory)
    structure = descriptor.structure
    structure.move_relative(item_id, delta)
    save_binder(store, descriptor)
    console.print(f"{escape(item_id)} is now #{structure.index_of(item_id) + 1}")


def up(
    item_id: str = typer.Argument(..., help="Item id."),
    directory: Path = DIR_OPTION,
):
    """Move an item one place up."""
    move(item_id, -1, directory)


def down(
    item_id: str = typer.Argument(..., help="Item id."),
    directory: Path = DIR_OPTION,
):
    """Move an item one place down."""
    move(item_id, 1, directory)


def next_item(
    item_id: str = typer.Argument(..., help="Item id."),
    count: int = typer.Option(1, "-n", help="Positions ahead (negative goes back)."),
    wrap: bool = typer.Option(False, "--wrap", "-w", help="Wrap around at either end."),
    directory: Path = DIR_OPTION,
):
    """Print the id and file of the item COUNT positions after ITEM_ID."""
    _store, descriptor = open_binder(directory)
    structure = descriptor.structure
    try:
        item = structure.next_item(item_id, count)
    except EndOfSequence:
        if not wrap:
            raise
        target = (structure.index_of(item_id) + count) % len(structure)
        item = structure.items[target]
    typer.echo(f"{item.id}\t{item.filename}")
