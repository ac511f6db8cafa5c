"""Notes command for Bindery.

Shows an item's notes, or edits them in $EDITOR and commits the result.
"""

from pathlib import Path

import click
import typer
from rich.console import Console
from rich.markup import escape

from bindery.cli.utils import open_binder, save_binder
from bindery.notes import NotesSession

console = Console()


def notes(
    item_id: str = typer.Argument(..., help="Item id."),
    edit: bool = typer.Option(
        False,
        "--edit",
        "-e",
        help="Edit the notes in $EDITOR.",
    ),
    text: str | None = typer.Option(
        None,
        "--set",
        "-s",
        help="Replace the notes with this text.",
    ),
    directory: Path = typer.Option(
        Path("."),
        "--dir",
        "-d",
        help="Project directory.",
    ),
):
    """View or edit the notes of an item.

    Example:
        bindery notes chapter-1.txt --edit
        bindery notes chapter-1.txt --set "Needs a stronger opening"
    """
    store, descriptor = open_binder(directory)
    session = NotesSession(descriptor.structure)
    content = session.open(item_id)

    if text is None and not edit:
        if content:
            console.print(escape(content), highlight=False)
        else:
            console.print(f"[dim]No notes for {escape(item_id)}[/dim]")
        return

    if edit:
        edited = click.edit(content, extension=".md")
        if edited is not None:
            # Drop the final newline the editor adds, keeping the notes' own
            if edited.endswith("\n") and not content.endswith("\n"):
                edited = edited[:-1]
            session.edit(edited)
    else:
        session.edit(text)

    result = session.commit()
    session.close()
    if not result.changed:
        console.print(f"[dim]{result.message}[/dim]")
        return

    save_binder(store, descriptor)
    console.print(f"[green]{escape(result.message)}[/green]")
