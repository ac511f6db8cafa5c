"""Item commands for Bindery.

Add, remove, rename, relocate and tag binder items.
"""

import os
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from bindery.cli.utils import get_console, get_store, open_binder, save_binder
from bindery.exceptions import ItemExistsError, NoDescriptorFound
from bindery.project.structure import BinderStructure

console = Console()

DIR_OPTION = typer.Option(Path("."), "--dir", "-d", help="Project directory.")


def _relative_filename(path: Path, root: Path) -> str:
    """Path of a file relative to the project root, with forward slashes."""
    return Path(os.path.relpath(path.resolve(), root)).as_posix()


def add(
    files: list[Path] = typer.Argument(..., help="Files to add."),
    item_id: str | None = typer.Option(
        None,
        "--id",
        help="Item id (single file only). Defaults to the relative filename.",
    ),
    position: int | None = typer.Option(
        None,
        "--at",
        min=1,
        help="1-based position to insert at. Defaults to the end.",
    ),
    directory: Path = DIR_OPTION,
):
    """Add files to the binder.

    Creates the binder (after asking) if the directory has none.

    Example:
        bindery add chapters/*.txt
    """
    if item_id and len(files) > 1:
        raise typer.BadParameter("--id can only be used with a single file")

    store = get_store()
    try:
        descriptor = store.descriptor(directory)
        structure, root = descriptor.structure, descriptor.root
    except NoDescriptorFound:
        descriptor = None
        structure, root = BinderStructure(), Path(directory).resolve()

    # Check every id before inserting so a clash leaves the binder untouched
    entries = [(file, _relative_filename(file, root)) for file in files]
    seen: set[str] = set()
    for _file, filename in entries:
        new_id = item_id or filename
        if new_id in seen or structure.find_item(new_id) is not None:
            raise ItemExistsError(f"Item '{new_id}' is already in the binder")
        seen.add(new_id)

    index = position - 1 if position is not None else None
    for offset, (file, filename) in enumerate(entries):
        item = structure.add_item(
            filename,
            item_id=item_id,
            index=None if index is None else index + offset,
        )
        if not file.exists():
            console.print(f"[yellow]Added {escape(item.id)} (file does not exist yet)[/yellow]")
        else:
            console.print(f"[green]Added[/green] {escape(item.id)}")

    if descriptor is not None:
        save_binder(store, descriptor)
    elif not store.save(structure, root=root):
        get_console().print("[yellow]Binder not saved[/yellow]")


def remove(
    item_id: str = typer.Argument(..., help="Item id."),
    directory: Path = DIR_OPTION,
):
    """Remove an item from the binder. The file is left in place."""
    store, descriptor = open_binder(directory)
    descriptor.structure.remove_item(item_id)
    save_binder(store, descriptor)
    console.print(f"Removed {escape(item_id)}")


def rename(
    old_id: str = typer.Argument(..., help="Current item id."),
    new_id: str = typer.Argument(..., help="New item id."),
    directory: Path = DIR_OPTION,
):
    """Change an item's id, keeping its position and file."""
    store, descriptor = open_binder(directory)
    descriptor.structure.rename_item(old_id, new_id)
    save_binder(store, descriptor)
    console.print(f"Renamed {escape(old_id)} -> {escape(new_id)}")


def relocate(
    item_id: str = typer.Argument(..., help="Item id."),
    file: Path = typer.Argument(..., help="New file for the item."),
    directory: Path = DIR_OPTION,
):
    """Point an item at a different file (e.g. after moving it)."""
    store, descriptor = open_binder(directory)
    item = descriptor.structure.relocate(item_id, _relative_filename(file, descriptor.root))
    save_binder(store, descriptor)
    console.print(f"{escape(item.id)} -> {escape(item.filename)}")


def tag(
    item_id: str = typer.Argument(..., help="Item id."),
    tags: list[str] = typer.Argument(..., help="Tags to add."),
    directory: Path = DIR_OPTION,
):
    """Add tags to an item."""
    store, descriptor = open_binder(directory)
    for name in tags:
        descriptor.structure.add_tag(item_id, name)
    save_binder(store, descriptor)
    item = descriptor.structure.get_item(item_id)
    console.print(f"{escape(item.id)}: {escape(', '.join(sorted(item.tags)))}")


def untag(
    item_id: str = typer.Argument(..., help="Item id."),
    tags: list[str] = typer.Argument(..., help="Tags to remove."),
    directory: Path = DIR_OPTION,
):
    """Remove tags from an item."""
    store, descriptor = open_binder(directory)
    removed = [name for name in tags if descriptor.structure.remove_tag(item_id, name)]
    if not removed:
        console.print("[yellow]No matching tags[/yellow]")
        return
    save_binder(store, descriptor)
    console.print(f"Removed {escape(', '.join(removed))} from {escape(item_id)}")
