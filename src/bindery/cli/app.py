"""Main Typer application for Bindery CLI."""

import logging

import typer
from rich.console import Console

from bindery import __version__
from bindery.cli.utils import handle_errors, set_context

# Default console for output
console = Console(stderr=True)

app = typer.Typer(
    name="bindery",
    help="""Bindery: keep the files of a writing project in order.

    [bold]Project:[/bold]
    init        Create a binder in a directory
    status      Show binder summary
    sidebar     List items with status glyphs

    [bold]Items:[/bold]
    add, remove, rename, relocate, tag, untag

    [bold]Order:[/bold]
    move, up, down, next

    [bold]Content:[/bold]
    notes       View or edit an item's notes
    multiview   Concatenate items into one text
    """,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        console.print(f"bindery version {__version__}")
        raise typer.Exit()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging and full tracebacks.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress status output; still shows errors.",
    ),
    silent: bool = typer.Option(
        False,
        "--silent",
        help="Completely silent (exit code only).",
    ),
):
    """Bindery: ordered project binders."""
    ctx.ensure_object(dict)
    quiet_level = 2 if silent else 1 if quiet else 0
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet_level

    # Also set global context for modules that can't access typer context
    set_context(verbose=verbose, quiet=quiet_level)
    _setup_logging(verbose)


def _wrap_command(func):
    """Wrap a command function with error handling."""
    return handle_errors(func)


def _setup_commands():
    """Set up all commands after imports are resolved."""
    # Import here to avoid circular imports
    from bindery.cli import (
        init_cmd,
        item_cmd,
        move_cmd,
        multiview_cmd,
        notes_cmd,
        sidebar_cmd,
        status_cmd,
    )

    app.command("init")(_wrap_command(init_cmd.init))
    app.command("status")(_wrap_command(status_cmd.status))
    app.command("sidebar")(_wrap_command(sidebar_cmd.sidebar))

    app.command("add")(_wrap_command(item_cmd.add))
    app.command("remove")(_wrap_command(item_cmd.remove))
    app.command("rename")(_wrap_command(item_cmd.rename))
    app.command("relocate")(_wrap_command(item_cmd.relocate))
    app.command("tag")(_wrap_command(item_cmd.tag))
    app.command("untag")(_wrap_command(item_cmd.untag))

    app.command("move")(_wrap_command(move_cmd.move))
    app.command("up")(_wrap_command(move_cmd.up))
    app.command("down")(_wrap_command(move_cmd.down))
    app.command("next")(_wrap_command(move_cmd.next_item))

    app.command("notes")(_wrap_command(notes_cmd.notes))
    app.command("multiview")(_wrap_command(multiview_cmd.multiview))


# Setup commands
_setup_commands()


if __name__ == "__main__":
    app()
