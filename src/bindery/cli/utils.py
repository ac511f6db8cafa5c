"""Shared utilities for CLI commands."""

import functools
import io
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from bindery.exceptions import BinderyError, BoundaryReached
from bindery.project.descriptor import ProjectDescriptor
from bindery.project.store import DescriptorStore

# Type variable for decorators
F = TypeVar("F", bound=Callable[..., Any])

# Context storage for flags
_context: dict[str, Any] = {"verbose": False, "quiet": 0}


def set_context(verbose: bool = False, quiet: int = 0) -> None:
    """Set global context values."""
    _context["verbose"] = verbose
    _context["quiet"] = quiet


def get_context_value(key: str, default: Any = None) -> Any:
    """Get a value from the context."""
    return _context.get(key, default)


def get_console() -> Console:
    """Get a Console instance respecting quiet mode.

    Returns a null console when quiet mode is enabled.
    """
    if is_quiet():
        return Console(file=io.StringIO(), stderr=True)
    return Console(stderr=True)


def is_quiet() -> bool:
    """Check if quiet mode is enabled (-q or --silent)."""
    return bool(get_context_value("quiet", 0) >= 1)


def is_silent() -> bool:
    """Check if silent mode is enabled.

    In silent mode, even errors are suppressed (exit code only).
    """
    return bool(get_context_value("quiet", 0) >= 2)


def is_verbose() -> bool:
    """Check if verbose mode is enabled (-v)."""
    return bool(get_context_value("verbose", False))


def get_store() -> DescriptorStore:
    """Descriptor store that asks on the terminal before creating a binder."""
    return DescriptorStore(confirm=lambda prompt: typer.confirm(prompt, default=True))


def open_binder(directory: Path) -> tuple[DescriptorStore, ProjectDescriptor]:
    """Load the binder reachable from ``directory``.

    Raises:
        NoDescriptorFound: If there is none.
    """
    store = get_store()
    return store, store.descriptor(Path(directory))


def save_binder(store: DescriptorStore, descriptor: ProjectDescriptor) -> None:
    """Save a loaded binder, reporting a declined creation."""
    if not store.save(descriptor.structure):
        get_console().print("[yellow]Binder not saved[/yellow]")


def handle_errors(func: F) -> F:
    """Decorator for consistent CLI error handling.

    Catches common exceptions and displays user-friendly error messages
    instead of raw Python tracebacks. Respects --verbose and --quiet flags.
    Reaching either end of the binder is reported, not treated as failure.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        err_console = get_console()
        verbose = is_verbose()
        silent = is_silent()

        try:
            return func(*args, **kwargs)
        except BoundaryReached as e:
            if not silent:
                err_console.print(f"[yellow]{escape(e.message)}[/yellow]")
            return None
        except BinderyError as e:
            if not silent:
                if verbose:
                    err_console.print_exception()
                else:
                    err_console.print(f"[red]Error:[/red] {escape(e.message)}")
                    if e.details:
                        err_console.print(f"[dim]{escape(e.details)}[/dim]")
                    if e.hint:
                        err_console.print(f"[dim]Hint: {escape(e.hint)}[/dim]")
            raise typer.Exit(e.exit_code)
        except PermissionError as e:
            if not silent:
                if verbose:
                    err_console.print_exception()
                else:
                    filename = getattr(e, "filename", None) or str(e)
                    err_console.print(f"[red]Permission denied:[/red] {filename}")
            raise typer.Exit(1)
        except KeyboardInterrupt:
            if not silent:
                err_console.print("\n[yellow]Interrupted[/yellow]")
            raise typer.Exit(130)
        except (typer.Exit, typer.Abort, typer.BadParameter):
            raise
        except Exception as e:
            if not silent:
                if verbose:
                    err_console.print_exception()
                else:
                    err_console.print(f"[red]Unexpected error:[/red] {type(e).__name__}: {e}")
            raise typer.Exit(1)

    return wrapper  # type: ignore[return-value]
