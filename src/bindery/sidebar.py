"""Sidebar listing for a binder.

Projects a structure into numbered lines, one per item. Each line carries
a status glyph and a hidden binding back to its item id. Marks live only
on the listing; they never touch the structure.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path

from rich.markup import escape
from rich.table import Table

from bindery.config.settings import SidebarSettings, get_settings
from bindery.project.item import BinderItem
from bindery.project.structure import BinderStructure


class ItemStatus(str, Enum):
    """Status of an item's backing file and notes."""

    MISSING = "missing"
    HAS_NOTES = "has-notes"
    NONE = "none"


@dataclass(frozen=True)
class ListingLine:
    """One line of the sidebar."""

    number: int  # 1-based
    item_id: str
    filename: str
    status: ItemStatus
    marked: bool = False
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class Listing:
    """Rendered sidebar: lines in reading order."""

    lines: tuple[ListingLine, ...] = ()
    tag: str | None = None  # Filter the listing was rendered with

    def __len__(self) -> int:
        return len(self.lines)

    def line(self, number: int) -> ListingLine | None:
        """Get a line by its 1-based number."""
        if 1 <= number <= len(self.lines):
            return self.lines[number - 1]
        return None


def item_status(item: BinderItem, root: Path) -> ItemStatus:
    """Work out the sidebar status of an item."""
    if not (root / item.filename).exists():
        return ItemStatus.MISSING
    if item.has_notes:
        return ItemStatus.HAS_NOTES
    return ItemStatus.NONE


class SidebarProjector:
    """Renders structures into listings and maps lines back to ids."""

    def __init__(self, settings: SidebarSettings | None = None):
        self.settings = settings or get_settings().sidebar

    def render(
        self,
        structure: BinderStructure,
        root: Path,
        marks: Iterable[str] = (),
        tag: str | None = None,
    ) -> Listing:
        """Render a structure.

        Args:
            structure: Structure to list.
            root: Project root that item filenames are relative to.
            marks: Ids to show as marked.
            tag: Only list items carrying this tag.
        """
        marked = set(marks)
        items = structure.filter_by_tag(tag) if tag else list(structure)
        lines = tuple(
            ListingLine(
                number=number,
                item_id=item.id,
                filename=item.filename,
                status=item_status(item, Path(root)),
                marked=item.id in marked,
                tags=tuple(sorted(item.tags)),
            )
            for number, item in enumerate(items, start=1)
        )
        return Listing(lines=lines, tag=tag)

    def refresh(self, listing: Listing, structure: BinderStructure, root: Path) -> Listing:
        """Re-render, carrying marks and the tag filter over by id."""
        return self.render(structure, root, marks=self.marked_ids(listing), tag=listing.tag)

    @staticmethod
    def resolve_line_to_id(listing: Listing, line_number: int) -> str | None:
        """Get the item id bound to a line, or None if there is no such line."""
        line = listing.line(line_number)
        return line.item_id if line else None

    def mark(self, listing: Listing, line_number: int) -> Listing:
        """Return a listing with the line marked."""
        return self._set_mark(listing, line_number, True)

    def unmark(self, listing: Listing, line_number: int) -> Listing:
        """Return a listing with the line unmarked."""
        return self._set_mark(listing, line_number, False)

    @staticmethod
    def unmark_all(listing: Listing) -> Listing:
        return replace(listing, lines=tuple(replace(line, marked=False) for line in listing.lines))

    @staticmethod
    def marked_ids(listing: Listing) -> list[str]:
        """Ids of marked lines, in listing order."""
        return [line.item_id for line in listing.lines if line.marked]

    @staticmethod
    def _set_mark(listing: Listing, line_number: int, marked: bool) -> Listing:
        if listing.line(line_number) is None:
            return listing
        lines = list(listing.lines)
        lines[line_number - 1] = replace(lines[line_number - 1], marked=marked)
        return replace(listing, lines=tuple(lines))

    def glyph(self, status: ItemStatus) -> str:
        """Display character for a status."""
        glyphs = self.settings.glyphs
        return {
            ItemStatus.MISSING: glyphs.missing,
            ItemStatus.HAS_NOTES: glyphs.has_notes,
            ItemStatus.NONE: glyphs.none,
        }[status]

    def line_text(self, line: ListingLine) -> str:
        """Plain-text rendering of a line."""
        mark = self.settings.mark_glyph if line.marked else " "
        return f"{mark}{self.glyph(line.status)} {line.item_id}"

    def to_table(self, listing: Listing, title: str | None = None) -> Table:
        """Build a Rich table for display."""
        table = Table(title=title)
        table.add_column("#", style="dim", justify="right")
        table.add_column("", width=2)
        table.add_column("Item")
        table.add_column("File", style="dim")
        table.add_column("Tags")

        status_style = {
            ItemStatus.MISSING: "red",
            ItemStatus.HAS_NOTES: "cyan",
            ItemStatus.NONE: "",
        }
        for line in listing.lines:
            mark = self.settings.mark_glyph if line.marked else " "
            style = "bold" if line.marked else status_style[line.status]
            table.add_row(
                str(line.number),
                escape(f"{mark}{self.glyph(line.status)}"),
                escape(line.item_id),
                escape(line.filename),
                escape(", ".join(line.tags)) or "-",
                style=style or None,
            )
        return table
