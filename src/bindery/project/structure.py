"""Ordered binder structure.

The structure is the reading order of a binder: a sequence of items with
unique ids. Every mutator validates before touching the sequence, so a
failed call leaves the structure exactly as it was.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from bindery.exceptions import (
    BoundaryReached,
    EndOfSequence,
    ItemExistsError,
    ItemNotFound,
    StructureError,
)
from bindery.project.item import FILENAME_KEY, NOTES_KEY, TAGS_KEY, BinderItem

logger = logging.getLogger(__name__)


class BinderStructure:
    """In-memory ordered collection of binder items."""

    def __init__(self, items: Iterable[BinderItem] = ()):
        self._items: list[BinderItem] = []
        for item in items:
            if self.find_item(item.id) is not None:
                raise ItemExistsError(f"Duplicate item id: {item.id}")
            self._items.append(item)

    def __iter__(self) -> Iterator[BinderItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BinderStructure):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"BinderStructure({self.ids()!r})"

    @property
    def items(self) -> tuple[BinderItem, ...]:
        """Items in reading order."""
        return tuple(self._items)

    def ids(self) -> list[str]:
        """Item ids in reading order."""
        return [item.id for item in self._items]

    # Lookup

    def find_item(self, item_id: str) -> BinderItem | None:
        """Get an item by id, or None."""
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def get_item(self, item_id: str) -> BinderItem:
        """Get an item by id.

        Raises:
            ItemNotFound: If no item has this id.
        """
        item = self.find_item(item_id)
        if item is None:
            raise ItemNotFound(f"No item '{item_id}' in binder")
        return item

    def index_of(self, item: BinderItem | str) -> int:
        """Position of an item in the reading order.

        Items are matched by id, never by value: two items sharing every
        field except the id are distinct.

        Args:
            item: The item or its id.

        Raises:
            ItemNotFound: If the item is not in the structure.
        """
        item_id = item.id if isinstance(item, BinderItem) else item
        for index, candidate in enumerate(self._items):
            if candidate.id == item_id:
                return index
        raise ItemNotFound(f"No item '{item_id}' in binder")

    def get_property(self, item_id: str, key: str) -> Any:
        """Read a named field of an item.

        Returns None for a field the item does not carry; empty tags count
        as absent.
        """
        item = self.get_item(item_id)
        if key == "id":
            return item.id
        if key == FILENAME_KEY:
            return item.filename
        if key == NOTES_KEY:
            return item.notes
        if key == TAGS_KEY:
            return set(item.tags) if item.tags else None
        return item.extra.get(key)

    def set_property(self, item_id: str, key: str, value: Any) -> None:
        """Write a named field of an item, creating it if absent."""
        item = self.get_item(item_id)
        if key == "id":
            raise StructureError(
                "Item ids cannot be set as a property",
                hint="Use rename_item() to change an id",
            )
        if key == FILENAME_KEY:
            item.filename = str(value)
        elif key == NOTES_KEY:
            item.notes = None if value is None else str(value)
        elif key == TAGS_KEY:
            item.tags = {str(t) for t in value or ()}
        else:
            item.extra[key] = value

    def remove_property(self, item_id: str, key: str) -> None:
        """Drop a named field of an item. The filename cannot be dropped."""
        item = self.get_item(item_id)
        if key in ("id", FILENAME_KEY):
            raise StructureError(f"Property '{key}' is required")
        if key == NOTES_KEY:
            item.notes = None
        elif key == TAGS_KEY:
            item.tags = set()
        else:
            item.extra.pop(key, None)

    # Ordering

    def next_item(self, item_id: str, n: int = 1) -> BinderItem:
        """Item ``n`` positions after ``item_id`` (negative goes backwards).

        Raises:
            EndOfSequence: If the position falls outside the structure.
        """
        target = self.index_of(item_id) + n
        if not 0 <= target < len(self._items):
            where = "end" if n > 0 else "beginning"
            raise EndOfSequence(f"Reached the {where} of the binder")
        return self._items[target]

    def move_relative(self, item_id: str, delta: int) -> None:
        """Swap an item with the one ``delta`` positions away.

        Raises:
            BoundaryReached: If the target position is out of range. The
                order is left unchanged.
        """
        index = self.index_of(item_id)
        target = index + delta
        if not 0 <= target < len(self._items):
            where = "bottom" if delta > 0 else "top"
            raise BoundaryReached(f"Cannot move '{item_id}' past the {where} of the binder")
        items = self._items
        items[index], items[target] = items[target], items[index]
        logger.debug("Moved %s from %d to %d", item_id, index, target)

    # Membership

    def add_item(
        self,
        filename: str,
        item_id: str | None = None,
        index: int | None = None,
        notes: str | None = None,
        tags: Iterable[str] = (),
    ) -> BinderItem:
        """Insert a new item. The id defaults to the filename.

        Args:
            filename: Path of the file relative to the project root.
            item_id: Explicit id.
            index: Insert position. Defaults to the end.
            notes: Initial notes.
            tags: Initial tags.

        Raises:
            ItemExistsError: If the id is already taken.
        """
        item_id = item_id or filename
        if self.find_item(item_id) is not None:
            raise ItemExistsError(f"Item '{item_id}' is already in the binder")
        item = BinderItem(id=item_id, filename=filename, notes=notes, tags=set(tags))
        if index is None:
            self._items.append(item)
        else:
            self._items.insert(index, item)
        logger.debug("Added %s", item_id)
        return item

    def remove_item(self, item_id: str) -> BinderItem:
        """Remove an item from the structure. The file itself is untouched."""
        item = self.get_item(item_id)
        self._items.remove(item)
        logger.debug("Removed %s", item_id)
        return item

    def rename_item(self, old_id: str, new_id: str) -> BinderItem:
        """Give an item a new id, keeping its position and fields."""
        item = self.get_item(old_id)
        if new_id != old_id and self.find_item(new_id) is not None:
            raise ItemExistsError(f"Item '{new_id}' is already in the binder")
        item.id = new_id
        return item

    def relocate(self, item_id: str, filename: str) -> BinderItem:
        """Point an item at a different file, keeping its id."""
        item = self.get_item(item_id)
        item.filename = filename
        return item

    # Tags

    def add_tag(self, item_id: str, tag: str) -> None:
        """Add a tag to an item."""
        self.get_item(item_id).tags.add(tag)

    def remove_tag(self, item_id: str, tag: str) -> bool:
        """Remove a tag from an item. Returns False if it was not there."""
        item = self.get_item(item_id)
        if tag not in item.tags:
            return False
        item.tags.discard(tag)
        return True

    def filter_by_tag(self, tag: str) -> list[BinderItem]:
        """Items carrying ``tag``, in reading order."""
        return [item for item in self._items if tag in item.tags]

    def all_tags(self) -> list[str]:
        """Every tag used in the binder, sorted."""
        tags: set[str] = set()
        for item in self._items:
            tags.update(item.tags)
        return sorted(tags)
