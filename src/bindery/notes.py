"""Notes editing sessions.

A session binds one item's notes to an editable buffer. Edits stay in the
buffer until committed; committing writes them into the in-memory
structure only. Saving the binder is a separate step.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from bindery.exceptions import NotInEditingContext
from bindery.project.structure import BinderStructure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommitResult:
    """Outcome of a commit."""

    item_id: str
    changed: bool

    @property
    def message(self) -> str:
        if not self.changed:
            return "No changes to notes"
        return f"Saved notes for {self.item_id}"


class NotesSession:
    """Editing session for the notes of a single item.

    States: closed (``bound_id`` is None) or open on one item id.
    """

    def __init__(self, structure: BinderStructure):
        self.structure = structure
        self.bound_id: str | None = None
        self.content: str = ""
        self.is_dirty: bool = False

    @property
    def is_open(self) -> bool:
        return self.bound_id is not None

    def open(self, item_id: str) -> str:
        """Open the notes of ``item_id`` and return the buffer content.

        Re-opening the item already bound keeps the unsaved buffer.

        Raises:
            ItemNotFound: If the id is not in the structure.
        """
        item = self.structure.get_item(item_id)
        if item_id != self.bound_id:
            self.bound_id = item_id
            self.content = item.notes or ""
            self.is_dirty = False
        return self.content

    def edit(self, text: str) -> None:
        """Replace the buffer content."""
        self._require_open()
        if text != self.content:
            self.content = text
            self.is_dirty = True

    def commit(self) -> CommitResult:
        """Write the buffer into the item's notes.

        Raises:
            NotInEditingContext: If no session is open.
        """
        item_id = self._require_open()
        if not self.is_dirty:
            return CommitResult(item_id, changed=False)
        self.structure.set_property(item_id, "notes", self.content)
        self.is_dirty = False
        logger.debug("Committed notes for %s", item_id)
        return CommitResult(item_id, changed=True)

    def close(self) -> None:
        """Close the session, discarding uncommitted edits."""
        self.bound_id = None
        self.content = ""
        self.is_dirty = False

    def _require_open(self) -> str:
        if self.bound_id is None:
            raise NotInEditingContext(
                "No notes are open for editing",
                hint="Open an item's notes first",
            )
        return self.bound_id
