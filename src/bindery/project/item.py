"""Binder items.

An item is one entry of the binder structure: a stable id bound to a file
relative to the project root, with optional notes and tags.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Keys with a dedicated attribute on BinderItem; anything else is kept in extra.
FILENAME_KEY = "filename"
NOTES_KEY = "notes"
TAGS_KEY = "tags"
KNOWN_KEYS = (FILENAME_KEY, NOTES_KEY, TAGS_KEY)


@dataclass
class BinderItem:
    """A single file tracked by the binder.

    The id is stable across reorders and is the only handle other
    components use to refer to an item.
    """

    id: str
    filename: str
    notes: str | None = None
    tags: set[str] = field(default_factory=set)
    extra: dict[str, Any] = field(default_factory=dict)  # Unknown on-disk keys

    @property
    def has_notes(self) -> bool:
        """True when the notes field holds any text."""
        return bool(self.notes)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the on-disk record (the id is written as the key)."""
        d: dict[str, Any] = {FILENAME_KEY: self.filename}
        if self.notes is not None:
            d[NOTES_KEY] = self.notes
        if self.tags:
            d[TAGS_KEY] = sorted(self.tags)
        d.update(self.extra)
        return d

    @classmethod
    def from_dict(cls, item_id: str, data: dict[str, Any]) -> BinderItem:
        """Create from an on-disk record keyed by ``item_id``."""
        tags = data.get(TAGS_KEY) or []
        if isinstance(tags, str):
            tags = [tags]
        notes = data.get(NOTES_KEY)
        return cls(
            id=str(item_id),
            filename=str(data[FILENAME_KEY]),
            notes=str(notes) if notes is not None else None,
            tags={str(t) for t in tags},
            extra={k: v for k, v in data.items() if k not in KNOWN_KEYS},
        )
