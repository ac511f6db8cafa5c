"""Multiview composition.

Joins the contents of several binder items into one read-only text, in
the order the ids are given.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from bindery.config.settings import MultiviewSettings, get_settings
from bindery.exceptions import FileUnreadable
from bindery.project.structure import BinderStructure
from bindery.sidebar import Listing, SidebarProjector

logger = logging.getLogger(__name__)


class MultiviewComposer:
    """Concatenates item files with a separator after each one.

    Composition stops at the first file that cannot be read; no partial
    text is returned.
    """

    def __init__(self, settings: MultiviewSettings | None = None):
        self.settings = settings or get_settings().multiview

    def compose(
        self,
        structure: BinderStructure,
        root: Path,
        ids: Iterable[str],
        separator: str | None = None,
    ) -> str:
        """Compose the files of ``ids``.

        Args:
            structure: Structure the ids are resolved in.
            root: Project root that item filenames are relative to.
            ids: Item ids, in output order.
            separator: Appended after each file. Defaults to the configured one.

        Returns:
            The concatenated text.

        Raises:
            ItemNotFound: If an id is not in the structure.
            FileUnreadable: If an item's file cannot be read.
        """
        if separator is None:
            separator = self.settings.separator

        parts: list[str] = []
        for item_id in ids:
            item = structure.get_item(item_id)
            path = Path(root) / item.filename
            try:
                with open(path, encoding=self.settings.encoding, newline="") as f:
                    content = f.read()
            except (OSError, UnicodeDecodeError) as e:
                raise FileUnreadable(
                    f"Cannot read '{item.filename}' for item '{item_id}'",
                    details=str(e),
                ) from e
            parts.append(content)
            parts.append(separator)

        logger.debug("Composed %d items", len(parts) // 2)
        return "".join(parts)

    def compose_marked(
        self,
        structure: BinderStructure,
        root: Path,
        listing: Listing,
        separator: str | None = None,
    ) -> str:
        """Compose the marked lines of a sidebar listing, in listing order."""
        ids = SidebarProjector.marked_ids(listing)
        return self.compose(structure, root, ids, separator=separator)
