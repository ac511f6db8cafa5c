"""Project descriptor for Bindery.

The descriptor is the single file at a project root that holds the binder
structure. It is stored as YAML behind a fixed header comment:

    # -*- coding: utf-8; mode: yaml -*-
    # Binder-Format-Version: 0
    structure:
      chapter-1.txt:
        filename: chapter-1.txt
        notes: First draft
        tags: [draft]
    default-mode: markdown

``structure`` is an ordered mapping of item id to item record. Top-level
keys other than ``structure`` and ``default-mode`` are kept as-is.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from bindery.exceptions import DescriptorFormatError, ItemExistsError
from bindery.project.item import FILENAME_KEY, BinderItem
from bindery.project.structure import BinderStructure

FORMAT_VERSION = 0
HEADER = f"# -*- coding: utf-8; mode: yaml -*-\n# Binder-Format-Version: {FORMAT_VERSION}\n"

STRUCTURE_KEY = "structure"
DEFAULT_MODE_KEY = "default-mode"


@dataclass
class ProjectDescriptor:
    """A binder project: its root directory and everything in its descriptor."""

    root: Path
    structure: BinderStructure = field(default_factory=BinderStructure)
    default_mode: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for YAML serialization."""
        d: dict[str, Any] = {
            STRUCTURE_KEY: {item.id: item.to_dict() for item in self.structure},
        }
        if self.default_mode is not None:
            d[DEFAULT_MODE_KEY] = self.default_mode
        d.update(self.extra)
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any], root: Path) -> ProjectDescriptor:
        """Create from dictionary.

        Raises:
            DescriptorFormatError: If the data does not describe a structure.
        """
        records = data.get(STRUCTURE_KEY) or {}
        if not isinstance(records, dict):
            raise DescriptorFormatError(
                "'structure' must be a mapping of item ids to records",
                details=f"Got {type(records).__name__}",
            )

        items = []
        for item_id, record in records.items():
            if not isinstance(record, dict) or FILENAME_KEY not in record:
                raise DescriptorFormatError(f"Item '{item_id}' has no filename")
            items.append(BinderItem.from_dict(item_id, record))

        try:
            structure = BinderStructure(items)
        except ItemExistsError as e:
            raise DescriptorFormatError(e.message) from e

        mode = data.get(DEFAULT_MODE_KEY)
        return cls(
            root=root,
            structure=structure,
            default_mode=str(mode) if mode is not None else None,
            extra={k: v for k, v in data.items() if k not in (STRUCTURE_KEY, DEFAULT_MODE_KEY)},
        )

    def to_yaml(self) -> str:
        """Convert to YAML string, header included."""
        body = yaml.safe_dump(
            self.to_dict(),
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
        return HEADER + body

    @classmethod
    def from_yaml(cls, yaml_str: str, root: Path) -> ProjectDescriptor:
        """Create from YAML string."""
        try:
            data = yaml.safe_load(yaml_str)
        except yaml.YAMLError as e:
            raise DescriptorFormatError("Binder file is not valid YAML", details=str(e)) from e
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise DescriptorFormatError("Binder file must contain a mapping")
        return cls.from_dict(data, root)

    @classmethod
    def load(cls, path: Path) -> ProjectDescriptor:
        """Load a descriptor file. The project root is the file's directory."""
        return cls.from_yaml(path.read_text(encoding="utf-8"), root=path.parent)
