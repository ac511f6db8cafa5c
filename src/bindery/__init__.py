"""Bindery: ordered project binders for writing projects.

A binder groups the files of a project (chapters, notes, documents) under a
single descriptor file that records their reading order, notes and tags.

Usage:
    >>> from pathlib import Path
    >>> from bindery import DescriptorStore, SidebarProjector
    >>>
    >>> store = DescriptorStore()
    >>> structure = store.load(Path("."))
    >>> structure.move_relative("chapter-2.txt", -1)
    >>> store.save(structure)
"""

__version__ = "0.1.0"

from bindery.config.settings import Settings, get_settings
from bindery.exceptions import (
    BinderyError,
    BoundaryReached,
    DescriptorError,
    DescriptorExistsError,
    DescriptorFormatError,
    EndOfSequence,
    FileUnreadable,
    ItemExistsError,
    ItemNotFound,
    NoDescriptorFound,
    NotInEditingContext,
    StructureError,
)
from bindery.multiview import MultiviewComposer
from bindery.notes import CommitResult, NotesSession
from bindery.project import (
    BinderItem,
    BinderStructure,
    DescriptorStore,
    FreshnessToken,
    ProjectDescriptor,
)
from bindery.sidebar import ItemStatus, Listing, ListingLine, SidebarProjector

__all__ = [
    # Version
    "__version__",
    # Exceptions
    "BinderyError",
    "DescriptorError",
    "NoDescriptorFound",
    "DescriptorExistsError",
    "DescriptorFormatError",
    "StructureError",
    "ItemNotFound",
    "ItemExistsError",
    "BoundaryReached",
    "EndOfSequence",
    "FileUnreadable",
    "NotInEditingContext",
    # Project model
    "BinderItem",
    "BinderStructure",
    "DescriptorStore",
    "FreshnessToken",
    "ProjectDescriptor",
    # Views
    "SidebarProjector",
    "Listing",
    "ListingLine",
    "ItemStatus",
    "MultiviewComposer",
    "NotesSession",
    "CommitResult",
    # Configuration
    "Settings",
    "get_settings",
]
