"""Binder project model.

This package handles the project descriptor file and the ordered
structure of items it holds.
"""

from bindery.project.descriptor import ProjectDescriptor
from bindery.project.item import BinderItem
from bindery.project.store import DescriptorStore, FreshnessToken
from bindery.project.structure import BinderStructure

__all__ = [
    "BinderItem",
    "BinderStructure",
    "DescriptorStore",
    "FreshnessToken",
    "ProjectDescriptor",
]
