"""Descriptor store for Bindery.

Locates, loads, caches and writes the project descriptor. One structure is
cached at a time; asking for a different root evicts it.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from bindery.config.settings import get_settings
from bindery.exceptions import DescriptorError, DescriptorExistsError, NoDescriptorFound
from bindery.project.descriptor import ProjectDescriptor
from bindery.project.structure import BinderStructure

logger = logging.getLogger(__name__)

# Asked before a descriptor file is created; returns True to go ahead.
ConfirmCallback = Callable[[str], bool]


@dataclass(frozen=True)
class FreshnessToken:
    """Which root a cached structure belongs to and when it was read."""

    root: Path
    loaded_at: float

    def is_fresh(self, root: Path, path: Path) -> bool:
        """Check whether the cache can still serve ``root``.

        The cache is stale when the root differs, or when the descriptor's
        modification time is not strictly older than the load time.
        """
        if root != self.root:
            return False
        try:
            mtime = path.stat().st_mtime
        except OSError:
            return False
        return mtime < self.loaded_at


@dataclass
class _CacheEntry:
    token: FreshnessToken
    path: Path
    descriptor: ProjectDescriptor


def _decline(prompt: str) -> bool:
    return False


class DescriptorStore:
    """Loads and saves binder descriptors, caching the last one read."""

    def __init__(
        self,
        filename: str | None = None,
        confirm: ConfirmCallback | None = None,
    ):
        """Initialize the store.

        Args:
            filename: Descriptor file name. Defaults to the configured name.
            confirm: Asked before creating a new descriptor file. Without
                one, saves that would create a file are declined.
        """
        self.filename = filename or get_settings().descriptor_filename
        self.confirm = confirm or _decline
        self._cache: _CacheEntry | None = None

    @property
    def token(self) -> FreshnessToken | None:
        """Freshness token of the cached structure, if any."""
        return self._cache.token if self._cache else None

    def invalidate(self) -> None:
        """Drop the cached structure."""
        self._cache = None

    def locate(self, root: Path) -> Path | None:
        """Find the nearest descriptor file at or above ``root``.

        Returns:
            Path to the descriptor, or None if there is none.
        """
        current = Path(root).resolve()
        for directory in (current, *current.parents):
            candidate = directory / self.filename
            if candidate.is_file():
                return candidate
        return None

    def load(self, root: Path) -> BinderStructure:
        """Get the structure for ``root``, re-reading the file only if needed.

        Raises:
            NoDescriptorFound: If no descriptor is reachable from ``root``.
        """
        return self.descriptor(root).structure

    def descriptor(self, root: Path) -> ProjectDescriptor:
        """Get the full descriptor for ``root`` (structure and top-level keys)."""
        root = Path(root).resolve()
        cache = self._cache
        if cache is not None and cache.token.is_fresh(root, cache.path):
            logger.debug("Using cached binder for %s", root)
            return cache.descriptor

        path = self.locate(root)
        if path is None:
            raise NoDescriptorFound(
                f"No binder found in {root} or its parents",
                details=f"Looked for {self.filename}",
            )

        loaded_at = time.time()
        descriptor = ProjectDescriptor.load(path)
        self._cache = _CacheEntry(FreshnessToken(root, loaded_at), path, descriptor)
        logger.debug("Loaded %d items from %s", len(descriptor.structure), path)
        return descriptor

    def save(self, structure: BinderStructure, root: Path | None = None) -> bool:
        """Write a structure to its descriptor file.

        A structure obtained from ``load`` is written back with the rest of
        its descriptor. Any other structure needs ``root``. If no descriptor
        exists yet, the confirm callback is asked before one is created.

        Returns:
            True if the file was written, False if creation was declined.
        """
        cache = self._cache
        if cache is not None and cache.descriptor.structure is structure:
            descriptor = cache.descriptor
            path = cache.path
            token_root = cache.token.root
        else:
            if root is None:
                raise DescriptorError("A project root is needed to save this structure")
            token_root = Path(root).resolve()
            path = self.locate(token_root) or token_root / self.filename
            descriptor = ProjectDescriptor(root=path.parent, structure=structure)
            if path.is_file():
                # Keep the top-level keys already on disk.
                on_disk = ProjectDescriptor.load(path)
                descriptor.default_mode = on_disk.default_mode
                descriptor.extra = on_disk.extra

        if not path.exists():
            if not self.confirm(f"Create binder file {path}?"):
                logger.info("Declined to create %s", path)
                return False
            if descriptor.default_mode is None:
                descriptor.default_mode = get_settings().default_mode

        self._write(path, descriptor)
        self._cache = _CacheEntry(FreshnessToken(token_root, time.time()), path, descriptor)
        logger.debug("Saved %d items to %s", len(structure), path)
        return True

    def init(
        self,
        root: Path,
        default_mode: str | None = None,
        force: bool = False,
    ) -> ProjectDescriptor:
        """Create an empty descriptor at ``root``.

        Raises:
            DescriptorExistsError: If ``root`` already has one and force=False.
        """
        root = Path(root).resolve()
        path = root / self.filename
        if path.exists() and not force:
            raise DescriptorExistsError(
                f"Binder already exists at {path}",
                hint="Use --force to reinitialize",
            )
        descriptor = ProjectDescriptor(
            root=root,
            default_mode=default_mode or get_settings().default_mode,
        )
        root.mkdir(parents=True, exist_ok=True)
        self._write(path, descriptor)
        self._cache = _CacheEntry(FreshnessToken(root, time.time()), path, descriptor)
        return descriptor

    def _write(self, path: Path, descriptor: ProjectDescriptor) -> None:
        """Write the descriptor atomically using temp file + rename."""
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(descriptor.to_yaml(), encoding="utf-8")
        tmp_path.replace(path)
