"""File model cache for Folio.

Parsed pages are cached per absolute filename and re-parsed only when the
file's modification time moves forward. The cache is shared by every lookup
in the process, so entry updates are guarded by a lock; two threads racing
to re-parse the same stale file both succeed and the last one stored wins.

Key classes:
- FileModelCache: Resolves logical paths and returns cached or fresh pages.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from .paths import PageNotFoundError, logical_path, resolve

if TYPE_CHECKING:
    from .content import Page
    from .protocols import PageBuilder

logger = logging.getLogger(__name__)


class FileModelCache:
    """Cache of parsed pages keyed by absolute filename.

    Attributes:
        root: Directory holding the pages.
        builder: PageBuilder used to parse files on a miss.
        extensions: Known extensions in lookup precedence.
    """

    def __init__(self, root: Path, builder: PageBuilder, extensions: tuple[str, ...]):
        """Initialize the cache.

        Args:
            root: Directory holding the pages.
            builder: PageBuilder used to parse files.
            extensions: Known extensions in lookup precedence.
        """
        self.root = root.absolute()
        self.builder = builder
        self.extensions = tuple(extensions)
        self._entries: dict[Path, Page] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_or_load(self, path: str) -> Page:
        """Return the page for a logical path.

        Args:
            path: Logical path of the page.

        Returns:
            The cached Page, or a freshly parsed one if the file changed.

        Raises:
            PageNotFoundError: If no file backs the path.
        """
        filename = resolve(self.root, path, self.extensions)
        return self.load_file(filename)

    def load_file(self, filename: Path) -> Page:
        """Return the page for a known content file.

        Args:
            filename: Path to the content file.

        Returns:
            The cached Page, or a freshly parsed one if the file changed.

        Raises:
            PageNotFoundError: If the file no longer exists.
        """
        filename = filename.absolute()
        try:
            mtime = filename.stat().st_mtime
        except FileNotFoundError as exc:
            self._evict(filename)
            raise self._not_found(filename) from exc

        with self._lock:
            cached = self._entries.get(filename)
        if cached is not None and not mtime > cached.mtime:
            return cached

        try:
            raw_text = filename.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError as exc:
            self._evict(filename)
            raise self._not_found(filename) from exc

        if cached is None:
            logger.debug("Loading %s", filename)
        else:
            logger.debug("Reloading modified file %s", filename)
        page = self.builder.build(filename, mtime, raw_text)
        with self._lock:
            self._entries[filename] = page
        return page

    def all(self) -> list[Page]:
        """Load every content file under the root.

        Files are visited in sorted directory order. Files that disappear
        while the tree is being walked are skipped.

        Returns:
            List of pages, one per content file.
        """
        pages: list[Page] = []
        for filename in self.iter_files():
            try:
                pages.append(self.load_file(filename))
            except PageNotFoundError:
                continue
        return pages

    def iter_files(self) -> list[Path]:
        """List every file under the root with a known extension.

        Returns:
            Sorted list of content file paths.
        """
        if not self.root.is_dir():
            return []
        suffixes = tuple(f".{ext}" for ext in self.extensions)
        files: list[Path] = []
        walked = sorted(self.root.rglob("*"), key=lambda p: p.relative_to(self.root).parts)
        for path in walked:
            if path.is_dir():
                continue
            if path.name.lower().endswith(suffixes):
                files.append(path)
        return files

    def purge(self) -> None:
        """Drop every cached entry."""
        with self._lock:
            self._entries.clear()

    def _evict(self, filename: Path) -> None:
        with self._lock:
            self._entries.pop(filename, None)

    def _not_found(self, filename: Path) -> PageNotFoundError:
        try:
            path = logical_path(self.root, filename, self.extensions)
        except ValueError:
            path = str(filename)
        return PageNotFoundError(path, [filename])
