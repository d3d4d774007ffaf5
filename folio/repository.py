"""Content repository for Folio.

The ContentRepository is the entry point to a content tree. It owns the file
model cache and answers every lookup and listing query. Pages keep a
reference to the repository that loaded them so that relationship queries
(parent, categories, sub-pages, articles) always run against the live set of
files.

Draft pages are invisible in production mode: they are left out of listings
and menus, and looking them up by path fails as if they did not exist.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from .cache import FileModelCache
from .collections import PageCollection
from .config import Settings
from .content import DefaultPageBuilder, Page
from .menu import Menu
from .paths import PageNotFoundError, normalize_path, parent_path, resolve_nearest
from .renderers import RendererRegistry, default_renderer_registry

logger = logging.getLogger(__name__)


class ContentRepository:
    """Queries over the pages of one content tree.

    Attributes:
        settings: Site settings.
        renderer_registry: Registry of content renderers.
        clock: Returns the current time; used to hide scheduled articles.
        cache: File model cache holding parsed pages.
    """

    def __init__(
        self,
        settings: Settings,
        renderer_registry: RendererRegistry | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize the repository.

        Args:
            settings: Site settings.
            renderer_registry: Optional custom renderer registry.
            clock: Optional replacement for ``datetime.now``.
        """
        self.settings = settings
        self.renderer_registry = renderer_registry or default_renderer_registry
        self.clock = clock or datetime.now
        builder = DefaultPageBuilder(settings.pages_dir, self, self.renderer_registry)
        self.cache = FileModelCache(
            settings.pages_dir, builder, self.renderer_registry.extensions
        )

    @classmethod
    def from_project(cls, project_root: Path, **kwargs) -> ContentRepository:
        """Create a repository for the project rooted at ``project_root``."""
        return cls(Settings.load(project_root), **kwargs)

    def purge(self) -> None:
        """Forget every cached page."""
        self.cache.purge()

    # Lookups

    def find_by_path(self, path: str) -> Page:
        """Return the page at a logical path.

        Args:
            path: Logical path; ``"/"`` is the home page.

        Returns:
            The page.

        Raises:
            PageNotFoundError: If no file backs the path, or the page is a
                draft and the site is in production mode.
        """
        page = self.cache.get_or_load(path)
        if page.hidden:
            raise PageNotFoundError(normalize_path(path))
        return page

    def lookup(self, path: str) -> Page | None:
        """Like find_by_path, but return None instead of raising."""
        try:
            return self.find_by_path(path)
        except PageNotFoundError:
            return None

    def find_nearest(self, path: str) -> Page:
        """Return the page at ``path`` or at its nearest existing ancestor.

        Raises:
            PageNotFoundError: If neither the path nor any ancestor, down to
                the home page, has a visible page.
        """
        requested = normalize_path(path)
        path = requested
        while True:
            filename = resolve_nearest(
                self.cache.root, path, self.renderer_registry.extensions
            )
            page = self.cache.load_file(filename)
            if not page.hidden:
                return page
            if page.is_home:
                raise PageNotFoundError(requested)
            path = parent_path(page.path)

    def parent_of(self, page: Page) -> Page | None:
        """Return the nearest existing ancestor of a page.

        Intermediate paths without a file are skipped, so the parent of
        ``a/b/c`` is ``a`` when ``a/b`` does not exist. The home page has no
        parent.
        """
        if page.is_home:
            return None
        try:
            return self.find_nearest(parent_path(page.path))
        except PageNotFoundError:
            return None

    # Listings

    def find_all(self) -> PageCollection:
        """Every visible page, in directory order."""
        return PageCollection(self.cache.all()).visible()

    def find_articles(self) -> PageCollection:
        """Published articles, newest first.

        Articles are pages with a parsable date. Articles dated in the future
        are scheduled and left out until their date has passed.
        """
        return self.find_all().published(self.clock()).by_date()

    def pages_in(self, category: Page) -> PageCollection:
        """Undated pages assigned to ``category``, ordered by priority then heading."""
        assigned = self.find_all().undated().in_category(category)
        return assigned.by_priority(category.path)

    def articles_in(self, category: Page) -> PageCollection:
        """Published articles assigned to ``category``, newest first."""
        return self.find_articles().in_category(category)

    # Menu

    def menu(self) -> Menu:
        """Parse the menu file, returning an empty menu if there is none."""
        menu_file = self.settings.menu_file
        try:
            text = menu_file.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No menu file at %s", menu_file)
            text = ""
        return Menu.parse(text, self.lookup)
