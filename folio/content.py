"""Content model for Folio.

This module turns a snapshot of a content file into a Page. A Page exposes
typed accessors over its metadata header, renders its body lazily through the
renderer for its markup dialect, and answers relationship queries (parent,
categories, sub-pages, articles) through the repository that loaded it.

Key classes:
- Page: Immutable snapshot of one content file.
- DefaultPageBuilder: Implementation of the PageBuilder protocol.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from functools import cached_property
from pathlib import Path
from typing import TYPE_CHECKING

from .html_utils import first_paragraph_html
from .metadata import parse_categories, parse_date, parse_flags, parse_metadata
from .paths import INDEX_NAME, logical_path, normalize_path
from .renderers import HTMLRenderer, RendererRegistry, default_renderer_registry

if TYPE_CHECKING:
    from .collections import PageCollection
    from .protocols import ContentRenderer
    from .repository import ContentRepository

DEFAULT_LAYOUT = "layout"
DEFAULT_TEMPLATE = "page"
DRAFT_FLAG = "draft"


@dataclass(frozen=True, eq=False)
class Page:
    """Represents one content file as it was when it was loaded.

    Attributes:
        path: Logical path, e.g. ``blog/first-post``; ``""`` for the home page.
        filename: Absolute path to the backing file.
        mtime: Modification time observed when the file was read.
        raw_text: Full file contents.
        metadata: Lower-cased header keys mapped to trimmed values.
        markup: Body markup including the heading.
        heading: First-level heading of the body, if any.
        body_markup: Body markup with the heading removed.
        source_type: Markup dialect ("markdown", "jinja" or "html").
    """

    path: str
    filename: Path
    mtime: float
    raw_text: str
    metadata: dict[str, str]
    markup: str
    heading: str | None
    body_markup: str
    source_type: str
    renderer: ContentRenderer = field(repr=False)
    repository: ContentRepository = field(repr=False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Page):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    def meta(self, key: str) -> str | None:
        """Look up an arbitrary metadata value by case-insensitive key."""
        return self.metadata.get(key.strip().lower())

    # Path-derived fields

    @property
    def is_home(self) -> bool:
        return self.path == ""

    @property
    def is_index_page(self) -> bool:
        name = self.filename.name
        return name.split(".", 1)[0] == INDEX_NAME

    @property
    def permalink(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    @property
    def abspath(self) -> str:
        return f"/{self.path}" if self.path else "/"

    @property
    def last_modified(self) -> datetime:
        return datetime.fromtimestamp(self.mtime)

    # Metadata-derived fields

    @cached_property
    def date(self) -> datetime | None:
        return parse_date(self.meta("date"))

    @cached_property
    def flags(self) -> frozenset[str]:
        return parse_flags(self.meta("flags"))

    def flagged_as(self, flag: str) -> bool:
        return flag in self.flags

    @property
    def draft(self) -> bool:
        return self.flagged_as(DRAFT_FLAG)

    @property
    def hidden(self) -> bool:
        """True if the page is a draft and the site runs in production mode."""
        return self.draft and self.repository.settings.production

    @property
    def layout(self) -> str:
        return self.meta("layout") or DEFAULT_LAYOUT

    @property
    def template(self) -> str:
        return self.meta("template") or DEFAULT_TEMPLATE

    @property
    def description(self) -> str | None:
        return self.meta("description")

    @property
    def keywords(self) -> str | None:
        return self.meta("keywords")

    @property
    def atom_id(self) -> str | None:
        return self.meta("atom id")

    @property
    def read_more(self) -> str:
        return self.meta("read more") or self.repository.settings.read_more

    @property
    def link_text(self) -> str | None:
        return self.meta("link text") or self.heading

    @property
    def title(self) -> str:
        """Page title for use in the document head.

        An explicit ``title`` value wins. Otherwise the home page uses the
        site title, and other pages combine their heading with it.
        """
        explicit = self.meta("title")
        if explicit:
            return explicit
        site_title = self.repository.settings.title
        if self.is_home:
            return site_title
        if self.heading:
            return f"{self.heading} - {site_title}"
        return site_title

    # Rendering

    @cached_property
    def body_html(self) -> str:
        return self.renderer.render(self.body_markup, self)

    def to_html(self) -> str:
        """Render the whole body, heading included."""
        return self.renderer.render(self.markup, self)

    @cached_property
    def summary(self) -> str | None:
        """Summary HTML for listings.

        A ``summary`` metadata value is rendered with the page's dialect,
        with each literal ``\\n`` treated as a line break so that ``\\n\\n``
        separates paragraphs. Without one, the first paragraph of the body
        is used.
        """
        text = self.meta("summary")
        if text:
            return self.renderer.render_summary(text.replace("\\n", "\n"), self)
        return first_paragraph_html(self.body_html)

    # Relationships

    @cached_property
    def category_specs(self) -> tuple[tuple[str, int], ...]:
        """Declared (category path, priority) pairs in declaration order."""
        return tuple(
            (normalize_path(path), priority)
            for path, priority in parse_categories(self.meta("categories"))
        )

    def priority(self, category: str) -> int | None:
        """Return the priority declared for a category, or None if not assigned."""
        category = normalize_path(category)
        for path, priority in self.category_specs:
            if path == category:
                return priority
        return None

    @property
    def categories(self) -> list[Page]:
        """Category pages this page is assigned to, sorted by heading.

        Resolved against the live set of pages on every access, so references
        to categories that no longer exist are dropped.
        """
        found: dict[str, Page] = {}
        for path, _priority in self.category_specs:
            if path in found:
                continue
            category = self.repository.lookup(path)
            if category is not None:
                found[path] = category
        return sorted(found.values(), key=lambda page: page.heading or "")

    def in_category(self, category: Page | str) -> bool:
        path = category.path if isinstance(category, Page) else normalize_path(category)
        if self.priority(path) is None:
            return False
        return any(page.path == path for page in self.categories)

    @property
    def parent(self) -> Page | None:
        return self.repository.parent_of(self)

    @property
    def pages(self) -> PageCollection:
        """Undated pages assigned to this page as a category."""
        return self.repository.pages_in(self)

    @property
    def articles(self) -> PageCollection:
        """Published articles assigned to this page as a category."""
        return self.repository.articles_in(self)


class DefaultPageBuilder:
    """Builds Page objects from content file snapshots.

    Attributes:
        root: Directory holding the pages.
        repository: Repository the built pages query for relationships.
        renderer_registry: Registry of content renderers.
    """

    def __init__(
        self,
        root: Path,
        repository: ContentRepository,
        renderer_registry: RendererRegistry | None = None,
    ):
        """Initialize the page builder.

        Args:
            root: Directory holding the pages.
            repository: Repository the built pages belong to.
            renderer_registry: Optional custom renderer registry.
        """
        self.root = root.absolute()
        self.repository = repository
        self.renderer_registry = renderer_registry or default_renderer_registry

    def build(self, filename: Path, mtime: float, raw_text: str) -> Page:
        """Build a Page object from a file snapshot.

        Args:
            filename: Absolute path to the source file.
            mtime: Modification time observed before reading.
            raw_text: Full file contents.

        Returns:
            Page object.
        """
        renderer = self.renderer_registry.get_renderer(filename) or HTMLRenderer()
        metadata, markup = parse_metadata(raw_text)
        heading, body_markup = renderer.extract_heading(markup)
        return Page(
            path=logical_path(self.root, filename, self.renderer_registry.extensions),
            filename=filename,
            mtime=mtime,
            raw_text=raw_text,
            metadata=metadata,
            markup=markup,
            heading=heading,
            body_markup=body_markup,
            source_type=renderer.source_type,
            renderer=renderer,
            repository=self.repository,
        )
