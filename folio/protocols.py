"""Protocol definitions for Folio.

This module defines the interfaces used between the content model and its
pluggable collaborators. Renderers are supplied per markup dialect, and the
file model cache builds pages through a PageBuilder so it never depends on a
concrete Page implementation.
"""

from __future__ import annotations

from abc import abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .content import Page


@runtime_checkable
class ContentRenderer(Protocol):
    """Protocol for rendering one markup dialect to HTML.

    Implementations also know how their dialect spells a first-level
    heading, since the heading is stored separately from the body.
    """

    @property
    @abstractmethod
    def source_type(self) -> str:
        """Return the dialect identifier (e.g., 'markdown', 'html', 'jinja')."""
        ...

    @property
    @abstractmethod
    def extensions(self) -> tuple[str, ...]:
        """Return handled file extensions without the leading dot, in priority order."""
        ...

    @abstractmethod
    def can_render(self, path: Path) -> bool:
        """Check if this renderer can handle the given file.

        Args:
            path: Path to the source file.

        Returns:
            True if this renderer can process the file.
        """
        ...

    @abstractmethod
    def extract_heading(self, markup: str) -> tuple[str | None, str]:
        """Split the first-level heading from the markup.

        Args:
            markup: Body markup with the metadata header already removed.

        Returns:
            Tuple of (heading text or None, markup without the heading).
        """
        ...

    @abstractmethod
    def render(self, markup: str, page: Page | None = None) -> str:
        """Render markup to HTML.

        Args:
            markup: Source markup to render.
            page: Page being rendered, available to templating dialects.

        Returns:
            Rendered HTML.
        """
        ...

    @abstractmethod
    def render_summary(self, text: str, page: Page | None = None) -> str:
        """Render summary text so that each paragraph is wrapped in ``<p>`` tags."""
        ...


@runtime_checkable
class PageBuilder(Protocol):
    """Protocol for building Page objects from files.

    This separates page construction from caching and path resolution.
    """

    @abstractmethod
    def build(self, filename: Path, mtime: float, raw_text: str) -> Page:
        """Build a Page object from a snapshot of a source file.

        Args:
            filename: Absolute path to the source file.
            mtime: Modification time observed before reading.
            raw_text: Full file contents.

        Returns:
            Page object.
        """
        ...
