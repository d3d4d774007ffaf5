"""Content renderers for Folio.

This module contains implementations of the ContentRenderer protocol
for the supported markup dialects. Each renderer renders one dialect and
knows how that dialect writes a first-level heading.

Key classes:
- MarkdownRenderer: Renders Markdown to HTML with syntax highlighting.
- JinjaContentRenderer: Renders Jinja templates with the page in context.
- HTMLRenderer: Passes through HTML content.
- RendererRegistry: Ordered registry; its order is the extension precedence
  used by the path resolver.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING

import mistune
from jinja2 import Environment, select_autoescape

from .html_utils import wrap_paragraphs

if TYPE_CHECKING:
    from .content import Page

MARKDOWN_HEADING_RE = re.compile(r"^#(?!#)[ \t]*(?P<text>.*?)[ \t]*#*[ \t]*$", re.MULTILINE)
HTML_HEADING_RE = re.compile(r"<h1\b[^>]*>(?P<text>.*?)</h1>", re.IGNORECASE | re.DOTALL)
_LINE_BREAK_RE = re.compile(r"\r?\n(?:[ \t]*\r?\n)?")


def _generate_heading_id(text: str) -> str:
    """Generate a URL-friendly ID from heading text.

    Args:
        text: The heading text.

    Returns:
        URL-friendly slug suitable for anchor links.
    """
    slug = text.lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[-\s]+", "-", slug)
    return slug.strip("-")


def _split_heading(markup: str, pattern: re.Pattern[str]) -> tuple[str | None, str]:
    """Remove the first match of ``pattern`` and one following blank line."""
    match = pattern.search(markup)
    if not match:
        return None, markup
    end = match.end()
    trailing = _LINE_BREAK_RE.match(markup, end)
    if trailing:
        end = trailing.end()
    heading = " ".join(match.group("text").split())
    return heading or None, markup[: match.start()] + markup[end:]


def _matches_extension(path: Path, extensions: tuple[str, ...]) -> bool:
    name = path.name.lower()
    return any(name.endswith(f".{ext}") for ext in extensions)


class _HighlightRenderer(mistune.HTMLRenderer):
    """Markdown HTML renderer with heading anchors and syntax highlighting."""

    def __init__(self):
        super().__init__(escape=False)
        self._heading_id_counts: dict[str, int] = {}

    def heading(self, text: str, level: int, **attrs) -> str:
        """Render a heading with an auto-generated, de-duplicated ID.

        Args:
            text: Heading text content.
            level: Heading level (1-6).
            **attrs: Additional attributes.

        Returns:
            HTML heading tag with id attribute.
        """
        base_id = _generate_heading_id(text)

        if base_id in self._heading_id_counts:
            self._heading_id_counts[base_id] += 1
            heading_id = f"{base_id}-{self._heading_id_counts[base_id]}"
        else:
            self._heading_id_counts[base_id] = 0
            heading_id = base_id

        return f'<h{level} id="{heading_id}">{text}</h{level}>\n'

    def block_code(self, code: str, info: str | None = None) -> str:
        """Render a code block with Pygments syntax highlighting.

        Args:
            code: The code content.
            info: Language identifier (e.g., 'python', 'javascript').

        Returns:
            HTML string with highlighted code.
        """
        if info:
            try:
                from pygments import highlight
                from pygments.formatters import HtmlFormatter
                from pygments.lexers import get_lexer_by_name

                lexer = get_lexer_by_name(info, stripall=True)
                formatter = HtmlFormatter(nowrap=False, cssclass="highlight")
                return highlight(code, lexer, formatter)
            except Exception:
                pass
        escaped = code.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
        lang_class = f' class="language-{info}"' if info else ""
        return f"<pre><code{lang_class}>{escaped}</code></pre>\n"


class MarkdownRenderer:
    """Renders Markdown content to HTML.

    Headings are ATX style (``# Heading``); trailing ``#`` characters are
    not part of the heading text.
    """

    @property
    def source_type(self) -> str:
        """Return the source type identifier."""
        return "markdown"

    @property
    def extensions(self) -> tuple[str, ...]:
        return ("mdown", "md")

    def can_render(self, path: Path) -> bool:
        """Check if this renderer can handle the given file.

        Args:
            path: Path to the source file.

        Returns:
            True if the file is a Markdown file.
        """
        return _matches_extension(path, self.extensions)

    def extract_heading(self, markup: str) -> tuple[str | None, str]:
        return _split_heading(markup, MARKDOWN_HEADING_RE)

    def render(self, markup: str, page: Page | None = None) -> str:
        """Render Markdown content to HTML.

        Args:
            markup: Markdown source content.
            page: Page being rendered (unused).

        Returns:
            Rendered HTML.
        """
        markdown = mistune.create_markdown(
            renderer=_HighlightRenderer(),
            plugins=["strikethrough", "footnotes", "table", "url"],
        )
        return markdown(markup)

    def render_summary(self, text: str, page: Page | None = None) -> str:
        return self.render(text, page)


class JinjaContentRenderer:
    """Renders Jinja template content.

    The page being rendered is available in the template as ``page`` and
    the site settings as ``settings``.
    Templates produce HTML, so the heading is the first ``<h1>`` element.
    """

    def __init__(self, environment: Environment | None = None):
        """Initialize the renderer.

        Args:
            environment: Optional Jinja environment to compile templates with.
        """
        self.environment = environment or Environment(
            autoescape=select_autoescape(default_for_string=True),
        )

    @property
    def source_type(self) -> str:
        """Return the source type identifier."""
        return "jinja"

    @property
    def extensions(self) -> tuple[str, ...]:
        return ("html.jinja", "jinja")

    def can_render(self, path: Path) -> bool:
        """Check if this renderer can handle the given file.

        Args:
            path: Path to the source file.

        Returns:
            True if the file is a Jinja template.
        """
        return _matches_extension(path, self.extensions)

    def extract_heading(self, markup: str) -> tuple[str | None, str]:
        return _split_heading(markup, HTML_HEADING_RE)

    def render(self, markup: str, page: Page | None = None) -> str:
        """Render a Jinja template string.

        Args:
            markup: Jinja template source content.
            page: Page exposed to the template as ``page``; its repository's
                settings are exposed as ``settings``.

        Returns:
            Rendered HTML.
        """
        template = self.environment.from_string(markup)
        settings = page.repository.settings if page is not None else None
        return template.render(page=page, settings=settings)

    def render_summary(self, text: str, page: Page | None = None) -> str:
        return wrap_paragraphs(self.render(text, page))


class HTMLRenderer:
    """Passes through HTML content unchanged."""

    @property
    def source_type(self) -> str:
        """Return the source type identifier."""
        return "html"

    @property
    def extensions(self) -> tuple[str, ...]:
        return ("html",)

    def can_render(self, path: Path) -> bool:
        """Check if this renderer can handle the given file.

        Args:
            path: Path to the source file.

        Returns:
            True if the file is a plain HTML file.
        """
        return _matches_extension(path, self.extensions)

    def extract_heading(self, markup: str) -> tuple[str | None, str]:
        return _split_heading(markup, HTML_HEADING_RE)

    def render(self, markup: str, page: Page | None = None) -> str:
        """Pass through HTML content.

        Args:
            markup: HTML source content.
            page: Page being rendered (unused).

        Returns:
            The content unchanged.
        """
        return markup

    def render_summary(self, text: str, page: Page | None = None) -> str:
        return wrap_paragraphs(text)


class RendererRegistry:
    """Registry for content renderers.

    Registration order is significant: the first renderer that can handle a
    file wins, and the flattened extension list is the precedence the path
    resolver tries when looking up a logical path.
    """

    def __init__(self):
        """Initialize the registry with default renderers."""
        self._renderers: list = []
        # Register default renderers in priority order
        self.register(MarkdownRenderer())
        self.register(JinjaContentRenderer())
        self.register(HTMLRenderer())

    def register(self, renderer) -> None:
        """Register a new renderer.

        Args:
            renderer: A ContentRenderer implementation.
        """
        self._renderers.append(renderer)

    @property
    def extensions(self) -> tuple[str, ...]:
        """All handled extensions in lookup precedence."""
        result: list[str] = []
        for renderer in self._renderers:
            for ext in renderer.extensions:
                if ext not in result:
                    result.append(ext)
        return tuple(result)

    def get_renderer(self, path: Path):
        """Get the appropriate renderer for a file.

        Args:
            path: Path to the source file.

        Returns:
            The first renderer that can handle the file, or None.
        """
        for renderer in self._renderers:
            if renderer.can_render(path):
                return renderer
        return None


# Default renderer registry instance
default_renderer_registry = RendererRegistry()
