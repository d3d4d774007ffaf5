"""HTML utility functions for Folio.

This module provides the small amount of HTML string handling needed to
produce page summaries.

Functions:
    wrap_paragraphs: Wrap each non-empty line of text in ``<p>`` tags.
    first_paragraph_html: Extract the first ``<p>`` element from HTML.
"""

from __future__ import annotations

import re

_PARAGRAPH_RE = re.compile(r"<p\b[^>]*>.*?</p>", re.IGNORECASE | re.DOTALL)


def wrap_paragraphs(text: str) -> str:
    """Wrap each non-empty line of text in a paragraph tag.

    Args:
        text: Plain or inline-HTML text, one paragraph per line.

    Returns:
        HTML with one ``<p>`` element per non-empty line.

    Examples:
        >>> wrap_paragraphs("Wrap me\\nIn paragraph tags")
        '<p>Wrap me</p>\\n<p>In paragraph tags</p>\\n'
    """
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    return "".join(f"<p>{line}</p>\n" for line in lines)


def first_paragraph_html(html: str) -> str | None:
    """Return the first ``<p>...</p>`` element of an HTML fragment.

    Args:
        html: Rendered HTML.

    Returns:
        The first paragraph element including its tags, or None.
    """
    match = _PARAGRAPH_RE.search(html)
    if not match:
        return None
    return match.group(0)
