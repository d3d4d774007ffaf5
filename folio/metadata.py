"""Metadata parsing for Folio.

Content files start with an optional block of ``key: value`` lines followed by
a blank line and the body. Parsing is best effort: malformed header lines are
dropped and nothing in this module raises on bad input.

Key functions:
- parse_metadata: Split raw file text into a metadata mapping and a body.
- parse_date: Parse a human readable date, returning None on failure.
- parse_flags: Split a comma separated flag list.
- parse_categories: Parse ``path:priority`` category specifiers.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime

from dateutil import parser as dateutil_parser

logger = logging.getLogger(__name__)

PARAGRAPH_BREAK_RE = re.compile(r"\r?\n\r?\n")
METADATA_LINE_RE = re.compile(r"^[\w ]+:")
CATEGORY_PRIORITY_RE = re.compile(r"^(?P<path>.*?)\s*:\s*(?P<priority>-?\d+)$")


def looks_like_metadata(block: str) -> bool:
    """Return True if the first line of ``block`` is a ``key: value`` line."""
    first_line = block.splitlines()[0] if block else ""
    return bool(METADATA_LINE_RE.match(first_line))


def parse_metadata(text: str) -> tuple[dict[str, str], str]:
    """Extract the metadata header and body from raw file content.

    The header is the leading block of text up to the first blank line,
    provided its first line looks like ``key: value``. Lines in the header
    without a colon are skipped. Keys are lower-cased, keys and values are
    trimmed, and the last occurrence of a duplicate key wins.

    Args:
        text: Raw file content.

    Returns:
        Tuple of (metadata dict, body text).
    """
    parts = PARAGRAPH_BREAK_RE.split(text, maxsplit=1)
    header = parts[0]
    if not looks_like_metadata(header):
        return {}, text

    metadata: dict[str, str] = {}
    for line in header.splitlines():
        key, sep, value = line.partition(":")
        if not sep:
            logger.debug("Skipping malformed metadata line: %r", line)
            continue
        metadata[key.strip().lower()] = value.strip()
    body = parts[1] if len(parts) > 1 else ""
    return metadata, body


def parse_date(value: str | None) -> datetime | None:
    """Parse a human readable date such as ``07 Sep 2009``.

    Timezone-aware results are converted to naive local time so that every
    parsed date can be compared with ``datetime.now()`` and with each other.

    Args:
        value: Raw date string from the metadata header.

    Returns:
        The parsed datetime, or None if the value is missing or unparsable.
    """
    if not value or not value.strip():
        return None
    try:
        parsed = dateutil_parser.parse(value.strip())
    except (TypeError, ValueError, OverflowError):
        logger.debug("Ignoring unparsable date: %r", value)
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def parse_flags(value: str | None) -> frozenset[str]:
    """Split a comma separated list of flags into a set of tokens."""
    if not value:
        return frozenset()
    return frozenset(token.strip() for token in value.split(",") if token.strip())


def parse_categories(value: str | None) -> list[tuple[str, int]]:
    """Parse category specifiers of the form ``path`` or ``path:priority``.

    Args:
        value: Raw ``categories`` metadata value, e.g. ``"news:1, about"``.

    Returns:
        List of (category path, priority) tuples in declaration order.
        Priority defaults to 0.

    Examples:
        >>> parse_categories(" some-page:1, another-page , and-another :-1 ")
        [('some-page', 1), ('another-page', 0), ('and-another', -1)]
    """
    if not value:
        return []
    specs: list[tuple[str, int]] = []
    for raw in value.split(","):
        item = raw.strip()
        if not item:
            continue
        match = CATEGORY_PRIORITY_RE.match(item)
        if match:
            path, priority = match.group("path"), int(match.group("priority"))
        else:
            path, priority = item, 0
        path = path.strip().strip("/")
        if path:
            specs.append((path, priority))
    return specs
