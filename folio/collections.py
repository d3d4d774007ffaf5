from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from datetime import datetime

from .content import Page


class PageCollection(Sequence[Page]):
    """Lightweight helper for working with lists of Pages in listings and code."""

    def __init__(self, pages: Iterable[Page]):
        self._pages = list(pages)

    def __iter__(self) -> Iterator[Page]:
        return iter(self._pages)

    def __len__(self) -> int:
        return len(self._pages)

    def __getitem__(self, item):
        return self._pages[item]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PageCollection):
            return self._pages == other._pages
        if isinstance(other, list):
            return self._pages == other
        return NotImplemented

    def paths(self) -> list[str]:
        return [p.path for p in self._pages]

    def visible(self) -> PageCollection:
        """Pages that are not hidden drafts."""
        return PageCollection(p for p in self._pages if not p.hidden)

    def dated(self) -> PageCollection:
        return PageCollection(p for p in self._pages if p.date is not None)

    def undated(self) -> PageCollection:
        return PageCollection(p for p in self._pages if p.date is None)

    def published(self, now: datetime) -> PageCollection:
        """Dated pages whose date is not later than ``now``."""
        return PageCollection(
            p for p in self._pages if p.date is not None and p.date <= now
        )

    def in_category(self, category: Page) -> PageCollection:
        return PageCollection(p for p in self._pages if p.in_category(category))

    def by_date(self) -> PageCollection:
        """Sort dated pages newest first, keeping the original order for ties."""
        return PageCollection(
            sorted(self.dated(), key=lambda p: p.date, reverse=True)
        )

    def by_priority(self, category: str) -> PageCollection:
        """Sort pages for a category listing.

        Sorting order:
        1. Priority declared for ``category``: highest first
        2. Heading: case-sensitive, missing headings first
        3. Path: so that the order is total
        """

        def sort_key(p: Page):
            priority = p.priority(category) or 0
            return (-priority, p.heading or "", p.path)

        return PageCollection(sorted(self._pages, key=sort_key))

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"PageCollection({len(self._pages)} pages)"
