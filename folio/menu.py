"""Navigation menu for Folio.

The menu is declared in a text file with one logical path per line. Nesting
is expressed by indentation: a line belongs to the closest preceding line
that is indented less than it. For example::

    about
      about/team
      about/history
    blog

Lines naming pages that don't exist are skipped, and their indented lines
attach to the closest remaining ancestor.

Key classes:
- MenuLeaf / MenuBranch: The two kinds of menu node.
- Menu: Parsed menu with top-level and subtree queries.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .paths import normalize_path

if TYPE_CHECKING:
    from .content import Page

logger = logging.getLogger(__name__)

TAB_SIZE = 4


@dataclass(frozen=True)
class MenuLeaf:
    """Menu entry without children."""

    page: Page

    @property
    def children(self) -> tuple[MenuNode, ...]:
        return ()


@dataclass(frozen=True)
class MenuBranch:
    """Menu entry with an ordered list of child entries."""

    page: Page
    children: tuple[MenuNode, ...]


MenuNode = MenuLeaf | MenuBranch


@dataclass
class _Entry:
    page: Page
    indent: int
    children: list[_Entry] = field(default_factory=list)

    def freeze(self) -> MenuNode:
        if not self.children:
            return MenuLeaf(self.page)
        return MenuBranch(self.page, tuple(child.freeze() for child in self.children))


def parse_menu(text: str, lookup: Callable[[str], Page | None]) -> tuple[MenuNode, ...]:
    """Parse indented menu text into a tree of menu nodes.

    Args:
        text: Menu source, one logical path per line.
        lookup: Returns the page for a logical path, or None if there is none.

    Returns:
        Tuple of top-level nodes in file order.
    """
    top: list[_Entry] = []
    stack: list[_Entry] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        expanded = line.expandtabs(TAB_SIZE)
        path = expanded.strip()
        if not path:
            continue
        indent = len(expanded) - len(expanded.lstrip())
        page = lookup(path)
        if page is None:
            logger.debug("Skipping menu line %d: no page at %r", lineno, path)
            continue
        while stack and stack[-1].indent >= indent:
            stack.pop()
        entry = _Entry(page, indent)
        if stack:
            stack[-1].children.append(entry)
        else:
            top.append(entry)
        stack.append(entry)
    return tuple(entry.freeze() for entry in top)


def _find(nodes: tuple[MenuNode, ...], path: str) -> MenuNode | None:
    for node in nodes:
        if node.page.path == path:
            return node
        found = _find(node.children, path)
        if found is not None:
            return found
    return None


class Menu:
    """A parsed navigation menu."""

    def __init__(self, nodes: tuple[MenuNode, ...] = ()):
        self._nodes = tuple(nodes)

    @classmethod
    def parse(cls, text: str, lookup: Callable[[str], Page | None]) -> Menu:
        return cls(parse_menu(text, lookup))

    def __iter__(self) -> Iterator[MenuNode]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def top_level(self) -> list[Page]:
        """Pages of the top-level entries, in menu order."""
        return [node.page for node in self._nodes]

    def full_menu(self) -> tuple[MenuNode, ...]:
        return self._nodes

    def for_path(self, path: str) -> tuple[MenuNode, ...] | None:
        """Return the children of the entry for ``path``.

        The whole tree is searched. The home page path (``"/"`` or ``""``)
        returns the full menu.

        Args:
            path: Logical path of the entry.

        Returns:
            The entry's children (empty for a leaf), or None if the path is
            not in the menu.
        """
        path = normalize_path(path)
        if not path:
            return self._nodes
        node = _find(self._nodes, path)
        if node is None:
            return None
        return node.children

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"Menu({len(self._nodes)} top-level entries)"
