"""Path resolution for Folio.

Logical paths are slash separated identifiers such as ``blog/first-post``.
They are independent of the file extension, and a directory's ``index`` file
stands for the directory itself. This module maps logical paths to files and
back, without touching the cache.

Key functions:
- normalize_path: Canonical form of a logical path.
- resolve: Find the file for an exact logical path.
- resolve_nearest: Find the file for a path or its nearest existing ancestor.
- logical_path: Derive the logical path of a content file.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

INDEX_NAME = "index"


class PageNotFoundError(FileNotFoundError):
    """Error raised when a logical path does not resolve to a content file.

    Attributes:
        path: The logical path that was requested.
        searched: Candidate files that were checked, in order.
    """

    def __init__(self, path: str, searched: list[Path] | None = None):
        self.path = path
        self.searched = list(searched or [])
        super().__init__(f"No page found for path '/{path}'")


def normalize_path(path: str) -> str:
    """Return the canonical form of a logical path.

    Strips surrounding slashes and collapses a trailing ``index`` segment, so
    the home page is always ``""``.

    Examples:
        >>> normalize_path("/blog/index")
        'blog'

        >>> normalize_path("/")
        ''
    """
    segments = [segment for segment in path.strip().split("/") if segment]
    if segments and segments[-1] == INDEX_NAME:
        segments.pop()
    return "/".join(segments)


def is_safe_path(path: str) -> bool:
    """Return True if no segment of ``path`` is ``.`` or ``..``.

    Only such paths can be resolved, so every page comes from under the
    pages root.

    Examples:
        >>> is_safe_path("blog/first-post")
        True

        >>> is_safe_path("../secret")
        False
    """
    return not any(segment in (".", "..") for segment in path.split("/"))


def candidates(root: Path, path: str, extensions: Iterable[str]) -> list[Path]:
    """List the files that could back ``path``, in lookup order.

    ``{root}/{path}.{ext}`` is tried for every extension before
    ``{root}/{path}/index.{ext}``.
    """
    path = normalize_path(path)
    extensions = tuple(extensions)
    found: list[Path] = []
    if path:
        found.extend(root / f"{path}.{ext}" for ext in extensions)
    base = root / path if path else root
    found.extend(base / f"{INDEX_NAME}.{ext}" for ext in extensions)
    return found


def resolve(root: Path, path: str, extensions: Iterable[str]) -> Path:
    """Resolve a logical path to the file that backs it.

    Args:
        root: Directory holding the pages.
        path: Logical path.
        extensions: Known extensions in precedence order.

    Returns:
        Absolute path of the first existing candidate.

    Raises:
        PageNotFoundError: If no candidate file exists, or the path has a
            ``.`` or ``..`` segment.
    """
    if not is_safe_path(path):
        raise PageNotFoundError(normalize_path(path))
    searched = candidates(root, path, extensions)
    for candidate in searched:
        if candidate.is_file():
            return candidate
    raise PageNotFoundError(normalize_path(path), searched)


def parent_path(path: str) -> str:
    """Return the logical path one segment shorter (``""`` at the top level)."""
    path = normalize_path(path)
    return path.rsplit("/", 1)[0] if "/" in path else ""


def ancestors(path: str) -> list[str]:
    """Return ``path`` followed by each shorter prefix, ending with the root.

    Examples:
        >>> ancestors("a/b/c")
        ['a/b/c', 'a/b', 'a', '']
    """
    segments = normalize_path(path).split("/")
    result = ["/".join(segments[:i]) for i in range(len(segments), 0, -1)]
    if result[-1] != "":
        result.append("")
    return result


def resolve_nearest(root: Path, path: str, extensions: Iterable[str]) -> Path:
    """Resolve a path, falling back to its nearest existing ancestor.

    Trailing segments are stripped one at a time until a file exists, down
    to and including the home page.

    Raises:
        PageNotFoundError: If no file exists at any level.
    """
    if not is_safe_path(path):
        raise PageNotFoundError(normalize_path(path))
    extensions = tuple(extensions)
    searched: list[Path] = []
    for candidate_path in ancestors(path):
        try:
            return resolve(root, candidate_path, extensions)
        except PageNotFoundError as exc:
            searched.extend(exc.searched)
    raise PageNotFoundError(normalize_path(path), searched)


def logical_path(root: Path, filename: Path, extensions: Iterable[str]) -> str:
    """Derive the logical path of a content file.

    The longest matching extension is stripped and an ``index`` file
    collapses to its directory.

    Examples:
        >>> logical_path(Path("/c"), Path("/c/blog/index.md"), ["md"])
        'blog'
    """
    rel = filename.relative_to(root).as_posix()
    for ext in sorted(extensions, key=len, reverse=True):
        suffix = f".{ext}"
        if rel.lower().endswith(suffix):
            rel = rel[: -len(suffix)]
            break
    return normalize_path(rel)
