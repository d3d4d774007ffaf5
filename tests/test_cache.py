import os
import threading
from dataclasses import dataclass
from pathlib import Path

import pytest

from folio.cache import FileModelCache
from folio.paths import PageNotFoundError

EXTENSIONS = ("mdown", "md", "html")


@dataclass
class FakePage:
    filename: Path
    mtime: float
    text: str


class CountingBuilder:
    def __init__(self):
        self.calls = 0

    def build(self, filename, mtime, raw_text):
        self.calls += 1
        return FakePage(filename, mtime, raw_text)


def write(root: Path, rel: str, text: str) -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def bump_mtime(path: Path, seconds: float) -> None:
    stat = path.stat()
    os.utime(path, (stat.st_atime, stat.st_mtime + seconds))


def test_get_or_load_returns_cached_page(tmp_path):
    write(tmp_path, "a-page.md", "Version 1")
    builder = CountingBuilder()
    cache = FileModelCache(tmp_path, builder, EXTENSIONS)
    first = cache.get_or_load("a-page")
    second = cache.get_or_load("/a-page/")
    assert first is second
    assert builder.calls == 1
    assert len(cache) == 1


def test_get_or_load_reloads_when_mtime_advances(tmp_path):
    path = write(tmp_path, "a-page.md", "Version 1")
    cache = FileModelCache(tmp_path, CountingBuilder(), EXTENSIONS)
    assert cache.get_or_load("a-page").text == "Version 1"
    path.write_text("Version 2", encoding="utf-8")
    bump_mtime(path, 10)
    assert cache.get_or_load("a-page").text == "Version 2"


def test_get_or_load_keeps_entry_when_mtime_not_newer(tmp_path):
    path = write(tmp_path, "a-page.md", "Version 1")
    original = path.stat().st_mtime
    cache = FileModelCache(tmp_path, CountingBuilder(), EXTENSIONS)
    cache.get_or_load("a-page")
    path.write_text("Version 2", encoding="utf-8")
    os.utime(path, (original, original))
    assert cache.get_or_load("a-page").text == "Version 1"


def test_get_or_load_missing_path(tmp_path):
    cache = FileModelCache(tmp_path, CountingBuilder(), EXTENSIONS)
    with pytest.raises(PageNotFoundError):
        cache.get_or_load("no-such-page")


def test_load_file_for_deleted_file(tmp_path):
    path = write(tmp_path, "gone.md", "text")
    cache = FileModelCache(tmp_path, CountingBuilder(), EXTENSIONS)
    cache.load_file(path)
    path.unlink()
    with pytest.raises(PageNotFoundError) as excinfo:
        cache.load_file(path)
    assert excinfo.value.path == "gone"
    assert len(cache) == 0


def test_purge_forces_reparse(tmp_path):
    write(tmp_path, "a-page.md", "text")
    builder = CountingBuilder()
    cache = FileModelCache(tmp_path, builder, EXTENSIONS)
    cache.get_or_load("a-page")
    cache.purge()
    assert len(cache) == 0
    cache.get_or_load("a-page")
    assert builder.calls == 2


def test_all_lists_content_files_in_directory_order(tmp_path):
    write(tmp_path, "b.md", "b")
    write(tmp_path, "a.mdown", "a")
    write(tmp_path, "a/index.html", "a index")
    write(tmp_path, "notes.txt", "ignored")
    cache = FileModelCache(tmp_path, CountingBuilder(), EXTENSIONS)
    names = [page.filename.relative_to(tmp_path).as_posix() for page in cache.all()]
    assert names == ["a/index.html", "a.mdown", "b.md"]


def test_all_with_missing_root(tmp_path):
    cache = FileModelCache(tmp_path / "missing", CountingBuilder(), EXTENSIONS)
    assert cache.all() == []


def test_concurrent_loads_agree(tmp_path):
    write(tmp_path, "shared.md", "shared")
    cache = FileModelCache(tmp_path, CountingBuilder(), EXTENSIONS)
    results = []

    def worker():
        results.append(cache.get_or_load("shared").text)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert results == ["shared"] * 8
    assert len(cache) == 1


def test_undecodable_file_does_not_break_listing(tmp_path):
    write(tmp_path, "good.md", "# Good")
    (tmp_path / "latin1.md").write_bytes(b"# Caf\xe9\n")
    cache = FileModelCache(tmp_path, CountingBuilder(), EXTENSIONS)
    pages = {page.filename.name: page.text for page in cache.all()}
    assert pages["good.md"] == "# Good"
    assert pages["latin1.md"].startswith("# Caf")
