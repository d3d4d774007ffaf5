from datetime import datetime

from folio.metadata import (
    looks_like_metadata,
    parse_categories,
    parse_date,
    parse_flags,
    parse_metadata,
)


def test_parse_metadata_splits_header_and_body():
    text = "Date: 07 Sep 2009\nCategories: news\n\n# Heading\n\nBody text\n"
    metadata, body = parse_metadata(text)
    assert metadata == {"date": "07 Sep 2009", "categories": "news"}
    assert body == "# Heading\n\nBody text\n"


def test_parse_metadata_lowercases_keys_and_trims_values():
    metadata, _ = parse_metadata("My Key:   some value  \nRead More: Go on\n\nBody")
    assert metadata["my key"] == "some value"
    assert metadata["read more"] == "Go on"


def test_parse_metadata_last_duplicate_wins():
    metadata, _ = parse_metadata("Layout: first\nlayout: second\n\nBody")
    assert metadata == {"layout": "second"}


def test_parse_metadata_skips_malformed_lines():
    text = "Key: value\nKey without value\nAnother key: value\n\n# Banana\n"
    metadata, body = parse_metadata(text)
    assert metadata == {"key": "value", "another key": "value"}
    assert body == "# Banana\n"


def test_parse_metadata_keeps_colons_in_values():
    metadata, _ = parse_metadata("Link: http://example.com/a:b\n\nBody")
    assert metadata["link"] == "http://example.com/a:b"


def test_parse_metadata_without_header():
    text = "# Just a heading\n\nKey: not metadata\n"
    metadata, body = parse_metadata(text)
    assert metadata == {}
    assert body == text


def test_parse_metadata_header_only():
    metadata, body = parse_metadata("Title: Only metadata")
    assert metadata == {"title": "Only metadata"}
    assert body == ""


def test_parse_metadata_handles_crlf():
    metadata, body = parse_metadata("Title: Windows\r\n\r\n# Heading\r\n")
    assert metadata == {"title": "Windows"}
    assert body == "# Heading\r\n"


def test_parse_metadata_never_raises_on_junk():
    for junk in ["", "\n\n\n", ":", ": value", "::::\n\n", "\x00\x01: x"]:
        metadata, body = parse_metadata(junk)
        assert isinstance(metadata, dict)
        assert isinstance(body, str)


def test_looks_like_metadata():
    assert looks_like_metadata("Read more: x")
    assert not looks_like_metadata("# Heading")
    assert not looks_like_metadata("")


def test_parse_date():
    assert parse_date("07 Sep 2009") == datetime(2009, 9, 7)
    assert parse_date("31 December 2008") == datetime(2008, 12, 31)
    assert parse_date(None) is None
    assert parse_date("   ") is None
    assert parse_date("not a date at all") is None


def test_parse_date_converts_aware_dates_to_naive():
    parsed = parse_date("2009-09-07T10:00:00+00:00")
    assert parsed is not None
    assert parsed.tzinfo is None


def test_parse_flags():
    assert parse_flags("draft, orange") == frozenset({"draft", "orange"})
    assert parse_flags(" , ") == frozenset()
    assert parse_flags(None) == frozenset()


def test_parse_categories_with_priorities():
    specs = parse_categories(" some-page:1, another-page , and-another :-1 ")
    assert specs == [("some-page", 1), ("another-page", 0), ("and-another", -1)]


def test_parse_categories_strips_slashes_and_blanks():
    assert parse_categories("/news/, ,about/team:2") == [("news", 0), ("about/team", 2)]
    assert parse_categories("") == []
    assert parse_categories(None) == []
