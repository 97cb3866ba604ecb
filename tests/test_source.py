"""Properties grammar: comments, separators, continuation, escapes; mtime lookup."""

import os

import pytest

from hotprops.exceptions import SourceLoadError
from hotprops.source import last_modified, parse_properties, read_properties


def test_parse_separators_and_whitespace():
    text = "a=1\nb : 2\nc 3\n  d\t=\t4  \ne\n"
    assert parse_properties(text) == [("a", "1"), ("b", "2"), ("c", "3"), ("d", "4  "), ("e", "")]


def test_parse_skips_comments_and_blank_lines():
    text = "# comment\n! also comment\n\n   \nkey=value\n  # indented comment\n"
    assert parse_properties(text) == [("key", "value")]


def test_parse_keeps_duplicates_in_order():
    """The parser reports every line; last-write-wins is applied by the snapshot."""
    assert parse_properties("a=1\nb=2\na=3") == [("a", "1"), ("b", "2"), ("a", "3")]


def test_parse_line_continuation():
    text = "fruits = apple, \\\n         banana, \\\n         pear\nnext=1"
    assert parse_properties(text) == [("fruits", "apple, banana, pear"), ("next", "1")]


def test_parse_even_backslashes_do_not_continue():
    assert parse_properties("path=C:\\\\\nnext=1") == [("path", "C:\\"), ("next", "1")]


def test_parse_escapes():
    text = "tab=a\\tb\nnl=x\\ny\nuni=\\u00e9t\\u00e9\nkey\\ with\\=sep=v\\:1"
    assert parse_properties(text) == [
        ("tab", "a\tb"),
        ("nl", "x\ny"),
        ("uni", "été"),
        ("key with=sep", "v:1"),
    ]


def test_parse_windows_line_endings():
    assert parse_properties("a=1\r\nb=2\rc=3") == [("a", "1"), ("b", "2"), ("c", "3")]


def test_parse_malformed_unicode_escape_raises():
    with pytest.raises(ValueError, match="malformed"):
        parse_properties("bad=\\u12zz")


def test_read_properties_wraps_errors(tmp_path):
    missing = tmp_path / "missing.properties"
    with pytest.raises(SourceLoadError):
        read_properties(missing)
    bad = tmp_path / "bad.properties"
    bad.write_bytes(b"key=\xff\xfe\n")
    with pytest.raises(SourceLoadError) as exc_info:
        read_properties(bad)
    assert isinstance(exc_info.value, OSError)


def test_last_modified(tmp_path):
    p = tmp_path / "a.properties"
    assert last_modified(p) == 0
    p.write_text("a=1")
    os.utime(p, ns=(1_700_000_000_000_000_000, 1_700_000_000_000_000_000))
    assert last_modified(p) == 1_700_000_000_000_000_000
    assert last_modified(tmp_path) == 0
