"""Tests for unipatch.text string operations."""

import pytest

from unipatch.text import BYTES_TEXT, STR_TEXT, BytesText, StrText, text_for


# ---------------------------------------------------------------------------
# text_for
# ---------------------------------------------------------------------------


def test_text_for_str():
    assert isinstance(text_for("x"), StrText)


def test_text_for_bytes():
    assert isinstance(text_for(b"x"), BytesText)


def test_text_for_other():
    with pytest.raises(TypeError, match="expected str or bytes"):
        text_for(1.5)


# ---------------------------------------------------------------------------
# prefix / suffix / split
# ---------------------------------------------------------------------------


def test_strip_prefix():
    assert STR_TEXT.strip_prefix("--- a", "--- ") == "a"
    assert STR_TEXT.strip_prefix("+++ a", "--- ") is None


def test_strip_prefix_bytes():
    assert BYTES_TEXT.strip_prefix(b"@@ x", "@@ ") == b"x"


def test_strip_prefix_whole_string():
    assert STR_TEXT.strip_prefix("abc", "abc") == ""


def test_strip_suffix():
    assert STR_TEXT.strip_suffix("line\n", "\n") == "line"
    assert STR_TEXT.strip_suffix("line", "\n") is None


def test_strip_suffix_bytes():
    assert BYTES_TEXT.strip_suffix(b'"q"', '"') == b'"q'


def test_split_at_exclusive_first_occurrence():
    assert STR_TEXT.split_at_exclusive("a,b,c", ",") == ("a", "b,c")


def test_split_at_exclusive_multichar_delimiter():
    assert STR_TEXT.split_at_exclusive("-1 +1 @@ ctx", " @@") == ("-1 +1", " ctx")


def test_split_at_exclusive_absent():
    assert STR_TEXT.split_at_exclusive("abc", ",") is None


def test_split_at_exclusive_edges():
    assert BYTES_TEXT.split_at_exclusive(b",x", ",") == (b"", b"x")
    assert BYTES_TEXT.split_at_exclusive(b"x,", ",") == (b"x", b"")


def test_starts_with():
    assert STR_TEXT.starts_with("@@ -1", "@")
    assert not BYTES_TEXT.starts_with(b" x", "@")


# ---------------------------------------------------------------------------
# lines
# ---------------------------------------------------------------------------


def test_lines_keep_terminators():
    assert list(STR_TEXT.lines("a\nb\n")) == ["a\n", "b\n"]


def test_lines_final_partial_line():
    assert list(STR_TEXT.lines("a\nb")) == ["a\n", "b"]


def test_lines_blank_lines():
    assert list(BYTES_TEXT.lines(b"\n\nx\n")) == [b"\n", b"\n", b"x\n"]


def test_lines_empty():
    assert list(STR_TEXT.lines("")) == []


def test_lines_carriage_return_is_kept():
    assert list(STR_TEXT.lines("a\r\nb\r\n")) == ["a\r\n", "b\r\n"]


# ---------------------------------------------------------------------------
# conversions
# ---------------------------------------------------------------------------


def test_as_bytes_and_back():
    assert STR_TEXT.as_bytes("café") == b"caf\xc3\xa9"
    assert STR_TEXT.from_bytes(b"caf\xc3\xa9") == "café"
    assert BYTES_TEXT.from_bytes(b"\xff") == b"\xff"


def test_parse_uint():
    assert STR_TEXT.parse_uint("42") == 42
    assert BYTES_TEXT.parse_uint(b"007") == 7


def test_parse_uint_rejects_non_digits():
    assert STR_TEXT.parse_uint("") is None
    assert STR_TEXT.parse_uint("-1") is None
    assert STR_TEXT.parse_uint(" 1") is None
    assert STR_TEXT.parse_uint("1_000") is None


def test_parse_uint_rejects_non_ascii_digits():
    assert STR_TEXT.parse_uint("١") is None
