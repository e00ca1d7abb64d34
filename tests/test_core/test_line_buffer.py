# tests/test_core/test_line_buffer.py
"""Tests for `moded.core.LineBuffer`: loading, serialization and guarded mutation."""

import pytest

from moded.core.LineBuffer import LineBuffer
from moded.core.exceptions import OutOfRange


# --- load / serialize ---
@pytest.mark.parametrize(
    "text",
    [
        "",
        "\n",
        "abc",
        "abc\n",
        "one\ntwo\nthree",
        "one\ntwo\n\n",
        "\n\nx",
        "dos\r\nline\r\n",
        "mixed\r\nand\nunix",
        "юникод\n日本語\n",
    ],
)
def test_serialize_restores_loaded_text(text: str) -> None:
    assert LineBuffer.load(text).serialize() == text


def test_load_empty_text_has_zero_rows() -> None:
    buf = LineBuffer.load("")
    assert len(buf) == 0
    assert buf.serialize() == ""


def test_load_splits_rows_and_remembers_trailing_newline() -> None:
    buf = LineBuffer.load("first\nsecond\n")
    assert list(buf) == ["first", "second"]
    assert buf.trailing_separator is True
    assert buf.separator == "\n"


def test_load_detects_crlf() -> None:
    buf = LineBuffer.load("a\r\nb")
    assert list(buf) == ["a", "b"]
    assert buf.separator == "\r\n"
    assert buf.trailing_separator is False


def test_load_splits_mixed_line_endings() -> None:
    buf = LineBuffer.load("first\nsecond\r\nthird\n")
    assert list(buf) == ["first", "second", "third"]
    assert buf.line_endings == ["\n", "\r\n"]
    assert buf.final_ending == "\n"
    assert buf.separator == "\n"


def test_mostly_crlf_text_uses_crlf_for_new_rows() -> None:
    buf = LineBuffer.load("a\r\nb\r\nc\n")
    assert list(buf) == ["a", "b", "c"]
    assert buf.separator == "\r\n"
    buf.insert_row(3, "d")
    assert buf.serialize() == "a\r\nb\r\nc\r\nd\n"


def test_lone_carriage_return_stays_in_row() -> None:
    assert list(LineBuffer.load("a\rb\nc")) == ["a\rb", "c"]


def test_edits_keep_each_row_terminator() -> None:
    buf = LineBuffer.load("one\r\ntwo\nthree")
    buf.insert_char(1, 3, "!")
    buf.split_row(0, 2)
    assert list(buf) == ["on", "e", "two!", "three"]
    assert buf.serialize() == "on\ne\r\ntwo!\nthree"

    buf.remove_row(3)
    assert buf.serialize() == "on\ne\r\ntwo!"
    buf.remove_row(0)
    assert buf.serialize() == "e\r\ntwo!"


def test_insert_row_at_end_of_trailing_text() -> None:
    buf = LineBuffer.load("a\r\n")
    buf.insert_row(1, "b")
    assert buf.serialize() == "a\r\nb\r\n"
    buf.insert_row(0, "z")
    assert buf.serialize() == "z\r\na\r\nb\r\n"


def test_lone_newline_is_one_empty_row() -> None:
    buf = LineBuffer.load("\n")
    assert list(buf) == [""]


def test_zero_rows_serialize_to_empty_string_even_with_trailing_flag() -> None:
    assert LineBuffer([], trailing_separator=True).serialize() == ""


def test_empty_buffer_is_truthy() -> None:
    assert LineBuffer()


def test_str_dumps_rows() -> None:
    assert str(LineBuffer(["a", "b"])) == "--------------Buffer--------------\na\nb\n"


# --- row access ---
def test_row_and_line_length() -> None:
    buf = LineBuffer(["abc", ""])
    assert buf.row(0) == "abc"
    assert buf.line_length(0) == 3
    assert buf.line_length(1) == 0


@pytest.mark.parametrize("index", [-1, 2, 10])
def test_row_out_of_range(index: int) -> None:
    with pytest.raises(OutOfRange):
        LineBuffer(["a", "b"]).row(index)


def test_out_of_range_is_an_index_error() -> None:
    with pytest.raises(IndexError):
        LineBuffer().row(0)


# --- row mutation ---
def test_insert_row_at_end_and_front() -> None:
    buf = LineBuffer(["b"])
    buf.insert_row(1, "c")
    buf.insert_row(0, "a")
    assert list(buf) == ["a", "b", "c"]


def test_insert_row_into_empty_buffer() -> None:
    buf = LineBuffer()
    buf.insert_row(0)
    assert list(buf) == [""]


def test_insert_row_past_end_raises() -> None:
    with pytest.raises(OutOfRange):
        LineBuffer(["a"]).insert_row(2)


def test_remove_row_returns_text() -> None:
    buf = LineBuffer(["a", "b"])
    assert buf.remove_row(0) == "a"
    assert list(buf) == ["b"]


def test_split_row() -> None:
    buf = LineBuffer(["hello world"])
    buf.split_row(0, 5)
    assert list(buf) == ["hello", " world"]


def test_split_row_at_end_opens_empty_row() -> None:
    buf = LineBuffer(["abc"])
    buf.split_row(0, 3)
    assert list(buf) == ["abc", ""]


def test_split_row_bad_column_raises() -> None:
    with pytest.raises(OutOfRange):
        LineBuffer(["abc"]).split_row(0, 4)


# --- character mutation ---
def test_insert_char_positions() -> None:
    buf = LineBuffer(["ac"])
    buf.insert_char(0, 1, "b")
    buf.insert_char(0, 3, "d")
    buf.insert_char(0, 0, ">")
    assert buf.row(0) == ">abcd"


def test_insert_char_past_line_end_raises() -> None:
    with pytest.raises(OutOfRange):
        LineBuffer(["ab"]).insert_char(0, 3, "x")


def test_remove_char_returns_removed() -> None:
    buf = LineBuffer(["abc"])
    assert buf.remove_char(0, 1) == "b"
    assert buf.row(0) == "ac"


@pytest.mark.parametrize("column", [-1, 3])
def test_remove_char_out_of_range(column: int) -> None:
    with pytest.raises(OutOfRange):
        LineBuffer(["abc"]).remove_char(0, column)


def test_remove_char_on_empty_line_raises() -> None:
    with pytest.raises(OutOfRange):
        LineBuffer([""]).remove_char(0, 0)
