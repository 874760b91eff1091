import re

import pytest

from line_engine.buffer import BIG_WORD_PATTERN, WORD_PATTERN, Document


def make_document(text: str, cursor_position: int) -> Document:
    return Document(text, cursor_position)


def test_find_next_word_beginning_skips_current_word() -> None:
    assert make_document("hello world foo", 0).find_next_word_beginning() == 6
    assert make_document("hello world foo", 6).find_next_word_beginning() == 6
    assert make_document("hello world foo bar", 0).find_next_word_beginning(count=2) == 12


def test_find_next_word_beginning_treats_punctuation_as_word() -> None:
    document = make_document("hello++ world", 0)

    assert document.find_next_word_beginning() == 5
    assert document.find_next_word_beginning(WORD=True) == 8


def test_find_next_word_beginning_from_whitespace() -> None:
    assert make_document("abc   def", 3).find_next_word_beginning() == 3


def test_find_next_word_beginning_returns_none_at_end() -> None:
    assert make_document("hello", 0).find_next_word_beginning() is None
    assert make_document("hello world", 11).find_next_word_beginning() is None


def test_find_next_word_ending() -> None:
    document = make_document("hello world", 0)

    assert document.find_next_word_ending() == 5
    assert document.find_next_word_ending(include_current_position=True) == 5
    assert make_document("hello world", 4).find_next_word_ending() == 7
    assert make_document("hello++ world", 0).find_next_word_ending(WORD=True) == 7


def test_find_previous_word_beginning() -> None:
    assert make_document("hello world", 11).find_previous_word_beginning() == -5
    assert make_document("hello++ world", 13).find_previous_word_beginning(WORD=True) == -5
    assert make_document("hello world foo", 15).find_previous_word_beginning(count=2) == -9
    assert make_document("hello", 0).find_previous_word_beginning() is None


def test_find_previous_word_ending_skips_current_word() -> None:
    document = make_document("hello world", 8)

    assert document.find_previous_word_ending() == -3
    assert make_document("hello", 0).find_previous_word_ending() is None


def test_find_start_of_previous_word() -> None:
    document = make_document("hello world foo", 15)

    assert document.find_start_of_previous_word() == -3
    assert document.find_start_of_previous_word(count=2) == -9
    assert make_document("hello", 0).find_start_of_previous_word() is None


def test_word_counts_below_one_find_nothing() -> None:
    document = make_document("hello world foo", 6)

    assert document.find_next_word_beginning(count=0) is None
    assert document.find_next_word_ending(count=0) is None
    assert document.find_previous_word_beginning(count=-1) is None
    assert document.find_previous_word_ending(count=0) is None
    assert document.find_start_of_previous_word(count=0) is None


def test_custom_pattern_is_used() -> None:
    digits = re.compile(r"(\d+)")
    document = make_document("a1 b22 c333", 0)

    assert document.find_next_word_beginning(pattern=digits) == 1
    assert document.find_next_word_beginning(count=2, pattern=digits) == 4


def test_word_and_custom_pattern_are_exclusive() -> None:
    with pytest.raises(ValueError):
        make_document("abc", 0).find_next_word_beginning(WORD=True, pattern=WORD_PATTERN)


def test_get_word_before_cursor() -> None:
    assert make_document("hello world", 5).get_word_before_cursor() == "hello"
    assert make_document("hello world", 6).get_word_before_cursor() == ""
    assert make_document("", 0).get_word_before_cursor() == ""
    assert make_document("call foo.bar", 12).get_word_before_cursor(WORD=True) == "foo.bar"


def test_get_word_before_cursor_with_pattern() -> None:
    document = make_document("x = 42", 6)

    assert document.get_word_before_cursor(pattern=re.compile(r"^\d+")) == "42"
    assert document.get_word_before_cursor(pattern=re.compile(r"^[a-z]+")) == ""


def test_get_word_before_cursor_with_pattern_after_whitespace() -> None:
    word = re.compile(r"\w+")

    assert make_document("foo ", 4).get_word_before_cursor(pattern=word) == ""
    assert make_document("", 0).get_word_before_cursor(pattern=word) == ""
    assert make_document("foo bar", 7).get_word_before_cursor(pattern=word) == "bar"


def test_find_start_of_previous_word_uses_pattern_group() -> None:
    digits = re.compile(r"(\d+)\s*")

    assert make_document("ba 12", 5).find_start_of_previous_word(pattern=digits) == -2
    assert make_document("ab", 2).find_start_of_previous_word(pattern=re.compile(r"\w+\s*")) == -2


def test_get_word_under_cursor() -> None:
    assert make_document("hello world", 2).get_word_under_cursor() == "hello"
    assert make_document("hello++ world", 2).get_word_under_cursor(WORD=True) == "hello++"
    assert make_document("hello world", 5).get_word_under_cursor() == "hello"
    assert make_document("hello  world", 6).get_word_under_cursor() == ""


def test_find_boundaries_of_current_word() -> None:
    document = make_document("hello world foo", 8)

    assert document.find_boundaries_of_current_word() == (-2, 3)
    assert document.find_boundaries_of_current_word(include_trailing_whitespace=True) == (-2, 4)


def test_find_boundaries_do_not_join_word_and_punctuation() -> None:
    document = make_document("foo.bar", 3)

    assert document.find_boundaries_of_current_word() == (0, 1)
    assert document.find_boundaries_of_current_word(WORD=True) == (-3, 4)


def test_find_boundaries_with_leading_whitespace() -> None:
    document = make_document("one  two", 6)

    assert document.find_boundaries_of_current_word(include_leading_whitespace=True) == (-3, 2)


def test_pattern_constants() -> None:
    assert WORD_PATTERN.findall("foo.bar baz") == ["foo", ".", "bar", "baz"]
    assert BIG_WORD_PATTERN.findall("foo.bar baz") == ["foo.bar", "baz"]
