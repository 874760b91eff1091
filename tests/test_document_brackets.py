import pytest

from line_engine.buffer import Document


@pytest.mark.parametrize(
    ("text", "cursor_position", "expected"),
    [
        ("(a(b)c)", 0, 6),
        ("((inner))", 0, 8),
        ("((inner))", 1, 6),
        ("([{<>}])", 1, 5),
        ("(hello)", 6, -6),
        ("{[x]}", 4, -4),
        ("a<b>", 3, -2),
    ],
)
def test_find_matching_bracket_position(text: str, cursor_position: int, expected: int) -> None:
    assert Document(text, cursor_position).find_matching_bracket_position() == expected


@pytest.mark.parametrize(
    ("text", "cursor_position"),
    [("(hello)", 1), ("(hello", 0), ("hello)", 5), ("", 0)],
)
def test_find_matching_bracket_position_not_found(text: str, cursor_position: int) -> None:
    assert Document(text, cursor_position).find_matching_bracket_position() is None


def test_matching_bracket_respects_search_window() -> None:
    document = Document("(abc)", 0)

    assert document.find_matching_bracket_position(end_pos=3) is None
    assert Document("(abc)", 4).find_matching_bracket_position(start_pos=1) is None


def test_find_enclosing_bracket_left() -> None:
    assert Document("(hello)", 3).find_enclosing_bracket_left("(", ")") == -3
    assert Document("(outer(inner))", 9).find_enclosing_bracket_left("(", ")") == -3
    assert Document("((a)(b)c)", 7).find_enclosing_bracket_left("(", ")") == -7
    assert Document("(hello)", 0).find_enclosing_bracket_left("(", ")") == 0
    assert Document("hello world", 5).find_enclosing_bracket_left("(", ")") is None


def test_find_enclosing_bracket_right() -> None:
    assert Document("(hello)", 3).find_enclosing_bracket_right("(", ")") == 3
    assert Document("(outer(inner)outer)", 9).find_enclosing_bracket_right("(", ")") == 3
    assert Document("(a(b)(c))", 1).find_enclosing_bracket_right("(", ")") == 7
    assert Document("(hello)", 6).find_enclosing_bracket_right("(", ")") == 0
    assert Document("hello world", 5).find_enclosing_bracket_right("(", ")") is None
