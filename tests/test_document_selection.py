from line_engine.buffer import ClipboardData, Document, SelectionState, SelectionType

THREE_LINES = "line1\nline2\nline3"
GRID = "abcdef\nghijkl\nmnopqr"


def make_selected(
    text: str,
    cursor_position: int,
    origin: int,
    selection_type: SelectionType = SelectionType.CHARACTERS,
) -> Document:
    return Document(text, cursor_position, SelectionState(origin, selection_type))


def test_selection_range_is_sorted() -> None:
    assert make_selected("hello world", 11, 6).selection_range() == (6, 11)
    assert make_selected("hello world", 3, 8).selection_range() == (3, 8)
    assert make_selected("", 0, 0).selection_range() == (0, 0)


def test_character_ranges() -> None:
    document = make_selected("hello world", 4, 0)

    assert list(document.selection_ranges()) == [(0, 4)]
    assert list(document.selection_ranges(vi_mode=True)) == [(0, 5)]
    assert list(make_selected("hello", 5, 0).selection_ranges(vi_mode=True)) == [(0, 5)]


def test_line_ranges_cover_whole_lines() -> None:
    document = make_selected(THREE_LINES, 12, 6, SelectionType.LINES)

    assert list(document.selection_ranges()) == [(6, 11), (12, 17)]
    assert list(make_selected(THREE_LINES, 10, 7, SelectionType.LINES).selection_ranges()) == [
        (6, 11)
    ]


def test_block_ranges_one_per_row() -> None:
    document = make_selected(GRID, 18, 2, SelectionType.BLOCK)

    assert list(document.selection_ranges()) == [(2, 4), (9, 11), (16, 18)]
    assert list(document.selection_ranges(vi_mode=True)) == [(2, 5), (9, 12), (16, 19)]


def test_block_ranges_clip_short_rows() -> None:
    clipped = make_selected("abcdef\nabcd\nabcdef", 17, 3, SelectionType.BLOCK)
    skipped = make_selected("abcdef\nab\nabcdef", 15, 3, SelectionType.BLOCK)

    assert list(clipped.selection_ranges()) == [(3, 5), (10, 11), (15, 17)]
    assert list(skipped.selection_ranges()) == [(3, 5), (13, 15)]


def test_block_on_single_line() -> None:
    assert list(make_selected("abcdefgh", 5, 2, SelectionType.BLOCK).selection_ranges()) == [(2, 5)]


def test_selection_range_at_line_for_characters() -> None:
    document = make_selected(THREE_LINES, 12, 0)

    assert document.selection_range_at_line(0) == (0, 5)
    assert document.selection_range_at_line(1) == (0, 5)
    assert document.selection_range_at_line(2) == (0, 0)
    assert document.selection_range_at_line(5) is None
    assert make_selected(THREE_LINES, 3, 0).selection_range_at_line(2) is None
    assert Document(THREE_LINES, 5).selection_range_at_line(0) is None


def test_selection_range_at_line_for_lines_and_block() -> None:
    lines = make_selected(THREE_LINES, 8, 7, SelectionType.LINES)
    block = make_selected(GRID, 18, 2, SelectionType.BLOCK)

    assert lines.selection_range_at_line(1) == (0, 5)
    assert lines.selection_range_at_line(0) is None
    assert block.selection_range_at_line(1) == (2, 4)


def test_cut_characters() -> None:
    document, data = make_selected("hello world", 11, 6).cut_selection()

    assert document == Document("hello ", 6)
    assert document.selection is None
    assert data == ClipboardData("world", SelectionType.CHARACTERS)


def test_cut_with_cursor_before_origin() -> None:
    document, data = make_selected("hello world", 3, 8).cut_selection()

    assert document.text == "helrld"
    assert document.cursor_position == 3
    assert data.text == "lo wo"


def test_cut_characters_in_vi_mode_includes_cursor() -> None:
    document, data = make_selected("hello world", 4, 0).cut_selection(vi_mode=True)

    assert document.text == " world"
    assert data.text == "hello"


def test_cut_lines_leaves_empty_line() -> None:
    document, data = make_selected(THREE_LINES, 10, 6, SelectionType.LINES).cut_selection()

    assert document.text == "line1\n\nline3"
    assert document.cursor_position == 6
    assert data == ClipboardData("line2", SelectionType.LINES)


def test_cut_lines_in_vi_mode_removes_line_ending() -> None:
    document, data = make_selected(THREE_LINES, 10, 6, SelectionType.LINES).cut_selection(
        vi_mode=True
    )

    assert document.text == "line1\nline3"
    assert document.cursor_position == 6
    assert data == ClipboardData("line2", SelectionType.LINES)


def test_cut_several_lines() -> None:
    document, data = make_selected(THREE_LINES, 8, 2, SelectionType.LINES).cut_selection()

    assert document.text == "\nline3"
    assert document.cursor_position == 0
    assert data.text == "line1\nline2"


def test_cut_last_line() -> None:
    document, data = make_selected("line1\nline2", 8, 8, SelectionType.LINES).cut_selection()

    assert document.text == "line1\n"
    assert data.text == "line2"


def test_cut_block_removes_column_slice_per_row() -> None:
    document, data = make_selected(GRID, 18, 2, SelectionType.BLOCK).cut_selection()

    assert document.text == "abef\nghkl\nmnqr"
    assert document.cursor_position == 2
    assert data == ClipboardData("cd\nij\nop", SelectionType.BLOCK)


def test_cut_without_selection_changes_nothing() -> None:
    original = Document("hello world", 5)

    document, data = original.cut_selection()

    assert document is original
    assert data == ClipboardData("")
