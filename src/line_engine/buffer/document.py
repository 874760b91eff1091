"""Immutable text + cursor + selection snapshot and every query over it."""

from __future__ import annotations

import bisect
import re
import string
from typing import Callable, Iterator, List, Optional, Pattern, Sequence, Tuple

from .cache import DocumentCache, get_document_cache
from .clipboard import ClipboardData
from .selection import PasteMode, SelectionState, SelectionType
from .validation import ensure_cursor_position

# A vi "word": a run of alphanumerics, or a run of other non-blank characters.
WORD_PATTERN: Pattern[str] = re.compile(r"([a-zA-Z0-9_]+|[^a-zA-Z0-9_\s]+)")

# A vi "WORD": any run of non-blank characters.
BIG_WORD_PATTERN: Pattern[str] = re.compile(r"([^\s]+)")

_CURRENT_WORD_RE = re.compile(r"^([a-zA-Z0-9_]+|[^a-zA-Z0-9_\s]+)")
_CURRENT_WORD_WITH_WHITESPACE_RE = re.compile(
    r"^(([a-zA-Z0-9_]+|[^a-zA-Z0-9_\s]+)\s*)"
)
_CURRENT_BIG_WORD_RE = re.compile(r"^([^\s]+)")
_CURRENT_BIG_WORD_WITH_WHITESPACE_RE = re.compile(r"^([^\s]+\s*)")

_WORD_ALPHABET = frozenset(string.ascii_letters + string.digits + "_")

BRACKET_PAIRS: Tuple[Tuple[str, str], ...] = (
    ("(", ")"),
    ("[", "]"),
    ("{", "}"),
    ("<", ">"),
)

Range = Tuple[int, int]


def _resolve_pattern(WORD: bool, pattern: Optional[Pattern[str]]) -> Pattern[str]:
    if pattern is not None:
        if WORD:
            raise ValueError("Cannot combine WORD=True with a custom pattern.")
        return pattern
    return BIG_WORD_PATTERN if WORD else WORD_PATTERN


def _word_span(match: "re.Match[str]") -> Range:
    """Span of the word inside ``match``: group 1 when present, else the match."""

    if match.re.groups:
        return match.span(1)
    return match.span(0)


def _is_blank(line: str) -> bool:
    return not line or line.isspace()


class Document:
    """Text, cursor position and optional selection, frozen together.

    Every "edit" returns a new ``Document``. Derived data (the line split and
    the line-start offset table) lives in a :class:`DocumentCache` shared with
    every other document built from the same text object.

    :param text: The document text.
    :param cursor_position: Offset in ``text``; defaults to the end.
    :param selection: Optional :class:`SelectionState`, copied on entry.
    :raises CursorPositionError: when ``cursor_position`` is outside the text.
    """

    __slots__ = ("_text", "_cursor_position", "_selection", "_cache")

    def __init__(
        self,
        text: str = "",
        cursor_position: Optional[int] = None,
        selection: Optional[SelectionState] = None,
    ) -> None:
        if cursor_position is None:
            cursor_position = len(text)
        self._text = text
        self._cursor_position = ensure_cursor_position(text, cursor_position)
        self._selection = selection.copy() if selection is not None else None
        self._cache: DocumentCache = get_document_cache(text)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.text!r}, {self.cursor_position!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return (
            self.text == other.text
            and self.cursor_position == other.cursor_position
            and self.selection == other.selection
        )

    def __hash__(self) -> int:
        return hash((self._text, self._cursor_position))

    # ------------------------------------------------------------------
    # Core queries

    @property
    def text(self) -> str:
        return self._text

    @property
    def cursor_position(self) -> int:
        return self._cursor_position

    @property
    def selection(self) -> Optional[SelectionState]:
        return self._selection

    @property
    def cache(self) -> DocumentCache:
        return self._cache

    @property
    def current_char(self) -> Optional[str]:
        """Character under the cursor, ``None`` at the end of the text."""
        return self._get_char_relative_to_cursor(0)

    @property
    def char_before_cursor(self) -> Optional[str]:
        return self._get_char_relative_to_cursor(-1)

    @property
    def text_before_cursor(self) -> str:
        return self.text[: self.cursor_position]

    @property
    def text_after_cursor(self) -> str:
        return self.text[self.cursor_position :]

    @property
    def current_line_before_cursor(self) -> str:
        _, _, text = self.text_before_cursor.rpartition("\n")
        return text

    @property
    def current_line_after_cursor(self) -> str:
        text, _, _ = self.text_after_cursor.partition("\n")
        return text

    @property
    def lines(self) -> Tuple[str, ...]:
        """All lines; the same tuple object for documents sharing a text."""
        return self._cache.get_lines()

    @property
    def _line_start_indexes(self) -> Tuple[int, ...]:
        return self._cache.get_line_start_offsets()

    @property
    def lines_from_current(self) -> Tuple[str, ...]:
        return self.lines[self.cursor_position_row :]

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def current_line(self) -> str:
        return self.current_line_before_cursor + self.current_line_after_cursor

    @property
    def leading_whitespace_in_current_line(self) -> str:
        current_line = self.current_line
        length = len(current_line) - len(current_line.lstrip())
        return current_line[:length]

    def _get_char_relative_to_cursor(self, offset: int = 0) -> Optional[str]:
        index = self.cursor_position + offset
        if 0 <= index < len(self.text):
            return self.text[index]
        return None

    @property
    def on_first_line(self) -> bool:
        return self.cursor_position_row == 0

    @property
    def on_last_line(self) -> bool:
        return self.cursor_position_row == self.line_count - 1

    @property
    def cursor_position_row(self) -> int:
        row, _ = self._find_line_start_index(self.cursor_position)
        return row

    @property
    def cursor_position_col(self) -> int:
        _, line_start_index = self._find_line_start_index(self.cursor_position)
        return self.cursor_position - line_start_index

    @property
    def is_cursor_at_the_end(self) -> bool:
        return self.cursor_position == len(self.text)

    @property
    def is_cursor_at_the_end_of_line(self) -> bool:
        return self.current_char in ("\n", None)

    @property
    def empty_line_count_at_the_end(self) -> int:
        count = 0
        for line in reversed(self.lines):
            if not _is_blank(line):
                break
            count += 1
        return count

    # ------------------------------------------------------------------
    # Offset <-> (row, col)

    def _find_line_start_index(self, index: int) -> Tuple[int, int]:
        indexes = self._line_start_indexes
        pos = bisect.bisect_right(indexes, index) - 1
        return pos, indexes[pos]

    def translate_index_to_position(self, index: int) -> Tuple[int, int]:
        """Given an offset in the text, return ``(row, col)``, both 0-based."""
        row, row_index = self._find_line_start_index(index)
        return row, index - row_index

    def translate_row_col_to_index(self, row: int, col: int) -> int:
        """Given ``(row, col)``, return the offset in the text.

        Out-of-range rows snap to the first/last line and the column is
        clipped to the line length.
        """
        indexes = self._line_start_indexes
        lines = self.lines
        if row < 0:
            row = 0
        elif row >= len(indexes):
            row = len(indexes) - 1

        result = indexes[row] + max(0, min(col, len(lines[row])))
        return max(0, min(result, len(self.text)))

    # ------------------------------------------------------------------
    # Search

    def has_match_at_current_position(self, sub: str) -> bool:
        return self.text.find(sub, self.cursor_position) == self.cursor_position

    def find(
        self,
        sub: str,
        in_current_line: bool = False,
        include_current_position: bool = False,
        ignore_case: bool = False,
        count: int = 1,
    ) -> Optional[int]:
        """Relative offset of the ``count``-th occurrence of ``sub`` after the
        cursor, or ``None``."""
        text = self.current_line_after_cursor if in_current_line else self.text_after_cursor

        if not include_current_position:
            if not text:
                return None
            text = text[1:]

        flags = re.IGNORECASE if ignore_case else 0
        for i, match in enumerate(re.finditer(re.escape(sub), text, flags)):
            if i + 1 == count:
                if include_current_position:
                    return match.start(0)
                return match.start(0) + 1
        return None

    def find_all(self, sub: str, ignore_case: bool = False) -> List[int]:
        flags = re.IGNORECASE if ignore_case else 0
        return [match.start() for match in re.finditer(re.escape(sub), self.text, flags)]

    def find_backwards(
        self,
        sub: str,
        in_current_line: bool = False,
        ignore_case: bool = False,
        count: int = 1,
    ) -> Optional[int]:
        if in_current_line:
            before_cursor = self.current_line_before_cursor[::-1]
        else:
            before_cursor = self.text_before_cursor[::-1]

        flags = re.IGNORECASE if ignore_case else 0
        for i, match in enumerate(re.finditer(re.escape(sub[::-1]), before_cursor, flags)):
            if i + 1 == count:
                return -match.start(0) - len(sub)
        return None

    # ------------------------------------------------------------------
    # Words

    def get_word_before_cursor(
        self, WORD: bool = False, pattern: Optional[Pattern[str]] = None
    ) -> str:
        """Word right before the cursor; empty when whitespace precedes it."""
        if self._is_word_before_cursor_complete(WORD=WORD, pattern=pattern):
            return ""

        text_before_cursor = self.text_before_cursor
        start = self.find_start_of_previous_word(WORD=WORD, pattern=pattern) or 0
        return text_before_cursor[len(text_before_cursor) + start :]

    def _is_word_before_cursor_complete(
        self, WORD: bool = False, pattern: Optional[Pattern[str]] = None
    ) -> bool:
        text = self.text_before_cursor
        if text == "" or text[-1:].isspace():
            return True
        if pattern is not None:
            return self.find_start_of_previous_word(WORD=WORD, pattern=pattern) is None
        return False

    def find_start_of_previous_word(
        self,
        count: int = 1,
        WORD: bool = False,
        pattern: Optional[Pattern[str]] = None,
    ) -> Optional[int]:
        """Relative offset of the start of the ``count``-th word before the
        cursor.

        A custom ``pattern`` is matched against the reversed text before the
        cursor; its first group, when it has one, is taken as the word.
        """
        if count < 1:
            return None
        regex = _resolve_pattern(WORD, pattern)
        reversed_text = self.text_before_cursor[::-1]

        for i, match in enumerate(regex.finditer(reversed_text)):
            if i + 1 == count:
                return -_word_span(match)[1]
        return None

    def find_boundaries_of_current_word(
        self,
        WORD: bool = False,
        include_leading_whitespace: bool = False,
        include_trailing_whitespace: bool = False,
    ) -> Tuple[int, int]:
        """Relative ``(start, end)`` of the word under the cursor on the
        current line; ``(0, 0)`` when not on a word."""
        text_before_cursor = self.current_line_before_cursor[::-1]
        text_after_cursor = self.current_line_after_cursor

        def get_regex(include_whitespace: bool) -> Pattern[str]:
            if WORD:
                return (
                    _CURRENT_BIG_WORD_WITH_WHITESPACE_RE
                    if include_whitespace
                    else _CURRENT_BIG_WORD_RE
                )
            return (
                _CURRENT_WORD_WITH_WHITESPACE_RE
                if include_whitespace
                else _CURRENT_WORD_RE
            )

        match_before = get_regex(include_leading_whitespace).search(text_before_cursor)
        match_after = get_regex(include_trailing_whitespace).search(text_after_cursor)

        # Don't glue an alphanumeric run onto a punctuation run.
        if not WORD and match_before and match_after:
            c1 = self.text[self.cursor_position - 1]
            c2 = self.text[self.cursor_position]
            if (c1 in _WORD_ALPHABET) != (c2 in _WORD_ALPHABET):
                match_before = None

        return (
            -match_before.end(1) if match_before else 0,
            match_after.end(1) if match_after else 0,
        )

    def get_word_under_cursor(self, WORD: bool = False) -> str:
        start, end = self.find_boundaries_of_current_word(WORD=WORD)
        return self.text[self.cursor_position + start : self.cursor_position + end]

    def find_next_word_beginning(
        self,
        count: int = 1,
        WORD: bool = False,
        pattern: Optional[Pattern[str]] = None,
    ) -> Optional[int]:
        """Relative offset of the start of the next word, or ``None``."""
        if count < 1:
            return None
        regex = _resolve_pattern(WORD, pattern)

        for i, match in enumerate(regex.finditer(self.text_after_cursor)):
            start, _ = _word_span(match)
            # Skip the word the cursor is on.
            if i == 0 and start == 0:
                count += 1
            if i + 1 == count:
                return start
        return None

    def find_next_word_ending(
        self,
        include_current_position: bool = False,
        count: int = 1,
        WORD: bool = False,
        pattern: Optional[Pattern[str]] = None,
    ) -> Optional[int]:
        """Relative offset just past the end of the next word, or ``None``."""
        if count < 1:
            return None
        regex = _resolve_pattern(WORD, pattern)

        if include_current_position:
            text = self.text_after_cursor
        else:
            text = self.text_after_cursor[1:]

        for i, match in enumerate(regex.finditer(text)):
            if i + 1 == count:
                _, end = _word_span(match)
                return end if include_current_position else end + 1
        return None

    def find_previous_word_beginning(
        self,
        count: int = 1,
        WORD: bool = False,
        pattern: Optional[Pattern[str]] = None,
    ) -> Optional[int]:
        """Relative (negative) offset of the start of the previous word."""
        if count < 1:
            return None
        regex = _resolve_pattern(WORD, pattern)

        for i, match in enumerate(regex.finditer(self.text_before_cursor[::-1])):
            if i + 1 == count:
                _, end = _word_span(match)
                return -end
        return None

    def find_previous_word_ending(
        self,
        count: int = 1,
        WORD: bool = False,
        pattern: Optional[Pattern[str]] = None,
    ) -> Optional[int]:
        """Relative offset of the last character of the previous word."""
        if count < 1:
            return None
        regex = _resolve_pattern(WORD, pattern)
        text = self.text_after_cursor[:1] + self.text_before_cursor[::-1]

        for i, match in enumerate(regex.finditer(text)):
            start, _ = _word_span(match)
            # Skip the word the cursor is on.
            if i == 0 and start == 0:
                count += 1
            if i + 1 == count:
                return -start + 1
        return None

    # ------------------------------------------------------------------
    # Lines, characters, document

    def find_next_matching_line(
        self, match_func: Callable[[str], bool], count: int = 1
    ) -> Optional[int]:
        """Relative row offset of the ``count``-th following line for which
        ``match_func`` is true, or ``None``."""
        result = None
        for index, line in enumerate(self.lines[self.cursor_position_row + 1 :]):
            if match_func(line):
                result = 1 + index
                count -= 1
            if count == 0:
                break
        return result

    def find_previous_matching_line(
        self, match_func: Callable[[str], bool], count: int = 1
    ) -> Optional[int]:
        result = None
        for index, line in enumerate(self.lines[: self.cursor_position_row][::-1]):
            if match_func(line):
                result = -1 - index
                count -= 1
            if count == 0:
                break
        return result

    def get_cursor_left_position(self, count: int = 1) -> int:
        if count < 0:
            return self.get_cursor_right_position(-count)
        return -min(self.cursor_position_col, count)

    def get_cursor_right_position(self, count: int = 1) -> int:
        if count < 0:
            return self.get_cursor_left_position(-count)
        return min(count, len(self.current_line_after_cursor))

    def get_cursor_up_position(
        self, count: int = 1, preferred_column: Optional[int] = None
    ) -> int:
        """Relative offset for moving ``count`` rows up, keeping the column
        (or ``preferred_column``) where the target row allows."""
        if count < 1:
            return 0
        column = self.cursor_position_col if preferred_column is None else preferred_column
        return (
            self.translate_row_col_to_index(max(0, self.cursor_position_row - count), column)
            - self.cursor_position
        )

    def get_cursor_down_position(
        self, count: int = 1, preferred_column: Optional[int] = None
    ) -> int:
        if count < 1:
            return 0
        column = self.cursor_position_col if preferred_column is None else preferred_column
        return (
            self.translate_row_col_to_index(self.cursor_position_row + count, column)
            - self.cursor_position
        )

    def get_start_of_document_position(self) -> int:
        return -self.cursor_position

    def get_end_of_document_position(self) -> int:
        return len(self.text) - self.cursor_position

    def get_start_of_line_position(self, after_whitespace: bool = False) -> int:
        if after_whitespace:
            current_line = self.current_line
            return (
                len(current_line)
                - len(current_line.lstrip())
                - self.cursor_position_col
            )
        return -len(self.current_line_before_cursor)

    def get_end_of_line_position(self) -> int:
        return len(self.current_line_after_cursor)

    def last_non_blank_of_current_line_position(self) -> int:
        return len(self.current_line.rstrip()) - self.cursor_position_col - 1

    def get_column_cursor_position(self, column: int) -> int:
        """Relative offset for moving to ``column`` of the current line."""
        line_length = len(self.current_line)
        column = max(0, min(line_length, column))
        return column - self.cursor_position_col

    # ------------------------------------------------------------------
    # Paragraphs

    def start_of_paragraph(self, count: int = 1, before: bool = False) -> int:
        """Relative offset of the start of the current paragraph.

        With ``before=True`` the cursor lands on the blank separator line
        itself rather than the line after it.
        """
        line_index = self.find_previous_matching_line(match_func=_is_blank, count=count)
        if line_index:
            add = 0 if before else 1
            return min(0, self.get_cursor_up_position(count=-line_index) + add)
        return -self.cursor_position

    def end_of_paragraph(self, count: int = 1, after: bool = False) -> int:
        line_index = self.find_next_matching_line(match_func=_is_blank, count=count)
        if line_index:
            add = 0 if after else 1
            return max(0, self.get_cursor_down_position(count=line_index) - add)
        return len(self.text_after_cursor)

    # ------------------------------------------------------------------
    # Brackets

    def find_enclosing_bracket_right(
        self, left_ch: str, right_ch: str, end_pos: Optional[int] = None
    ) -> Optional[int]:
        """Relative offset of the ``right_ch`` closing the innermost pair
        around the cursor, or ``None``."""
        if self.current_char == right_ch:
            return 0

        end_pos = len(self.text) if end_pos is None else min(len(self.text), end_pos)
        depth = 1
        for i in range(self.cursor_position + 1, end_pos):
            c = self.text[i]
            if c == left_ch:
                depth += 1
            elif c == right_ch:
                depth -= 1
            if depth == 0:
                return i - self.cursor_position
        return None

    def find_enclosing_bracket_left(
        self, left_ch: str, right_ch: str, start_pos: Optional[int] = None
    ) -> Optional[int]:
        """Relative (negative) offset of the ``left_ch`` opening the innermost
        pair around the cursor, or ``None``."""
        if self.current_char == left_ch:
            return 0

        start_pos = 0 if start_pos is None else max(0, start_pos)
        depth = 1
        for i in range(self.cursor_position - 1, start_pos - 1, -1):
            c = self.text[i]
            if c == right_ch:
                depth += 1
            elif c == left_ch:
                depth -= 1
            if depth == 0:
                return i - self.cursor_position
        return None

    def find_matching_bracket_position(
        self, start_pos: Optional[int] = None, end_pos: Optional[int] = None
    ) -> Optional[int]:
        """Relative offset of the partner of the bracket under the cursor.

        ``None`` when the cursor is not on a bracket or the bracket is
        unbalanced.
        """
        char = self.current_char
        for left, right in BRACKET_PAIRS:
            if char == left:
                return self.find_enclosing_bracket_right(left, right, end_pos=end_pos)
            if char == right:
                return self.find_enclosing_bracket_left(left, right, start_pos=start_pos)
        return None

    # ------------------------------------------------------------------
    # Selection

    def selection_range(self) -> Range:
        """Sorted ``(from, to)`` of cursor and anchor, ignoring the selection
        type. ``(cursor, cursor)`` when nothing is selected."""
        if self.selection:
            from_, to = sorted(
                [self.cursor_position, self.selection.original_cursor_position]
            )
            return from_, to
        return self.cursor_position, self.cursor_position

    def selection_ranges(self, vi_mode: bool = False) -> Iterator[Range]:
        """Yield half-open ``(from, to)`` spans covered by the selection.

        CHARACTERS gives one span, LINES one span per covered line and BLOCK
        one span per row of the rectangle, clipped to each row's length. With
        ``vi_mode`` the upper boundary is included.
        """
        if not self.selection:
            return

        from_, to = self.selection_range()
        selection_type = self.selection.type

        if selection_type == SelectionType.BLOCK:
            from_line, from_column = self.translate_index_to_position(from_)
            to_line, to_column = self.translate_index_to_position(to)
            from_column, to_column = sorted([from_column, to_column])
            if vi_mode:
                to_column += 1

            lines = self.lines
            for row in range(from_line, to_line + 1):
                line_length = len(lines[row])
                if from_column <= line_length:
                    yield (
                        self.translate_row_col_to_index(row, from_column),
                        self.translate_row_col_to_index(row, min(line_length, to_column)),
                    )

        elif selection_type == SelectionType.LINES:
            from_line, _ = self.translate_index_to_position(from_)
            to_line, _ = self.translate_index_to_position(to)
            indexes = self._line_start_indexes
            lines = self.lines
            for row in range(from_line, to_line + 1):
                start = indexes[row]
                end = start + len(lines[row])
                if vi_mode and row == to_line:
                    end = min(end + 1, len(self.text))
                yield start, end

        else:
            if vi_mode:
                to = min(to + 1, len(self.text))
            yield from_, to

    def selection_range_at_line(self, row: int) -> Optional[Range]:
        """Column span ``(from_col, to_col)`` selected on ``row``, or ``None``
        when the selection does not touch that row."""
        if not self.selection or not 0 <= row < self.line_count:
            return None

        line = self.lines[row]
        row_start = self.translate_row_col_to_index(row, 0)
        row_end = self.translate_row_col_to_index(row, len(line))
        from_, to = self.selection_range()

        intersection_start = max(row_start, from_)
        intersection_end = min(row_end, to)
        if intersection_start > intersection_end:
            return None

        if self.selection.type == SelectionType.LINES:
            intersection_start = row_start
            intersection_end = row_end
        elif self.selection.type == SelectionType.BLOCK:
            _, col1 = self.translate_index_to_position(from_)
            _, col2 = self.translate_index_to_position(to)
            col1, col2 = sorted([col1, col2])
            if col1 > len(line):
                return None
            intersection_start = self.translate_row_col_to_index(row, col1)
            intersection_end = self.translate_row_col_to_index(row, col2)

        _, from_column = self.translate_index_to_position(intersection_start)
        _, to_column = self.translate_index_to_position(intersection_end)
        return from_column, to_column

    def _cut_ranges(self, vi_mode: bool) -> List[Range]:
        ranges = list(self.selection_ranges(vi_mode=vi_mode))
        if not ranges or self.selection is None:
            return ranges
        if self.selection.type == SelectionType.BLOCK:
            return ranges
        # Characters and whole lines come out as one contiguous run.
        return [(ranges[0][0], ranges[-1][1])]

    def cut_selection(self, vi_mode: bool = False) -> Tuple["Document", ClipboardData]:
        """Remove the selection.

        Returns the new document (cursor at the start of the removed region,
        no selection) and the :class:`ClipboardData` that was cut.
        """
        if not self.selection:
            return self, ClipboardData("")

        cut_parts: List[str] = []
        remaining_parts: List[str] = []
        new_cursor_position = self.cursor_position
        last_to = 0

        for index, (from_, to) in enumerate(self._cut_ranges(vi_mode)):
            if index == 0:
                new_cursor_position = from_
            remaining_parts.append(self.text[last_to:from_])
            cut_parts.append(self.text[from_:to])
            last_to = to

        remaining_parts.append(self.text[last_to:])

        cut_text = "\n".join(cut_parts)
        remaining_text = "".join(remaining_parts)

        # A LINES cut never carries the trailing newline.
        if self.selection.type == SelectionType.LINES and cut_text.endswith("\n"):
            cut_text = cut_text[:-1]

        return (
            Document(
                text=remaining_text,
                cursor_position=min(new_cursor_position, len(remaining_text)),
            ),
            ClipboardData(cut_text, self.selection.type),
        )

    # ------------------------------------------------------------------
    # Paste / insert

    def paste_clipboard_data(
        self,
        data: ClipboardData,
        paste_mode: PasteMode = PasteMode.EMACS,
        count: int = 1,
    ) -> "Document":
        """Return a new document with ``data`` pasted ``count`` times."""
        before = paste_mode == PasteMode.VI_BEFORE
        after = paste_mode == PasteMode.VI_AFTER

        if data.type == SelectionType.CHARACTERS:
            if after:
                split = self.cursor_position + 1
                new_text = self.text[:split] + data.text * count + self.text[split:]
            else:
                new_text = self.text_before_cursor + data.text * count + self.text_after_cursor

            new_cursor_position = self.cursor_position + len(data.text) * count
            if before:
                new_cursor_position = max(0, new_cursor_position - 1)

        elif data.type == SelectionType.LINES:
            row = self.cursor_position_row
            lines: Sequence[str] = self.lines
            if before:
                new_lines = [*lines[:row], *([data.text] * count), *lines[row:]]
                new_cursor_position = len("".join(lines[:row])) + row
            else:
                new_lines = [*lines[: row + 1], *([data.text] * count), *lines[row + 1 :]]
                new_cursor_position = len("".join(lines[: row + 1])) + row + 1
            new_text = "\n".join(new_lines)

        else:
            block_lines = list(self.lines)
            start_line = self.cursor_position_row
            start_column = self.cursor_position_col + (0 if before else 1)

            for i, line in enumerate(data.text.split("\n")):
                index = i + start_line
                if index >= len(block_lines):
                    block_lines.append("")
                padded = block_lines[index].ljust(start_column)
                block_lines[index] = (
                    padded[:start_column] + line * count + padded[start_column:]
                )

            new_text = "\n".join(block_lines)
            new_cursor_position = self.cursor_position

        return Document(
            text=new_text,
            cursor_position=min(new_cursor_position, len(new_text)),
        )

    def insert_after(self, text: str) -> "Document":
        """Append ``text``; cursor and selection stay where they are."""
        return Document(
            text=self.text + text,
            cursor_position=self.cursor_position,
            selection=self.selection,
        )

    def insert_before(self, text: str) -> "Document":
        """Prepend ``text``, shifting the cursor and the selection anchor."""
        selection = self.selection
        if selection is not None:
            selection = SelectionState(
                original_cursor_position=selection.original_cursor_position + len(text),
                type=selection.type,
                shift_mode=selection.shift_mode,
            )
        return Document(
            text=text + self.text,
            cursor_position=self.cursor_position + len(text),
            selection=selection,
        )


__all__ = [
    "BIG_WORD_PATTERN",
    "BRACKET_PAIRS",
    "Document",
    "WORD_PATTERN",
]
