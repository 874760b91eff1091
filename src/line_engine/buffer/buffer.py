"""Mutable edit-session controller wrapping documents, selection, undo and history."""

from __future__ import annotations

import threading
from contextlib import AbstractContextManager
from typing import Any, Callable, ContextManager, Dict, Iterable, List, Optional

from line_engine.runtime import telemetry

from .clipboard import ClipboardData
from .document import Document
from .events import CURSOR_POSITION_CHANGED, TEXT_CHANGED, BufferEvents
from .history import History, InMemoryHistory
from .selection import PasteMode, SelectionState, SelectionType
from .undo import UndoHistory
from .validation import EditReadOnlyBuffer, ValidationError, ValidationState, Validator

TEXT_INSERTED = "text_inserted"

AcceptHandler = Callable[["Buffer"], bool]


class Buffer:
    """The text being edited, its cursor, selection and undo/redo stacks.

    Every change to text or cursor goes through a :class:`Transaction`, which
    holds the buffer lock and a telemetry span. Change events are delivered
    after the outermost transaction has released the lock, so listeners may
    safely call back into the buffer.

    :param document: Initial :class:`Document`; selection on it is ignored.
    :param history: Store of accepted inputs used for history navigation.
    :param validator: Consulted by :meth:`validate` before accepting input.
    :param accept_handler: Called by :meth:`validate_and_handle` with the
        buffer; returning ``True`` keeps the text instead of resetting.
    :param read_only: Reject text changes with :class:`EditReadOnlyBuffer`.
    :param multiline: Whether the dispatch layer should treat Enter as a
        newline rather than accept.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[Document] = None,
        history: Optional[History] = None,
        validator: Optional[Validator] = None,
        accept_handler: Optional[AcceptHandler] = None,
        read_only: bool = False,
        multiline: bool = True,
    ) -> None:
        self.name = name
        self.history: History = history if history is not None else InMemoryHistory()
        self.validator = validator
        self.accept_handler = accept_handler
        self.read_only = read_only
        self.multiline = multiline
        self.events = BufferEvents()
        self.undo_history = UndoHistory()

        self._lock = threading.RLock()
        self._transaction: Optional[Transaction] = None

        self.reset(document=document)

    def __repr__(self) -> str:
        text = self.text if len(self.text) < 15 else self.text[:12] + "..."
        return f"<Buffer(name={self.name!r}, text={text!r}) at {id(self)!r}>"

    # ------------------------------------------------------------------
    # State

    def reset(
        self, document: Optional[Document] = None, append_to_history: bool = False
    ) -> None:
        """Start over with ``document`` (empty by default).

        Clears selection, validation result, undo/redo stacks and the history
        working lines. With ``append_to_history`` the current text is stored
        first.
        """
        with self._lock:
            if append_to_history:
                self.append_to_history()

            document = document or Document()
            self._text = document.text
            self._cursor_position = document.cursor_position

            self.validation_error: Optional[ValidationError] = None
            self.validation_state = ValidationState.UNKNOWN
            self.selection_state: Optional[SelectionState] = None
            self.preferred_column: Optional[int] = None
            self.document_before_paste: Optional[Document] = None

            self.undo_history.clear()

            self._working_lines: List[str] = [document.text]
            self._working_index = 0
            self._history_loaded = False

    def transaction(self, label: str, **metadata: Any) -> "Transaction":
        """Group several changes under one lock hold and one telemetry span."""
        return Transaction(self, label, metadata)

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str) -> None:
        with self.transaction("set_text"):
            self._check_writable()
            self._install(value, self._cursor_position)

    @property
    def cursor_position(self) -> int:
        return self._cursor_position

    @cursor_position.setter
    def cursor_position(self, value: int) -> None:
        with self.transaction("set_cursor_position"):
            self._install(self._text, value)

    @property
    def document(self) -> Document:
        """Snapshot of text, cursor and current selection."""
        with self._lock:
            return Document(self._text, self._cursor_position, self.selection_state)

    @document.setter
    def document(self, value: Document) -> None:
        self.set_document(value)

    def set_document(self, value: Document, bypass_readonly: bool = False) -> None:
        """Install ``value``'s text and cursor in one step.

        Listeners see at most one ``text_changed`` and one
        ``cursor_position_changed`` event, both after the state is
        consistent.
        """
        with self.transaction("set_document"):
            if not bypass_readonly:
                self._check_writable()
            self._install(value.text, value.cursor_position)

    @property
    def working_index(self) -> int:
        return self._working_index

    def _check_writable(self) -> None:
        if self.read_only:
            raise EditReadOnlyBuffer()

    def _install(self, text: str, cursor_position: int) -> None:
        tx = self._transaction
        if tx is None:
            raise RuntimeError("Buffer state may only change inside a transaction")

        text_changed = text != self._text
        if text_changed:
            self._text = text
            self._working_lines[self._working_index] = text

        cursor_position = max(0, min(cursor_position, len(self._text)))
        cursor_changed = cursor_position != self._cursor_position
        self._cursor_position = cursor_position

        if text_changed:
            self._text_changed()
            tx.notify(TEXT_CHANGED)
        if cursor_changed:
            self._cursor_position_changed()
            tx.notify(CURSOR_POSITION_CHANGED)

    def _text_changed(self) -> None:
        self.validation_error = None
        self.validation_state = ValidationState.UNKNOWN
        self.selection_state = None
        self.document_before_paste = None
        self.preferred_column = None

    def _cursor_position_changed(self) -> None:
        self.validation_error = None
        self.validation_state = ValidationState.UNKNOWN
        self.document_before_paste = None
        # Up/down movement sets it again after moving.
        self.preferred_column = None

    # ------------------------------------------------------------------
    # Undo / redo

    def save_to_undo_stack(self, clear_redo_stack: bool = True) -> None:
        """Remember the current text and cursor as an undo point."""
        with self._lock:
            self.undo_history.save(
                self._text, self._cursor_position, clear_redo_stack=clear_redo_stack
            )

    def undo(self) -> None:
        with self.transaction("undo") as tx:
            self._check_writable()
            entry = self.undo_history.pop_undo(self._text, self._cursor_position)
            if entry is None:
                tx.note("undo_empty")
                return
            self._install(entry.text, entry.cursor_position)
        telemetry.record_event(
            "buffer.undo", level="debug", data={"buffer": self.name, "cursor": entry.cursor_position}
        )

    def redo(self) -> None:
        with self.transaction("redo") as tx:
            self._check_writable()
            entry = self.undo_history.pop_redo(self._text, self._cursor_position)
            if entry is None:
                tx.note("redo_empty")
                return
            self._install(entry.text, entry.cursor_position)
        telemetry.record_event(
            "buffer.redo", level="debug", data={"buffer": self.name, "cursor": entry.cursor_position}
        )

    # ------------------------------------------------------------------
    # Editing

    def insert_text(
        self,
        data: str,
        overwrite: bool = False,
        move_cursor: bool = True,
        fire_event: bool = True,
    ) -> None:
        """Insert ``data`` at the cursor.

        In ``overwrite`` mode the characters under the cursor are replaced,
        but never past the end of the current line.
        """
        if not data:
            return
        with self.transaction("insert_text", length=len(data)) as tx:
            self._check_writable()
            otext = self._text
            ocpos = self._cursor_position

            if overwrite:
                overwritten = otext[ocpos : ocpos + len(data)]
                if "\n" in overwritten:
                    overwritten = overwritten[: overwritten.find("\n")]
                text = otext[:ocpos] + data + otext[ocpos + len(overwritten) :]
            else:
                text = otext[:ocpos] + data + otext[ocpos:]

            cpos = ocpos + len(data) if move_cursor else ocpos
            self._install(text, cpos)
            if fire_event:
                tx.notify(TEXT_INSERTED)

    def delete(self, count: int = 1) -> str:
        """Delete ``count`` characters after the cursor and return them."""
        if count < 0:
            raise ValueError("count must be >= 0")
        with self.transaction("delete", count=count):
            self._check_writable()
            if self._cursor_position >= len(self._text):
                return ""
            pos = self._cursor_position
            deleted = self._text[pos : pos + count]
            self._install(self._text[:pos] + self._text[pos + len(deleted) :], pos)
            return deleted

    def delete_before_cursor(self, count: int = 1) -> str:
        """Delete ``count`` characters before the cursor and return them."""
        if count < 0:
            raise ValueError("count must be >= 0")
        with self.transaction("delete_before_cursor", count=count):
            self._check_writable()
            pos = self._cursor_position
            start = max(0, pos - count)
            deleted = self._text[start:pos]
            if deleted:
                self._install(self._text[:start] + self._text[pos:], start)
            return deleted

    def newline(self, copy_margin: bool = True) -> None:
        """Insert a line ending, optionally repeating the current indentation."""
        if copy_margin:
            self.insert_text("\n" + self.document.leading_whitespace_in_current_line)
        else:
            self.insert_text("\n")

    def insert_line_above(self, copy_margin: bool = True) -> None:
        with self.transaction("insert_line_above"):
            document = self.document
            insert = (document.leading_whitespace_in_current_line if copy_margin else "") + "\n"
            self.cursor_position += document.get_start_of_line_position()
            self.insert_text(insert)
            self.cursor_position -= 1

    def insert_line_below(self, copy_margin: bool = True) -> None:
        with self.transaction("insert_line_below"):
            document = self.document
            insert = "\n" + (document.leading_whitespace_in_current_line if copy_margin else "")
            self.cursor_position += document.get_end_of_line_position()
            self.insert_text(insert)

    def join_next_line(self, separator: str = " ") -> None:
        """Join the next line onto the current one, dropping its leading spaces."""
        with self.transaction("join_next_line"):
            if self.document.on_last_line:
                return
            self.cursor_position += self.document.get_end_of_line_position()
            self.delete()
            document = self.document
            self.text = (
                document.text_before_cursor
                + separator
                + document.text_after_cursor.lstrip(" ")
            )

    def join_selected_lines(self, separator: str = " ") -> None:
        if self.selection_state is None:
            raise ValueError("join_selected_lines requires an active selection")
        with self.transaction("join_selected_lines"):
            from_, to = sorted(
                [self._cursor_position, self.selection_state.original_cursor_position]
            )
            before = self._text[:from_]
            lines = [line.lstrip(" ") + separator for line in self._text[from_:to].splitlines()]
            after = self._text[to:]
            self.set_document(
                Document(
                    text=before + "".join(lines) + after,
                    cursor_position=max(0, len(before + "".join(lines[:-1])) - 1),
                )
            )

    def swap_characters_before_cursor(self) -> None:
        """Swap the two characters before the cursor (Emacs ``C-t``)."""
        with self.transaction("swap_characters_before_cursor"):
            pos = self._cursor_position
            if pos >= 2:
                a = self._text[pos - 2]
                b = self._text[pos - 1]
                self.text = self._text[: pos - 2] + b + a + self._text[pos:]

    def transform_lines(
        self, line_index_iterator: Iterable[int], transform_callback: Callable[[str], str]
    ) -> str:
        """Return the text with the given lines passed through ``transform_callback``.

        Out-of-range indexes are skipped. The buffer itself is not changed.
        """
        lines = self._text.split("\n")
        for index in line_index_iterator:
            if 0 <= index < len(lines):
                lines[index] = transform_callback(lines[index])
        return "\n".join(lines)

    def transform_current_line(self, transform_callback: Callable[[str], str]) -> None:
        with self.transaction("transform_current_line"):
            document = self.document
            a = document.cursor_position + document.get_start_of_line_position()
            b = document.cursor_position + document.get_end_of_line_position()
            self.text = document.text[:a] + transform_callback(document.text[a:b]) + document.text[b:]

    def transform_region(
        self, from_: int, to: int, transform_callback: Callable[[str], str]
    ) -> None:
        """Replace ``text[from_:to]`` with its transformed version."""
        if from_ >= to:
            raise ValueError(f"Empty region: from_={from_!r} must be < to={to!r}")
        with self.transaction("transform_region", start=from_, end=to):
            text = self._text
            self.text = "".join(
                [text[:from_], transform_callback(text[from_:to]), text[to:]]
            )

    # ------------------------------------------------------------------
    # Navigation

    def cursor_left(self, count: int = 1) -> None:
        self.cursor_position += self.document.get_cursor_left_position(count=count)

    def cursor_right(self, count: int = 1) -> None:
        self.cursor_position += self.document.get_cursor_right_position(count=count)

    def cursor_up(self, count: int = 1) -> None:
        """Move up, keeping the column of the first vertical move."""
        with self.transaction("cursor_up", count=count):
            original_column = self.preferred_column
            if original_column is None:
                original_column = self.document.cursor_position_col
            self.cursor_position += self.document.get_cursor_up_position(
                count=count, preferred_column=original_column
            )
            self.preferred_column = original_column

    def cursor_down(self, count: int = 1) -> None:
        with self.transaction("cursor_down", count=count):
            original_column = self.preferred_column
            if original_column is None:
                original_column = self.document.cursor_position_col
            self.cursor_position += self.document.get_cursor_down_position(
                count=count, preferred_column=original_column
            )
            self.preferred_column = original_column

    def auto_up(self, count: int = 1, go_to_start_of_line_if_history_changes: bool = False) -> None:
        """Move up a row, or to older history when already on the first row."""
        with self.transaction("auto_up"):
            if self.document.cursor_position_row > 0:
                self.cursor_up(count=count)
            elif self.selection_state is None:
                self.history_backward(count=count)
                if go_to_start_of_line_if_history_changes:
                    self.cursor_position += self.document.get_start_of_line_position()

    def auto_down(self, count: int = 1, go_to_start_of_line_if_history_changes: bool = False) -> None:
        with self.transaction("auto_down"):
            if self.document.cursor_position_row < self.document.line_count - 1:
                self.cursor_down(count=count)
            elif self.selection_state is None:
                self.history_forward(count=count)
                if go_to_start_of_line_if_history_changes:
                    self.cursor_position += self.document.get_start_of_line_position()

    def go_to_matching_bracket(self) -> None:
        with self.transaction("go_to_matching_bracket"):
            offset = self.document.find_matching_bracket_position()
            if offset is not None:
                self.cursor_position += offset

    # ------------------------------------------------------------------
    # Selection and clipboard

    def start_selection(self, selection_type: SelectionType = SelectionType.CHARACTERS) -> None:
        with self._lock:
            self.selection_state = SelectionState(self._cursor_position, selection_type)

    def exit_selection(self) -> None:
        with self._lock:
            self.selection_state = None

    def copy_selection(self, _cut: bool = False) -> ClipboardData:
        """Return the selected text as clipboard data and clear the selection.

        With ``_cut`` the selected text is also removed from the buffer.
        """
        with self.transaction("cut_selection" if _cut else "copy_selection"):
            new_document, clipboard_data = self.document.cut_selection()
            if _cut:
                self.set_document(new_document)
            self.selection_state = None
            return clipboard_data

    def cut_selection(self) -> ClipboardData:
        return self.copy_selection(_cut=True)

    def paste_clipboard_data(
        self,
        data: ClipboardData,
        paste_mode: PasteMode = PasteMode.EMACS,
        count: int = 1,
    ) -> None:
        """Paste ``data`` ``count`` times; remembers the pre-paste document."""
        with self.transaction("paste", mode=paste_mode.value, count=count):
            original_document = self.document
            self.set_document(
                original_document.paste_clipboard_data(data, paste_mode=paste_mode, count=count)
            )
            # Yank-pop replaces the previous paste using this.
            self.document_before_paste = original_document

    # ------------------------------------------------------------------
    # Validation

    def validate(self, set_cursor: bool = False) -> bool:
        """Run the validator unless the current text already has a verdict.

        On failure the error is kept on ``validation_error`` and, with
        ``set_cursor``, the cursor moves to the position it reports.
        """
        with self.transaction("validate") as tx:
            if self.validation_state != ValidationState.UNKNOWN:
                return self.validation_state == ValidationState.VALID

            if self.validator is not None:
                try:
                    self.validator.validate(self.document)
                except ValidationError as exc:
                    if set_cursor:
                        self.cursor_position = min(max(0, exc.cursor_position), len(self._text))
                    self.validation_state = ValidationState.INVALID
                    self.validation_error = exc
                    tx.add_metadata("error", exc.message)
                    telemetry.record_event(
                        "buffer.validation_failed",
                        level="debug",
                        data={"buffer": self.name, "message": exc.message},
                    )
                    return False

            self.validation_state = ValidationState.VALID
            self.validation_error = None
            return True

    def validate_and_handle(self) -> None:
        """Accept the input if it validates.

        The accept handler runs first, then the text is stored in history and
        the buffer is reset, unless the handler returned ``True``.
        """
        if not self.validate(set_cursor=True):
            return
        keep_text = self.accept_handler(self) if self.accept_handler else False
        with self.transaction("accept"):
            self.append_to_history()
            if not keep_text:
                self.reset()
        telemetry.record_event("buffer.accept", data={"buffer": self.name, "kept": bool(keep_text)})

    # ------------------------------------------------------------------
    # History

    def append_to_history(self) -> None:
        """Store the current text unless it is empty or repeats the last entry."""
        with self._lock:
            if self._text:
                history_strings = self.history.get_strings()
                if not len(history_strings) or history_strings[-1] != self._text:
                    self.history.append_string(self._text)

    def load_history_if_not_yet_loaded(self) -> None:
        """Put the stored history entries in front of the working lines, once."""
        with self._lock:
            if self._history_loaded:
                return
            self._history_loaded = True
            strings = list(self.history.get_strings())
            self._working_lines[:0] = strings
            self._working_index += len(strings)
        telemetry.record_event(
            "buffer.history_loaded", level="debug", data={"buffer": self.name, "entries": len(strings)}
        )

    def _go_to_working_index(self, index: int) -> None:
        if index != self._working_index:
            self._working_index = index
            self._install(self._working_lines[index], self._cursor_position)

    def history_backward(self, count: int = 1) -> None:
        """Move ``count`` entries back in history; cursor goes to the end."""
        with self.transaction("history_backward", count=count):
            if count < 1 or self._working_index == 0:
                return
            self._go_to_working_index(max(0, self._working_index - count))
            self._install(self._text, len(self._text))
        telemetry.record_event(
            "buffer.history", level="debug", data={"buffer": self.name, "index": self._working_index}
        )

    def history_forward(self, count: int = 1) -> None:
        """Move ``count`` entries forward; cursor goes to the end of the first line."""
        with self.transaction("history_forward", count=count):
            last = len(self._working_lines) - 1
            if count < 1 or self._working_index == last:
                return
            self._go_to_working_index(min(last, self._working_index + count))
            first_line = self._text.partition("\n")[0]
            self._install(self._text, len(first_line))
        telemetry.record_event(
            "buffer.history", level="debug", data={"buffer": self.name, "index": self._working_index}
        )

    def go_to_history(self, index: int) -> None:
        """Install working line ``index``; out-of-range indexes are ignored."""
        with self.transaction("go_to_history", index=index):
            if 0 <= index < len(self._working_lines):
                self._go_to_working_index(index)
                self._install(self._text, len(self._text))


class Transaction(AbstractContextManager["Transaction"]):
    """One logical buffer change: lock, telemetry span and deferred events.

    Transactions nest. Inner ones hand their pending events to the outermost,
    which emits them once the lock is released.
    """

    def __init__(
        self, buffer: Buffer, label: str, metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        self.buffer = buffer
        self.label = label
        self.metadata = metadata or {}
        self.pending: List[str] = []
        self._parent: Optional[Transaction] = None
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None
        self._handle: Optional[telemetry.SpanHandle] = None

    def __enter__(self) -> "Transaction":
        self.buffer._lock.acquire()
        try:
            self._span_cm = telemetry.span(
                name=f"buffer::{self.label}",
                component="buffer",
                metadata={"buffer": self.buffer.name, **self.metadata},
            )
            self._handle = self._span_cm.__enter__()
        except BaseException:
            self.buffer._lock.release()
            raise
        self._parent = self.buffer._transaction
        self.buffer._transaction = self
        return self

    def notify(self, event: str) -> None:
        if event not in self.pending:
            self.pending.append(event)

    def note(self, message: str, **extra: Any) -> None:
        if self._handle is not None:
            self._handle.note(message, **extra)

    def add_metadata(self, key: str, value: Any) -> None:
        if self._handle is not None:
            self._handle.add_metadata(key, value)

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.buffer._transaction = self._parent
        try:
            if self._span_cm is not None:
                self._span_cm.__exit__(exc_type, exc, tb)
        finally:
            self.buffer._lock.release()

        if exc_type is not None:
            return False
        if self._parent is not None:
            for event in self.pending:
                self._parent.notify(event)
        else:
            for event in self.pending:
                self.buffer.events.emit(event, self.buffer)
        return False


__all__ = ["Buffer", "TEXT_INSERTED", "Transaction"]
