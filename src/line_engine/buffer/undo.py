"""Two-stack undo/redo history for a live edit session."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True, slots=True)
class UndoEntry:
    text: str
    cursor_position: int

    def clamped(self) -> "UndoEntry":
        """Entry whose cursor fits inside its own text."""
        position = max(0, min(self.cursor_position, len(self.text)))
        if position == self.cursor_position:
            return self
        return UndoEntry(self.text, position)


class UndoHistory:
    """Undo and redo stacks of ``(text, cursor_position)`` snapshots.

    Saving a state whose text equals the top undo entry only updates that
    entry's cursor, so cursor movement alone never grows the stack. Any save
    that clears the redo stack discards the undone branch; there is no redo
    tree. Every operation holds one lock, so saves racing with undo/redo
    cannot interleave.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._undo_stack: List[UndoEntry] = []
        self._redo_stack: List[UndoEntry] = []

    @property
    def undo_stack(self) -> List[UndoEntry]:
        with self._lock:
            return list(self._undo_stack)

    @property
    def redo_stack(self) -> List[UndoEntry]:
        with self._lock:
            return list(self._redo_stack)

    def save(self, text: str, cursor_position: int, *, clear_redo_stack: bool = True) -> None:
        with self._lock:
            entry = UndoEntry(text, cursor_position)
            if self._undo_stack and self._undo_stack[-1].text == text:
                self._undo_stack[-1] = entry
            else:
                self._undo_stack.append(entry)

            if clear_redo_stack:
                self._redo_stack.clear()

    def pop_undo(self, text: str, cursor_position: int) -> Optional[UndoEntry]:
        """Step back to the newest entry whose text differs from ``text``.

        Entries matching the current text are discarded on the way down. The
        current state is pushed onto the redo stack. Returns ``None`` when no
        differing entry exists.
        """
        with self._lock:
            while self._undo_stack:
                entry = self._undo_stack.pop()
                if entry.text != text:
                    self._redo_stack.append(UndoEntry(text, cursor_position))
                    return entry.clamped()
            return None

    def pop_redo(self, text: str, cursor_position: int) -> Optional[UndoEntry]:
        with self._lock:
            if not self._redo_stack:
                return None
            self.save(text, cursor_position, clear_redo_stack=False)
            return self._redo_stack.pop().clamped()

    def clear(self) -> None:
        with self._lock:
            self._undo_stack.clear()
            self._redo_stack.clear()

    def can_undo(self) -> bool:
        with self._lock:
            return bool(self._undo_stack)

    def can_redo(self) -> bool:
        with self._lock:
            return bool(self._redo_stack)

    def __len__(self) -> int:
        with self._lock:
            return len(self._undo_stack)


__all__ = ["UndoEntry", "UndoHistory"]
