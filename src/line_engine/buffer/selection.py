"""Selection shapes, paste modes, and the in-progress selection anchor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SelectionType(str, Enum):
    """Shape of a selection and of the clipboard data it produces."""

    #: Characters between the anchor and the cursor.
    CHARACTERS = "CHARACTERS"

    #: Whole lines.
    LINES = "LINES"

    #: A rectangle of columns across successive rows.
    BLOCK = "BLOCK"


class PasteMode(str, Enum):
    EMACS = "EMACS"  # Yank like emacs.
    VI_AFTER = "VI_AFTER"  # When pressing 'p' in Vi.
    VI_BEFORE = "VI_BEFORE"  # When pressing 'P' in Vi.


@dataclass(slots=True, init=False)
class SelectionState:
    """Anchor and shape of the selection currently being made.

    ``shift_mode`` records that the selection was started by shift+movement.
    It can be switched on via ``enter_shift_mode`` but never back off.
    """

    original_cursor_position: int
    type: SelectionType
    _shift_mode: bool

    def __init__(
        self,
        original_cursor_position: int = 0,
        type: SelectionType = SelectionType.CHARACTERS,
        shift_mode: bool = False,
    ) -> None:
        self.original_cursor_position = original_cursor_position
        self.type = type
        self._shift_mode = shift_mode

    @property
    def shift_mode(self) -> bool:
        return self._shift_mode

    def enter_shift_mode(self) -> None:
        self._shift_mode = True

    def copy(self) -> "SelectionState":
        return SelectionState(
            original_cursor_position=self.original_cursor_position,
            type=self.type,
            shift_mode=self.shift_mode,
        )

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"original_cursor_position={self.original_cursor_position!r}, "
            f"type={self.type!r})"
        )


__all__ = ["PasteMode", "SelectionState", "SelectionType"]
