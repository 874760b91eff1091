"""Validation errors and helpers shared across buffer services."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .document import Document


class CursorPositionError(ValueError):
    """Raised when a document is built with a cursor outside its text."""

    def __init__(self, cursor_position: int, text_length: int) -> None:
        super().__init__(
            f"Cursor position {cursor_position} is out of range "
            f"(expected 0 <= cursor_position <= {text_length})."
        )
        self.cursor_position = cursor_position
        self.text_length = text_length


class EditReadOnlyBuffer(Exception):
    """Attempt editing of read-only :class:`Buffer`."""


class ValidationError(Exception):
    """Raised by a validator that rejects the buffer's document."""

    def __init__(self, cursor_position: int = 0, message: str = "") -> None:
        super().__init__(message)
        self.cursor_position = cursor_position
        self.message = message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(cursor_position={self.cursor_position!r}, "
            f"message={self.message!r})"
        )


class ValidationState(str, Enum):
    VALID = "VALID"
    INVALID = "INVALID"
    UNKNOWN = "UNKNOWN"


class Validator(ABC):
    """Decides whether a document may be accepted."""

    @abstractmethod
    def validate(self, document: "Document") -> None:
        """Raise :class:`ValidationError` when ``document`` is not acceptable."""


class _PredicateValidator(Validator):
    def __init__(
        self,
        func: Callable[["Document"], bool],
        error_message: str,
        move_cursor_to_end: bool,
    ) -> None:
        self.func = func
        self.error_message = error_message
        self.move_cursor_to_end = move_cursor_to_end

    def validate(self, document: "Document") -> None:
        if not self.func(document):
            index = len(document.text) if self.move_cursor_to_end else 0
            raise ValidationError(cursor_position=index, message=self.error_message)

    def __repr__(self) -> str:
        return f"Validator.from_callable({self.func!r})"


def validator_from_callable(
    func: Callable[["Document"], bool],
    error_message: str = "Invalid input",
    move_cursor_to_end: bool = False,
) -> Validator:
    """Wrap a ``Document -> bool`` predicate as a :class:`Validator`."""

    return _PredicateValidator(func, error_message, move_cursor_to_end)


def ensure_cursor_position(text: str, cursor_position: int) -> int:
    if cursor_position < 0 or cursor_position > len(text):
        raise CursorPositionError(cursor_position, len(text))
    return cursor_position


__all__ = [
    "CursorPositionError",
    "EditReadOnlyBuffer",
    "ValidationError",
    "ValidationState",
    "Validator",
    "ensure_cursor_position",
    "validator_from_callable",
]
