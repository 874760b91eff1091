"""Documents, buffers and the value types exchanged between them."""

from .buffer import TEXT_INSERTED, Buffer, Transaction
from .cache import DocumentCache, get_document_cache
from .clipboard import Clipboard, ClipboardData, InMemoryClipboard
from .document import BIG_WORD_PATTERN, WORD_PATTERN, Document
from .events import CURSOR_POSITION_CHANGED, TEXT_CHANGED, BufferEvents
from .history import History, InMemoryHistory
from .selection import PasteMode, SelectionState, SelectionType
from .undo import UndoEntry, UndoHistory
from .validation import (
    CursorPositionError,
    EditReadOnlyBuffer,
    ValidationError,
    ValidationState,
    Validator,
    ensure_cursor_position,
    validator_from_callable,
)

__all__ = [
    "BIG_WORD_PATTERN",
    "Buffer",
    "BufferEvents",
    "CURSOR_POSITION_CHANGED",
    "Clipboard",
    "ClipboardData",
    "CursorPositionError",
    "Document",
    "DocumentCache",
    "EditReadOnlyBuffer",
    "History",
    "InMemoryClipboard",
    "InMemoryHistory",
    "PasteMode",
    "SelectionState",
    "SelectionType",
    "TEXT_CHANGED",
    "TEXT_INSERTED",
    "Transaction",
    "UndoEntry",
    "UndoHistory",
    "ValidationError",
    "ValidationState",
    "Validator",
    "WORD_PATTERN",
    "ensure_cursor_position",
    "get_document_cache",
    "validator_from_callable",
]
