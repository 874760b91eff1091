"""Clipboard payloads and the in-memory kill ring."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional

from .selection import SelectionType


@dataclass(frozen=True, slots=True)
class ClipboardData:
    """Text on the clipboard plus the shape it was cut in.

    The shape tells a later paste whether to insert characters, whole lines,
    or a column block.
    """

    text: str = ""
    type: SelectionType = SelectionType.CHARACTERS


class Clipboard(ABC):
    """Storage for cut and copied data, shared between buffers."""

    @abstractmethod
    def set_data(self, data: ClipboardData) -> None:
        """Put ``data`` on the clipboard."""

    def set_text(self, text: str) -> None:
        self.set_data(ClipboardData(text))

    def rotate(self) -> None:
        """Cycle to the previous entry (Emacs yank-pop)."""

    @abstractmethod
    def get_data(self) -> ClipboardData:
        """Return the current clipboard payload."""


class InMemoryClipboard(Clipboard):
    """Bounded kill ring kept in process memory.

    The newest entry sits at the left end; ``rotate`` moves it to the back so
    the next-older entry becomes current.
    """

    def __init__(
        self, data: Optional[ClipboardData] = None, *, max_size: int = 60
    ) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self._ring: Deque[ClipboardData] = deque()
        if data is not None:
            self.set_data(data)

    def set_data(self, data: ClipboardData) -> None:
        self._ring.appendleft(data)
        while len(self._ring) > self.max_size:
            self._ring.pop()

    def get_data(self) -> ClipboardData:
        if self._ring:
            return self._ring[0]
        return ClipboardData()

    def rotate(self) -> None:
        if self._ring:
            self._ring.append(self._ring.popleft())

    def __len__(self) -> int:
        return len(self._ring)


__all__ = ["Clipboard", "ClipboardData", "InMemoryClipboard"]
