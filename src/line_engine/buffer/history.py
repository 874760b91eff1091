"""Interface to the persisted input history and an in-memory implementation."""

from __future__ import annotations

from typing import Iterable, List, Optional, Protocol, Sequence


class History(Protocol):
    """Store of previously accepted inputs, oldest first."""

    def get_strings(self) -> Sequence[str]:
        """Return every stored entry, oldest first."""
        ...

    def append_string(self, string: str) -> None:
        """Persist a newly accepted entry."""
        ...


class InMemoryHistory:
    """History kept in a plain list; nothing survives the process."""

    def __init__(self, history_strings: Optional[Iterable[str]] = None) -> None:
        self._strings: List[str] = list(history_strings or [])

    def get_strings(self) -> Sequence[str]:
        return list(self._strings)

    def append_string(self, string: str) -> None:
        self._strings.append(string)

    def __len__(self) -> int:
        return len(self._strings)


__all__ = ["History", "InMemoryHistory"]
