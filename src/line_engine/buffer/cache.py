"""Flyweight cache of per-text derived data shared between documents."""

from __future__ import annotations

import weakref
from typing import MutableMapping, Optional, Tuple


class DocumentCache:
    """Lazily computed line split and line-start offsets for one text object.

    A document that only moves the cursor reuses the text object of its
    predecessor, so it also reuses this cache instead of splitting again.
    """

    __slots__ = ("text", "_lines", "_line_start_offsets", "__weakref__")

    def __init__(self, text: str) -> None:
        if text is None:
            raise TypeError("DocumentCache requires a text string")
        self.text = text
        self._lines: Optional[Tuple[str, ...]] = None
        self._line_start_offsets: Optional[Tuple[int, ...]] = None

    def get_lines(self) -> Tuple[str, ...]:
        lines = self._lines
        if lines is None:
            lines = tuple(self.text.split("\n"))
            self._lines = lines
        return lines

    def get_line_start_offsets(self) -> Tuple[int, ...]:
        offsets = self._line_start_offsets
        if offsets is None:
            pos = 0
            values = [0]
            for line in self.get_lines()[:-1]:
                pos += len(line) + 1  # newline
                values.append(pos)
            offsets = tuple(values)
            self._line_start_offsets = offsets
        return offsets

    @property
    def is_computed(self) -> bool:
        return self._lines is not None

    def __repr__(self) -> str:
        state = "computed" if self.is_computed else "pending"
        return f"DocumentCache(len={len(self.text)}, {state})"


# Keyed by ``id(text)``. Each cache keeps its text alive, so an id cannot be
# reused by another string while its entry exists; entries vanish with the
# last document holding the cache.
_CACHES: MutableMapping[int, DocumentCache] = weakref.WeakValueDictionary()


def get_document_cache(text: str) -> DocumentCache:
    """Return the cache shared by every document built from ``text``."""

    key = id(text)
    cache = _CACHES.get(key)
    if cache is None or cache.text is not text:
        cache = DocumentCache(text)
        _CACHES[key] = cache
    return cache


def cached_text_count() -> int:
    return len(_CACHES)


__all__ = ["DocumentCache", "cached_text_count", "get_document_cache"]
