"""Minimal event bus used by buffers to notify observers."""

from __future__ import annotations

from typing import Callable, Dict, List

TEXT_CHANGED = "text_changed"
CURSOR_POSITION_CHANGED = "cursor_position_changed"

Listener = Callable[[object], None]


class BufferEvents:
    """Named events with ordered subscribers.

    Listeners run synchronously in subscription order. A listener raising an
    exception stops the dispatch and propagates to the emitter.
    """

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[Listener]] = {}

    def subscribe(self, event: str, callback: Listener) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: Listener) -> None:
        listeners = self._subscribers.get(event)
        if listeners and callback in listeners:
            listeners.remove(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)

    def listener_count(self, event: str) -> int:
        return len(self._subscribers.get(event, []))


__all__ = ["BufferEvents", "CURSOR_POSITION_CHANGED", "TEXT_CHANGED"]
