"""Event bus connecting a session to whatever renders it."""

from __future__ import annotations

from typing import Callable, Dict, List

HISTORY_EVENTS = ("history.commit", "history.undo", "history.redo")


class HistoryBus:
    """Minimal publish/subscribe channel for history events."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: Callable[[object], None]) -> None:
        callbacks = self._subscribers.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)
