"""Bounded linear undo/redo history over annotation snapshots."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Iterable, List, Optional

from markup_history.runtime.telemetry import record_event, span

from .settings import resolve_capacity
from .snapshot import Snapshot


@dataclass(slots=True)
class HistoryStats:
    """Point-in-time view of a log's shape."""

    length: int
    cursor: int
    capacity: int
    can_undo: bool
    can_redo: bool


class HistoryLog:
    """Ordered snapshots plus a cursor selecting the current one.

    The log is never empty: it is seeded with ``initial`` and the cursor
    always indexes a stored snapshot. Committing drops everything after the
    cursor before appending, so eviction at capacity only removes the oldest
    state and never the discarded redo branch.
    """

    def __init__(
        self,
        initial: Iterable[Any] = (),
        *,
        capacity: Optional[int] = None,
        logger_name: Optional[str] = None,
    ) -> None:
        self._capacity = resolve_capacity(capacity)
        self._entries: Deque[Snapshot] = deque(maxlen=self._capacity)
        self._entries.append(Snapshot.capture(initial))
        self._cursor = 0
        self._logger_name = logger_name

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def capacity(self) -> int:
        return self._capacity

    def commit(self, records: Iterable[Any]) -> None:
        """Record ``records`` as the newest state and make it current."""

        with span(
            "history::commit",
            logger_name=self._logger_name,
            component="history",
            metadata={"cursor": self._cursor, "length": len(self._entries)},
        ) as handle:
            snapshot = Snapshot.capture(records)

            discarded = 0
            while len(self._entries) - 1 > self._cursor:
                self._entries.pop()
                discarded += 1

            # deque(maxlen=...) drops the leftmost entry on overflow
            evicted = len(self._entries) == self._capacity
            self._entries.append(snapshot)
            self._cursor = len(self._entries) - 1

            handle.add_metadata("records", len(snapshot))
            if discarded:
                handle.add_metadata("discarded", discarded)
            if evicted:
                handle.add_metadata("evicted", 1)

    def undo(self) -> Optional[List[Any]]:
        """Step back one state; ``None`` when already at the oldest."""

        if not self.can_undo():
            self._noop("undo")
            return None
        self._cursor -= 1
        return self._entries[self._cursor].restore()

    def redo(self) -> Optional[List[Any]]:
        """Step forward one state; ``None`` when already at the newest."""

        if not self.can_redo():
            self._noop("redo")
            return None
        self._cursor += 1
        return self._entries[self._cursor].restore()

    def can_undo(self) -> bool:
        return self._cursor > 0

    def can_redo(self) -> bool:
        return self._cursor < len(self._entries) - 1

    def current(self) -> List[Any]:
        return self._entries[self._cursor].restore()

    def stats(self) -> HistoryStats:
        return HistoryStats(
            length=len(self._entries),
            cursor=self._cursor,
            capacity=self._capacity,
            can_undo=self.can_undo(),
            can_redo=self.can_redo(),
        )

    def _noop(self, operation: str) -> None:
        record_event(
            f"history.{operation}.noop",
            level="debug",
            data={"cursor": self._cursor, "length": len(self._entries)},
            logger_name=self._logger_name,
        )
