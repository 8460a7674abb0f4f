"""Editing session combining the annotation collection with its history."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass, fields, replace
from typing import Any, ContextManager, Iterable, List, Optional

from markup_history.annotations import AnnotationRecord
from markup_history.history import HistoryLog
from markup_history.runtime import telemetry

from .bus import HistoryBus

_IMMUTABLE_FIELDS = frozenset({"id", "created_at"})


class AnnotationNotFoundError(KeyError):
    """Raised when an edit targets an annotation the current state lacks."""

    def __init__(self, annotation_id: str) -> None:
        super().__init__(annotation_id)
        self.annotation_id = annotation_id

    def __str__(self) -> str:
        return f"Annotation '{self.annotation_id}' is not in the current state"


@dataclass(slots=True)
class HistoryChange:
    """Payload emitted on the session bus after the current state moves."""

    label: str
    annotations: List[AnnotationRecord]
    can_undo: bool
    can_redo: bool


class AnnotationSession:
    """One document's annotations plus the history behind them.

    The history log's current snapshot is the only copy of the state; every
    read goes through it, every finalized edit is one commit.
    """

    def __init__(
        self,
        initial: Iterable[AnnotationRecord] = (),
        *,
        name: str = "document",
        history: Optional[HistoryLog] = None,
        capacity: Optional[int] = None,
        bus: Optional[HistoryBus] = None,
    ) -> None:
        seed = list(initial)
        if history is not None and (seed or capacity is not None):
            raise ValueError(
                "Pass either an existing `history` or `initial`/`capacity`, not both."
            )
        self.name = name
        self.history = (
            history if history is not None else HistoryLog(seed, capacity=capacity)
        )
        self.bus = bus or HistoryBus()

    @property
    def annotations(self) -> List[AnnotationRecord]:
        return self.history.current()

    def find(self, annotation_id: str) -> AnnotationRecord:
        for record in self.annotations:
            if record.id == annotation_id:
                return record
        raise AnnotationNotFoundError(annotation_id)

    def edit(self, label: str) -> "Edit":
        return Edit(self, label)

    def add(self, record: AnnotationRecord) -> AnnotationRecord:
        with self.edit("add") as edit:
            edit.records.append(record)
        return record

    def update(self, annotation_id: str, **changes: Any) -> AnnotationRecord:
        locked = _IMMUTABLE_FIELDS.intersection(changes)
        if locked:
            raise ValueError(f"Cannot change {sorted(locked)} of an annotation")
        known = {f.name for f in fields(AnnotationRecord)}
        unknown = set(changes) - known
        if unknown:
            raise ValueError(f"Unknown annotation fields {sorted(unknown)}")
        if not changes:
            return self.find(annotation_id)

        with self.edit("update") as edit:
            index = edit.index_of(annotation_id)
            updated = replace(edit.records[index], **changes)
            edit.records[index] = updated
        return updated

    def remove(self, annotation_id: str) -> AnnotationRecord:
        with self.edit("remove") as edit:
            removed = edit.records.pop(edit.index_of(annotation_id))
        return removed

    def replace_all(self, records: Iterable[AnnotationRecord]) -> None:
        with self.edit("replace_all") as edit:
            edit.records[:] = list(records)

    def undo(self) -> Optional[List[AnnotationRecord]]:
        restored = self.history.undo()
        if restored is not None:
            self._publish("history.undo", "undo", self.history.current())
        return restored

    def redo(self) -> Optional[List[AnnotationRecord]]:
        restored = self.history.redo()
        if restored is not None:
            self._publish("history.redo", "redo", self.history.current())
        return restored

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    def _publish(
        self, event: str, label: str, annotations: List[AnnotationRecord]
    ) -> None:
        self.bus.emit(
            event,
            HistoryChange(
                label=label,
                annotations=annotations,
                can_undo=self.history.can_undo(),
                can_redo=self.history.can_redo(),
            ),
        )


class Edit(AbstractContextManager["Edit"]):
    """Working copy of the current state, committed once on clean exit.

    Wrap a whole gesture (a drag, a resize) in one ``Edit`` so that it lands
    in history as a single step. Raising inside the block, calling
    ``discard``, or leaving the records equal to the current state leaves
    history untouched.
    """

    def __init__(self, session: AnnotationSession, label: str) -> None:
        self.session = session
        self.label = label
        self.records: List[AnnotationRecord] = []
        self._discarded = False
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Edit":
        self._span_cm = telemetry.span(
            name=f"session::{self.label}",
            component=True,
            metadata={"session": self.session.name},
        )
        self._span_cm.__enter__()
        self.records = self.session.history.current()
        return self

    def index_of(self, annotation_id: str) -> int:
        for index, record in enumerate(self.records):
            if record.id == annotation_id:
                return index
        raise AnnotationNotFoundError(annotation_id)

    def discard(self) -> None:
        self._discarded = True

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None and not self._discarded:
            try:
                self._commit()
            except BaseException as err:
                self._close_span(type(err), err, err.__traceback__)
                raise
        self._close_span(exc_type, exc, tb)
        return False

    def _commit(self) -> None:
        history = self.session.history
        # an unchanged state is not an edit and must not drop the redo branch
        if self.records == history.current():
            return
        history.commit(self.records)
        self.session._publish("history.commit", self.label, history.current())

    def _close_span(self, exc_type, exc, tb) -> None:
        span_cm, self._span_cm = self._span_cm, None
        if span_cm is not None:
            span_cm.__exit__(exc_type, exc, tb)
