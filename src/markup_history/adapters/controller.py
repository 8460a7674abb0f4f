"""UI-facing controller wiring session history into host callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List

from markup_history.annotations import AnnotationRecord
from markup_history.session import HISTORY_EVENTS, AnnotationSession, HistoryChange


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class HistoryUIHooks:
    """Callbacks the controller invokes to update the host view."""

    render: Callable[[List[AnnotationRecord]], None]
    update_controls: Callable[[bool, bool], None] = _noop
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class HistoryController:
    """Turns undo/redo buttons and finished gestures into session calls.

    The host re-renders from whatever the controller hands to ``render`` and
    enables its undo/redo buttons from ``update_controls``; it never reads
    the history directly.
    """

    def __init__(self, session: AnnotationSession, hooks: HistoryUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        for event in HISTORY_EVENTS:
            session.bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )
        self._refresh(self.session.annotations)

    def handle_undo(self) -> bool:
        self._log_state("undo ->")
        if self.session.undo() is None:
            self.hooks.update_status("Nothing to undo")
            return False
        return True

    def handle_redo(self) -> bool:
        self._log_state("redo ->")
        if self.session.redo() is None:
            self.hooks.update_status("Nothing to redo")
            return False
        return True

    def handle_annotation_add(self, annotation: AnnotationRecord) -> AnnotationRecord:
        self._log_state("add ->", annotation=annotation.id)
        return self.session.add(annotation)

    def handle_annotation_update(
        self, annotation_id: str, **changes: Any
    ) -> AnnotationRecord:
        self._log_state("update ->", annotation=annotation_id, changed=sorted(changes))
        return self.session.update(annotation_id, **changes)

    def handle_annotation_delete(self, annotation_id: str) -> AnnotationRecord:
        self._log_state("delete ->", annotation=annotation_id)
        return self.session.remove(annotation_id)

    def finish_gesture(self, records: Iterable[AnnotationRecord]) -> None:
        """Commit the state the host ended up with after a gesture."""

        self._log_state("gesture ->")
        self.session.replace_all(records)

    def _handle_event(self, name: str, payload: object | None) -> None:
        if not isinstance(payload, HistoryChange):
            return
        self._log_state("event ->", event=name, label=payload.label)
        self.hooks.update_status(payload.label)
        self._refresh(payload.annotations)

    def _refresh(self, annotations: List[AnnotationRecord]) -> None:
        self.hooks.render(annotations)
        self.hooks.update_controls(self.session.can_undo(), self.session.can_redo())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update(fields)
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        stats = self.session.history.stats()
        return {
            "session": self.session.name,
            "cursor": stats.cursor,
            "length": stats.length,
            "capacity": stats.capacity,
        }


__all__ = ["HistoryController", "HistoryUIHooks"]
