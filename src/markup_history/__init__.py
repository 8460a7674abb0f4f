"""Bounded undo/redo history for document annotations."""

from .annotations import AnnotationKind, AnnotationRecord
from .history import HistoryLog, HistorySettings, Snapshot
from .session import AnnotationSession

__all__ = [
    "AnnotationKind",
    "AnnotationRecord",
    "AnnotationSession",
    "HistoryLog",
    "HistorySettings",
    "Snapshot",
    "adapters",
    "annotations",
    "history",
    "runtime",
    "session",
]

__version__ = "0.1.0"
