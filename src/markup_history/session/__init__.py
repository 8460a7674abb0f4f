"""Per-document editing sessions backed by a history log."""

from .bus import HISTORY_EVENTS, HistoryBus
from .session import AnnotationNotFoundError, AnnotationSession, Edit, HistoryChange

__all__ = [
    "HISTORY_EVENTS",
    "AnnotationNotFoundError",
    "AnnotationSession",
    "Edit",
    "HistoryBus",
    "HistoryChange",
]
