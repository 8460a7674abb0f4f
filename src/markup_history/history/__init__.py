"""Snapshot history with bounded undo/redo."""

from .log import HistoryLog, HistoryStats
from .settings import (
    DEFAULT_CAPACITY,
    HistoryConfigError,
    HistorySettings,
    resolve_capacity,
)
from .snapshot import Snapshot

__all__ = [
    "DEFAULT_CAPACITY",
    "HistoryConfigError",
    "HistoryLog",
    "HistorySettings",
    "HistoryStats",
    "Snapshot",
    "resolve_capacity",
]
