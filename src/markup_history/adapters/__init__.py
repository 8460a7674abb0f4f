"""Host adapters for annotation editing sessions."""

from .controller import HistoryController, HistoryUIHooks

__all__ = ["HistoryController", "HistoryUIHooks"]
