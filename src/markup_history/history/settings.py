"""Capacity configuration for history logs."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from markup_history.runtime.telemetry import ENV_PREFIX

DEFAULT_CAPACITY = 50
CAPACITY_ENV = f"{ENV_PREFIX}CAPACITY"


class HistoryConfigError(ValueError):
    """Raised when a history capacity is not a positive integer."""

    def __init__(self, message: str, *, value: object = None) -> None:
        super().__init__(message)
        self.value = value


@dataclass(frozen=True, slots=True)
class HistorySettings:
    capacity: int = DEFAULT_CAPACITY

    def __post_init__(self) -> None:
        if isinstance(self.capacity, bool) or not isinstance(self.capacity, int):
            raise HistoryConfigError(
                "capacity must be an integer", value=self.capacity
            )
        if self.capacity < 1:
            raise HistoryConfigError(
                "capacity must hold at least one snapshot", value=self.capacity
            )

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "HistorySettings":
        """Read ``MARKUP_HISTORY_CAPACITY``; unset or blank means the default."""

        if environ is None:
            environ = os.environ
        raw = (environ.get(CAPACITY_ENV) or "").strip()
        if not raw:
            return cls()
        try:
            capacity = int(raw)
        except ValueError as exc:
            raise HistoryConfigError(
                f"{CAPACITY_ENV} must be an integer", value=raw
            ) from exc
        return cls(capacity=capacity)


def resolve_capacity(capacity: Optional[int] = None) -> int:
    """Explicit argument, then environment, then ``DEFAULT_CAPACITY``."""

    if capacity is not None:
        return HistorySettings(capacity=capacity).capacity
    return HistorySettings.from_env().capacity
