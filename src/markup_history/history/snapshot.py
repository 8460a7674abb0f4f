"""Immutable copies of an annotation collection."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Iterable, List, Tuple


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Deep-copied records captured at one point in history.

    The tuple itself cannot change, and since nothing outside the snapshot
    ever holds a reference to the records inside it, neither can they.
    ``capture`` copies on the way in and ``restore`` on the way out.
    """

    records: Tuple[Any, ...] = ()

    @classmethod
    def capture(cls, records: Iterable[Any]) -> "Snapshot":
        return cls(records=tuple(copy.deepcopy(list(records))))

    def restore(self) -> List[Any]:
        return copy.deepcopy(list(self.records))

    def __len__(self) -> int:
        return len(self.records)
