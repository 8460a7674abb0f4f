"""Annotation records placed on a document page."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class AnnotationKind(str, Enum):
    TEXT = "text"
    HIGHLIGHT = "highlight"
    SIGNATURE = "signature"


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


# (attribute, plain-data key) for the optional fields
_OPTIONAL_FIELDS = (
    ("width", "width"),
    ("height", "height"),
    ("content", "content"),
    ("color", "color"),
    ("page", "page"),
)


@dataclass(slots=True)
class AnnotationRecord:
    """Single piece of markup.

    Records are deliberately mutable: editors drag and resize them in place.
    Anything that keeps a record beyond the current call has to take its own
    copy.
    """

    id: str
    kind: AnnotationKind
    x: float
    y: float
    width: Optional[float] = None
    height: Optional[float] = None
    content: Optional[str] = None
    color: Optional[str] = None
    page: Optional[int] = None
    created_at: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("annotation id cannot be empty")
        if not isinstance(self.kind, AnnotationKind):
            try:
                self.kind = AnnotationKind(self.kind)
            except ValueError as exc:
                raise ValueError(f"Unknown annotation kind '{self.kind}'") from exc
        if not self.created_at:
            self.created_at = _utc_timestamp()

    @classmethod
    def create(
        cls, kind: AnnotationKind | str, x: float, y: float, **fields: Any
    ) -> "AnnotationRecord":
        """Mint a record with a fresh id and creation timestamp."""

        return cls(id=uuid.uuid4().hex, kind=kind, x=x, y=y, **fields)

    def move_to(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    def resize(self, width: float, height: float) -> None:
        if width < 0 or height < 0:
            raise ValueError("width and height must be non-negative")
        self.width = width
        self.height = height

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "type": self.kind.value,
            "x": self.x,
            "y": self.y,
        }
        for attr, key in _OPTIONAL_FIELDS:
            value = getattr(self, attr)
            if value is not None:
                data[key] = value
        data["createdAt"] = self.created_at
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AnnotationRecord":
        optional = {attr: data.get(key) for attr, key in _OPTIONAL_FIELDS}
        return cls(
            id=data["id"],
            kind=data["type"],
            x=data["x"],
            y=data["y"],
            created_at=data.get("createdAt", ""),
            **optional,
        )
