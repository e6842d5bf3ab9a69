"""
Card schema and lane statuses.

Lanes:
  Not Started → In Progress → Done

Status values are 1-based because that is how they are written to the
store; the column index of a status is always ``value - 1``.
"""
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, TYPE_CHECKING

from .errors import IndexOutOfRange

if TYPE_CHECKING:
    from .board import Column


class Status(Enum):
    """The lane a card belongs to."""
    NOT_STARTED = 1
    IN_PROGRESS = 2
    DONE = 3

    @property
    def index(self) -> int:
        return self.value - 1

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def from_index(cls, index: int) -> "Status":
        """Map a column index (0..2) to its status."""
        for status in cls:
            if status.index == index:
                return status
        raise IndexOutOfRange(f"Column index {index} out of range [0, {len(cls) - 1}]")

    @classmethod
    def from_str(cls, value: str) -> "Status":
        """Parse 'in-progress', 'In Progress', 'IN_PROGRESS' or a lane number (1..3)."""
        text = value.strip()
        if text.isdigit():
            return cls.from_index(int(text) - 1)
        key = text.upper().replace("-", "_").replace(" ", "_")
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown status: {value!r}")

    def __str__(self) -> str:
        return self.label


_LABELS = {
    Status.NOT_STARTED: "Not Started",
    Status.IN_PROGRESS: "In Progress",
    Status.DONE: "Done",
}


@dataclass(frozen=True)
class Position:
    """A point in the renderer's coordinate space."""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Position") -> "Position":
        return Position(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Position") -> "Position":
        return Position(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class ColumnGeometry:
    """Horizontal extent of one lane as laid out by the renderer."""
    x: float
    width: float

    @property
    def right(self) -> float:
        return self.x + self.width

    def contains(self, x: float) -> bool:
        return self.x <= x < self.x + self.width


@dataclass(eq=False)
class Card:
    """A sticky note on the board."""

    # Content
    title: str
    subtitle: str
    body: str
    status: Status = Status.NOT_STARTED

    # Transient drag state (never persisted)
    drag_offset: Position = field(default_factory=Position, repr=False)
    is_dragging: bool = field(default=False, repr=False)

    # Owning lane, maintained by Column; not used for lifetime
    column: Optional["Column"] = field(default=None, repr=False)

    def same_content(self, other: "Card") -> bool:
        """Structural equality over the persisted fields."""
        return (
            self.title == other.title
            and self.subtitle == other.subtitle
            and self.body == other.body
            and self.status == other.status
        )

    def to_record(self) -> Dict[str, Any]:
        """Serialize to a persisted record."""
        return {
            "title": self.title,
            "subtitle": self.subtitle,
            "body": self.body,
            "status": self.status.value,
        }

    @classmethod
    def from_record(cls, data: Dict[str, Any]) -> "Card":
        """Deserialize a persisted record. Callers validate the shape first."""
        # Older saves called the body "content"
        body = data["body"] if "body" in data else data["content"]
        return cls(
            title=data["title"],
            subtitle=data["subtitle"],
            body=body,
            status=Status(data["status"]),
        )
