from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class PointerPhase(Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"
    CANCEL = "cancel"


class GestureState(Enum):
    IDLE = "idle"
    PRESSED = "pressed"
    DRAGGING = "dragging"
    SELECTING = "selecting"


class GestureOutcome(Enum):
    NONE = "none"              # event consumed, gesture still in flight
    TOGGLED = "toggled"        # modifier-click changed the selection
    TAPPED = "tapped"          # press released below the drag threshold
    COMMITTED = "committed"    # drop applied to the grid
    CANCELLED = "cancelled"    # gesture abandoned, grid untouched
    REJECTED = "rejected"      # drop target invalid, grid untouched
    SELECTED = "selected"      # marquee merged into the selection
    IGNORED = "ignored"        # event did not apply to the current state


@dataclass
class PointerEvent:
    phase: PointerPhase
    x: float = 0.0
    y: float = 0.0
    timestamp: float = 0.0
    modifier: bool = False     # ctrl/cmd held


@dataclass
class Rect:
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @classmethod
    def from_points(cls, x1: float, y1: float, x2: float, y2: float) -> "Rect":
        return cls(min(x1, x2), min(y1, y2), abs(x2 - x1), abs(y2 - y1))


@dataclass
class DragPayload:
    kind: str                              # "single" or "block"
    anchor_seat_id: str                    # seat under the pointer at press time
    source_seat_ids: List[str] = field(default_factory=list)
    student_uuid: Optional[str] = None     # occupant of the anchor seat

    @property
    def is_block(self) -> bool:
        return self.kind == "block"
