import copy
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from models.seat import Seat


@dataclass
class GridSnapshot:
    """Value copy of the grid: dimensions plus every seat, occupants copied by value.

    Occupants inside a snapshot are detached copies; a grid restored from a
    snapshot must be relinked to its canonical roster.
    """
    rows: int
    cols: int
    seats: List[Seat] = field(default_factory=list)

    @classmethod
    def capture(cls, rows: int, cols: int, seats: List[Seat]) -> "GridSnapshot":
        return cls(rows=rows, cols=cols, seats=copy.deepcopy(list(seats)))

    def copy_seats(self) -> List[Seat]:
        return copy.deepcopy(self.seats)

    def to_record(self) -> dict:
        return {
            "rows": self.rows,
            "cols": self.cols,
            "seats": [s.to_record() for s in self.seats],
        }

    @classmethod
    def from_record(cls, record: dict) -> "GridSnapshot":
        return cls(
            rows=int(record["rows"]),
            cols=int(record["cols"]),
            seats=[Seat.from_record(s) for s in record.get("seats", [])],
        )


@dataclass
class HistoryEntry:
    action: str                  # e.g. "seatArrangement", "blockMove", "layoutChange"
    snapshot: GridSnapshot       # state before the action ran
    timestamp: datetime = field(default_factory=datetime.now)
    redo_snapshot: Optional[GridSnapshot] = None  # state after the action, set on undo

    def to_record(self) -> dict:
        return {
            "action": self.action,
            "snapshot": self.snapshot.to_record(),
            "timestamp": self.timestamp.isoformat(),
            "redo_snapshot": self.redo_snapshot.to_record() if self.redo_snapshot else None,
        }

    @classmethod
    def from_record(cls, record: dict) -> "HistoryEntry":
        redo = record.get("redo_snapshot")
        return cls(
            action=record["action"],
            snapshot=GridSnapshot.from_record(record["snapshot"]),
            timestamp=datetime.fromisoformat(record["timestamp"]),
            redo_snapshot=GridSnapshot.from_record(redo) if redo else None,
        )
