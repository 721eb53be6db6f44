from dataclasses import dataclass
from typing import Optional, Tuple

from models.student import Student


def make_seat_id(row: int, col: int) -> str:
    """Seat identifier built from internal (0-based) coordinates."""
    return f"{row}-{col}"


def parse_seat_id(seat_id: str) -> Tuple[int, int]:
    row, col = seat_id.split("-")
    return int(row), int(col)


@dataclass
class Seat:
    row: int                              # 0-based; display row = rows - row
    col: int                              # 0-based, col 0 = leftmost
    occupant: Optional[Student] = None
    deleted: bool = False

    @property
    def id(self) -> str:
        return make_seat_id(self.row, self.col)

    @property
    def is_occupied(self) -> bool:
        return not self.deleted and self.occupant is not None

    @property
    def is_available(self) -> bool:
        return not self.deleted and self.occupant is None

    def position_key(self) -> Tuple[int, int]:
        """Row-major sort key."""
        return self.row, self.col

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "row": self.row,
            "col": self.col,
            "occupant": self.occupant.to_record() if self.occupant else None,
            "deleted": self.deleted,
        }

    @classmethod
    def from_record(cls, record: dict) -> "Seat":
        occupant = record.get("occupant")
        return cls(
            row=int(record["row"]),
            col=int(record["col"]),
            occupant=Student.from_record(occupant) if occupant else None,
            deleted=bool(record.get("deleted", False)),
        )
