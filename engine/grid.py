"""Grid model: seats, roster, and the seat -> student assignment invariants."""

import logging
from typing import Dict, Iterable, List, Optional

from models.seat import Seat, make_seat_id
from models.student import Student
from models.history import GridSnapshot
from engine.coords import in_bounds
from engine.errors import InvalidTarget, UnknownStudent, SeatOccupied, LayoutError
from config.defaults import (
    DEFAULT_ROWS, DEFAULT_COLS, MIN_ROWS, MAX_ROWS, MIN_COLS, MAX_COLS,
)

logger = logging.getLogger(__name__)


def validate_dimensions(rows: int, cols: int):
    if not (MIN_ROWS <= rows <= MAX_ROWS and MIN_COLS <= cols <= MAX_COLS):
        raise LayoutError(
            f"Grid must be {MIN_ROWS}-{MAX_ROWS} rows by {MIN_COLS}-{MAX_COLS} cols, "
            f"got {rows}x{cols}"
        )


class GridModel:
    """Owns the dense seat collection and the student roster.

    Seat occupants always reference canonical roster instances. After any
    change in occupancy call resync() so Student.seat_id matches the seats.
    """

    def __init__(self, rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS,
                 students: Optional[Iterable[Student]] = None):
        validate_dimensions(rows, cols)
        self.rows = rows
        self.cols = cols
        self.students: List[Student] = list(students or [])
        self.seats: List[Seat] = []
        self._seat_index: Dict[str, Seat] = {}
        self.initialize_seats(rows, cols)

    # --- Lookup ---

    def find_seat(self, seat_id: str) -> Optional[Seat]:
        return self._seat_index.get(seat_id)

    def find_seat_at(self, row: int, col: int) -> Optional[Seat]:
        if not in_bounds(row, col, self.rows, self.cols):
            return None
        return self._seat_index.get(make_seat_id(row, col))

    def find_student_by_uuid(self, uuid: str) -> Optional[Student]:
        return next((s for s in self.students if s.uuid == uuid), None)

    def resolve_student(self, external_id=None, name: Optional[str] = None) -> Optional[Student]:
        """Two-phase lookup: external id first, then exact name.

        External ids are compared as stripped strings so that 12 and "12"
        (spreadsheet numbers vs. text) match. The name fallback only runs
        when the id phase finds nothing.
        """
        if external_id is not None and str(external_id).strip():
            key = str(external_id).strip()
            student = next((s for s in self.students if str(s.external_id).strip() == key), None)
            if student:
                return student
        if name:
            return next((s for s in self.students if s.name == name), None)
        return None

    def seat_of(self, student_uuid: str) -> Optional[Seat]:
        return next(
            (s for s in self.seats if s.occupant is not None and s.occupant.uuid == student_uuid),
            None,
        )

    def active_seats(self) -> List[Seat]:
        return [s for s in self.seats if not s.deleted]

    def available_seats(self) -> List[Seat]:
        return [s for s in self.seats if s.is_available]

    def seated_count(self) -> int:
        return sum(1 for s in self.seats if s.is_occupied)

    def unseated_students(self) -> List[Student]:
        seated = {s.occupant.uuid for s in self.seats if s.is_occupied}
        return [s for s in self.students if s.uuid not in seated]

    def occupancy(self) -> Dict[str, Optional[str]]:
        """seat_id -> occupant uuid for every active seat."""
        return {
            s.id: s.occupant.uuid if s.occupant else None
            for s in self.active_seats()
        }

    # --- Seat mutations ---

    def _require_target(self, seat_id: str) -> Seat:
        seat = self.find_seat(seat_id)
        if seat is None:
            raise InvalidTarget(f"Seat {seat_id} does not exist")
        if seat.deleted:
            raise InvalidTarget(f"Seat {seat_id} is deleted")
        return seat

    def assign(self, student_uuid: str, target_seat_id: str) -> bool:
        """Put a student on a seat, swapping with whoever sat there.

        Returns False when the student already occupies the target.
        Callers must resync() afterwards.
        """
        target = self._require_target(target_seat_id)
        student = self.find_student_by_uuid(student_uuid)
        if student is None:
            raise UnknownStudent(f"No student with uuid {student_uuid}")

        current = self.seat_of(student_uuid)
        if current is target:
            return False

        displaced = target.occupant
        target.occupant = student
        if current is not None:
            current.occupant = displaced
        return True

    def remove(self, seat_id: str) -> bool:
        seat = self.find_seat(seat_id)
        if seat is None or seat.occupant is None:
            return False
        seat.occupant = None
        return True

    def delete_seat(self, seat_id: str) -> bool:
        """Mark a seat deleted. Returns False if it already was."""
        seat = self.find_seat(seat_id)
        if seat is None:
            raise InvalidTarget(f"Seat {seat_id} does not exist")
        if seat.occupant is not None:
            raise SeatOccupied(f"Seat {seat_id} is occupied by {seat.occupant.name}")
        if seat.deleted:
            return False
        seat.deleted = True
        return True

    def restore_seat(self, seat_id: str) -> bool:
        seat = self.find_seat(seat_id)
        if seat is None:
            raise InvalidTarget(f"Seat {seat_id} does not exist")
        if not seat.deleted:
            return False
        seat.deleted = False
        return True

    def clear_seats(self, seat_ids: Iterable[str]) -> int:
        """Empty the given non-deleted seats. Returns how many were occupied."""
        cleared = 0
        for seat_id in seat_ids:
            seat = self.find_seat(seat_id)
            if seat and not seat.deleted and seat.occupant is not None:
                seat.occupant = None
                cleared += 1
        return cleared

    def reset_seats(self):
        """Empty every seat and undelete all of them."""
        for seat in self.seats:
            seat.occupant = None
            seat.deleted = False

    def apply_mapping(self, mapping: Dict[str, Optional[str]]):
        """Replace the occupancy of every active seat with the given mapping.

        The mapping is validated in full before anything is written, so a
        bad entry leaves the grid untouched. Active seats missing from the
        mapping end up empty.
        """
        resolved = self.validate_mapping(mapping)
        for seat in self.active_seats():
            seat.occupant = resolved.get(seat.id)

    def validate_mapping(self, mapping: Dict[str, Optional[str]]) -> Dict[str, Optional[Student]]:
        """Resolve a seat_id -> uuid mapping to roster students or raise."""
        resolved: Dict[str, Optional[Student]] = {}
        seen = set()
        for seat_id, student_uuid in mapping.items():
            if student_uuid is None:
                if self.find_seat(seat_id) is None:
                    raise InvalidTarget(f"Seat {seat_id} does not exist")
                resolved[seat_id] = None
                continue
            self._require_target(seat_id)
            student = self.find_student_by_uuid(student_uuid)
            if student is None:
                raise UnknownStudent(f"No student with uuid {student_uuid}")
            if student_uuid in seen:
                raise InvalidTarget(f"Student {student.name} mapped to more than one seat")
            seen.add(student_uuid)
            resolved[seat_id] = student
        return resolved

    def initialize_seats(self, rows: int, cols: int):
        """(Re)build the dense seat collection for the given dimensions.

        Seats whose id survives the resize keep their occupant and deleted
        flag; everything else starts empty.
        """
        validate_dimensions(rows, cols)
        existing = {s.id: s for s in self.seats}
        seats = []
        for row in range(rows):
            for col in range(cols):
                old = existing.get(make_seat_id(row, col))
                seats.append(Seat(
                    row=row,
                    col=col,
                    occupant=old.occupant if old else None,
                    deleted=old.deleted if old else False,
                ))
        self.rows = rows
        self.cols = cols
        self._set_seats(seats)

    def _set_seats(self, seats: List[Seat]):
        self.seats = seats
        self._seat_index = {s.id: s for s in seats}

    # --- Roster ---

    def add_student(self, student: Student) -> Student:
        if self.find_student_by_uuid(student.uuid) is not None:
            raise ValueError(f"Student uuid {student.uuid} already on the roster")
        student.seat_id = None
        self.students.append(student)
        return student

    def remove_student(self, student_uuid: str) -> Student:
        student = self.find_student_by_uuid(student_uuid)
        if student is None:
            raise UnknownStudent(f"No student with uuid {student_uuid}")
        seat = self.seat_of(student_uuid)
        if seat is not None:
            seat.occupant = None
        self.students = [s for s in self.students if s.uuid != student_uuid]
        student.seat_id = None
        return student

    def clear_roster(self):
        for seat in self.seats:
            seat.occupant = None
        for student in self.students:
            student.seat_id = None
        self.students = []

    # --- Consistency ---

    def resync(self):
        for student in self.students:
            student.seat_id = None
        for seat in self.seats:
            if seat.occupant is not None:
                seat.occupant.seat_id = seat.id

    def relink(self):
        """Point every occupant at the roster instance sharing its uuid.

        Used after loading seats whose occupants are copies. An occupant with
        no roster counterpart is dropped from its seat, and so is any repeat
        of a student already linked to an earlier seat (row-major).
        """
        by_uuid = {s.uuid: s for s in self.students}
        linked = set()
        for seat in self.seats:
            if seat.occupant is None:
                continue
            canonical = by_uuid.get(seat.occupant.uuid)
            if canonical is None:
                logger.warning(
                    "Student %s on seat %s is not on the roster; assignment dropped",
                    seat.occupant.name, seat.id,
                )
                seat.occupant = None
            elif canonical.uuid in linked:
                logger.warning(
                    "Student %s already seated; duplicate assignment on seat %s dropped",
                    canonical.name, seat.id,
                )
                seat.occupant = None
            else:
                seat.occupant = canonical
                linked.add(canonical.uuid)

    def check_injective(self) -> bool:
        uuids = [s.occupant.uuid for s in self.seats if s.is_occupied]
        return len(uuids) == len(set(uuids))

    # --- Snapshots ---

    def snapshot(self) -> GridSnapshot:
        return GridSnapshot.capture(self.rows, self.cols, self.seats)

    def restore(self, snapshot: GridSnapshot):
        self.rows = snapshot.rows
        self.cols = snapshot.cols
        self._set_seats(snapshot.copy_seats())
        self.relink()
        self.resync()
