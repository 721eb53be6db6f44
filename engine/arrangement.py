"""Bulk arrangement rules. Each rule returns a full seat_id -> uuid mapping.

Nothing here mutates the grid: the session applies a mapping atomically
under a single history record.
"""

import logging
import random
import re
from typing import Dict, List, Optional, Sequence

from models.seat import Seat
from models.student import Student
from engine.grid import GridModel
from config.defaults import (
    ARRANGE_BY_ROW, ARRANGE_BY_COLUMN,
    GENDER_MALE, GENDER_FEMALE,
    ROTATE_ROW_LEFT, ROTATE_ROW_RIGHT, ROTATE_COL_FORWARD, ROTATE_COL_BACKWARD,
)

logger = logging.getLogger(__name__)

Mapping = Dict[str, Optional[str]]


def _empty_mapping(grid: GridModel) -> Mapping:
    return {seat.id: None for seat in grid.active_seats()}


def _fill(grid: GridModel, seats: Sequence[Seat], students: Sequence[Student]) -> Mapping:
    mapping = _empty_mapping(grid)
    for seat, student in zip(seats, students):
        mapping[seat.id] = student.uuid
    if len(students) > len(seats):
        logger.warning("%d students left unseated: not enough seats", len(students) - len(seats))
    return mapping


def natural_key(value) -> List:
    """Sort key treating digit runs as numbers, so "S2" < "S10"."""
    parts = re.split(r"(\d+)", str(value or ""))
    return [(0, int(p), "") if p.isdigit() else (1, 0, p.lower()) for p in parts if p]


def seats_front_to_back(grid: GridModel, arrangement_type: str = ARRANGE_BY_ROW) -> List[Seat]:
    """Active seats in fill order starting at display row 1 (the lectern).

    Row order walks each row left to right before moving one row back;
    column order walks each column front to back before moving right.
    """
    seats = grid.active_seats()
    if arrangement_type == ARRANGE_BY_COLUMN:
        return sorted(seats, key=lambda s: (s.col, -s.row))
    return sorted(seats, key=lambda s: (-s.row, s.col))


def random_arrangement(grid: GridModel, rng: Optional[random.Random] = None) -> Mapping:
    rng = rng or random.Random()
    seats = grid.active_seats()
    students = list(grid.students)
    rng.shuffle(students)
    rng.shuffle(seats)
    return _fill(grid, seats, students)


def rule_based_arrangement(
    grid: GridModel,
    order_by_id: bool = False,
    by_height: bool = False,
    arrangement_type: str = ARRANGE_BY_ROW,
    rng: Optional[random.Random] = None,
) -> Mapping:
    """Order students by id and/or height and fill seats from the front.

    Height sorting is stable, so with both rules on, students of equal height
    keep their id order. With no rule selected this falls back to a random
    arrangement.
    """
    if not (order_by_id or by_height):
        return random_arrangement(grid, rng)

    students = list(grid.students)
    if order_by_id:
        students.sort(key=lambda s: natural_key(s.external_id))
    if by_height:
        students.sort(key=lambda s: s.height or 0)
    return _fill(grid, seats_front_to_back(grid, arrangement_type), students)


def same_gender_arrangement(grid: GridModel) -> Mapping:
    """Seat boys, then girls, then everyone else from the front so that
    neighbours share a gender wherever the counts allow."""
    males = [s for s in grid.students if s.gender == GENDER_MALE]
    females = [s for s in grid.students if s.gender == GENDER_FEMALE]
    others = [s for s in grid.students if s.gender not in (GENDER_MALE, GENDER_FEMALE)]
    return _fill(grid, seats_front_to_back(grid), males + females + others)


def _rotate(values: list, direction: int) -> list:
    if not values:
        return values
    if direction > 0:
        return values[-1:] + values[:-1]
    return values[1:] + values[:1]


def rotation_arrangement(grid: GridModel, direction: str) -> Mapping:
    """Shift occupants one seat along every row or column, wrapping around.

    rowLeft/rowRight rotate within each row (rowRight moves everyone one
    column right). colForward moves everyone to the next lower internal row,
    colBackward to the next higher one.
    """
    if direction in (ROTATE_ROW_LEFT, ROTATE_ROW_RIGHT):
        step = 1 if direction == ROTATE_ROW_RIGHT else -1
        group_key, order_key = (lambda s: s.row), (lambda s: s.col)
    elif direction in (ROTATE_COL_FORWARD, ROTATE_COL_BACKWARD):
        step = 1 if direction == ROTATE_COL_BACKWARD else -1
        group_key, order_key = (lambda s: s.col), (lambda s: s.row)
    else:
        raise ValueError(f"Unknown rotation direction: {direction}")

    groups: Dict[int, List[Seat]] = {}
    for seat in grid.active_seats():
        groups.setdefault(group_key(seat), []).append(seat)

    mapping = _empty_mapping(grid)
    for seats in groups.values():
        seats.sort(key=order_key)
        occupants = _rotate([s.occupant for s in seats], step)
        for seat, student in zip(seats, occupants):
            mapping[seat.id] = student.uuid if student else None
    return mapping


def replacement_arrangement(
    grid: GridModel,
    seat_ids: Sequence[str],
    student_uuids: Sequence[str],
) -> Mapping:
    """Current occupancy with the given seats taken over by new students.

    Students being replaced become unseated. A replacement student who
    already sits elsewhere leaves that seat empty.
    """
    mapping = grid.occupancy()
    incoming = set(student_uuids)
    for seat_id, uuid in list(mapping.items()):
        if uuid in incoming:
            mapping[seat_id] = None
    for seat_id, uuid in zip(seat_ids, student_uuids):
        if seat_id in mapping:
            mapping[seat_id] = uuid
    return mapping
