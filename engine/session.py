"""Editing session: one grid, selection and history per editing session.

Every state-changing operation here follows the same order: validate,
record history, mutate, resync, notify. A validation failure raises before
the history record, so a failed operation leaves both grid and history
untouched.
"""

import logging
import random
from typing import Callable, Dict, List, Optional, Sequence

from models.selection import SelectionSet
from models.student import Student
from engine.grid import GridModel, validate_dimensions
from engine.history import HistoryManager
from engine.relocation import plan_block_move, apply_block_move
from engine.arrangement import (
    random_arrangement, rule_based_arrangement, same_gender_arrangement,
    rotation_arrangement, replacement_arrangement,
)
from engine.errors import InvalidTarget, UnknownStudent, SeatOccupied, HistoryUnavailable
from config.defaults import (
    DEFAULT_ROWS, DEFAULT_COLS, MAX_HISTORY_SIZE, ARRANGE_BY_ROW,
    ACTION_SEAT_ARRANGEMENT, ACTION_BLOCK_MOVE, ACTION_BULK_ARRANGEMENT, ACTION_LAYOUT_CHANGE,
)

logger = logging.getLogger(__name__)

Listener = Callable[[str], None]


class EditingSession:
    def __init__(
        self,
        grid: Optional[GridModel] = None,
        history: Optional[HistoryManager] = None,
        selection: Optional[SelectionSet] = None,
    ):
        self.grid = grid or GridModel(DEFAULT_ROWS, DEFAULT_COLS)
        self.history = history or HistoryManager(MAX_HISTORY_SIZE)
        self.selection = selection or SelectionSet()
        self._listeners: List[Listener] = []

    # --- Change notification ---

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a renderer callback; returns an unsubscribe function."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener) if listener in self._listeners else None

    def notify(self, event: str):
        for listener in list(self._listeners):
            listener(event)

    def _finish(self, event: str):
        self.grid.resync()
        self.notify(event)

    # --- Single-seat operations ---

    def assign_student(self, student_uuid: str, seat_id: str) -> bool:
        """Move a student (seated or not) onto a seat, swapping if occupied.

        Returns False without touching history when the student is already
        on that seat.
        """
        seat = self.grid.find_seat(seat_id)
        if seat is None or seat.deleted:
            raise InvalidTarget(f"Seat {seat_id} is missing or deleted")
        student = self.grid.find_student_by_uuid(student_uuid)
        if student is None:
            raise UnknownStudent(f"No student with uuid {student_uuid}")
        if seat.occupant is student:
            return False

        self.history.record(ACTION_SEAT_ARRANGEMENT, self.grid)
        self.grid.assign(student_uuid, seat_id)
        logger.debug("Assigned %s to seat %s", student.name, seat_id)
        self._finish("assign")
        return True

    def move_seat(self, source_seat_id: str, target_seat_id: str) -> bool:
        source = self.grid.find_seat(source_seat_id)
        if source is None or source.occupant is None:
            raise InvalidTarget(f"Seat {source_seat_id} has no student to move")
        return self.assign_student(source.occupant.uuid, target_seat_id)

    def remove_student_from_seat(self, seat_id: str) -> bool:
        seat = self.grid.find_seat(seat_id)
        if seat is None or seat.occupant is None:
            return False
        self.history.record(ACTION_SEAT_ARRANGEMENT, self.grid)
        self.grid.remove(seat_id)
        self._finish("remove")
        return True

    def delete_seat(self, seat_id: str) -> bool:
        seat = self.grid.find_seat(seat_id)
        if seat is None:
            raise InvalidTarget(f"Seat {seat_id} does not exist")
        if seat.occupant is not None:
            raise SeatOccupied(f"Remove {seat.occupant.name} before deleting seat {seat_id}")
        if seat.deleted:
            return False
        self.history.record(ACTION_SEAT_ARRANGEMENT, self.grid)
        self.grid.delete_seat(seat_id)
        self.selection.discard(seat_id)
        self._finish("delete_seat")
        return True

    def restore_seat(self, seat_id: str) -> bool:
        seat = self.grid.find_seat(seat_id)
        if seat is None:
            raise InvalidTarget(f"Seat {seat_id} does not exist")
        if not seat.deleted:
            return False
        self.history.record(ACTION_SEAT_ARRANGEMENT, self.grid)
        self.grid.restore_seat(seat_id)
        self._finish("restore_seat")
        return True

    # --- Block moves ---

    def move_block(self, selected_seat_ids: Sequence[str], anchor_seat_id: str,
                   target_seat_id: str) -> List[Student]:
        """Translate a selected block. Raises RelocationRejected untouched.

        Returns displaced students that could not be backfilled.
        """
        plan = plan_block_move(self.grid, selected_seat_ids, anchor_seat_id, target_seat_id)
        if plan.is_noop:
            return []

        self.history.record(ACTION_BLOCK_MOVE, self.grid)
        detached = apply_block_move(self.grid, plan)
        logger.debug(
            "Moved %d seats by (%d, %d); %d displaced, %d detached",
            len(plan.positions), plan.row_offset, plan.col_offset,
            len(plan.displaced_students), len(detached),
        )
        self.selection.clear()
        self._finish("block_move")
        return detached

    # --- Bulk arrangements ---

    def apply_arrangement(self, mapping: Dict[str, Optional[str]],
                          action: str = ACTION_BULK_ARRANGEMENT):
        """Apply a full seat_id -> uuid mapping under one history record."""
        self.grid.validate_mapping(mapping)
        self.history.record(action, self.grid)
        self.grid.apply_mapping(mapping)
        self._finish("arrangement")

    def arrange_randomly(self, rng: Optional[random.Random] = None):
        self.apply_arrangement(random_arrangement(self.grid, rng))

    def arrange_by_rules(self, order_by_id: bool = False, by_height: bool = False,
                         arrangement_type: str = ARRANGE_BY_ROW,
                         rng: Optional[random.Random] = None):
        self.apply_arrangement(
            rule_based_arrangement(self.grid, order_by_id, by_height, arrangement_type, rng)
        )

    def arrange_by_gender(self):
        self.apply_arrangement(same_gender_arrangement(self.grid))

    def rotate(self, direction: str):
        self.apply_arrangement(rotation_arrangement(self.grid, direction))

    def replace_selected(self, student_uuids: Sequence[str]):
        """Seat unseated students on the selected seats, in row-major order."""
        active_ids = {s.id for s in self.grid.active_seats()}
        seat_ids = [sid for sid in self.selection.ordered(self.grid) if sid in active_ids]
        if len(student_uuids) > len(seat_ids):
            raise InvalidTarget(
                f"{len(student_uuids)} students for {len(seat_ids)} selected seats"
            )
        unseated = {s.uuid for s in self.grid.unseated_students()}
        for uuid in student_uuids:
            if uuid not in unseated:
                raise UnknownStudent(f"Student {uuid} is not an unseated roster member")

        self.apply_arrangement(replacement_arrangement(self.grid, seat_ids, student_uuids))
        self.selection.clear()

    def clear_selected_seats(self) -> int:
        if not self.selection:
            return 0
        self.history.record(ACTION_SEAT_ARRANGEMENT, self.grid)
        cleared = self.grid.clear_seats(list(self.selection))
        self.selection.clear()
        self._finish("clear_seats")
        return cleared

    def reset_all_seats(self):
        """Empty every seat and bring back deleted ones."""
        self.history.record(ACTION_SEAT_ARRANGEMENT, self.grid)
        self.grid.reset_seats()
        self.selection.clear()
        self._finish("reset")

    def resize_layout(self, rows: int, cols: int):
        validate_dimensions(rows, cols)
        self.history.record(ACTION_LAYOUT_CHANGE, self.grid)
        self.grid.initialize_seats(rows, cols)
        self.selection.clear()
        self._finish("layout")

    # --- Roster ---

    def add_student(self, student: Student) -> Student:
        self.grid.add_student(student)
        self.notify("roster")
        return student

    def delete_student(self, student_uuid: str) -> Student:
        student = self.grid.remove_student(student_uuid)
        self._finish("roster")
        return student

    def clear_all_students(self):
        self.history.record(ACTION_SEAT_ARRANGEMENT, self.grid)
        self.grid.clear_roster()
        self.selection.clear()
        self._finish("roster")

    # --- Selection ---

    def select_all(self):
        self.selection.select_all(self.grid.active_seats())
        self.notify("selection")

    def clear_selection(self):
        self.selection.clear()
        self.notify("selection")

    # --- History ---

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    def undo(self):
        entry = self.history.undo()
        if entry is None:
            raise HistoryUnavailable("Nothing to undo")
        entry.redo_snapshot = self.grid.snapshot()
        self._restore(entry.snapshot)
        logger.debug("Undo %s", entry.action)
        return entry

    def redo(self):
        entry = self.history.redo()
        if entry is None:
            raise HistoryUnavailable("Nothing to redo")
        if entry.redo_snapshot is None:
            self.history.index -= 1
            raise HistoryUnavailable(f"No forward state stored for {entry.action}")
        self._restore(entry.redo_snapshot)
        logger.debug("Redo %s", entry.action)
        return entry

    def _restore(self, snapshot):
        if (snapshot.rows, snapshot.cols) != (self.grid.rows, self.grid.cols):
            self.selection.clear()
        self.grid.restore(snapshot)
        self.notify("history")

    # --- Queries ---

    def stats(self) -> dict:
        total = len(self.grid.students)
        seated = self.grid.seated_count()
        return {
            "total_students": total,
            "seated_students": seated,
            "unseated_students": total - seated,
            "active_seats": len(self.grid.active_seats()),
            "available_seats": len(self.grid.available_seats()),
        }
