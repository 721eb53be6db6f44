"""Relocation engine: single-seat swaps and rigid block moves with backfill.

A block move translates every selected seat's occupant by the offset between
the anchor seat (the one under the pointer when the drag started) and the
drop target. Students sitting on target seats outside the block are
displaced and backfilled into the seats the block leaves behind, pairing
both lists in row-major order.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from models.seat import Seat
from models.student import Student
from engine.grid import GridModel
from engine.coords import in_bounds
from engine.errors import InvalidTarget, RelocationRejected

logger = logging.getLogger(__name__)


@dataclass
class SingleMovePlan:
    source_seat_id: str
    target_seat_id: str
    target_occupant: Optional[Student]   # who ends up on the target (the mover)
    displaced: Optional[Student]         # who was on the target, sent back to the source

    @property
    def is_swap(self) -> bool:
        return self.displaced is not None


@dataclass
class BlockPosition:
    original_seat_id: str
    target_seat_id: str
    occupant: Optional[Student]


@dataclass
class BlockMovePlan:
    anchor_seat_id: str
    target_seat_id: str
    row_offset: int
    col_offset: int
    positions: List[BlockPosition] = field(default_factory=list)
    displaced_students: List[Student] = field(default_factory=list)

    @property
    def source_seat_ids(self) -> List[str]:
        return [p.original_seat_id for p in self.positions]

    @property
    def target_seat_ids(self) -> List[str]:
        return [p.target_seat_id for p in self.positions]

    @property
    def is_noop(self) -> bool:
        return self.row_offset == 0 and self.col_offset == 0


def _row_major(seats: Iterable[Seat]) -> List[Seat]:
    return sorted(seats, key=lambda s: s.position_key())


def plan_single_move(grid: GridModel, source_seat_id: str, target_seat_id: str) -> SingleMovePlan:
    """Preview moving one seat's occupant onto another seat (a two-seat swap)."""
    source = grid.find_seat(source_seat_id)
    if source is None or source.deleted:
        raise InvalidTarget(f"Source seat {source_seat_id} is missing or deleted")
    target = grid.find_seat(target_seat_id)
    if target is None or target.deleted:
        raise InvalidTarget(f"Target seat {target_seat_id} is missing or deleted")

    if source is target:
        return SingleMovePlan(source.id, target.id, source.occupant, None)
    return SingleMovePlan(source.id, target.id, source.occupant, target.occupant)


def plan_block_move(
    grid: GridModel,
    selected_seat_ids: Iterable[str],
    anchor_seat_id: str,
    target_seat_id: str,
) -> BlockMovePlan:
    """Translate the selection so the anchor lands on the target.

    Raises RelocationRejected unless every translated seat is inside the grid
    and not deleted; the block never moves partially. Missing or deleted
    source seats hold nobody and are left out of the plan.
    """
    selected = set(selected_seat_ids)
    target = grid.find_seat(target_seat_id)
    if target is None or target.deleted:
        raise RelocationRejected(f"Target seat {target_seat_id} is missing or deleted")
    anchor = grid.find_seat(anchor_seat_id)
    if anchor is None or anchor_seat_id not in selected:
        raise RelocationRejected(f"Anchor seat {anchor_seat_id} is not part of the selection")

    row_offset = target.row - anchor.row
    col_offset = target.col - anchor.col

    sources = _row_major(
        s for s in (grid.find_seat(sid) for sid in selected)
        if s is not None and not s.deleted
    )

    plan = BlockMovePlan(
        anchor_seat_id=anchor.id,
        target_seat_id=target.id,
        row_offset=row_offset,
        col_offset=col_offset,
    )
    for source in sources:
        new_row = source.row + row_offset
        new_col = source.col + col_offset
        if not in_bounds(new_row, new_col, grid.rows, grid.cols):
            raise RelocationRejected(
                f"Seat {source.id} would move outside the grid to ({new_row}, {new_col})"
            )
        landing = grid.find_seat_at(new_row, new_col)
        if landing is None or landing.deleted:
            raise RelocationRejected(f"Seat {source.id} would land on deleted seat {new_row}-{new_col}")

        plan.positions.append(BlockPosition(source.id, landing.id, source.occupant))
        if landing.occupant is not None and landing.id not in selected:
            plan.displaced_students.append(landing.occupant)

    return plan


def apply_block_move(grid: GridModel, plan: BlockMovePlan) -> List[Student]:
    """Carry out a block move on the grid.

    Occupants are read from the grid at apply time. Returns the displaced
    students left without a seat (only possible when net-vacated seats were
    deleted after planning). Callers must resync() afterwards.
    """
    source_ids = set(plan.source_seat_ids)
    target_ids = set(plan.target_seat_ids)

    targets = [grid.find_seat(sid) for sid in plan.target_seat_ids]
    if any(t is None or t.deleted for t in targets):
        raise RelocationRejected("A target seat was deleted after the move was planned")

    net_vacated = _row_major(
        s for s in (grid.find_seat(sid) for sid in source_ids - target_ids)
        if s is not None and not s.deleted
    )
    displaced = _row_major(t for t in targets if t.id not in source_ids and t.occupant is not None)
    displaced_students = [t.occupant for t in displaced]

    moving = []
    for position in plan.positions:
        source = grid.find_seat(position.original_seat_id)
        moving.append((position.target_seat_id, source.occupant if source else None))

    for position in plan.positions:
        source = grid.find_seat(position.original_seat_id)
        if source is not None:
            source.occupant = None

    for target_seat_id, student in moving:
        grid.find_seat(target_seat_id).occupant = student

    detached = []
    for i, student in enumerate(displaced_students):
        if i < len(net_vacated):
            net_vacated[i].occupant = student
            logger.debug("Backfilled %s into seat %s", student.name, net_vacated[i].id)
        else:
            student.seat_id = None
            detached.append(student)
            logger.warning("No vacated seat left for %s; student is now unseated", student.name)

    return detached
