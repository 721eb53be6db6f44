"""Gesture controller: turns a pointer event stream into selections and moves.

States: IDLE -> PRESSED -> (DRAGGING | SELECTING) -> IDLE. Only DRAGGING ever
mutates the grid, and only on release over a valid target, through the
session so the move gets exactly one history record.

A press that arrives while another gesture is still in flight force-cancels
the earlier gesture (no mutation, selection kept) and is then handled as a
fresh press.
"""

import logging
from typing import Optional, Set, Union

from models.gesture import (
    DragPayload, GestureOutcome, GestureState, PointerEvent, PointerPhase, Rect,
)
from engine.session import EditingSession
from engine.relocation import (
    BlockMovePlan, SingleMovePlan, plan_block_move, plan_single_move,
)
from engine.errors import SeatingError
from config.defaults import DRAG_THRESHOLD

logger = logging.getLogger(__name__)


class GestureController:
    def __init__(self, session: EditingSession, locator,
                 drag_threshold: float = DRAG_THRESHOLD):
        self.session = session
        self.locator = locator
        self.drag_threshold = drag_threshold
        self._reset()

    def _reset(self):
        self.state = GestureState.IDLE
        self.payload: Optional[DragPayload] = None
        self.pressed_seat_id: Optional[str] = None
        self.start_x = 0.0
        self.start_y = 0.0
        self.hover_seat_id: Optional[str] = None
        self.preview: Optional[Union[SingleMovePlan, BlockMovePlan]] = None
        self.preview_valid = False
        self.candidates: Set[str] = set()

    @property
    def grid(self):
        return self.session.grid

    @property
    def selection(self):
        return self.session.selection

    # --- Entry points ---

    def handle(self, event: PointerEvent) -> GestureOutcome:
        if event.phase == PointerPhase.DOWN:
            return self._on_down(event)
        if event.phase == PointerPhase.MOVE:
            return self._on_move(event)
        if event.phase == PointerPhase.UP:
            return self._on_up(event)
        if event.phase == PointerPhase.CANCEL:
            return self.cancel()
        return GestureOutcome.IGNORED

    def cancel(self) -> GestureOutcome:
        """Externally delivered cancellation: drop the gesture, keep the selection."""
        if self.state == GestureState.IDLE:
            return GestureOutcome.IGNORED
        logger.debug("Gesture cancelled in state %s", self.state.value)
        self._reset()
        return GestureOutcome.CANCELLED

    def escape(self) -> GestureOutcome:
        """Explicit user cancel: back to IDLE with an empty selection."""
        self._reset()
        self.selection.clear()
        self.session.notify("selection")
        return GestureOutcome.CANCELLED

    # --- Phases ---

    def _on_down(self, event: PointerEvent) -> GestureOutcome:
        if self.state != GestureState.IDLE:
            logger.debug("Press during %s; cancelling the earlier gesture", self.state.value)
            self._reset()

        seat_id = self.locator.seat_at(event.x, event.y)
        seat = self.grid.find_seat(seat_id) if seat_id else None
        self.start_x, self.start_y = event.x, event.y

        # Deleted seats behave like empty floor and start a marquee
        if seat is None or seat.deleted:
            self.selection.clear()
            self.state = GestureState.SELECTING
            self.candidates = set()
            return GestureOutcome.NONE

        if event.modifier:
            self.selection.toggle(seat.id, exclusive=False)
            self.session.notify("selection")
            return GestureOutcome.TOGGLED

        self.state = GestureState.PRESSED
        self.pressed_seat_id = seat.id
        if seat.occupant is None:
            self.payload = None
        elif seat.id in self.selection:
            self.payload = DragPayload(
                kind="block",
                anchor_seat_id=seat.id,
                source_seat_ids=self.selection.ordered(self.grid),
                student_uuid=seat.occupant.uuid,
            )
        else:
            self.payload = DragPayload(
                kind="single",
                anchor_seat_id=seat.id,
                source_seat_ids=[seat.id],
                student_uuid=seat.occupant.uuid,
            )
        return GestureOutcome.NONE

    def _on_move(self, event: PointerEvent) -> GestureOutcome:
        if self.state == GestureState.PRESSED:
            if self.payload is None or not self._past_threshold(event):
                return GestureOutcome.NONE
            self.state = GestureState.DRAGGING
            logger.debug("Drag started from seat %s (%s)", self.pressed_seat_id, self.payload.kind)

        if self.state == GestureState.DRAGGING:
            self._update_preview(event)
            return GestureOutcome.NONE

        if self.state == GestureState.SELECTING:
            self._update_candidates(event)
            return GestureOutcome.NONE

        return GestureOutcome.IGNORED

    def _on_up(self, event: PointerEvent) -> GestureOutcome:
        if self.state == GestureState.PRESSED:
            self.selection.toggle(self.pressed_seat_id, exclusive=True)
            self._reset()
            self.session.notify("selection")
            return GestureOutcome.TAPPED

        if self.state == GestureState.DRAGGING:
            self._update_preview(event)
            outcome = self._commit()
            self._reset()
            return outcome

        if self.state == GestureState.SELECTING:
            self._update_candidates(event)
            self.selection.update(self.candidates)
            self._reset()
            self.session.notify("selection")
            return GestureOutcome.SELECTED

        return GestureOutcome.IGNORED

    # --- Helpers ---

    def _past_threshold(self, event: PointerEvent) -> bool:
        return (abs(event.x - self.start_x) > self.drag_threshold
                or abs(event.y - self.start_y) > self.drag_threshold)

    def _update_candidates(self, event: PointerEvent):
        rect = Rect.from_points(self.start_x, self.start_y, event.x, event.y)
        self.candidates = {
            sid for sid in self.locator.seats_in_rect(rect)
            if self.grid.find_seat(sid) is not None and not self.grid.find_seat(sid).deleted
        }

    def _update_preview(self, event: PointerEvent):
        self.hover_seat_id = self.locator.seat_at(event.x, event.y)
        self.preview = None
        self.preview_valid = False
        if self.hover_seat_id is None:
            return
        try:
            if self.payload.is_block:
                self.preview = plan_block_move(
                    self.grid, self.payload.source_seat_ids,
                    self.payload.anchor_seat_id, self.hover_seat_id,
                )
            else:
                self.preview = plan_single_move(
                    self.grid, self.payload.anchor_seat_id, self.hover_seat_id,
                )
            self.preview_valid = True
        except SeatingError as e:
            logger.debug("Invalid drop target %s: %s", self.hover_seat_id, e)

    def _commit(self) -> GestureOutcome:
        if self.hover_seat_id is None:
            return GestureOutcome.CANCELLED
        if not self.preview_valid:
            return GestureOutcome.REJECTED
        # A drop back onto the starting position changes nothing
        if self.payload.is_block and self.preview.is_noop:
            return GestureOutcome.CANCELLED
        try:
            if self.payload.is_block:
                self.session.move_block(
                    self.payload.source_seat_ids,
                    self.payload.anchor_seat_id,
                    self.hover_seat_id,
                )
            elif not self.session.assign_student(self.payload.student_uuid, self.hover_seat_id):
                return GestureOutcome.CANCELLED
        except SeatingError as e:
            logger.info("Drop on %s rejected: %s", self.hover_seat_id, e)
            return GestureOutcome.REJECTED
        return GestureOutcome.COMMITTED
