"""Tests for the pointer gesture state machine."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from models.student import Student
from models.gesture import PointerEvent, PointerPhase, GestureState, GestureOutcome, Rect
from engine.grid import GridModel
from engine.history import HistoryManager
from engine.session import EditingSession
from engine.geometry import UniformGridLocator, overlap_ratio
from engine.gesture import GestureController

# 80x60 cells, no gap: seat r-c spans x [80c, 80c+80), y [60r, 60r+60)
OUTSIDE = (500, 500)


def make_controller(rows=2, cols=3, placements=None):
    placements = placements or {"0-0": "A", "0-1": "B"}
    students = [Student(name=name) for name in placements.values()]
    grid = GridModel(rows, cols, students)
    for student, seat_id in zip(students, placements):
        grid.assign(student.uuid, seat_id)
    grid.resync()
    session = EditingSession(grid=grid, history=HistoryManager())
    return GestureController(session, UniformGridLocator(grid))


def centre(seat_id):
    row, col = (int(v) for v in seat_id.split("-"))
    return 80 * col + 40, 60 * row + 30


def down(x, y, modifier=False):
    return PointerEvent(PointerPhase.DOWN, x, y, modifier=modifier)


def move(x, y):
    return PointerEvent(PointerPhase.MOVE, x, y)


def up(x, y):
    return PointerEvent(PointerPhase.UP, x, y)


def drag(controller, source, target):
    sx, sy = centre(source)
    tx, ty = target if isinstance(target, tuple) else centre(target)
    controller.handle(down(sx, sy))
    controller.handle(move(tx, ty))
    return controller.handle(up(tx, ty))


def names(controller):
    return {s.id: s.occupant.name if s.occupant else None for s in controller.grid.seats}


class TestTap:
    def test_tap_selects_seat(self):
        c = make_controller()
        c.handle(down(40, 30))
        assert c.state == GestureState.PRESSED
        assert c.handle(up(42, 31)) == GestureOutcome.TAPPED
        assert c.selection.as_set() == {"0-0"}
        assert c.state == GestureState.IDLE

    def test_tap_replaces_selection(self):
        c = make_controller()
        c.selection.update(["0-1", "1-1"])
        c.handle(down(40, 30))
        c.handle(up(40, 30))
        assert c.selection.as_set() == {"0-0"}

    def test_tap_on_selected_seat_deselects(self):
        c = make_controller()
        c.selection.add("0-0")
        c.handle(down(40, 30))
        c.handle(up(40, 30))
        assert c.selection.as_set() == set()

    def test_movement_within_threshold_stays_pressed(self):
        c = make_controller()
        c.handle(down(40, 30))
        c.handle(move(45, 35))
        assert c.state == GestureState.PRESSED
        c.handle(move(46, 30))
        assert c.state == GestureState.DRAGGING

    def test_empty_seat_can_only_tap(self):
        c = make_controller()
        x, y = centre("1-0")
        c.handle(down(x, y))
        c.handle(move(x + 100, y))
        assert c.state == GestureState.PRESSED
        assert c.handle(up(x + 100, y)) == GestureOutcome.TAPPED
        assert c.selection.as_set() == {"1-0"}

    def test_release_while_idle_is_ignored(self):
        c = make_controller()
        assert c.handle(up(40, 30)) == GestureOutcome.IGNORED


class TestModifier:
    def test_modifier_click_toggles_without_gesture(self):
        c = make_controller()
        assert c.handle(down(40, 30, modifier=True)) == GestureOutcome.TOGGLED
        assert c.state == GestureState.IDLE
        c.handle(down(*centre("1-2"), modifier=True))
        assert c.selection.as_set() == {"0-0", "1-2"}
        c.handle(down(40, 30, modifier=True))
        assert c.selection.as_set() == {"1-2"}

    def test_modifier_on_deleted_seat_does_not_select_it(self):
        c = make_controller()
        c.session.delete_seat("1-2")
        c.handle(down(*centre("1-2"), modifier=True))
        c.handle(up(*centre("1-2")))
        assert "1-2" not in c.selection

    def test_tap_on_deleted_seat_does_not_select_it(self):
        c = make_controller()
        c.session.delete_seat("1-2")
        c.handle(down(*centre("1-2")))
        assert c.state == GestureState.SELECTING
        c.handle(up(*centre("1-2")))
        assert "1-2" not in c.selection


class TestDrag:
    def test_single_drag_swaps(self):
        c = make_controller()
        assert drag(c, "0-0", "0-1") == GestureOutcome.COMMITTED
        assert names(c)["0-0"] == "B"
        assert names(c)["0-1"] == "A"
        assert len(c.session.history) == 1
        assert c.state == GestureState.IDLE

    def test_preview_does_not_mutate(self):
        c = make_controller()
        c.handle(down(*centre("0-0")))
        c.handle(move(*centre("1-2")))
        assert c.preview_valid
        assert c.preview.target_seat_id == "1-2"
        assert names(c)["1-2"] is None
        assert len(c.session.history) == 0

    def test_release_outside_cancels(self):
        c = make_controller()
        before = names(c)
        assert drag(c, "0-0", OUTSIDE) == GestureOutcome.CANCELLED
        assert names(c) == before
        assert len(c.session.history) == 0

    def test_drop_on_deleted_seat_rejected(self):
        c = make_controller()
        c.session.delete_seat("1-2")
        before = names(c)
        assert drag(c, "0-0", "1-2") == GestureOutcome.REJECTED
        assert names(c) == before
        assert len(c.session.history) == 1

    def test_block_drag(self):
        c = make_controller()
        c.selection.update(["0-0", "0-1"])
        c.handle(down(*centre("0-0")))
        assert c.payload.is_block
        assert c.payload.source_seat_ids == ["0-0", "0-1"]

        c.handle(move(*centre("1-0")))
        assert c.handle(up(*centre("1-0"))) == GestureOutcome.COMMITTED
        assert names(c) == {
            "0-0": None, "0-1": None, "0-2": None,
            "1-0": "A", "1-1": "B", "1-2": None,
        }
        assert len(c.session.history) == 1

    def test_block_drag_out_of_bounds_rejected(self):
        c = make_controller()
        c.selection.update(["0-0", "0-1"])
        before = names(c)
        assert drag(c, "0-0", "0-2") == GestureOutcome.REJECTED
        assert names(c) == before
        assert len(c.session.history) == 0
        assert c.selection.as_set() == {"0-0", "0-1"}

    def test_unselected_seat_drags_alone(self):
        c = make_controller()
        c.selection.add("0-1")
        c.handle(down(*centre("0-0")))
        assert not c.payload.is_block
        assert c.payload.source_seat_ids == ["0-0"]

    def test_drop_back_on_source_is_not_a_commit(self):
        c = make_controller()
        before = names(c)
        c.handle(down(*centre("0-0")))
        c.handle(move(*centre("0-1")))
        assert c.handle(up(*centre("0-0"))) == GestureOutcome.CANCELLED
        assert names(c) == before
        assert len(c.session.history) == 0

    def test_block_drop_with_zero_offset_is_not_a_commit(self):
        c = make_controller()
        c.selection.update(["0-0", "0-1"])
        before = names(c)
        c.handle(down(*centre("0-0")))
        c.handle(move(*centre("1-0")))
        assert c.handle(up(*centre("0-0"))) == GestureOutcome.CANCELLED
        assert names(c) == before
        assert len(c.session.history) == 0


class TestMarquee:
    def test_release_without_move_uses_release_point(self):
        c = make_controller()
        c.handle(down(300, 10))
        assert c.handle(up(100, 50)) == GestureOutcome.SELECTED
        assert c.selection.as_set() == {"0-1", "0-2"}

    def test_release_from_gutter_with_gaps(self):
        c = make_controller(2, 2, {"0-0": "A"})
        c.locator = UniformGridLocator(c.grid, cell_width=10, cell_height=10, gap=10)
        c.handle(down(15, 15))
        assert c.state == GestureState.SELECTING
        c.handle(up(40, 40))
        assert c.selection.as_set() == {"1-1"}

    def test_press_on_empty_area_clears_and_selects(self):
        c = make_controller()
        c.selection.add("1-1")
        c.handle(down(300, 10))
        assert c.state == GestureState.SELECTING
        assert len(c.selection) == 0

        c.handle(move(100, 50))
        assert c.candidates == {"0-1", "0-2"}
        assert c.handle(up(100, 50)) == GestureOutcome.SELECTED
        assert c.selection.as_set() == {"0-1", "0-2"}

    def test_marquee_skips_deleted_seats(self):
        c = make_controller()
        c.grid.delete_seat("1-2")
        c.handle(down(*OUTSIDE))
        c.handle(move(0, 0))
        c.handle(up(0, 0))
        assert c.selection.as_set() == {"0-0", "0-1", "0-2", "1-0", "1-1"}

    def test_overlap_ratio(self):
        cell = Rect(0, 0, 80, 60)
        assert overlap_ratio(cell, Rect(0, 0, 40, 60)) == 0.5
        assert overlap_ratio(cell, Rect(100, 0, 10, 10)) == 0.0

    def test_small_corner_overlap_not_picked(self):
        c = make_controller()
        c.handle(down(300, 100))
        c.handle(move(230, 70))
        assert c.candidates == set()


class TestCancel:
    def test_pointer_cancel_keeps_selection(self):
        c = make_controller()
        c.selection.add("1-1")
        before = names(c)
        c.handle(down(*centre("0-0")))
        c.handle(move(*centre("0-2")))
        assert c.handle(PointerEvent(PointerPhase.CANCEL)) == GestureOutcome.CANCELLED
        assert c.state == GestureState.IDLE
        assert c.payload is None
        assert c.selection.as_set() == {"1-1"}
        assert names(c) == before
        assert len(c.session.history) == 0

    def test_escape_clears_selection(self):
        c = make_controller()
        c.selection.update(["0-0", "0-1"])
        c.handle(down(*centre("0-0")))
        c.handle(move(*centre("1-0")))
        assert c.escape() == GestureOutcome.CANCELLED
        assert c.state == GestureState.IDLE
        assert len(c.selection) == 0
        assert len(c.session.history) == 0

    def test_cancel_while_idle_is_ignored(self):
        c = make_controller()
        assert c.cancel() == GestureOutcome.IGNORED


class TestConflictingPress:
    def test_press_during_drag_cancels_prior_gesture(self):
        c = make_controller()
        before = names(c)
        c.handle(down(*centre("0-0")))
        c.handle(move(*centre("0-1")))
        assert c.state == GestureState.DRAGGING

        c.handle(down(*centre("1-0")))
        assert c.state == GestureState.PRESSED
        assert c.pressed_seat_id == "1-0"
        assert c.payload is None
        assert names(c) == before
        assert len(c.session.history) == 0

        assert c.handle(up(*centre("1-0"))) == GestureOutcome.TAPPED
        assert c.selection.as_set() == {"1-0"}

    def test_press_during_marquee_drops_candidates(self):
        c = make_controller()
        c.handle(down(*OUTSIDE))
        c.handle(move(0, 0))
        c.handle(down(*centre("0-0")))
        assert c.state == GestureState.PRESSED
        assert c.candidates == set()
        c.handle(up(*centre("0-0")))
        assert c.selection.as_set() == {"0-0"}


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
