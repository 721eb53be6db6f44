"""Tests for the bounded undo/redo history."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from models.student import Student
from models.history import GridSnapshot
from engine.grid import GridModel
from engine.history import HistoryManager


def make_grid(rows=2, cols=2):
    return GridModel(rows, cols, [Student(name=f"S{i}") for i in range(rows * cols)])


def record_steps(history, grid, count):
    """Record `count` actions, seating one more student before each record."""
    for i in range(count):
        if i < len(grid.seats):
            grid.assign(grid.students[i].uuid, grid.seats[i].id)
            grid.resync()
        history.record(f"step{i}", grid)


class TestRecord:
    def test_snapshot_is_a_copy(self):
        grid = make_grid()
        history = HistoryManager()
        history.record("a", grid)
        grid.assign(grid.students[0].uuid, "0-0")

        entry = history.undo()
        assert entry.snapshot.seats[0].occupant is None

    def test_accepts_snapshot_source(self):
        grid = make_grid()
        history = HistoryManager()
        snap = grid.snapshot()
        entry = history.record("a", snap)
        assert isinstance(entry.snapshot, GridSnapshot)
        assert entry.snapshot is not snap

    def test_eviction_keeps_latest_five(self):
        grid = make_grid(3, 3)
        history = HistoryManager(max_size=5)
        record_steps(history, grid, 8)

        assert len(history) == 5
        assert [e.action for e in history.entries] == ["step3", "step4", "step5", "step6", "step7"]
        assert history.index == 4

    def test_record_truncates_redo_tail(self):
        grid = make_grid()
        history = HistoryManager()
        record_steps(history, grid, 3)
        history.undo()
        history.undo()
        history.record("new", grid)

        assert [e.action for e in history.entries] == ["step0", "new"]
        assert not history.can_redo()


class TestUndoRedo:
    def test_bounded_undo_returns_five_in_reverse(self):
        grid = make_grid(3, 3)
        history = HistoryManager(max_size=5)
        record_steps(history, grid, 7)

        actions = [history.undo().action for _ in range(5)]
        assert actions == ["step6", "step5", "step4", "step3", "step2"]
        assert history.undo() is None
        assert not history.can_undo()

    def test_undo_returns_pre_mutation_state(self):
        grid = make_grid(3, 3)
        history = HistoryManager()
        record_steps(history, grid, 3)

        entry = history.undo()
        # step2 was recorded after seating three students
        assert sum(1 for s in entry.snapshot.seats if s.occupant) == 3

    def test_redo_walks_forward(self):
        grid = make_grid()
        history = HistoryManager()
        record_steps(history, grid, 2)
        history.undo()
        history.undo()

        assert history.can_redo()
        assert history.redo().action == "step0"
        assert history.redo().action == "step1"
        assert history.redo() is None

    def test_empty_history(self):
        history = HistoryManager()
        assert history.undo() is None
        assert history.redo() is None
        assert not history.can_undo()
        assert not history.can_redo()


class TestSerialization:
    def test_round_trip(self):
        grid = make_grid()
        history = HistoryManager()
        record_steps(history, grid, 3)
        history.undo()

        loaded = HistoryManager.from_record(history.to_record())
        assert [e.action for e in loaded.entries] == ["step0", "step1", "step2"]
        assert loaded.index == 1
        assert loaded.entries[1].snapshot.rows == 2

    def test_index_is_clamped(self):
        grid = make_grid()
        history = HistoryManager()
        record_steps(history, grid, 2)
        record = history.to_record()
        record["index"] = 9

        assert HistoryManager.from_record(record).index == 1


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
