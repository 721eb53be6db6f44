"""Tests for bulk arrangement rules."""

import sys
import os
import random
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from models.student import Student
from engine.grid import GridModel
from engine.arrangement import (
    natural_key,
    seats_front_to_back,
    random_arrangement,
    rule_based_arrangement,
    same_gender_arrangement,
    rotation_arrangement,
    replacement_arrangement,
)
from config.defaults import (
    ARRANGE_BY_COLUMN, GENDER_MALE, GENDER_FEMALE,
    ROTATE_ROW_LEFT, ROTATE_ROW_RIGHT, ROTATE_COL_FORWARD, ROTATE_COL_BACKWARD,
)


def make_student(name, external_id="", gender="", height=None):
    return Student(name=name, external_id=external_id, gender=gender, height=height)


def seated_names(grid, mapping):
    by_uuid = {s.uuid: s.name for s in grid.students}
    return {sid: by_uuid.get(uuid) for sid, uuid in mapping.items()}


def place(grid, placements):
    for seat_id, name in placements.items():
        uuid = next(s.uuid for s in grid.students if s.name == name)
        grid.assign(uuid, seat_id)
    grid.resync()


class TestOrdering:
    def test_natural_key(self):
        assert sorted(["S10", "S2", "S1"], key=natural_key) == ["S1", "S2", "S10"]
        assert sorted([10, 9, "", None], key=natural_key) == ["", None, 9, 10]

    def test_row_fill_starts_at_front(self):
        grid = GridModel(2, 2)
        assert [s.id for s in seats_front_to_back(grid)] == ["1-0", "1-1", "0-0", "0-1"]

    def test_column_fill(self):
        grid = GridModel(2, 2)
        assert [s.id for s in seats_front_to_back(grid, ARRANGE_BY_COLUMN)] == ["1-0", "0-0", "1-1", "0-1"]

    def test_fill_skips_deleted(self):
        grid = GridModel(2, 2)
        grid.delete_seat("1-0")
        assert [s.id for s in seats_front_to_back(grid)] == ["1-1", "0-0", "0-1"]


class TestRuleBased:
    def test_by_id(self):
        grid = GridModel(2, 2, [
            make_student("C", external_id="S10"),
            make_student("A", external_id="S1"),
            make_student("B", external_id="S2"),
        ])
        mapping = rule_based_arrangement(grid, order_by_id=True)
        assert seated_names(grid, mapping) == {"1-0": "A", "1-1": "B", "0-0": "C", "0-1": None}

    def test_by_height_shortest_front(self):
        grid = GridModel(1, 3, [
            make_student("Tall", height=180),
            make_student("Short", height=140),
            make_student("Mid", height=160),
        ])
        mapping = rule_based_arrangement(grid, by_height=True)
        assert seated_names(grid, mapping) == {"0-0": "Short", "0-1": "Mid", "0-2": "Tall"}

    def test_height_ties_keep_id_order(self):
        grid = GridModel(1, 3, [
            make_student("B", external_id="2", height=150),
            make_student("A", external_id="1", height=150),
            make_student("C", external_id="3", height=140),
        ])
        mapping = rule_based_arrangement(grid, order_by_id=True, by_height=True)
        assert seated_names(grid, mapping) == {"0-0": "C", "0-1": "A", "0-2": "B"}

    def test_no_rule_falls_back_to_random(self):
        grid = GridModel(2, 2, [make_student(n) for n in "ABC"])
        mapping = rule_based_arrangement(grid, rng=random.Random(1))
        assert sorted(u for u in mapping.values() if u) == sorted(s.uuid for s in grid.students)


class TestRandom:
    def test_everyone_seated_once(self):
        grid = GridModel(3, 3, [make_student(f"S{i}") for i in range(7)])
        mapping = random_arrangement(grid, random.Random(7))
        placed = [u for u in mapping.values() if u]
        assert len(placed) == 7
        assert len(set(placed)) == 7
        assert set(mapping) == {s.id for s in grid.active_seats()}

    def test_more_students_than_seats(self):
        grid = GridModel(1, 2, [make_student(f"S{i}") for i in range(4)])
        mapping = random_arrangement(grid, random.Random(3))
        assert len([u for u in mapping.values() if u]) == 2

    def test_seeded_is_deterministic(self):
        grid = GridModel(2, 3, [make_student(f"S{i}") for i in range(5)])
        assert random_arrangement(grid, random.Random(5)) == random_arrangement(grid, random.Random(5))


class TestSameGender:
    def test_groups_genders_front_first(self):
        grid = GridModel(2, 2, [
            make_student("F1", gender=GENDER_FEMALE),
            make_student("M1", gender=GENDER_MALE),
            make_student("X"),
            make_student("M2", gender=GENDER_MALE),
        ])
        mapping = same_gender_arrangement(grid)
        assert seated_names(grid, mapping) == {"1-0": "M1", "1-1": "M2", "0-0": "F1", "0-1": "X"}


class TestRotation:
    def test_row_right_and_left(self):
        grid = GridModel(1, 3, [make_student("A"), make_student("B")])
        place(grid, {"0-0": "A", "0-1": "B"})

        assert seated_names(grid, rotation_arrangement(grid, ROTATE_ROW_RIGHT)) == {
            "0-0": None, "0-1": "A", "0-2": "B",
        }
        assert seated_names(grid, rotation_arrangement(grid, ROTATE_ROW_LEFT)) == {
            "0-0": "B", "0-1": None, "0-2": "A",
        }

    def test_columns(self):
        grid = GridModel(3, 1, [make_student("A")])
        place(grid, {"2-0": "A"})
        assert seated_names(grid, rotation_arrangement(grid, ROTATE_COL_FORWARD))["1-0"] == "A"
        assert seated_names(grid, rotation_arrangement(grid, ROTATE_COL_BACKWARD))["0-0"] == "A"

    def test_unknown_direction(self):
        with pytest.raises(ValueError):
            rotation_arrangement(GridModel(2, 2), "diagonal")


class TestReplacement:
    def test_replaced_become_unseated(self):
        grid = GridModel(1, 3, [make_student(n) for n in ("A", "B", "C")])
        place(grid, {"0-0": "A", "0-1": "B"})
        c = next(s.uuid for s in grid.students if s.name == "C")

        mapping = replacement_arrangement(grid, ["0-0"], [c])
        assert seated_names(grid, mapping) == {"0-0": "C", "0-1": "B", "0-2": None}


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
