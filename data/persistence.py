"""Flat, reference-free persisted form of an editing session."""

import json
from typing import Optional

from models.seat import Seat
from models.student import Student
from engine.grid import GridModel
from engine.history import HistoryManager
from engine.session import EditingSession
from config.defaults import DEFAULT_ROWS, DEFAULT_COLS, MAX_HISTORY_SIZE

FORMAT_VERSION = 1


def session_to_record(session: EditingSession) -> dict:
    grid = session.grid
    return {
        "version": FORMAT_VERSION,
        "rows": grid.rows,
        "cols": grid.cols,
        "students": [s.to_record() for s in grid.students],
        "seats": [s.to_record() for s in grid.seats],
        "history": session.history.to_record(),
    }


def session_from_record(record: dict, max_history: int = MAX_HISTORY_SIZE) -> EditingSession:
    """Rebuild a session; seat occupants are relinked to the roster first thing."""
    rows = int(record.get("rows") or DEFAULT_ROWS)
    cols = int(record.get("cols") or DEFAULT_COLS)
    students = [Student.from_record(s) for s in record.get("students", [])]

    grid = GridModel(rows, cols, students)
    seats = [Seat.from_record(s) for s in record.get("seats", [])]
    if seats:
        by_id = {s.id: s for s in seats}
        for seat in grid.seats:
            saved = by_id.get(seat.id)
            if saved is not None:
                seat.occupant = saved.occupant
                seat.deleted = saved.deleted
    grid.relink()
    grid.resync()

    history = HistoryManager.from_record(record.get("history") or {}, max_size=max_history)
    return EditingSession(grid=grid, history=history)


def dumps(session: EditingSession, indent: Optional[int] = None) -> str:
    return json.dumps(session_to_record(session), ensure_ascii=False, indent=indent)


def loads(text: str) -> EditingSession:
    return session_from_record(json.loads(text))
