"""Import of externally suggested layouts (e.g. pasted from an AI assistant).

Expected JSON, coordinates in display form (row 1 = front, col 1 = left):

    {"assignments": [{"row": 1, "col": 1, "studentName": "...", "studentId": "..."}],
     "unseatedStudents": ["..."]}
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from engine.coords import to_internal
from engine.session import EditingSession
from config.defaults import ACTION_SUGGESTED_LAYOUT

logger = logging.getLogger(__name__)


@dataclass
class SuggestedSeat:
    display_row: int
    display_col: int
    student_name: str = ""
    student_id: Optional[str] = None


@dataclass
class SuggestionResult:
    seated: int = 0
    errors: List[str] = field(default_factory=list)
    mapping: Dict[str, Optional[str]] = field(default_factory=dict)

    @property
    def failed(self) -> int:
        return len(self.errors)


def strip_code_fence(text: str) -> str:
    text = text.strip()
    if text.startswith("```json"):
        text = text[7:]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def parse_suggestion(text: str) -> List[SuggestedSeat]:
    """Parse suggestion JSON. Raises ValueError on malformed input."""
    try:
        payload = json.loads(strip_code_fence(text))
    except json.JSONDecodeError as e:
        raise ValueError(f"Suggested layout is not valid JSON: {e}") from e

    assignments = payload.get("assignments") if isinstance(payload, dict) else None
    if not isinstance(assignments, list):
        raise ValueError("Suggested layout is missing the 'assignments' list.")

    seats = []
    for item in assignments:
        try:
            row, col = int(item["row"]), int(item["col"])
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Assignment without a usable row/col: {item!r}") from e
        student_id = item.get("studentId")
        seats.append(SuggestedSeat(
            display_row=row,
            display_col=col,
            student_name=str(item.get("studentName") or "").strip(),
            student_id=str(student_id).strip() if student_id not in (None, "") else None,
        ))
    return seats


def build_suggestion_mapping(session: EditingSession, seats: List[SuggestedSeat]) -> SuggestionResult:
    """Resolve suggested seats to a full mapping; unresolvable entries become errors.

    Every active seat starts empty, as the suggestion replaces the whole layout.
    """
    grid = session.grid
    result = SuggestionResult(mapping={s.id: None for s in grid.active_seats()})
    placed = set()

    for item in seats:
        # Primary key: external student id; fallback: exact name
        student = grid.resolve_student(item.student_id, item.student_name)
        if student is None:
            result.errors.append(f"Student not found: {item.student_name or item.student_id}")
            continue
        if student.uuid in placed:
            result.errors.append(f"Student listed more than once: {student.name}")
            continue

        row, col = to_internal(item.display_row, item.display_col, grid.rows)
        seat = grid.find_seat_at(row, col)
        if seat is None or seat.deleted or result.mapping.get(seat.id) is not None:
            result.errors.append(
                f"Invalid seat [{item.display_row}, {item.display_col}] for {student.name}"
            )
            continue

        result.mapping[seat.id] = student.uuid
        placed.add(student.uuid)
        result.seated += 1

    return result


def apply_suggestion(session: EditingSession, text: str) -> SuggestionResult:
    result = build_suggestion_mapping(session, parse_suggestion(text))
    session.apply_arrangement(result.mapping, ACTION_SUGGESTED_LAYOUT)
    if result.errors:
        logger.warning("Suggested layout partially applied: %s", result.errors)
    return result
