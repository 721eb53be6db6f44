"""Roster upload parsing and layout export (CSV/XLSX via pandas)."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import pandas as pd

from models.student import Student
from engine.coords import parse_display_coordinate, format_display_coordinate
from engine.session import EditingSession
from data.validator import match_columns, validate_roster
from config.defaults import (
    GENDER_ALIASES, GENDER_UNSET, ACTION_ROSTER_IMPORT,
)

logger = logging.getLogger(__name__)


@dataclass
class RosterRow:
    name: str
    external_id: str = ""
    gender: str = GENDER_UNSET
    height: Optional[int] = None
    notes: str = ""
    seat: Optional[str] = None     # display coordinate, e.g. "1-3"


@dataclass
class ImportResult:
    imported: int = 0
    skipped: int = 0
    seated: int = 0
    errors: List[str] = field(default_factory=list)


def parse_gender(value) -> str:
    if value is None or pd.isna(value):
        return GENDER_UNSET
    text = str(value).strip().lower()
    for gender, aliases in GENDER_ALIASES.items():
        if text in aliases:
            return gender
    return GENDER_UNSET


def _text(row, column) -> str:
    if column is None:
        return ""
    value = row.get(column)
    if value is None or pd.isna(value):
        return ""
    # Spreadsheet ids often arrive as floats (12.0)
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def parse_roster(df: pd.DataFrame) -> List[RosterRow]:
    """Convert a roster DataFrame into RosterRow objects. Raises ValueError if unusable."""
    validation = validate_roster(df)
    if not validation.is_valid:
        raise ValueError("; ".join(validation.errors))
    for warning in validation.warnings:
        logger.warning(warning)

    columns = match_columns(df.columns)
    rows = []
    for _, row in df.iterrows():
        name = _text(row, columns["name"])
        if not name:
            continue
        height = None
        if columns["height"] is not None:
            value = pd.to_numeric(row.get(columns["height"]), errors="coerce")
            if pd.notna(value):
                height = int(value)
        rows.append(RosterRow(
            name=name,
            external_id=_text(row, columns["external_id"]),
            gender=parse_gender(row.get(columns["gender"])) if columns["gender"] else GENDER_UNSET,
            height=height,
            notes=_text(row, columns["notes"]),
            seat=_text(row, columns["seat"]) or None,
        ))
    return rows


def import_roster(session: EditingSession, rows: List[RosterRow], overwrite: bool = False) -> ImportResult:
    """Merge roster rows into the session, matching existing students by name.

    Seat coordinates in the file are applied afterwards as one arrangement
    (a single history record); a student placed on an occupied seat
    unseats the previous occupant.
    """
    grid = session.grid
    result = ImportResult()
    placements = []

    for item in rows:
        student = next((s for s in grid.students if s.name == item.name), None)
        if student is not None:
            if not overwrite:
                result.skipped += 1
                continue
            student.external_id = item.external_id or student.external_id
            student.gender = item.gender or student.gender
            student.height = item.height if item.height is not None else student.height
            student.notes = item.notes or student.notes
        else:
            student = session.add_student(Student(
                name=item.name,
                external_id=item.external_id,
                gender=item.gender,
                height=item.height,
                notes=item.notes,
            ))
        result.imported += 1

        if item.seat:
            seat_id = parse_display_coordinate(item.seat, grid.rows, grid.cols)
            seat = grid.find_seat(seat_id) if seat_id else None
            if seat is None or seat.deleted:
                result.errors.append(f"Invalid seat {item.seat} for {item.name}")
            else:
                placements.append((seat.id, student.uuid))

    if placements:
        mapping = grid.occupancy()
        for seat_id, uuid in placements:
            for sid, occupant in list(mapping.items()):
                if occupant == uuid:
                    mapping[sid] = None
            mapping[seat_id] = uuid
        session.apply_arrangement(mapping, ACTION_ROSTER_IMPORT)
        result.seated = sum(1 for seat_id, uuid in placements if mapping.get(seat_id) == uuid)

    return result


def export_layout_df(session: EditingSession) -> pd.DataFrame:
    """One row per active seat, in display coordinates."""
    grid = session.grid
    rows = []
    for seat in sorted(grid.active_seats(), key=lambda s: (s.row, s.col)):
        occupant = seat.occupant
        rows.append({
            "Seat": format_display_coordinate(seat.row, seat.col, grid.rows),
            "Row": grid.rows - seat.row,
            "Col": seat.col + 1,
            "Name": occupant.name if occupant else "",
            "Student ID": occupant.external_id if occupant else "",
            "Gender": occupant.gender_label if occupant else "",
        })
    return pd.DataFrame(rows)


def export_roster_df(session: EditingSession) -> pd.DataFrame:
    grid = session.grid
    rows = []
    for student in grid.students:
        seat = grid.find_seat(student.seat_id) if student.seat_id else None
        rows.append({
            "Name": student.name,
            "Student ID": student.external_id,
            "Gender": student.gender_label,
            "Height": student.height,
            "Notes": student.notes,
            "Seat": format_display_coordinate(seat.row, seat.col, grid.rows) if seat else "",
        })
    return pd.DataFrame(rows)


def load_file(uploaded_file) -> pd.DataFrame:
    """Load an uploaded file (CSV or XLSX) into a DataFrame."""
    name = uploaded_file.name.lower()
    if name.endswith(".csv"):
        return pd.read_csv(uploaded_file)
    elif name.endswith(".xlsx") or name.endswith(".xls"):
        return pd.read_excel(uploaded_file, engine="openpyxl")
    else:
        raise ValueError(f"Unsupported file format: {name}. Use CSV or XLSX.")


def load_csv_path(path: str) -> pd.DataFrame:
    """Load a CSV file from a local path."""
    return pd.read_csv(path)
