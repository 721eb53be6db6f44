"""Internal <-> display coordinate transform.

Internal coordinates are 0-based and address the dense seat collection.
Display coordinates are 1-based with display row 1 nearest the lectern, and
are the only form used at external boundaries (spreadsheets, suggested
layouts, labels):

    display_row = rows - row        row = rows - display_row
    display_col = col + 1           col = display_col - 1

So the internal row nearest the lectern is rows - 1.
"""

import logging
import re
from typing import Optional, Tuple

from models.seat import make_seat_id

logger = logging.getLogger(__name__)

_DISPLAY_COORD_RE = re.compile(r"^(\d+)-(\d+)$")


def to_display(row: int, col: int, rows: int) -> Tuple[int, int]:
    return rows - row, col + 1


def to_internal(display_row: int, display_col: int, rows: int) -> Tuple[int, int]:
    return rows - display_row, display_col - 1


def in_bounds(row: int, col: int, rows: int, cols: int) -> bool:
    return 0 <= row < rows and 0 <= col < cols


def format_display_coordinate(row: int, col: int, rows: int) -> str:
    display_row, display_col = to_display(row, col, rows)
    return f"{display_row}-{display_col}"


def parse_display_coordinate(text, rows: int, cols: int) -> Optional[str]:
    """Parse a "row-col" display coordinate into an internal seat id.

    Returns None (with a warning) for malformed or out-of-range input.
    """
    if not isinstance(text, str):
        return None
    match = _DISPLAY_COORD_RE.match(text.strip())
    if not match:
        logger.warning("Invalid seat coordinate format: %r", text)
        return None
    row, col = to_internal(int(match.group(1)), int(match.group(2)), rows)
    if not in_bounds(row, col, rows, cols):
        logger.warning("Seat coordinate out of range: %r", text)
        return None
    return make_seat_id(row, col)
