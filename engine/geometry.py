"""Hit-testing for a uniformly laid out seat grid.

The gesture controller only needs `seat_at(x, y)` and `seats_in_rect(rect)`;
any renderer can supply its own locator with those two methods. This one
assumes equal-sized cells drawn in internal row order from the top of the
screen, which puts display row 1 (nearest the lectern) at the bottom.
"""

from typing import List, Optional

from models.gesture import Rect
from engine.grid import GridModel
from config.defaults import MARQUEE_OVERLAP_RATIO


def overlap_ratio(cell: Rect, box: Rect) -> float:
    """Fraction of `cell` covered by `box`."""
    width = max(0.0, min(cell.right, box.right) - max(cell.left, box.left))
    height = max(0.0, min(cell.bottom, box.bottom) - max(cell.top, box.top))
    area = cell.width * cell.height
    return (width * height) / area if area > 0 else 0.0


class UniformGridLocator:
    def __init__(self, grid: GridModel, cell_width: float = 80, cell_height: float = 60,
                 gap: float = 0, origin_x: float = 0, origin_y: float = 0,
                 min_overlap: float = MARQUEE_OVERLAP_RATIO):
        self.grid = grid
        self.cell_width = cell_width
        self.cell_height = cell_height
        self.gap = gap
        self.origin_x = origin_x
        self.origin_y = origin_y
        self.min_overlap = min_overlap

    def seat_rect(self, row: int, col: int) -> Rect:
        return Rect(
            self.origin_x + col * (self.cell_width + self.gap),
            self.origin_y + row * (self.cell_height + self.gap),
            self.cell_width,
            self.cell_height,
        )

    def seat_at(self, x: float, y: float) -> Optional[str]:
        dx = x - self.origin_x
        dy = y - self.origin_y
        if dx < 0 or dy < 0:
            return None
        pitch_x = self.cell_width + self.gap
        pitch_y = self.cell_height + self.gap
        col = int(dx // pitch_x)
        row = int(dy // pitch_y)
        # Points inside the gutter between cells hit nothing
        if dx - col * pitch_x > self.cell_width or dy - row * pitch_y > self.cell_height:
            return None
        seat = self.grid.find_seat_at(row, col)
        return seat.id if seat else None

    def seats_in_rect(self, rect: Rect) -> List[str]:
        picked = []
        for seat in self.grid.active_seats():
            cell = self.seat_rect(seat.row, seat.col)
            overlaps = (cell.left < rect.right and cell.right > rect.left
                        and cell.top < rect.bottom and cell.bottom > rect.top)
            if not overlaps:
                continue
            cx = cell.left + cell.width / 2
            cy = cell.top + cell.height / 2
            centre_inside = rect.left <= cx <= rect.right and rect.top <= cy <= rect.bottom
            if centre_inside or overlap_ratio(cell, rect) > self.min_overlap:
                picked.append(seat.id)
        return picked
