"""Plotly chart builders for the seating grid."""

import plotly.graph_objects as go
from typing import Optional, Set

from engine.grid import GridModel
from config.defaults import (
    GENDER_MALE, GENDER_FEMALE, MALE_COLOR, FEMALE_COLOR, EMPTY_COLOR, DELETED_COLOR,
)

# Heatmap cell codes
_EMPTY, _MALE, _FEMALE, _UNSET = 0, 1, 2, 3


def _cell_code(seat) -> Optional[int]:
    if seat.deleted:
        return None
    if seat.occupant is None:
        return _EMPTY
    if seat.occupant.gender == GENDER_MALE:
        return _MALE
    if seat.occupant.gender == GENDER_FEMALE:
        return _FEMALE
    return _UNSET


def seating_heatmap(
    grid: GridModel,
    selected: Optional[Set[str]] = None,
    show_coordinates: bool = False,
    title: str = "Classroom Layout",
) -> go.Figure:
    """Seat map with the front row (nearest the lectern) at the bottom."""
    selected = selected or set()
    z, text = [], []
    # Internal row 0 is display row `rows`; the reversed y axis below draws
    # it at the top so display row 1 sits next to the lectern.
    for row in range(grid.rows):
        z_row, text_row = [], []
        for col in range(grid.cols):
            seat = grid.find_seat_at(row, col)
            z_row.append(_cell_code(seat))
            label = seat.occupant.name if seat.occupant else ""
            if show_coordinates and not seat.deleted:
                label = f"{label}<br>{grid.rows - row}-{col + 1}" if label else f"{grid.rows - row}-{col + 1}"
            if seat.id in selected:
                label = f"<b>[{label or ' '}]</b>"
            text_row.append(label)
        z.append(z_row)
        text.append(text_row)

    colorscale = [
        [0.0, EMPTY_COLOR], [0.24, EMPTY_COLOR],
        [0.25, MALE_COLOR], [0.49, MALE_COLOR],
        [0.5, FEMALE_COLOR], [0.74, FEMALE_COLOR],
        [0.75, "#9ca3af"], [1.0, "#9ca3af"],
    ]
    fig = go.Figure(data=go.Heatmap(
        z=z,
        x=[f"Col {c + 1}" for c in range(grid.cols)],
        y=[f"Row {grid.rows - r}" for r in range(grid.rows)],
        text=text,
        texttemplate="%{text}",
        colorscale=colorscale,
        zmin=0,
        zmax=3,
        showscale=False,
        xgap=4,
        ygap=4,
        hoverinfo="skip",
    ))
    fig.update_layout(
        title=title,
        height=max(300, grid.rows * 60),
        plot_bgcolor=DELETED_COLOR,
        yaxis=dict(autorange="reversed", title="Lectern ↓"),
        xaxis=dict(side="top"),
    )
    return fig


def seating_donut(seated: int, total_seats: int, title: str = "Seat Occupancy") -> go.Figure:
    """Donut chart of occupied vs free active seats."""
    free = max(0, total_seats - seated)
    fig = go.Figure(data=[go.Pie(
        labels=["Occupied", "Free"],
        values=[seated, free],
        hole=0.6,
        marker_colors=[MALE_COLOR, EMPTY_COLOR],
        textinfo="percent+label",
    )])
    fig.update_layout(
        title=title,
        height=300,
        annotations=[dict(text=f"{seated}/{total_seats}", x=0.5, y=0.5, font_size=16, showarrow=False)],
    )
    return fig
