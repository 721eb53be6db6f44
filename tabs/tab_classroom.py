"""Tab 1: Classroom — seat grid, moves, and bulk arrangements."""

import streamlit as st

from data.session_store import get_session, set_message
from components.charts import seating_heatmap, seating_donut
from components.metrics_cards import render_session_stats
from engine.coords import format_display_coordinate, parse_display_coordinate
from engine.errors import SeatingError
from models.seat import parse_seat_id
from config.defaults import (
    ARRANGE_BY_ROW, ARRANGE_BY_COLUMN, ROTATE_DIRECTIONS,
)


def _seat_label(seat, rows: int, show_coordinates: bool) -> str:
    if seat.deleted:
        return "✕"
    name = seat.occupant.name if seat.occupant else "·"
    if show_coordinates:
        return f"{name} ({format_display_coordinate(seat.row, seat.col, rows)})"
    return name


def _render_seat_buttons(session, sidebar_state):
    grid = session.grid
    for row in range(grid.rows):
        cols = st.columns(grid.cols)
        for col in range(grid.cols):
            seat = grid.find_seat_at(row, col)
            label = _seat_label(seat, grid.rows, sidebar_state.show_coordinates)
            kind = "primary" if seat.id in session.selection else "secondary"
            with cols[col]:
                if st.button(label, key=f"seat_{seat.id}", type=kind,
                             disabled=seat.deleted, use_container_width=True):
                    session.selection.toggle(seat.id, exclusive=not sidebar_state.multi_select)
                    st.rerun()
    st.caption("Lectern")


def _render_move_controls(session):
    grid = session.grid
    selected = session.selection.ordered(grid)
    if not selected:
        st.info("Select seats to move, clear, or replace them.")
        return

    labels = {sid: format_display_coordinate(*parse_seat_id(sid), grid.rows) for sid in selected}
    st.write(f"Selected: {', '.join(labels[s] for s in selected)}")

    col1, col2 = st.columns(2)
    with col1:
        anchor = st.selectbox("Anchor seat", selected, format_func=labels.get, key="move_anchor")
    with col2:
        target_text = st.text_input("Move anchor to (row-col)", key="move_target")

    if st.button("Move", key="move_btn") and target_text:
        target_id = parse_display_coordinate(target_text, grid.rows, grid.cols)
        try:
            if target_id is None:
                set_message(f"Invalid seat coordinate: {target_text}", "error")
            elif len(selected) == 1:
                session.move_seat(anchor, target_id)
            else:
                detached = session.move_block(selected, anchor, target_id)
                if detached:
                    set_message(f"Unseated: {', '.join(s.name for s in detached)}", "warning")
        except SeatingError as e:
            set_message(str(e), "error")
        st.rerun()

    col1, col2, col3 = st.columns(3)
    with col1:
        if st.button("Clear Selected Seats"):
            session.clear_selected_seats()
            st.rerun()
    with col2:
        if len(selected) == 1 and st.button("Delete Seat"):
            try:
                session.delete_seat(selected[0])
            except SeatingError as e:
                set_message(str(e), "error")
            st.rerun()
    with col3:
        if st.button("Deselect All"):
            session.clear_selection()
            st.rerun()

    unseated = session.grid.unseated_students()
    if unseated:
        chosen = st.multiselect(
            "Replace selected seats with",
            [s.uuid for s in unseated],
            format_func=lambda u: session.grid.find_student_by_uuid(u).name,
            max_selections=len(selected),
            key="replace_students",
        )
        if chosen and st.button("Replace"):
            try:
                session.replace_selected(chosen)
            except SeatingError as e:
                set_message(str(e), "error")
            st.rerun()


def _render_deleted_seats(session):
    grid = session.grid
    deleted = [s.id for s in grid.seats if s.deleted]
    if not deleted:
        return
    col1, col2 = st.columns([3, 1])
    with col1:
        seat_id = st.selectbox(
            "Deleted seats", deleted,
            format_func=lambda sid: format_display_coordinate(*parse_seat_id(sid), grid.rows),
            key="restore_seat",
        )
    with col2:
        if st.button("Restore Seat"):
            session.restore_seat(seat_id)
            st.rerun()


def _render_arrangement_controls(session):
    st.subheader("Arrange")
    col1, col2, col3 = st.columns(3)
    with col1:
        order_by_id = st.checkbox("Order by student ID", key="rule_by_id")
        by_height = st.checkbox("Shortest at the front", key="rule_by_height")
        arrangement_type = st.radio("Fill", [ARRANGE_BY_ROW, ARRANGE_BY_COLUMN], horizontal=True)
        if st.button("Apply Rules"):
            session.arrange_by_rules(order_by_id, by_height, arrangement_type)
            st.rerun()
    with col2:
        if st.button("Random"):
            session.arrange_randomly()
            st.rerun()
        if st.button("Same-gender Pairs"):
            session.arrange_by_gender()
            st.rerun()
        if st.button("Select All Seats"):
            session.select_all()
            st.rerun()
    with col3:
        direction = st.selectbox("Rotate", ROTATE_DIRECTIONS, key="rotate_direction")
        if st.button("Rotate"):
            session.rotate(direction)
            st.rerun()
        if st.button("Reset All Seats"):
            session.reset_all_seats()
            st.rerun()


def render(sidebar_state):
    """Render the Classroom tab."""
    st.header("Classroom")
    session = get_session()

    render_session_stats(session.stats())
    st.divider()

    _render_seat_buttons(session, sidebar_state)
    st.divider()
    _render_move_controls(session)
    _render_deleted_seats(session)
    st.divider()
    _render_arrangement_controls(session)
    st.divider()

    fig = seating_heatmap(session.grid, session.selection.as_set(), sidebar_state.show_coordinates)
    col1, col2 = st.columns([3, 1])
    with col1:
        st.plotly_chart(fig, use_container_width=True)
    with col2:
        stats = session.stats()
        st.plotly_chart(
            seating_donut(stats["seated_students"], stats["active_seats"]),
            use_container_width=True,
        )
