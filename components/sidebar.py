"""Global sidebar controls: layout size, history, and save/load."""

import streamlit as st
from dataclasses import dataclass

from data.session_store import (
    get_session, set_show_coordinates, get_show_coordinates, set_message,
    export_session_json, import_session_json,
)
from engine.errors import SeatingError
from config.defaults import MIN_ROWS, MAX_ROWS, MIN_COLS, MAX_COLS


@dataclass
class SidebarState:
    show_coordinates: bool
    multi_select: bool


def render_sidebar() -> SidebarState:
    """Render the global sidebar controls and return current state."""
    session = get_session()
    grid = session.grid

    with st.sidebar:
        st.title("Classroom Seating")
        st.divider()

        # Layout size
        rows = st.number_input("Rows", MIN_ROWS, MAX_ROWS, grid.rows, key="sidebar_rows")
        cols = st.number_input("Columns", MIN_COLS, MAX_COLS, grid.cols, key="sidebar_cols")
        if st.button("Apply Layout", use_container_width=True):
            if (rows, cols) != (grid.rows, grid.cols):
                try:
                    session.resize_layout(int(rows), int(cols))
                    set_message(f"Layout changed to {rows} x {cols}.", "success")
                except SeatingError as e:
                    set_message(str(e), "error")
                st.rerun()

        st.divider()

        # History
        col1, col2 = st.columns(2)
        with col1:
            if st.button("↶ Undo", disabled=not session.can_undo(), use_container_width=True):
                session.undo()
                st.rerun()
        with col2:
            if st.button("↷ Redo", disabled=not session.can_redo(), use_container_width=True):
                session.redo()
                st.rerun()

        show_coords = st.toggle("Show coordinates", value=get_show_coordinates())
        set_show_coordinates(show_coords)
        multi_select = st.toggle("Multi-select (Ctrl-click)", value=False, key="sidebar_multi")

        st.divider()

        # Save / load
        st.download_button(
            "Save Session",
            data=export_session_json(),
            file_name="seating_session.json",
            mime="application/json",
            use_container_width=True,
        )
        uploaded = st.file_uploader("Load Session", type=["json"], key="sidebar_load")
        if uploaded is not None and st.button("Load", use_container_width=True):
            try:
                import_session_json(uploaded.getvalue().decode("utf-8"))
                set_message("Session loaded.", "success")
            except (ValueError, KeyError) as e:
                set_message(f"Could not load session: {e}", "error")
            st.rerun()

    return SidebarState(
        show_coordinates=show_coords,
        multi_select=multi_select,
    )
