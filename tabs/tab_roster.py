"""Tab 2: Roster — upload, edit and export students."""

import streamlit as st

from data.session_store import get_session, set_message
from data.loader import (
    load_file, parse_roster, import_roster, export_layout_df, export_roster_df,
)
from data.sample_data import generate_roster_df
from components.tables import render_roster_table, render_styled_table
from models.student import Student
from engine.coords import parse_display_coordinate
from engine.errors import SeatingError
from config.defaults import GENDER_MALE, GENDER_FEMALE, GENDER_UNSET


def _render_upload(session):
    st.subheader("Import Roster")
    uploaded = st.file_uploader("Roster (CSV or XLSX)", type=["csv", "xlsx", "xls"], key="roster_upload")
    overwrite = st.checkbox("Overwrite students with the same name", key="roster_overwrite")

    col1, col2 = st.columns(2)
    with col1:
        if uploaded is not None and st.button("Import"):
            try:
                result = import_roster(session, parse_roster(load_file(uploaded)), overwrite)
                set_message(
                    f"Imported {result.imported}, skipped {result.skipped}, seated {result.seated}.",
                    "warning" if result.errors else "success",
                )
            except (ValueError, SeatingError) as e:
                set_message(f"Import failed: {e}", "error")
            st.rerun()
    with col2:
        if st.button("Load Sample Roster"):
            result = import_roster(session, parse_roster(generate_roster_df()))
            set_message(f"Loaded {result.imported} sample students.", "success")
            st.rerun()


def _render_add_student(session):
    st.subheader("Add Student")
    with st.form("add_student", clear_on_submit=True):
        name = st.text_input("Name")
        external_id = st.text_input("Student ID")
        gender = st.selectbox("Gender", [GENDER_UNSET, GENDER_MALE, GENDER_FEMALE])
        height = st.number_input("Height (cm)", min_value=0, max_value=250, value=0)
        notes = st.text_input("Notes")
        if st.form_submit_button("Add") and name.strip():
            session.add_student(Student(
                name=name.strip(),
                external_id=external_id.strip(),
                gender=gender,
                height=int(height) or None,
                notes=notes.strip(),
            ))
            st.rerun()


def _render_seat_student(session):
    unseated = session.grid.unseated_students()
    if not unseated:
        return
    st.subheader("Seat a Student")
    col1, col2 = st.columns(2)
    with col1:
        uuid = st.selectbox(
            "Student", [s.uuid for s in unseated],
            format_func=lambda u: session.grid.find_student_by_uuid(u).name,
            key="seat_student",
        )
    with col2:
        coord = st.text_input("Seat (row-col)", key="seat_student_coord")
    if st.button("Seat") and coord:
        seat_id = parse_display_coordinate(coord, session.grid.rows, session.grid.cols)
        try:
            if seat_id is None:
                set_message(f"Invalid seat coordinate: {coord}", "error")
            else:
                session.assign_student(uuid, seat_id)
        except SeatingError as e:
            set_message(str(e), "error")
        st.rerun()


def render(sidebar_state):
    """Render the Roster tab."""
    st.header("Roster")
    session = get_session()

    _render_upload(session)
    st.divider()
    _render_add_student(session)
    _render_seat_student(session)
    st.divider()

    roster_df = export_roster_df(session)
    if roster_df.empty:
        st.info("No students yet.")
        return
    render_roster_table(roster_df)

    names = {s.uuid: s.name for s in session.grid.students}
    col1, col2 = st.columns(2)
    with col1:
        to_delete = st.selectbox("Delete student", list(names), format_func=names.get, key="delete_student")
        if st.button("Delete"):
            session.delete_student(to_delete)
            st.rerun()
    with col2:
        if st.button("Clear All Students"):
            session.clear_all_students()
            st.rerun()

    layout_df = export_layout_df(session)
    render_styled_table(layout_df, title="Seat Layout", height=300)
    st.download_button(
        "Export Layout (CSV)",
        data=layout_df.to_csv(index=False).encode("utf-8"),
        file_name="seating_layout.csv",
        mime="text/csv",
    )
