"""Typed wrapper around st.session_state for the editing session."""

import streamlit as st
from typing import Optional

from engine.session import EditingSession
from engine.grid import GridModel
from data import persistence
from config.defaults import DEFAULT_ROWS, DEFAULT_COLS


def initialize_session_state():
    """Initialize all session state keys with defaults."""
    defaults = {
        "editing_session": None,
        "show_coordinates": False,
        "last_message": None,
    }
    for key, default in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default
    if st.session_state["editing_session"] is None:
        st.session_state["editing_session"] = EditingSession(GridModel(DEFAULT_ROWS, DEFAULT_COLS))


# --- Getters ---

def get_session() -> EditingSession:
    return st.session_state["editing_session"]


def get_show_coordinates() -> bool:
    return st.session_state.get("show_coordinates", False)


def pop_message() -> Optional[tuple]:
    message = st.session_state.get("last_message")
    st.session_state["last_message"] = None
    return message


# --- Setters ---

def set_session(session: EditingSession):
    st.session_state["editing_session"] = session


def set_show_coordinates(show: bool):
    st.session_state["show_coordinates"] = show


def set_message(text: str, level: str = "info"):
    st.session_state["last_message"] = (level, text)


# --- Save / load ---

def export_session_json() -> str:
    return persistence.dumps(get_session(), indent=2)


def import_session_json(text: str):
    set_session(persistence.loads(text))
