"""Classroom Seating Planner — Streamlit entry point."""

import logging
import streamlit as st
import sys
import os

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from components.sidebar import render_sidebar
from components.metrics_cards import render_alert_card
from data.session_store import initialize_session_state, pop_message
from tabs import (
    tab_classroom,
    tab_roster,
    tab_suggestion,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def main():
    st.set_page_config(
        page_title="Classroom Seating",
        page_icon="🏫",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    initialize_session_state()
    sidebar_state = render_sidebar()

    message = pop_message()
    if message:
        level, text = message
        render_alert_card(text, level)

    tab1, tab2, tab3 = st.tabs([
        "🪑 Classroom",
        "👥 Roster",
        "🤖 Suggested Layout",
    ])

    with tab1:
        tab_classroom.render(sidebar_state)
    with tab2:
        tab_roster.render(sidebar_state)
    with tab3:
        tab_suggestion.render(sidebar_state)


if __name__ == "__main__":
    main()
