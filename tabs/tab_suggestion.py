"""Tab 3: Suggested Layout — paste a layout produced by an external assistant."""

import streamlit as st

from data.session_store import get_session, set_message
from data.suggestion import apply_suggestion
from engine.errors import SeatingError


def render(sidebar_state):
    """Render the Suggested Layout tab."""
    st.header("Suggested Layout")
    session = get_session()

    st.caption(
        'Paste JSON of the form {"assignments": [{"row": 1, "col": 1, '
        '"studentName": "...", "studentId": "..."}]}. Row 1 is the row nearest the lectern.'
    )
    text = st.text_area("Layout JSON", height=240, key="suggestion_text")

    if st.button("Apply Layout", key="apply_suggestion", disabled=not text.strip()):
        try:
            result = apply_suggestion(session, text)
        except (ValueError, SeatingError) as e:
            set_message(f"Could not apply layout: {e}", "error")
        else:
            message = f"Seated {result.seated} students."
            if result.errors:
                message += f" {result.failed} entries skipped: " + "; ".join(result.errors)
            set_message(message, "warning" if result.errors else "success")
        st.rerun()
