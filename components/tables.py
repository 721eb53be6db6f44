"""Styled dataframe display helpers."""

import streamlit as st
import pandas as pd
from typing import Optional


def render_styled_table(
    df: pd.DataFrame,
    title: Optional[str] = None,
    height: Optional[int] = None,
    use_container_width: bool = True,
):
    """Render a styled, non-editable dataframe."""
    if title:
        st.subheader(title)
    st.dataframe(df, height=height, use_container_width=use_container_width)


def render_roster_table(df: pd.DataFrame, seat_column: str = "Seat"):
    """Render the roster with unseated students highlighted."""
    def color_seat(val):
        if not val:
            return "background-color: #fff3cd; color: #856404; font-weight: bold"
        return ""

    if seat_column in df.columns:
        styled = df.style.map(color_seat, subset=[seat_column])
        st.dataframe(styled, use_container_width=True)
    else:
        st.dataframe(df, use_container_width=True)
