"""Reusable KPI metric card widgets."""

import streamlit as st


def render_metric_row(metrics: list[dict]):
    """Render a row of metric cards.

    Each metric dict should have: label, value, and optionally delta, delta_color.
    """
    cols = st.columns(len(metrics))
    for col, m in zip(cols, metrics):
        with col:
            st.metric(
                label=m["label"],
                value=m["value"],
                delta=m.get("delta"),
                delta_color=m.get("delta_color", "normal"),
            )


def render_session_stats(stats: dict):
    render_metric_row([
        {"label": "Students", "value": stats["total_students"]},
        {"label": "Seated", "value": stats["seated_students"]},
        {"label": "Unseated", "value": stats["unseated_students"]},
        {"label": "Free Seats", "value": stats["available_seats"]},
    ])


def render_alert_card(message: str, level: str = "warning"):
    """Render an alert card with appropriate styling."""
    if level == "error":
        st.error(message, icon="🔴")
    elif level == "warning":
        st.warning(message, icon="🟡")
    elif level == "success":
        st.success(message, icon="🟢")
    else:
        st.info(message, icon="🔵")
