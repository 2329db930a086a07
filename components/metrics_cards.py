"""KPI and alert widgets for run summaries."""

import streamlit as st
from typing import Dict, Union

from models.allocation import NeedShortfall


def render_metric_row(metrics: Dict[str, Union[int, str]]):
    """One metric card per label, laid out in a single row."""
    cols = st.columns(len(metrics))
    for col, (label, value) in zip(cols, metrics.items()):
        col.metric(label=label, value=value)


def render_shortfall_card(shortfall: NeedShortfall):
    st.warning(
        f"Requested {shortfall.requested} × {shortfall.housing_type}, "
        f"received {shortfall.granted} ({shortfall.missing} short).",
        icon="🟡",
    )


def render_audit_problem(message: str):
    st.error(message, icon="🔴")
