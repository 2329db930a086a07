"""Stages 2 and 3: draw the priority sequence, then allocate units."""

import streamlit as st

from components.charts import supply_vs_demand_bar
from components.metrics_cards import render_metric_row
from components.tables import participants_frame, render_balance_table, render_styled_table
from data.session_store import add_audit_entry, dispatch, get_import_warnings, get_state
from engine.allocation_engine import allocate
from engine.randomizer import draw_sequence
from engine.stages import SequenceDrawn, Stage, UnitsAllocated
from engine.validator import type_balance


def _render_summary(state):
    total_requested = sum(p.total_requested for p in state.participants)
    types = {u.housing_type for u in state.units}
    render_metric_row({
        "Participants": len(state.participants),
        "Units Requested": total_requested,
        "Units Available": len(state.units),
        "Housing Types": len(types),
    })

    with st.expander("Supply vs Demand", expanded=False):
        balance = type_balance(state.participants, state.units)
        render_balance_table(balance)
        st.plotly_chart(supply_vs_demand_bar(balance), use_container_width=True)


def render(sidebar_state):
    """Render the sequence draw / allocation stage."""
    state = get_state()
    is_sequenced = state.stage is Stage.ALLOCATING

    if is_sequenced:
        st.header("Stage 3: Allocate Units")
        st.caption(
            "The priority sequence has been drawn. Allocate units to every participant "
            "in sequence order; units of each type are drawn at random."
        )
    else:
        st.header("Stage 2: Draw Sequence")
        st.success(
            f"Loaded {len(state.participants)} participants and {len(state.units)} "
            "housing units. Validation passed."
        )
        for w in get_import_warnings():
            st.warning(w)
        st.caption("Draw a random sequence number for every participant.")

    _render_summary(state)

    render_styled_table(
        participants_frame(state.participants),
        title=f"Participants ({len(state.participants)})",
    )

    if not is_sequenced:
        if st.button("Draw Sequence", type="primary", key="btn_draw"):
            with st.spinner("Drawing sequence..."):
                ranked = draw_sequence(state.participants)
                dispatch(SequenceDrawn(tuple(ranked)))
            order = ", ".join(f"{p.rank}:{p.name}" for p in ranked)
            add_audit_entry("draw_sequence", order)
            st.rerun()
    else:
        if st.button("Allocate Units", type="primary", key="btn_allocate"):
            with st.spinner("Allocating units..."):
                results = allocate(state.participants, state.units)
                dispatch(UnitsAllocated(tuple(results)))
            shortfalls = sum(len(r.shortfalls) for r in results)
            add_audit_entry(
                "allocate",
                f"{sum(r.unit_count for r in results)} units to {len(results)} participants; "
                f"{shortfalls} shortfall(s)",
            )
            st.rerun()
