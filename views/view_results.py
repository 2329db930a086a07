"""Stage 4: Results — per-participant breakdown, audit checks and export."""

import streamlit as st

from components.charts import allocation_by_type_bar
from components.metrics_cards import render_audit_problem, render_metric_row, render_shortfall_card
from components.tables import render_styled_table, units_frame
from config.defaults import EXPORT_FILE_STEM
from data.session_store import add_audit_entry, get_state, reset_run
from engine.results import (
    aggregate_results, build_export_df, check_conservation,
    export_csv_bytes, export_excel_bytes, summarize_by_type,
)
from engine.validator import aggregate_supply


def _render_participant(result):
    title = f"#{result.rank} · {result.participant_name} · {result.unit_count} unit(s)"
    with st.expander(title, expanded=False):
        if result.allocated_units:
            render_styled_table(units_frame(result))
        else:
            st.caption("No units allocated.")
        for s in result.shortfalls:
            render_shortfall_card(s)


def render(sidebar_state):
    """Render the results stage."""
    state = get_state()
    results = aggregate_results(state.results)

    st.header("Allocation Results")
    st.caption("Final randomized allocation, in sequence order.")

    allocated = summarize_by_type(results)
    shortfalls = [s for r in results for s in r.shortfalls]
    render_metric_row({
        "Participants": len(results),
        "Units Allocated": sum(allocated.values()),
        "Units Unallocated": len(state.units) - sum(allocated.values()),
        "Shortfalls": len(shortfalls),
    })

    problems = check_conservation(results, state.units)
    if problems:
        for p in problems:
            render_audit_problem(p)
    else:
        st.success("Audit check passed: every unit was allocated at most once.")

    for result in results:
        _render_participant(result)

    st.divider()
    st.plotly_chart(
        allocation_by_type_bar(allocated, aggregate_supply(state.units)),
        use_container_width=True,
    )

    st.subheader("Export")
    render_styled_table(build_export_df(results))

    col_csv, col_xlsx = st.columns(2)
    with col_csv:
        if st.download_button(
            "Download CSV",
            data=export_csv_bytes(results),
            file_name=f"{EXPORT_FILE_STEM}.csv",
            mime="text/csv",
            key="btn_export_csv",
        ):
            add_audit_entry("export", "CSV")
    with col_xlsx:
        if st.download_button(
            "Download Excel",
            data=export_excel_bytes(results),
            file_name=f"{EXPORT_FILE_STEM}.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            key="btn_export_xlsx",
        ):
            add_audit_entry("export", "Excel")

    st.divider()
    if st.button("Start Over", key="btn_start_over"):
        reset_run("Started a new run")
        st.rerun()
