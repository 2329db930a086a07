"""Global sidebar: stage progress, run summary and the audit trail."""

import streamlit as st
from dataclasses import dataclass

from config.defaults import APP_TITLE, STAGE_LABELS
from data.session_store import get_audit_log, get_state, reset_run
from engine.stages import Stage


@dataclass
class SidebarState:
    stage: Stage


def render_sidebar() -> SidebarState:
    """Render the sidebar and return the stage the main area should show."""
    with st.sidebar:
        st.title(APP_TITLE)
        st.divider()

        state = get_state()
        stages = list(Stage)
        current_idx = stages.index(state.stage)
        for idx, stage in enumerate(stages):
            label = STAGE_LABELS[stage.value]
            if idx < current_idx:
                st.markdown(f"✅ {label}")
            elif idx == current_idx:
                st.markdown(f"**▶ {label}**")
            else:
                st.markdown(f"◻️ {label}")

        st.divider()

        if state.stage is Stage.IMPORTING:
            st.warning("No data loaded")
        else:
            st.caption(f"Participants: {len(state.participants)}")
            st.caption(f"Housing units: {len(state.units)}")
            if st.button("Discard run and start over", key="sidebar_reset"):
                reset_run("Discarded from sidebar")
                st.rerun()

        audit_log = get_audit_log()
        if audit_log:
            with st.expander(f"Audit trail ({len(audit_log)})", expanded=False):
                for entry in reversed(audit_log):
                    st.caption(
                        f"{entry.timestamp:%H:%M:%S} · **{entry.action}** · {entry.detail}"
                    )

    return SidebarState(stage=get_state().stage)
