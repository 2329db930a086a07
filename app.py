"""Housing Allocation Assistant — Streamlit entry point."""

import streamlit as st
import sys
import os

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from components.sidebar import render_sidebar
from config.defaults import APP_SUBTITLE, APP_TITLE
from data.session_store import initialize_session_state
from engine.stages import Stage
from utils.logger import configure_logging
from views import view_data_import, view_results, view_sequence


STAGE_VIEWS = {
    Stage.IMPORTING: view_data_import,
    Stage.SEQUENCING: view_sequence,
    Stage.ALLOCATING: view_sequence,
    Stage.SHOWING_RESULTS: view_results,
}


def main():
    st.set_page_config(
        page_title=APP_TITLE,
        page_icon="🏠",
        layout="wide",
        initial_sidebar_state="expanded",
    )
    configure_logging()

    initialize_session_state()
    sidebar_state = render_sidebar()

    st.title(APP_TITLE)
    st.caption(APP_SUBTITLE)

    STAGE_VIEWS[sidebar_state.stage].render(sidebar_state)


if __name__ == "__main__":
    main()
