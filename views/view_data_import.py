"""Stage 1: Data import — upload participant needs and housing stock, then validate."""

import streamlit as st
import pandas as pd

from components.charts import supply_vs_demand_bar
from components.tables import render_balance_table
from config.defaults import HOUSING_COLUMNS, PARTICIPANT_COLUMNS, SUPPORTED_UPLOAD_TYPES
from data.loader import load_file, parse_housing, parse_participants
from data.sample_data import generate_housing_df, generate_participants_df
from data.session_store import add_audit_entry, dispatch, set_import_warnings
from data.validator import import_warnings, validate_housing_table, validate_participant_table
from engine.errors import SupplyValidationError
from engine.stages import DataLoaded
from engine.validator import type_balance, validate_supply
from utils.logger import get_logger


logger = get_logger(__name__)


def _load_and_validate(participants_df: pd.DataFrame, housing_df: pd.DataFrame) -> bool:
    """Validate both tables, check supply covers demand, and start the run."""
    errors = []
    p_result = validate_participant_table(participants_df)
    h_result = validate_housing_table(housing_df)
    for r in [p_result, h_result]:
        errors.extend(r.errors)

    if errors:
        for e in errors:
            st.error(e)
        return False

    participant_import = parse_participants(participants_df)
    housing_import = parse_housing(housing_df)
    participants = participant_import.participants
    units = housing_import.units

    warnings = p_result.warnings + h_result.warnings + import_warnings(
        participant_import.dropped_rows, housing_import.dropped_rows,
    )
    for w in warnings:
        st.warning(w)

    if not participants:
        st.error("Participants: No valid participant rows were found.")
        return False

    try:
        validate_supply(participants, units)
    except SupplyValidationError as e:
        st.error(str(e))
        add_audit_entry("import_rejected", str(e))
        balance = type_balance(participants, units)
        render_balance_table(balance)
        st.plotly_chart(supply_vs_demand_bar(balance), use_container_width=True)
        return False

    dispatch(DataLoaded(tuple(participants), tuple(units)))
    set_import_warnings(warnings)
    add_audit_entry(
        "import",
        f"{len(participants)} participants, {len(units)} housing units; validation passed",
    )
    return True


def render(sidebar_state):
    """Render the data import stage."""
    st.header("Stage 1: Data Import")
    st.caption("Upload the participant requests and the available housing stock (CSV or XLSX).")

    col1, col2 = st.columns(2)
    with col1:
        participants_file = st.file_uploader(
            "Participant requests",
            type=SUPPORTED_UPLOAD_TYPES,
            key="upload_participants",
            help=f"Columns: {', '.join(PARTICIPANT_COLUMNS)}. The first row is a header.",
        )
    with col2:
        housing_file = st.file_uploader(
            "Available housing",
            type=SUPPORTED_UPLOAD_TYPES,
            key="upload_housing",
            help=f"Columns: {', '.join(HOUSING_COLUMNS)}. The first row is a header.",
        )

    col_upload, col_sample = st.columns(2)
    with col_upload:
        if st.button("Load & Validate", type="primary", key="btn_load"):
            if participants_file and housing_file:
                loaded = False
                try:
                    with st.spinner("Processing..."):
                        p_df = load_file(participants_file, len(PARTICIPANT_COLUMNS))
                        h_df = load_file(housing_file, len(HOUSING_COLUMNS))
                        loaded = _load_and_validate(p_df, h_df)
                except ValueError as e:
                    logger.warning("Could not read uploaded files: %s", e)
                    st.error(f"Error loading files: {e}")
                if loaded:
                    st.rerun()
            else:
                st.warning("Please upload both files.")

    with col_sample:
        if st.button("Load Sample Data", key="btn_sample"):
            if _load_and_validate(generate_participants_df(), generate_housing_df()):
                st.rerun()
