"""Dataframe display helpers for participants, balances and results."""

import streamlit as st
import pandas as pd
from typing import List, Optional, Sequence

from engine.validator import TypeBalance
from models.allocation import AllocationResult
from models.participant import Participant


def participants_frame(participants: Sequence[Participant]) -> pd.DataFrame:
    rows = [{
        "Rank": p.rank if p.rank is not None else "",
        "Participant": p.name,
        "Needs": p.needs_label,
        "Units Requested": p.total_requested,
    } for p in participants]
    df = pd.DataFrame(rows, columns=["Rank", "Participant", "Needs", "Units Requested"])
    if not any(p.rank is not None for p in participants):
        df = df.drop(columns=["Rank"])
    return df


def balance_frame(balance: List[TypeBalance]) -> pd.DataFrame:
    return pd.DataFrame([{
        "Housing Type": b.housing_type,
        "Demand": b.demand,
        "Supply": b.supply,
        "Surplus": b.surplus,
    } for b in balance], columns=["Housing Type", "Demand", "Supply", "Surplus"])


def units_frame(result: AllocationResult) -> pd.DataFrame:
    return pd.DataFrame([{
        "Type": u.housing_type,
        "District": u.district,
        "Building": u.building,
        "Floor": u.floor,
        "Room": u.room_number,
        "Area (m²)": u.area,
        "Construction Area (m²)": u.construction_area,
    } for u in result.allocated_units])


def render_styled_table(df: pd.DataFrame, title: Optional[str] = None):
    """Render a non-editable dataframe without the index column."""
    if title:
        st.subheader(title)
    st.dataframe(df, use_container_width=True, hide_index=True)


def render_balance_table(balance: List[TypeBalance]):
    """Balance table with shortages highlighted."""
    def color_surplus(val):
        try:
            v = float(val)
            if v < 0:
                return "color: #cc0000; font-weight: bold"
            elif v == 0:
                return "color: #856404"
        except (ValueError, TypeError):
            pass
        return ""

    df = balance_frame(balance)
    styled = df.style.map(color_surplus, subset=["Surplus"])
    st.dataframe(styled, use_container_width=True, hide_index=True)
