"""Plotly chart builders for the Housing Lottery app."""

import plotly.express as px
import plotly.graph_objects as go
import pandas as pd
from typing import Dict, List

from engine.validator import TypeBalance


def supply_vs_demand_bar(
    balance: List[TypeBalance],
    title: str = "Demand vs Supply by Housing Type",
) -> go.Figure:
    """Grouped bar chart of requested vs available units per type."""
    df = pd.DataFrame([
        {"housing_type": b.housing_type, "demand": b.demand, "supply": b.supply}
        for b in balance
    ])
    fig = px.bar(
        df, x="housing_type", y=["demand", "supply"],
        barmode="group",
        labels={"value": "Units", "housing_type": "Housing Type", "variable": ""},
        title=title,
        color_discrete_map={"demand": "#E8734A", "supply": "#4A90D9"},
    )
    fig.update_layout(legend_title_text="", height=380)
    return fig


def allocation_by_type_bar(
    allocated: Dict[str, int],
    supply: Dict[str, int],
    title: str = "Allocated vs Remaining Units",
) -> go.Figure:
    """Stacked bar of allocated and leftover units per type."""
    types = list(supply) + [t for t in allocated if t not in supply]
    allocated_counts = [allocated.get(t, 0) for t in types]
    remaining = [max(0, supply.get(t, 0) - allocated.get(t, 0)) for t in types]

    fig = go.Figure()
    fig.add_trace(go.Bar(name="Allocated", x=types, y=allocated_counts, marker_color="#2BA39A"))
    fig.add_trace(go.Bar(name="Remaining", x=types, y=remaining, marker_color="#C9D3DD"))
    fig.update_layout(
        barmode="stack",
        title=title,
        xaxis_title="Housing Type",
        yaxis_title="Units",
        height=380,
    )
    return fig
