# trawl_explorer/viz/charts.py
from __future__ import annotations
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

STAT_LABELS = {
    "total_biomass": "Total biomass (kg)",
    "avg_biomass": "Mean biomass per tow (kg)",
    "avg_lat": "Biomass-weighted latitude",
    "avg_lon": "Biomass-weighted longitude",
    "avg_sst": "Biomass-weighted surface temp (°C)",
    "avg_bot": "Biomass-weighted bottom temp (°C)",
    "avg_depth": "Biomass-weighted depth (m)",
}


def format_stat(stat: str) -> str:
    return STAT_LABELS.get(stat, stat)


def trend_line(annual: pd.DataFrame, stat: str, species: str) -> go.Figure:
    """Yearly trend of one summary statistic for the selected species."""
    label = format_stat(stat)
    if annual.empty:
        fig = go.Figure()
        fig.update_layout(title=f"{species}: no data")
        return fig

    fig = px.line(
        annual.sort_values("year"),
        x="year",
        y=stat,
        markers=True,
        title=f"{species}: {label}",
        labels={"year": "Year", stat: label},
    )
    if stat == "avg_biomass" and "biomass_sd" in annual.columns:
        fig.update_traces(error_y=dict(type="data", array=annual.sort_values("year")["biomass_sd"].to_numpy(), visible=True))
    return fig
