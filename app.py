# app.py
from __future__ import annotations

import streamlit as st
import pandas as pd
from pathlib import Path

from trawl_explorer.config import CLEAN_SURVEY_PATH
from trawl_explorer.io import load_clean_survey
from trawl_explorer.queries import (
    annual_summary,
    decade_centers,
    seasonal_summary,
    select_species,
    species_options,
)
from trawl_explorer.viz.charts import trend_line
from trawl_explorer.viz.maps import render_center_map

# -----------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# -----------------------------------------------------------------------------
st.set_page_config(page_title="Gulf of Maine Trawl Species Explorer", layout="wide")

# -----------------------------------------------------------------------------
# Data loading
# -----------------------------------------------------------------------------
@st.cache_data(show_spinner=False)
def load_summaries(path: Path) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Cleaned survey -> (annual summary, seasonal summary)."""
    clean = load_clean_survey(path)
    return annual_summary(clean), seasonal_summary(clean)


st.title("Gulf of Maine Trawl Species Explorer")

try:
    annual, seasonal = load_summaries(CLEAN_SURVEY_PATH)
except FileNotFoundError:
    st.warning(f"No cleaned survey found at {CLEAN_SURVEY_PATH}. Run `python -m trawl_explorer.etl.clean_trawl` first.")
    st.stop()

options = species_options(annual)
if not options:
    st.warning("The cleaned survey contains no eligible species.")
    st.stop()

with st.sidebar:
    st.header("Species")
    species = st.selectbox("Species", options, index=0)

sp_annual = select_species(annual, species)
sp_seasonal = select_species(seasonal, species)

tabs = st.tabs(["Trends", "Map"])

# -----------------------------------------------------------------------------
# Trends Tab
# -----------------------------------------------------------------------------
with tabs[0]:
    st.subheader(f"{species}: annual trends")
    c1, c2 = st.columns(2)
    c1.plotly_chart(trend_line(sp_annual, "avg_biomass", species), use_container_width=True)
    c2.plotly_chart(trend_line(sp_annual, "avg_lat", species), use_container_width=True)
    c3, c4 = st.columns(2)
    c3.plotly_chart(trend_line(sp_annual, "avg_bot", species), use_container_width=True)
    c4.plotly_chart(trend_line(sp_annual, "avg_depth", species), use_container_width=True)

# -----------------------------------------------------------------------------
# Map Tab
# -----------------------------------------------------------------------------
with tabs[1]:
    st.subheader(f"{species}: biomass-weighted centre by season and decade")
    centers = decade_centers(sp_seasonal)
    if centers.empty:
        st.info("No seasonal data for this species.")
    else:
        st.pydeck_chart(render_center_map(centers), use_container_width=True)
        with st.expander("Seasonal summary"):
            st.dataframe(sp_seasonal, use_container_width=True)
