# trawl_explorer/queries/aggregations.py
from __future__ import annotations
from typing import Sequence

import numpy as np
import pandas as pd

from trawl_explorer.cleaning import as_float
from trawl_explorer.queries.filters import select_species
from trawl_explorer.validators.schema import CLEAN_REQUIRED_COLS, validate_frame

WEIGHT_COL = "total_biomass_kg"

# output stat -> cleaned column, each weighted by biomass
WEIGHTED_STATS = {
    "avg_lat": "lat",
    "avg_lon": "lon",
    "avg_sst": "surftemp",
    "avg_bot": "bottemp",
    "avg_depth": "depth",
}

SUMMARY_COLS = ["decade", "total_biomass", "avg_biomass", "biomass_sd", *WEIGHTED_STATS]


def decade_of(year):
    """1987 -> 1980. Works on scalars and Series."""
    return (year // 10) * 10


def weighted_mean(values: Sequence[float] | pd.Series, weights: Sequence[float] | pd.Series) -> float:
    """
    Sum(x*w) / Sum(w) over positions where both x and w are present.
    NaN when no usable weight remains.
    """
    x = as_float(pd.Series(values)).to_numpy()
    w = as_float(pd.Series(weights)).to_numpy()
    mask = ~np.isnan(x) & ~np.isnan(w)
    total = w[mask].sum()
    if total == 0:
        return np.nan
    return float((x[mask] * w[mask]).sum() / total)


def summarize_species(df: pd.DataFrame, by_season: bool = False) -> pd.DataFrame:
    """
    Biomass-weighted summary per species and year (and season when `by_season`).

    Returns one row per group with:
        decade, total_biomass, avg_biomass, biomass_sd (sample sd),
        avg_lat, avg_lon, avg_sst, avg_bot, avg_depth (biomass-weighted)
    Rows missing a field are left out of that field's weighted mean only.
    """
    validate_frame(df, CLEAN_REQUIRED_COLS, "cleaned survey")
    keys = ["comname", "season", "year"] if by_season else ["comname", "year"]

    tmp = df[keys].copy()
    tmp["year"] = pd.to_numeric(tmp["year"], errors="coerce").astype("Int64")
    w = as_float(df[WEIGHT_COL])
    tmp[WEIGHT_COL] = w

    agg = {
        "total_biomass": (WEIGHT_COL, "sum"),
        "avg_biomass": (WEIGHT_COL, "mean"),
        "biomass_sd": (WEIGHT_COL, "std"),
    }
    for stat, col in WEIGHTED_STATS.items():
        x = as_float(df[col])
        mask = x.notna() & w.notna()
        tmp[f"{stat}_wx"] = (x * w).where(mask, 0.0)
        tmp[f"{stat}_w"] = w.where(mask, 0.0)
        agg[f"{stat}_wx"] = (f"{stat}_wx", "sum")
        agg[f"{stat}_w"] = (f"{stat}_w", "sum")

    grouped = tmp.groupby(keys, as_index=False).agg(**agg)
    for stat in WEIGHTED_STATS:
        denom = grouped[f"{stat}_w"].where(grouped[f"{stat}_w"] != 0)
        grouped[stat] = grouped[f"{stat}_wx"] / denom

    grouped["decade"] = decade_of(grouped["year"])
    return grouped[[*keys, *SUMMARY_COLS]].sort_values(keys).reset_index(drop=True)


def annual_summary(df: pd.DataFrame) -> pd.DataFrame:
    return summarize_species(df, by_season=False)


def seasonal_summary(df: pd.DataFrame) -> pd.DataFrame:
    return summarize_species(df, by_season=True)


def decade_centers(seasonal: pd.DataFrame, species: str | None = None) -> pd.DataFrame:
    """Biomass-weighted centre of a species per season and decade, for the map view."""
    q = select_species(seasonal, species) if species else seasonal
    rows = []
    for (season, decade), g in q.groupby(["season", "decade"], sort=True):
        rows.append({
            "season": season,
            "decade": int(decade),
            "lat": weighted_mean(g["avg_lat"], g["total_biomass"]),
            "lon": weighted_mean(g["avg_lon"], g["total_biomass"]),
            "total_biomass": float(g["total_biomass"].sum()),
        })
    return pd.DataFrame(rows, columns=["season", "decade", "lat", "lon", "total_biomass"])
