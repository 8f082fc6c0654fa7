# trawl_explorer/etl/totals.py
from __future__ import annotations
import logging

import pandas as pd

TOW_SPECIES_KEY = ["id", "svspp"]

# Exact duplicates are dropped on these before summing
DISTINCT_COLS = [
    "id", "svspp", "catchsex", "comname", "year", "est_month", "est_day", "season",
    "lat", "lon", "surftemp", "bottemp", "depth", "est_towdate", "biomass_kg",
]

GROUP_COLS = [
    "id", "svspp", "comname", "year", "est_month", "est_day", "season",
    "lat", "lon", "surftemp", "bottemp", "depth", "est_towdate",
]

CLEAN_COLS = [*GROUP_COLS, "total_biomass_kg"]


def species_tow_totals(df: pd.DataFrame) -> pd.DataFrame:
    """
    Collapse sex/length-class rows into one biomass total per species per tow.
    Missing tow attributes (e.g. no bottom temperature) are valid group keys.
    """
    distinct = df[DISTINCT_COLS].drop_duplicates()
    totals = (
        distinct.groupby(GROUP_COLS, dropna=False, sort=True)["biomass_kg"]
        .sum()
        .reset_index()
        .rename(columns={"biomass_kg": "total_biomass_kg"})
    )

    # A tow whose attributes disagree between rows would otherwise split in two
    dup = totals.duplicated(subset=TOW_SPECIES_KEY, keep=False)
    if dup.any():
        n_pairs = totals.loc[dup, TOW_SPECIES_KEY].drop_duplicates().shape[0]
        logging.warning(f"{n_pairs:,} tow/species pairs have inconsistent tow attributes; merging")
        # keep the first row whole so attributes stay as recorded together
        sums = totals.groupby(TOW_SPECIES_KEY, dropna=False, sort=True)["total_biomass_kg"].sum().reset_index()
        firsts = totals.drop_duplicates(subset=TOW_SPECIES_KEY, keep="first").drop(columns="total_biomass_kg")
        totals = firsts.merge(sums, on=TOW_SPECIES_KEY, how="left")

    logging.info(f"Per-tow species totals: {len(totals):,} rows from {len(df):,} records")
    return totals[CLEAN_COLS].reset_index(drop=True)
