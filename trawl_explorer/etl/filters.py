# trawl_explorer/etl/filters.py
"""
Survey-domain filters: strata, species codes and years.

Each filter is an independent row predicate, so they can be applied in any
order with the same result. They work on the normalized raw records and on
the cleaned per-tow table (which carries the stratum inside the tow `id`).
"""
from __future__ import annotations
import logging
from typing import Iterable

import pandas as pd

from trawl_explorer.cleaning import as_float
from trawl_explorer.config import (
    ANOMALOUS_YEARS,
    EXCLUDED_SPECIES_CODES,
    EXCLUDED_STRATA,
    MIN_YEAR,
    STRATUM_MAX,
    STRATUM_MIN,
    STRATUM_WIDTH,
)


def stratum_numbers(df: pd.DataFrame) -> pd.Series:
    if "stratum" in df.columns:
        src = df["stratum"]
    else:
        src = df["id"].astype("string").str.slice(-STRATUM_WIDTH)
    return as_float(src)


def filter_strata(
    df: pd.DataFrame,
    lo: int = STRATUM_MIN,
    hi: int = STRATUM_MAX,
    excluded: Iterable[int] = EXCLUDED_STRATA,
) -> pd.DataFrame:
    """Keep strata in [lo, hi] minus the inconsistently sampled ones."""
    stratum = stratum_numbers(df)
    keep = stratum.between(lo, hi) & ~stratum.isin(sorted(excluded))
    return df.loc[keep].reset_index(drop=True)


def filter_species_codes(df: pd.DataFrame, excluded: Iterable[int] = EXCLUDED_SPECIES_CODES) -> pd.DataFrame:
    """Drop invertebrate/non-target taxa and sentinel codes ("000" counts as 0)."""
    keep = ~as_float(df["svspp"]).isin(sorted(excluded))
    return df.loc[keep].reset_index(drop=True)


def filter_years(df: pd.DataFrame, min_year: int = MIN_YEAR) -> pd.DataFrame:
    keep = as_float(df["year"]) >= min_year
    return df.loc[keep].reset_index(drop=True)


def drop_years(df: pd.DataFrame, years: Iterable[int] = ANOMALOUS_YEARS) -> pd.DataFrame:
    keep = ~as_float(df["year"]).isin(sorted(years))
    return df.loc[keep].reset_index(drop=True)


def apply_domain_filters(df: pd.DataFrame) -> pd.DataFrame:
    out = filter_strata(df)
    out = filter_species_codes(out)
    out = filter_years(out)
    logging.info(f"Domain filters kept {len(out):,} of {len(df):,} records")
    return out
