# trawl_explorer/etl/eligibility.py
"""
Species eligibility: keep only species sampled consistently enough to carry a
time series.

A species must be caught in at least `min_tows` tows in each season of a year
for that year to count, and must have enough such years over the survey span.
"""
from __future__ import annotations
import logging

import pandas as pd

from trawl_explorer.config import (
    MIN_TOWS_PER_SEASON,
    REQUIRED_SEASONS,
    YEAR_COVERAGE_SLACK_PCT,
)


def coverage_threshold(span: int, slack_pct: int = YEAR_COVERAGE_SLACK_PCT) -> int:
    """
    Covered years a species needs: span - floor(slack_pct% of span).
    A zero span (single survey year) needs one covered year.
    """
    span = int(span)
    if span <= 0:
        return 1
    return span - (span * slack_pct) // 100


def tows_per_season(df: pd.DataFrame, min_tows: int = MIN_TOWS_PER_SEASON) -> pd.DataFrame:
    """Distinct tows per (svspp, year, season), keeping combinations with >= min_tows."""
    counts = (
        df.groupby(["svspp", "year", "season"])["id"]
        .nunique()
        .reset_index(name="tows")
    )
    return counts[counts["tows"] >= min_tows].reset_index(drop=True)


def covered_years(tow_counts: pd.DataFrame, required_seasons: int = REQUIRED_SEASONS) -> pd.Series:
    """Number of years per species in which every required season cleared the tow bar."""
    seasons = (
        tow_counts.groupby(["svspp", "year"])["season"]
        .nunique()
        .reset_index(name="seasons")
    )
    both = seasons[seasons["seasons"] == required_seasons]
    return both.groupby("svspp")["year"].nunique()


def eligible_species(
    df: pd.DataFrame,
    *,
    min_tows: int = MIN_TOWS_PER_SEASON,
    required_seasons: int = REQUIRED_SEASONS,
    slack_pct: int = YEAR_COVERAGE_SLACK_PCT,
) -> list[str]:
    tow_counts = tows_per_season(df, min_tows=min_tows)
    if tow_counts.empty:
        logging.warning(f"No species reached {min_tows} tows in any season; nothing is eligible")
        return []

    span = int(tow_counts["year"].max()) - int(tow_counts["year"].min())
    cut = coverage_threshold(span, slack_pct=slack_pct)
    years = covered_years(tow_counts, required_seasons=required_seasons)
    eligible = sorted(years[years >= cut].index.tolist())

    logging.info(
        f"Eligibility: span {span} years, need {cut} covered years; "
        f"{len(eligible):,} of {df['svspp'].nunique():,} species eligible"
    )
    return eligible


def filter_eligible_species(df: pd.DataFrame, **kwargs) -> pd.DataFrame:
    """Keep rows of eligible species; kwargs are passed to `eligible_species`."""
    eligible = eligible_species(df, **kwargs)
    return df.loc[df["svspp"].isin(eligible)].reset_index(drop=True)
