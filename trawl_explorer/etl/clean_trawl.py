# trawl_explorer/etl/clean_trawl.py
"""
ETL for the NEFSC bottom-trawl survey extract.

Usage:
  python -m trawl_explorer.etl.clean_trawl \
    --input data/raw/survdat.csv \
    --species data/raw/sppclass.csv \
    --output data/processed/clean_survey.parquet

Steps, each a pure DataFrame -> DataFrame function:
  normalize -> reconcile zero values -> domain filters -> per-tow species
  totals -> species eligibility -> drop anomalous years

The output has one row per tow and species with `total_biomass_kg`
summed over sex classes, for eligible species only.
"""

from __future__ import annotations
import argparse
import logging
from pathlib import Path

import pandas as pd

from trawl_explorer.cleaning import normalize_records, reconcile_zero_values
from trawl_explorer.config import CLEAN_SURVEY_PATH, RAW_SURVEY_PATH, SPECIES_LOOKUP_PATH
from trawl_explorer.etl.eligibility import filter_eligible_species
from trawl_explorer.etl.filters import apply_domain_filters, drop_years
from trawl_explorer.etl.totals import species_tow_totals
from trawl_explorer.io import read_table, write_table


def _setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%H:%M:%S",
    )


def finalize(df: pd.DataFrame) -> pd.DataFrame:
    """Drop the anomalous survey years and sentence-case species names."""
    out = drop_years(df)
    unnamed = sorted(out.loc[out["comname"].isna(), "svspp"].dropna().unique().tolist())
    if unnamed:
        logging.warning(f"Eligible species codes without a lookup name (hidden from summaries): {unnamed}")
    out["comname"] = out["comname"].astype("string").str.capitalize()
    return out


def clean_survey(
    raw: pd.DataFrame,
    species: pd.DataFrame,
    counts: dict[str, int] | None = None,
) -> pd.DataFrame:
    """
    Run the whole cleaning pipeline on in-memory tables.
    If `counts` is given it is filled with the row count after each stage,
    so callers can audit how many records each step dropped.
    """
    counts = {} if counts is None else counts
    counts["raw"] = len(raw)

    df = normalize_records(raw, species)
    df = reconcile_zero_values(df)
    counts["reconciled"] = len(df)

    df = apply_domain_filters(df)
    counts["domain"] = len(df)

    df = species_tow_totals(df)
    counts["tow_totals"] = len(df)

    df = filter_eligible_species(df)
    counts["eligible"] = len(df)

    df = finalize(df)
    counts["clean"] = len(df)
    return df


def refilter(clean: pd.DataFrame) -> pd.DataFrame:
    """Re-apply the record-level filters to an already cleaned table (a no-op on pipeline output)."""
    return drop_years(apply_domain_filters(clean))


def summarize(df: pd.DataFrame) -> dict:
    if df.empty:
        return {"rows": 0}
    return {
        "rows": int(len(df)),
        "years_span": (int(df["year"].min()), int(df["year"].max())) if df["year"].notna().any() else None,
        "tows": int(df["id"].nunique()),
        "species_count": int(df["svspp"].nunique()),
        "total_biomass_kg": float(df["total_biomass_kg"].sum()),
    }


def main():
    parser = argparse.ArgumentParser(description="ETL: clean & filter bottom-trawl survey catch data.")
    parser.add_argument("--input", type=Path, default=RAW_SURVEY_PATH, help="Raw survey extract (csv/parquet/feather)")
    parser.add_argument("--species", type=Path, default=SPECIES_LOOKUP_PATH, help="Species code lookup table")
    parser.add_argument("--output", type=Path, default=CLEAN_SURVEY_PATH, help="Destination for the cleaned snapshot")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    _setup_logging(args.verbose)

    logging.info("Reading raw survey extract…")
    raw = read_table(args.input)
    logging.info(f"Raw shape: {raw.shape[0]:,} rows × {raw.shape[1]} cols")
    species = read_table(args.species)

    counts: dict[str, int] = {}
    clean = clean_survey(raw, species, counts=counts)
    logging.info(f"Rows after each stage: {counts}")

    if clean.empty:
        logging.warning("Cleaned dataset is empty. Check the input extract and species lookup.")

    path = write_table(clean, args.output)
    logging.info(f"[Summary] {summarize(clean)} -> {path}")


if __name__ == "__main__":
    main()
