# trawl_explorer/cleaning.py
from __future__ import annotations
import logging
import re

import pandas as pd

from trawl_explorer.config import (
    ABUNDANCE_FLOOR,
    BIOMASS_FLOOR_KG,
    CRUISE_WIDTH,
    STATION_WIDTH,
    STRATUM_WIDTH,
    SVSPP_WIDTH,
)
from trawl_explorer.validators.schema import (
    RAW_REQUIRED_COLS,
    SPECIES_REQUIRED_COLS,
    validate_frame,
)

NUMERIC_COLS = ["lat", "lon", "surftemp", "bottemp", "depth", "biomass_kg", "abundance"]

# YYYY-MM-DD, optionally followed by a time part
_TOWDATE_RE = r"^\s*(\d{4})-(\d{2})-(\d{2})(?:[ T].*)?$"


def as_float(s: pd.Series) -> pd.Series:
    """Numeric view of a column; anything unparseable becomes NaN."""
    return pd.to_numeric(s, errors="coerce").astype("float64")


def _snake(name) -> str:
    s = str(name).strip().lower()
    s = re.sub(r"[^a-z0-9]+", "_", s)
    return s.strip("_")


def clean_names(df: pd.DataFrame) -> pd.DataFrame:
    """Lower snake-case every header (`EST_TOWDATE`, `Est TowDate` -> `est_towdate`)."""
    return df.rename(columns=_snake)


def zero_pad(s: pd.Series, width: int) -> pd.Series:
    """
    Left-pad codes with zeros to a fixed width.
    Accepts ints, strings and floats read from CSV (1010.0 -> "1010").
    Missing and blank values stay missing.
    """
    out = (
        s.astype("string")
        .str.strip()
        .str.replace(r"\.0+$", "", regex=True)
        .replace("", pd.NA)
    )
    return out.str.zfill(width)


def make_tow_id(cruise: pd.Series, station: pd.Series, stratum: pd.Series) -> pd.Series:
    """cruise6 (6) + station (3) + stratum (4); missing if any part is missing."""
    return (
        zero_pad(cruise, CRUISE_WIDTH)
        + zero_pad(station, STATION_WIDTH)
        + zero_pad(stratum, STRATUM_WIDTH)
    )


def parse_tow_date(dates: pd.Series) -> tuple[pd.Series, pd.Series]:
    """
    Split tow dates into (month, day) as nullable integers.
    Month is characters 6-7 and day the last two characters of the date part.
    Malformed dates give missing values instead of raising.
    """
    if pd.api.types.is_datetime64_any_dtype(dates):
        dates = dates.dt.strftime("%Y-%m-%d")

    parts = dates.astype("string").str.extract(_TOWDATE_RE)
    month = as_float(parts[1])
    day = as_float(parts[2])
    month = month.where(month.between(1, 12)).astype("Int64")
    day = day.where(day.between(1, 31)).astype("Int64")

    bad = int((month.isna() | day.isna()).sum())
    if bad:
        logging.warning(f"{bad:,} tow dates are missing or not YYYY-MM-DD; month/day left empty")
    return month, day


def normalize_species_lookup(species: pd.DataFrame) -> pd.DataFrame:
    """Lookup keyed by padded svspp with lower-cased common/scientific names."""
    out = clean_names(species)
    validate_frame(out, SPECIES_REQUIRED_COLS, "species lookup")

    out = pd.DataFrame({
        "svspp": zero_pad(out["svspp"], SVSPP_WIDTH),
        "comname": out["common_name"].astype("string").str.strip().str.lower(),
        "scientific_name": out["scientific_name"].astype("string").str.strip().str.lower(),
    })
    out = out.dropna(subset=["svspp"]).drop_duplicates()

    # one name per code, otherwise the join would multiply catch rows
    dup = out["svspp"].duplicated(keep="first")
    if dup.any():
        codes = sorted(out.loc[dup, "svspp"].unique().tolist())
        logging.warning(f"Species codes with several names, keeping the first: {codes}")
        out = out[~dup]
    return out.reset_index(drop=True)


def normalize_records(raw: pd.DataFrame, species: pd.DataFrame) -> pd.DataFrame:
    """
    Assign tow ids and normalize the raw catch extract.
      - zero-padded cruise6/station/stratum and the concatenated `id`
      - strat_num (stratum without the survey-region digit)
      - est_month / est_day from est_towdate
      - padded svspp joined to the species lookup (comname, scientific_name)
      - title-cased season, numeric measurement columns
    Raises SchemaError if either table lacks a required column.
    """
    out = clean_names(raw)
    validate_frame(out, RAW_REQUIRED_COLS, "raw survey")
    out = out.rename(columns={"biomass": "biomass_kg", "length": "length_cm"})
    out = out.drop(columns=[c for c in ("comname", "scientific_name") if c in out.columns])

    stratum = zero_pad(out["stratum"], STRATUM_WIDTH)
    out = out.assign(
        cruise6=zero_pad(out["cruise6"], CRUISE_WIDTH),
        station=zero_pad(out["station"], STATION_WIDTH),
        stratum=stratum,
        id=make_tow_id(out["cruise6"], out["station"], out["stratum"]),
        strat_num=stratum.str.slice(1, 3),
        svspp=zero_pad(out["svspp"], SVSPP_WIDTH),
        season=out["season"].astype("string").str.strip().str.title(),
        year=pd.to_numeric(out["year"], errors="coerce").astype("Int64"),
    )
    out["est_month"], out["est_day"] = parse_tow_date(out["est_towdate"])

    for c in NUMERIC_COLS:
        out[c] = as_float(out[c])

    lookup = normalize_species_lookup(species)
    out = out.merge(lookup, on="svspp", how="left")

    unmatched = int(out["comname"].isna().sum())
    if unmatched:
        logging.info(f"{unmatched:,} records have no species lookup match")
    return out


def reconcile_zero_values(
    df: pd.DataFrame,
    *,
    biomass_floor: float = BIOMASS_FLOOR_KG,
    abundance_floor: float = ABUNDANCE_FLOOR,
) -> pd.DataFrame:
    """
    Fix zero biomass with a positive count (and the reverse), then drop
    records that still carry no usable catch.
      - biomass == 0 & abundance > 0  -> biomass = biomass_floor
      - abundance == 0 & biomass > 0  -> abundance = abundance_floor
      - missing biomass or abundance  -> dropped
      - both zero or negative         -> dropped
    """
    out = df.copy()
    biomass = as_float(out["biomass_kg"])
    abundance = as_float(out["abundance"])

    biomass = biomass.mask((biomass == 0) & (abundance > 0), biomass_floor)
    abundance = abundance.mask((abundance == 0) & (biomass > 0), float(abundance_floor))
    out["biomass_kg"] = biomass
    out["abundance"] = abundance

    missing = biomass.isna() | abundance.isna()
    empty = ~missing & ((biomass <= 0) | (abundance <= 0))
    if missing.any():
        logging.warning(f"Dropping {int(missing.sum()):,} records with missing biomass or abundance")
    if empty.any():
        logging.warning(f"Dropping {int(empty.sum()):,} records with no positive biomass/abundance")

    return out.loc[~(missing | empty)].reset_index(drop=True)
