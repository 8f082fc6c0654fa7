from __future__ import annotations
import pandas as pd

RAW_REQUIRED_COLS = [
    "cruise6", "station", "stratum", "svspp", "catchsex", "year", "est_towdate",
    "season", "lat", "lon", "surftemp", "bottemp", "depth", "biomass", "abundance",
]

SPECIES_REQUIRED_COLS = ["svspp", "common_name", "scientific_name"]

CLEAN_REQUIRED_COLS = [
    "id", "svspp", "comname", "year", "season", "lat", "lon",
    "surftemp", "bottemp", "depth", "total_biomass_kg",
]


class SchemaError(ValueError):
    """An input table is missing columns every later stage depends on."""


def validate_frame(df: pd.DataFrame, required: list[str], name: str = "input") -> None:
    miss = set(required) - set(df.columns)
    if miss:
        raise SchemaError(f"Missing expected columns in {name} table: {sorted(miss)}")
