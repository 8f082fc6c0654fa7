from __future__ import annotations
from pathlib import Path
import pandas as pd

from trawl_explorer.cleaning import zero_pad
from trawl_explorer.config import (
    CLEAN_SURVEY_PATH,
    CRUISE_WIDTH,
    STATION_WIDTH,
    STRATUM_WIDTH,
    SVSPP_WIDTH,
)
from trawl_explorer.validators.schema import CLEAN_REQUIRED_COLS, validate_frame

READERS = {
    ".parquet": pd.read_parquet,
    ".feather": pd.read_feather,
    ".csv": pd.read_csv,
}

# Codes keep their leading zeros only if CSV readers treat them as text
CODE_DTYPES = {"id": "string", "svspp": "string", "cruise6": "string", "station": "string", "stratum": "string"}


def read_table(path: str | Path) -> pd.DataFrame:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    reader = READERS.get(path.suffix.lower())
    if reader is None:
        raise ValueError(f"Unsupported file type {path.suffix!r}; expected one of {sorted(READERS)}")
    if path.suffix.lower() == ".csv":
        head = pd.read_csv(path, nrows=0)
        dtype = {c: CODE_DTYPES[c.lower()] for c in head.columns if c.lower() in CODE_DTYPES}
        return pd.read_csv(path, dtype=dtype)
    return reader(path)


def write_table(df: pd.DataFrame, path: str | Path) -> Path:
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in READERS:
        raise ValueError(f"Unsupported file type {path.suffix!r}; expected one of {sorted(READERS)}")
    path.parent.mkdir(parents=True, exist_ok=True)
    out = df.reset_index(drop=True)
    if suffix == ".parquet":
        out.to_parquet(path, index=False)
    elif suffix == ".feather":
        out.to_feather(path)
    else:
        out.to_csv(path, index=False)
    return path


def load_clean_survey(path: str | Path = CLEAN_SURVEY_PATH) -> pd.DataFrame:
    """Read a persisted cleaned snapshot and restore its column types."""
    df = read_table(path)
    validate_frame(df, CLEAN_REQUIRED_COLS, "cleaned survey")

    df = df.copy()
    df["id"] = zero_pad(df["id"], CRUISE_WIDTH + STATION_WIDTH + STRATUM_WIDTH)
    df["svspp"] = zero_pad(df["svspp"], SVSPP_WIDTH)
    df["comname"] = df["comname"].astype("string")
    df["season"] = df["season"].astype("string")
    for c in ("year", "est_month", "est_day"):
        if c in df.columns:
            df[c] = pd.to_numeric(df[c], errors="coerce").astype("Int64")
    for c in ("lat", "lon", "surftemp", "bottemp", "depth", "total_biomass_kg"):
        df[c] = pd.to_numeric(df[c], errors="coerce")
    return df
