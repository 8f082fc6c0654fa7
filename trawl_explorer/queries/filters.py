# trawl_explorer/queries/filters.py
from __future__ import annotations
import pandas as pd

# -------- string helpers --------
def _lc(s: pd.Series) -> pd.Series:
    return s.astype("string").str.strip().str.lower()

# -------- selection interface for the dashboard --------
def species_options(df: pd.DataFrame, col: str = "comname") -> list[str]:
    """Sorted, title-cased species names for the species dropdown."""
    if col not in df.columns:
        return []
    names = df[col].dropna().astype("string").str.strip().str.title()
    return sorted(n for n in names.unique().tolist() if n)


def select_species(df: pd.DataFrame, name: str, col: str = "comname") -> pd.DataFrame:
    """Rows for one species, matched case-insensitively ("Atlantic Cod" == "atlantic cod")."""
    if col not in df.columns or not name:
        return df.iloc[0:0].copy()
    m = (_lc(df[col]) == name.strip().lower()).fillna(False)
    return df.loc[m.astype(bool)].reset_index(drop=True)


__all__ = ["species_options", "select_species"]
