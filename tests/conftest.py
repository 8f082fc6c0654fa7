"""
Shared pytest fixtures: small synthetic survey extracts and species lookups.
"""
import pandas as pd
import pytest

RAW_DEFAULTS = {
    "cruise6": 197502,
    "station": 1,
    "stratum": 1010,
    "svspp": 75,
    "catchsex": 0,
    "year": 1975,
    "est_towdate": "1975-03-12",
    "season": "SPRING",
    "lat": 42.5,
    "lon": -69.5,
    "surftemp": 8.0,
    "bottemp": 6.0,
    "depth": 120.0,
    "biomass": 2.0,
    "abundance": 3,
}


@pytest.fixture
def make_raw():
    """Build a raw extract; each dict overrides RAW_DEFAULTS for one record."""
    def _make(*rows: dict) -> pd.DataFrame:
        return pd.DataFrame([{**RAW_DEFAULTS, **r} for r in rows])
    return _make


@pytest.fixture
def species_lookup() -> pd.DataFrame:
    return pd.DataFrame({
        "SVSPP": [75, 73, 301],
        "COMMON_NAME": ["POLLOCK", "ATLANTIC COD", "AMERICAN LOBSTER"],
        "SCIENTIFIC_NAME": ["Pollachius virens", "Gadus morhua", "Homarus americanus"],
    })


@pytest.fixture
def survey_rows():
    """
    One record per tow for a species, `tows` tows per season per year.
    Each (year, season) gets its own cruise so tow ids never collide.
    """
    def _rows(svspp=75, years=(1975,), seasons=("SPRING", "FALL"), tows=5, stratum=1010, first_station=1):
        rows = []
        for year in years:
            for i, season in enumerate(seasons):
                month = "03" if season.upper() == "SPRING" else "10"
                for k in range(tows):
                    rows.append({
                        "cruise6": year * 100 + i + 1,
                        "station": first_station + k,
                        "stratum": stratum,
                        "svspp": svspp,
                        "year": year,
                        "est_towdate": f"{year}-{month}-{10 + k:02d}",
                        "season": season,
                        "lat": 42.0 + 0.1 * k,
                    })
        return rows
    return _rows
