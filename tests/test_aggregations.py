import math

import numpy as np
import pandas as pd
import pytest

from trawl_explorer.queries.aggregations import (
    decade_centers,
    decade_of,
    seasonal_summary,
    summarize_species,
    weighted_mean,
)
from trawl_explorer.validators.schema import SchemaError

CLEAN_DEFAULTS = {
    "id": "1975020011010",
    "svspp": "075",
    "comname": "Pollock",
    "year": 1987,
    "season": "Spring",
    "lat": 42.0,
    "lon": -69.0,
    "surftemp": 8.0,
    "bottemp": 6.0,
    "depth": 100.0,
    "total_biomass_kg": 1.0,
}


def _clean(*rows):
    return pd.DataFrame([{**CLEAN_DEFAULTS, **r} for r in rows])


def test_weighted_mean_ignores_missing_pairs():
    assert weighted_mean([10, np.nan, 20], [2, 0, 8]) == pytest.approx(18.0)
    assert weighted_mean([10, 999, 20], [2, np.nan, 8]) == pytest.approx(18.0)


def test_weighted_mean_zero_weight_is_missing():
    assert math.isnan(weighted_mean([1.0, 2.0], [0.0, 0.0]))
    assert math.isnan(weighted_mean([np.nan], [5.0]))


def test_weighted_mean_positional_not_index_aligned():
    values = pd.Series([10.0, 20.0], index=[7, 8])
    assert weighted_mean(values, [1.0, 3.0]) == pytest.approx(17.5)


def test_decade_of():
    assert decade_of(1987) == 1980
    assert decade_of(1970) == 1970
    assert decade_of(2005) == 2000


def test_annual_summary_stats():
    df = _clean(
        {"total_biomass_kg": 2.0, "lat": 10.0, "bottemp": np.nan},
        {"total_biomass_kg": 8.0, "lat": 20.0, "bottemp": 5.0},
        {"year": 2005, "total_biomass_kg": 3.0},
    )
    out = summarize_species(df)

    assert list(out.columns[:3]) == ["comname", "year", "decade"]
    assert out["year"].tolist() == [1987, 2005]
    assert out["decade"].tolist() == [1980, 2000]

    row = out.iloc[0]
    assert row["total_biomass"] == pytest.approx(10.0)
    assert row["avg_biomass"] == pytest.approx(5.0)
    assert row["biomass_sd"] == pytest.approx(np.std([2.0, 8.0], ddof=1))
    assert row["avg_lat"] == pytest.approx(18.0)
    # the record without bottom temperature does not touch avg_bot
    assert row["avg_bot"] == pytest.approx(5.0)

    # one record -> no sample sd
    assert math.isnan(out.iloc[1]["biomass_sd"])


def test_zero_weight_group_gives_missing_means():
    out = summarize_species(_clean({"total_biomass_kg": 0.0}, {"total_biomass_kg": 0.0}))
    assert out.loc[0, "total_biomass"] == 0.0
    assert pd.isna(out.loc[0, "avg_lat"])
    assert pd.isna(out.loc[0, "avg_depth"])


def test_seasonal_summary_partitions_by_season_and_species():
    df = _clean(
        {"season": "Spring", "lat": 41.0},
        {"season": "Fall", "lat": 43.0},
        {"comname": "Atlantic cod", "season": "Fall", "lat": 44.0},
    )
    out = seasonal_summary(df)
    assert list(out.columns[:4]) == ["comname", "season", "year", "decade"]
    assert len(out) == 3
    pollock_fall = out[(out["comname"] == "Pollock") & (out["season"] == "Fall")]
    assert pollock_fall["avg_lat"].tolist() == [pytest.approx(43.0)]


def test_summary_requires_clean_columns():
    with pytest.raises(SchemaError):
        summarize_species(_clean({}).drop(columns=["total_biomass_kg"]))


def test_decade_centers():
    seasonal = seasonal_summary(_clean(
        {"year": 1981, "lat": 42.0, "total_biomass_kg": 1.0},
        {"year": 1985, "lat": 44.0, "total_biomass_kg": 3.0},
        {"year": 1991, "lat": 40.0},
        {"comname": "Atlantic cod", "lat": 30.0},
    ))
    centers = decade_centers(seasonal, "pollock")
    assert centers["decade"].tolist() == [1980, 1990]
    assert centers.loc[0, "lat"] == pytest.approx(43.5)
    assert centers.loc[0, "total_biomass"] == pytest.approx(4.0)
