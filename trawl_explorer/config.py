from pathlib import Path

# Root-relative data directories
DATA_DIR = Path("data")
RAW_DIR = DATA_DIR / "raw"
PROC_DIR = DATA_DIR / "processed"

RAW_SURVEY_PATH = RAW_DIR / "survdat.csv"
SPECIES_LOOKUP_PATH = RAW_DIR / "sppclass.csv"
CLEAN_SURVEY_PATH = PROC_DIR / "clean_survey.parquet"

# Tow id = cruise6 + station + stratum, each left-zero-padded to these widths
CRUISE_WIDTH = 6
STATION_WIDTH = 3
STRATUM_WIDTH = 4
SVSPP_WIDTH = 3

# Strata regularly sampled over the whole time series
STRATUM_MIN = 1010
STRATUM_MAX = 1760
EXCLUDED_STRATA = frozenset({1310, 1320, 1330, 1350, 1410, 1420, 1490})

# Shrimps, other invertebrates and non-species sentinel codes ("000" pads to 0)
EXCLUDED_SPECIES_CODES = frozenset(
    [*range(285, 300), 305, 306, 307, 316, 323, *range(910, 916), *range(955, 962)]
    + [0, 978, 979, 980, 998]
)

MIN_YEAR = 1970

# Present but unweighable / present with an uncertain count
BIOMASS_FLOOR_KG = 1e-4
ABUNDANCE_FLOOR = 1

# Species eligibility
MIN_TOWS_PER_SEASON = 5
REQUIRED_SEASONS = 2
YEAR_COVERAGE_SLACK_PCT = 8
ANOMALOUS_YEARS = frozenset({2017, 2020})
