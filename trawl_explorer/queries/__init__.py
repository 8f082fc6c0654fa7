from .filters import species_options, select_species
from .aggregations import (
    annual_summary,
    decade_centers,
    decade_of,
    seasonal_summary,
    summarize_species,
    weighted_mean,
)

__all__ = [
    "species_options",
    "select_species",
    "annual_summary",
    "seasonal_summary",
    "summarize_species",
    "weighted_mean",
    "decade_of",
    "decade_centers",
]
