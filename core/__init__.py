"""
Core package — record/series types, configuration, and shared numeric utilities.
No business logic lives here.
"""

from .schema import (
    ASSUMPTION_BOUNDS,
    MONETARY_FIELDS,
    ForecastPoint,
    ForecastSeries,
    MonthlyFinancialRecord,
    to_period,
)
from .config import EngineConfig, HorizonPolicy
from .utils import clamp, coefficient_of_variation, mean_period_growth, safe_ratio

__all__ = [
    "ASSUMPTION_BOUNDS",
    "MONETARY_FIELDS",
    "ForecastPoint",
    "ForecastSeries",
    "MonthlyFinancialRecord",
    "to_period",
    "EngineConfig",
    "HorizonPolicy",
    "clamp",
    "coefficient_of_variation",
    "mean_period_growth",
    "safe_ratio",
]
