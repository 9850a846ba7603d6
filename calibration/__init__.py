"""
Calibration — derive bounded forecast assumptions from monthly P&L history.

  1. assumptions.py — AssumptionSet, defaults, driver export
  2. calibrator.py  — history → AssumptionSet (with diagnostics)
  3. history.py     — data-review statistics and seasonal profile
  4. preview.py     — annualized FY preview of an AssumptionSet
"""

from .assumptions import AssumptionSet, Driver, default_assumptions
from .calibrator import CalibrationResult, calibrate, calibrate_with_diagnostics
from .history import HistorySummary, growth_series, seasonal_profile, summarize_history
from .preview import AssumptionPreview, preview_assumptions

__all__ = [
    "AssumptionSet",
    "Driver",
    "default_assumptions",
    "CalibrationResult",
    "calibrate",
    "calibrate_with_diagnostics",
    "HistorySummary",
    "growth_series",
    "seasonal_profile",
    "summarize_history",
    "AssumptionPreview",
    "preview_assumptions",
]
