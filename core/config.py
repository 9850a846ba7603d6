"""
Engine configuration.
Scenario multipliers live in scenarios/presets.py (SCENARIO_PRESETS).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class HorizonPolicy(str, Enum):
    """How the reconciler treats driver/model series of different horizons."""
    TRUNCATE = "truncate"  # compare the common prefix
    STRICT = "strict"      # require identical periods


@dataclass(frozen=True)
class EngineConfig:
    # reconciliation thresholds, in percent
    alignment_threshold_pct: float = 15.0
    excellent_threshold_pct: float = 5.0
    strong_accuracy_mape_pct: float = 10.0

    horizon_policy: HorizonPolicy = HorizonPolicy.TRUNCATE

    # runway display target
    runway_target_months: float = 24.0

    # below this many months the data review flags the history as thin
    min_history_months: int = 12

    # non-derivable assumption defaults
    default_hiring_plan: float = 0.0
    default_cash_conversion_days: float = 30.0
