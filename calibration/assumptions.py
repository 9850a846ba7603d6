"""
AssumptionSet — the six bounded driver assumptions behind a forecast.

Values are always inside ASSUMPTION_BOUNDS: construction raises ValueError
otherwise, and `clamped()` builds one from raw estimates.
`default_assumptions()` returns a fresh instance on every call so callers
never share state.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Dict, List

import pandas as pd

from core.config import EngineConfig
from core.schema import ASSUMPTION_BOUNDS
from core.utils import clamp_to


class DriverType(str, Enum):
    GROWTH_RATE = "GROWTH_RATE"
    FIXED_AMOUNT = "FIXED_AMOUNT"
    PERCENT_OF_REVENUE = "PERCENT_OF_REVENUE"


class AccountCategory(str, Enum):
    REVENUE = "REVENUE"
    COGS = "COGS"
    OPEX = "OPEX"
    PERSONNEL = "PERSONNEL"


@dataclass(frozen=True)
class Driver:
    """One driver entry as the external forecast engine expects it."""
    type: DriverType
    target_category: AccountCategory
    rate: float

    def to_payload(self) -> dict:
        return {
            "type": self.type.value,
            "target_category": self.target_category.value,
            "value": {"rate": self.rate},
        }


@dataclass(frozen=True)
class AssumptionSet:
    revenue_growth: float = 0.0
    seasonality_amplitude: float = 0.0
    cogs_percent: float = 0.0
    opex_growth: float = 0.0
    hiring_plan: float = 0.0
    cash_conversion_days: float = 30.0

    def __post_init__(self) -> None:
        out_of_bounds = []
        for f in fields(self):
            value = getattr(self, f.name)
            lo, hi = ASSUMPTION_BOUNDS[f.name]
            if not lo <= value <= hi:
                out_of_bounds.append(f"{f.name}={value!r} not in [{lo}, {hi}]")
        if out_of_bounds:
            raise ValueError(
                "Assumption(s) out of bounds (use AssumptionSet.clamped to clamp): "
                + "; ".join(out_of_bounds)
            )

    @classmethod
    def clamped(cls, **values: float) -> "AssumptionSet":
        """Build an AssumptionSet with every supplied value clamped into its bounds."""
        unknown = set(values) - set(ASSUMPTION_BOUNDS)
        if unknown:
            raise KeyError(f"Unknown assumption field(s): {sorted(unknown)}")
        return cls(**{k: clamp_to(float(v), ASSUMPTION_BOUNDS[k]) for k, v in values.items()})

    def is_within_bounds(self) -> bool:
        for f in fields(self):
            lo, hi = ASSUMPTION_BOUNDS[f.name]
            if not lo <= getattr(self, f.name) <= hi:
                return False
        return True

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    def to_drivers(self) -> List[Driver]:
        """Driver configuration for the external driver-based forecast engine."""
        return [
            Driver(DriverType.GROWTH_RATE, AccountCategory.REVENUE, self.revenue_growth),
            Driver(DriverType.PERCENT_OF_REVENUE, AccountCategory.COGS, self.cogs_percent),
            Driver(DriverType.GROWTH_RATE, AccountCategory.OPEX, self.opex_growth),
        ]

    def summary(self) -> pd.DataFrame:
        """One row per assumption with its bounds."""
        return pd.DataFrame([
            {"Assumption": name, "Value": value,
             "Min": ASSUMPTION_BOUNDS[name][0], "Max": ASSUMPTION_BOUNDS[name][1]}
            for name, value in self.to_dict().items()
        ])


def default_assumptions(config: EngineConfig = EngineConfig()) -> AssumptionSet:
    """Fresh AssumptionSet with derivable fields at 0 and the fixed defaults."""
    return AssumptionSet.clamped(
        revenue_growth=0.0,
        seasonality_amplitude=0.0,
        cogs_percent=0.0,
        opex_growth=0.0,
        hiring_plan=config.default_hiring_plan,
        cash_conversion_days=config.default_cash_conversion_days,
    )
