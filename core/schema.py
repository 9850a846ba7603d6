"""
Canonical engine types: monthly P&L records and forecast series.

Monetary history fields are integer minor-currency units (cents), exactly as
the backend summary endpoint delivers them. Forecast values may be fractional
once scenario multipliers have been applied.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Sequence, Tuple

import pandas as pd

# Monetary fields every monthly record must carry.
MONETARY_FIELDS: Tuple[str, ...] = (
    "revenue",
    "cogs",
    "opex",
    "personnel",
    "total_expenses",
    "net_income",
)

RECORD_FIELDS: Tuple[str, ...] = ("period",) + MONETARY_FIELDS

# Inclusive domain bounds for each assumption. Order matches the UI sliders.
ASSUMPTION_BOUNDS: Dict[str, Tuple[float, float]] = {
    "revenue_growth": (-0.10, 0.20),
    "seasonality_amplitude": (0.0, 0.50),
    "cogs_percent": (0.0, 1.0),
    "opex_growth": (-0.10, 0.20),
    "hiring_plan": (0.0, 20.0),
    "cash_conversion_days": (0.0, 120.0),
}


def to_period(value) -> pd.Period:
    """Coerce 'YYYY-MM', 'YYYY-MM-DD', a Timestamp or a Period to a monthly Period."""
    if isinstance(value, pd.Period):
        return value.asfreq("M")
    return pd.Period(pd.Timestamp(value), freq="M")


@dataclass(frozen=True)
class MonthlyFinancialRecord:
    """One month of profit-and-loss history for a workspace."""
    period: pd.Period
    revenue: int
    cogs: int
    opex: int
    personnel: int
    total_expenses: int
    net_income: int

    def to_dict(self) -> dict:
        return {
            "period": str(self.period),
            "revenue": self.revenue,
            "cogs": self.cogs,
            "opex": self.opex,
            "personnel": self.personnel,
            "total_expenses": self.total_expenses,
            "net_income": self.net_income,
        }


@dataclass(frozen=True)
class ForecastPoint:
    period: pd.Period
    revenue: float
    expenses: float
    net_income: float


@dataclass(frozen=True)
class ForecastSeries:
    """
    Contiguous monthly forecast horizon.

    Periods must be strictly increasing with no gaps; construction fails
    with ValueError otherwise. An empty series is valid.
    """
    points: Tuple[ForecastPoint, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", tuple(self.points))
        for prev, curr in zip(self.points, self.points[1:]):
            if curr.period != prev.period + 1:
                raise ValueError(
                    f"Forecast periods must be consecutive months: "
                    f"{prev.period} is followed by {curr.period}."
                )

    @classmethod
    def from_values(
        cls,
        start,
        revenue: Sequence[float],
        expenses: Sequence[float],
        net_income: Sequence[float] | None = None,
    ) -> "ForecastSeries":
        """Build a series starting at `start`; net income defaults to revenue - expenses."""
        if len(revenue) != len(expenses):
            raise ValueError("revenue and expenses must have the same length.")
        if net_income is None:
            net_income = [r - e for r, e in zip(revenue, expenses)]
        elif len(net_income) != len(revenue):
            raise ValueError("net_income must have the same length as revenue.")
        first = to_period(start)
        return cls(tuple(
            ForecastPoint(period=first + i, revenue=float(r), expenses=float(e), net_income=float(n))
            for i, (r, e, n) in enumerate(zip(revenue, expenses, net_income))
        ))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[ForecastPoint]:
        return iter(self.points)

    def __getitem__(self, idx):
        return self.points[idx]

    @property
    def periods(self) -> List[pd.Period]:
        return [p.period for p in self.points]

    def head(self, n: int) -> "ForecastSeries":
        return ForecastSeries(self.points[:n])

    def total_revenue(self) -> float:
        return float(sum(p.revenue for p in self.points))

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "period": [str(p.period) for p in self.points],
                "revenue": [p.revenue for p in self.points],
                "expenses": [p.expenses for p in self.points],
                "net_income": [p.net_income for p in self.points],
            },
            columns=["period", "revenue", "expenses", "net_income"],
        )
