"""
ScenarioProjector — expand one baseline forecast into Base/Upside/Downside.

Per period, for each scenario kind:
    revenue'    = revenue  × revenue multiplier
    expenses'   = expenses × expense multiplier
    net_income' = revenue' - expenses'     (recomputed, never scaled)

Totals are sums over the resulting per-period series. Every variant has the
same horizon as the baseline; an empty baseline gives three empty variants
with zero totals.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Mapping

import pandas as pd

from core.schema import ForecastPoint, ForecastSeries

from .presets import SCENARIO_PRESETS, ScenarioKind, ScenarioMultipliers, get_scenario_multipliers

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScenarioResult:
    kind: ScenarioKind
    series: ForecastSeries
    total_revenue: float
    total_expense: float
    total_net_income: float
    description: str = ""


@dataclass(frozen=True)
class ScenarioBundle:
    base: ScenarioResult
    upside: ScenarioResult
    downside: ScenarioResult

    def __getitem__(self, kind: ScenarioKind | str) -> ScenarioResult:
        return self.as_dict()[ScenarioKind(kind)]

    def as_dict(self) -> Dict[ScenarioKind, ScenarioResult]:
        return {
            ScenarioKind.BASE: self.base,
            ScenarioKind.UPSIDE: self.upside,
            ScenarioKind.DOWNSIDE: self.downside,
        }

    @property
    def horizon(self) -> int:
        return len(self.base.series)

    def comparison(self) -> pd.DataFrame:
        """Per-period net income for each scenario."""
        return pd.DataFrame(
            {
                "period": [str(p.period) for p in self.base.series],
                "base_net": [p.net_income for p in self.base.series],
                "upside_net": [p.net_income for p in self.upside.series],
                "downside_net": [p.net_income for p in self.downside.series],
            },
            columns=["period", "base_net", "upside_net", "downside_net"],
        )

    def summary(self) -> Dict[str, float]:
        """Scenario net-income totals and their deltas against Base."""
        base = self.base.total_net_income
        return {
            "base_total": base,
            "upside_total": self.upside.total_net_income,
            "downside_total": self.downside.total_net_income,
            "upside_delta": self.upside.total_net_income - base,
            "downside_delta": self.downside.total_net_income - base,
        }

    def to_dataframe(self) -> pd.DataFrame:
        """One row per scenario with totals, for display."""
        return pd.DataFrame([
            {
                "Scenario": r.kind.value,
                "Total Revenue": r.total_revenue,
                "Total Expense": r.total_expense,
                "Total Net Income": r.total_net_income,
                "Description": r.description,
            }
            for r in self.as_dict().values()
        ])


def _apply(
    baseline: ForecastSeries,
    kind: ScenarioKind,
    multipliers: ScenarioMultipliers,
) -> ScenarioResult:
    points = []
    for p in baseline:
        revenue = p.revenue * multipliers.revenue
        expenses = p.expenses * multipliers.expense
        points.append(ForecastPoint(
            period=p.period,
            revenue=revenue,
            expenses=expenses,
            net_income=revenue - expenses,
        ))
    series = ForecastSeries(tuple(points))
    return ScenarioResult(
        kind=kind,
        series=series,
        total_revenue=float(sum(p.revenue for p in points)),
        total_expense=float(sum(p.expenses for p in points)),
        total_net_income=float(sum(p.net_income for p in points)),
        description=multipliers.description,
    )


def project(
    baseline: ForecastSeries,
    *,
    presets: Mapping[ScenarioKind, ScenarioMultipliers] = SCENARIO_PRESETS,
) -> ScenarioBundle:
    """
    Project a baseline forecast into a ScenarioBundle.

    Parameters
    ----------
    baseline : ForecastSeries
        Driver-based baseline forecast
    presets : mapping
        ScenarioKind -> ScenarioMultipliers; must cover all three kinds.
    """
    if len(baseline) == 0:
        logger.debug("Empty baseline; projecting empty scenario bundle")

    results = {
        kind: _apply(baseline, kind, get_scenario_multipliers(kind, presets))
        for kind in ScenarioKind
    }
    return ScenarioBundle(
        base=results[ScenarioKind.BASE],
        upside=results[ScenarioKind.UPSIDE],
        downside=results[ScenarioKind.DOWNSIDE],
    )
