"""
Descriptive statistics over monthly history for the data-review step:
totals, averages, quality flags, month-of-year seasonal profile, and the
period growth series.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import pandas as pd

from core.config import EngineConfig
from core.schema import MonthlyFinancialRecord
from core.utils import safe_ratio


@dataclass(frozen=True)
class HistorySummary:
    months: int
    total_revenue: int
    total_expenses: int
    total_net_income: int
    avg_revenue: float
    avg_expenses: float
    has_minimum_data: bool
    has_revenue: bool
    has_expenses: bool

    @property
    def expense_ratio_pct(self) -> float:
        return safe_ratio(self.total_expenses, self.total_revenue) * 100


def summarize_history(
    records: Sequence[MonthlyFinancialRecord],
    *,
    config: EngineConfig = EngineConfig(),
) -> HistorySummary:
    n = len(records)
    total_revenue = sum(r.revenue for r in records)
    total_expenses = sum(r.total_expenses for r in records)
    return HistorySummary(
        months=n,
        total_revenue=total_revenue,
        total_expenses=total_expenses,
        total_net_income=sum(r.net_income for r in records),
        avg_revenue=total_revenue / n if n else 0.0,
        avg_expenses=total_expenses / n if n else 0.0,
        has_minimum_data=n >= config.min_history_months,
        has_revenue=total_revenue > 0,
        has_expenses=total_expenses > 0,
    )


def seasonal_profile(records: Sequence[MonthlyFinancialRecord]) -> pd.DataFrame:
    """
    Average revenue and total expenses per calendar month.

    Months without positive average revenue are dropped. The seasonal index is
    the month's average revenue over the mean of the monthly averages.
    """
    columns = ["month", "month_index", "avg_revenue", "avg_expense", "seasonal_index"]
    if not records:
        return pd.DataFrame(columns=columns)

    df = pd.DataFrame({
        "month_index": [r.period.month for r in records],
        "revenue": [r.revenue for r in records],
        "expense": [r.total_expenses for r in records],
    })
    grouped = (
        df.groupby("month_index", as_index=False)
        .agg(avg_revenue=("revenue", "mean"), avg_expense=("expense", "mean"))
        .sort_values("month_index")
    )
    grouped = grouped[grouped["avg_revenue"] > 0].reset_index(drop=True)
    overall = float(grouped["avg_revenue"].mean()) if len(grouped) else 0.0
    grouped["seasonal_index"] = [safe_ratio(v, overall) for v in grouped["avg_revenue"]]
    grouped["month"] = [pd.Timestamp(2000, m, 1).strftime("%b") for m in grouped["month_index"]]
    return grouped[columns]


def growth_series(records: Sequence[MonthlyFinancialRecord]) -> pd.DataFrame:
    """Month-over-month revenue growth in percent; 0 where the prior month has no revenue."""
    rows = [
        {
            "period": str(curr.period),
            "revenue": curr.revenue,
            "growth_rate_pct": safe_ratio(curr.revenue - prev.revenue, prev.revenue) * 100,
        }
        for prev, curr in zip(records, records[1:])
    ]
    return pd.DataFrame(rows, columns=["period", "revenue", "growth_rate_pct"])
