"""Shared pytest fixtures."""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence

import pandas as pd
import pytest

from core.schema import ForecastSeries, MonthlyFinancialRecord


def build_records(
    revenue: Sequence[int],
    *,
    cogs: Optional[Sequence[int]] = None,
    opex: Optional[Sequence[int]] = None,
    personnel: Optional[Sequence[int]] = None,
    start: str = "2024-01",
) -> List[MonthlyFinancialRecord]:
    """Well-formed monthly records (identities hold) starting at `start`."""
    n = len(revenue)
    cogs = list(cogs) if cogs is not None else [0] * n
    opex = list(opex) if opex is not None else [0] * n
    personnel = list(personnel) if personnel is not None else [0] * n
    first = pd.Period(start, freq="M")
    out = []
    for i in range(n):
        total = cogs[i] + opex[i] + personnel[i]
        out.append(MonthlyFinancialRecord(
            period=first + i,
            revenue=revenue[i],
            cogs=cogs[i],
            opex=opex[i],
            personnel=personnel[i],
            total_expenses=total,
            net_income=revenue[i] - total,
        ))
    return out


@pytest.fixture
def make_records() -> Callable[..., List[MonthlyFinancialRecord]]:
    return build_records


@pytest.fixture
def twelve_month_history() -> List[MonthlyFinancialRecord]:
    """A year of growing revenue with steady cost structure (cents)."""
    revenue = [10_000_000 + 250_000 * i for i in range(12)]
    return build_records(
        revenue,
        cogs=[r * 30 // 100 for r in revenue],
        opex=[2_000_000 + 20_000 * i for i in range(12)],
        personnel=[3_000_000] * 12,
    )


@pytest.fixture
def flat_baseline() -> ForecastSeries:
    """12 months at revenue 100,000 and expense 80,000."""
    return ForecastSeries.from_values("2025-01", [100_000.0] * 12, [80_000.0] * 12)
