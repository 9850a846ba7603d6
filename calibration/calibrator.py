"""
Derive default forecast assumptions from monthly P&L history.

Input:  Chronologically ordered MonthlyFinancialRecord sequence
Output: AssumptionSet, every field clamped into its domain bounds

Derivation:
  revenue_growth         mean MoM revenue growth over pairs with prev > 0
  opex_growth            same method on opex, guarded independently
  cogs_percent           sum(cogs) / sum(revenue)
  seasonality_amplitude  coefficient of variation of revenue (population std / mean)
  hiring_plan            not derivable, fixed default
  cash_conversion_days   not derivable (needs AR/AP data), fixed default

Fewer than two records is not an error: growth and variance fields come back
at 0 and the non-derivable fields at their defaults.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Sequence, Tuple

from core.config import EngineConfig
from core.schema import MonthlyFinancialRecord
from core.utils import coefficient_of_variation, mean_period_growth, safe_ratio

from .assumptions import AssumptionSet, default_assumptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalibrationResult:
    """Clamped assumptions plus the raw estimates they were derived from."""
    assumptions: AssumptionSet
    raw: Mapping[str, float]
    revenue_growth_pairs: int
    opex_growth_pairs: int
    n_records: int

    @property
    def insufficient_history(self) -> bool:
        return self.n_records < 2

    @property
    def clamped_fields(self) -> Tuple[str, ...]:
        """Fields whose raw estimate fell outside the bounds."""
        values = self.assumptions.to_dict()
        return tuple(k for k, v in self.raw.items() if v != values[k])

    def __repr__(self) -> str:
        return (
            f"CalibrationResult(n={self.n_records}, "
            f"revenue_growth={self.assumptions.revenue_growth:.4f}, "
            f"cogs_percent={self.assumptions.cogs_percent:.4f}, "
            f"opex_growth={self.assumptions.opex_growth:.4f}, "
            f"seasonality={self.assumptions.seasonality_amplitude:.4f})"
        )


@lru_cache(maxsize=128)
def _calibrate_cached(
    records: Tuple[MonthlyFinancialRecord, ...],
    config: EngineConfig,
) -> CalibrationResult:
    n = len(records)
    defaults = default_assumptions(config)

    if n < 2:
        logger.debug("Insufficient history (%d record(s)); returning default assumptions", n)
        return CalibrationResult(
            assumptions=defaults,
            raw=MappingProxyType({
                "revenue_growth": 0.0,
                "seasonality_amplitude": 0.0,
                "cogs_percent": 0.0,
                "opex_growth": 0.0,
            }),
            revenue_growth_pairs=0,
            opex_growth_pairs=0,
            n_records=n,
        )

    revenue = [r.revenue for r in records]
    opex = [r.opex for r in records]

    revenue_growth, rev_pairs = mean_period_growth(revenue)
    opex_growth, opex_pairs = mean_period_growth(opex)
    cogs_percent = safe_ratio(sum(r.cogs for r in records), sum(revenue))
    seasonality = coefficient_of_variation(revenue)

    raw = {
        "revenue_growth": revenue_growth,
        "seasonality_amplitude": seasonality,
        "cogs_percent": cogs_percent,
        "opex_growth": opex_growth,
    }
    assumptions = AssumptionSet.clamped(
        **raw,
        hiring_plan=defaults.hiring_plan,
        cash_conversion_days=defaults.cash_conversion_days,
    )
    result = CalibrationResult(
        assumptions=assumptions,
        raw=MappingProxyType(raw),
        revenue_growth_pairs=rev_pairs,
        opex_growth_pairs=opex_pairs,
        n_records=n,
    )
    if result.clamped_fields:
        logger.debug("Clamped assumption(s) into bounds: %s", ", ".join(result.clamped_fields))
    return result


def calibrate_with_diagnostics(
    records: Sequence[MonthlyFinancialRecord],
    *,
    config: EngineConfig = EngineConfig(),
) -> CalibrationResult:
    """
    Calibrate and keep the raw (unclamped) estimates and growth-pair counts.

    Records are assumed already validated (see data_prep.validators).
    """
    return _calibrate_cached(tuple(records), config)


def calibrate(
    records: Sequence[MonthlyFinancialRecord],
    *,
    config: EngineConfig = EngineConfig(),
) -> AssumptionSet:
    """Derive a bounded AssumptionSet from historical monthly records."""
    return calibrate_with_diagnostics(records, config=config).assumptions
