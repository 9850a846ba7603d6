"""
Cash runway — months until cash on hand is exhausted at the current burn.
"""

from __future__ import annotations

from typing import Optional

from core.schema import MonthlyFinancialRecord
from core.utils import clamp


def runway(cash_on_hand: float, net_burn: float) -> Optional[float]:
    """
    Fractional months of runway, or None when there is no burn.

    None means "not burning / indeterminate", which is different from 0
    (already out of cash).
    """
    if net_burn <= 0:
        return None
    return cash_on_hand / net_burn


def runway_progress_pct(runway_months: Optional[float], target_months: float = 24.0) -> float:
    """Runway as a percentage of the target, for progress displays. None maps to 0%."""
    if runway_months is None or target_months <= 0:
        return 0.0
    return clamp(runway_months / target_months * 100, 0.0, 100.0)


def net_burn(record: MonthlyFinancialRecord) -> int:
    """Monthly net cash outflow: expenses minus revenue (negative when profitable)."""
    return record.total_expenses - record.revenue
