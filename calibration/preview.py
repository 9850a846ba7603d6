"""
Annualized preview of what an AssumptionSet implies for the next fiscal year,
given the workspace's current monthly KPIs.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.utils import safe_ratio

from .assumptions import AssumptionSet


@dataclass(frozen=True)
class AssumptionPreview:
    projected_revenue: float
    projected_cogs: float
    projected_opex: float
    projected_ebitda: float

    @property
    def ebitda_margin(self) -> float:
        # negative revenue has no meaningful margin
        return safe_ratio(self.projected_ebitda, self.projected_revenue)


def preview_assumptions(
    assumptions: AssumptionSet,
    *,
    monthly_revenue: float,
    net_burn: float,
) -> AssumptionPreview:
    """
    Project FY revenue, COGS, opex and EBITDA from the current month's KPIs.

    Opex is approximated from the current month as revenue - net burn, the same
    proxy the dashboard KPIs expose.
    """
    revenue = monthly_revenue * 12 * (1 + assumptions.revenue_growth)
    cogs = revenue * assumptions.cogs_percent
    opex = (monthly_revenue - net_burn) * 12 * (1 + assumptions.opex_growth)
    return AssumptionPreview(
        projected_revenue=revenue,
        projected_cogs=cogs,
        projected_opex=opex,
        projected_ebitda=revenue - cogs - opex,
    )
