"""
Planning engine — runway utilities and the end-to-end planning runner.
"""

from .runway import net_burn, runway, runway_progress_pct
from .runner import PlanningResult, run_planning

__all__ = [
    "net_burn",
    "runway",
    "runway_progress_pct",
    "PlanningResult",
    "run_planning",
]
