"""
Reconciliation — variance between driver-based and statistical forecasts.
"""

from .reconciler import (
    AlignmentClass,
    HorizonMismatchError,
    Insight,
    InsightKind,
    ReconciliationReport,
    reconcile,
)

__all__ = [
    "AlignmentClass",
    "HorizonMismatchError",
    "Insight",
    "InsightKind",
    "ReconciliationReport",
    "reconcile",
]
