"""
Statistical forecast models served by the ML backend.

The engine never fits these models; it only needs a closed registry of their
identifiers to pick the comparison's best model for reconciliation.
"""

from .registry import (
    StatisticalModel,
    UnknownModelError,
    available_models,
    resolve_model,
    select_best_model,
)

__all__ = [
    "StatisticalModel",
    "UnknownModelError",
    "available_models",
    "resolve_model",
    "select_best_model",
]
