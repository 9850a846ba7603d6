"""
Statistical model registry — the closed set of ML forecast models the
backend can return, and selection of the "best" one from a comparison run.

Model identifiers are resolved through an explicit alias table. An identifier
that isn't in the table, or a best model the comparison didn't actually
return, raises UnknownModelError; there is no fallback to another model.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from core.schema import ForecastSeries
from data_prep.loader import ml_result_to_series, parse_payload
from data_prep.payloads import MLForecastResult, MLModelComparison

logger = logging.getLogger(__name__)


class StatisticalModel(str, Enum):
    PROPHET = "prophet"
    PROPHET_TUNED = "prophet_tuned"
    SARIMAX = "sarimax"
    LIGHTGBM = "lightgbm"


# Every accepted spelling, already lower-cased. "prophet_financial" is the
# backend's name for the tuned Prophet configuration.
MODEL_ALIASES: Dict[str, StatisticalModel] = {
    "prophet": StatisticalModel.PROPHET,
    "prophet_tuned": StatisticalModel.PROPHET_TUNED,
    "prophet_financial": StatisticalModel.PROPHET_TUNED,
    "prophet (tuned)": StatisticalModel.PROPHET_TUNED,
    "sarimax": StatisticalModel.SARIMAX,
    "lightgbm": StatisticalModel.LIGHTGBM,
}

# Minimum months of history each model needs to fit.
MIN_HISTORY_MONTHS: Dict[StatisticalModel, int] = {
    StatisticalModel.PROPHET: 12,
    StatisticalModel.PROPHET_TUNED: 12,
    StatisticalModel.SARIMAX: 24,
    StatisticalModel.LIGHTGBM: 24,
}


class UnknownModelError(KeyError):
    """A model identifier outside the registry, or a best model that is missing."""


def resolve_model(name: str) -> StatisticalModel:
    """Map a backend model identifier to a StatisticalModel."""
    key = name.strip().lower()
    if key not in MODEL_ALIASES:
        raise UnknownModelError(
            f"Unknown statistical model '{name}'. "
            f"Known identifiers: {sorted(MODEL_ALIASES)}"
        )
    return MODEL_ALIASES[key]


def available_models(n_months: int) -> Tuple[StatisticalModel, ...]:
    """Models that can be fitted on `n_months` of history."""
    return tuple(m for m in StatisticalModel if n_months >= MIN_HISTORY_MONTHS[m])


def select_best_model(
    comparison: Mapping[str, Any],
) -> Tuple[StatisticalModel, ForecastSeries, Optional[float]]:
    """
    Pick the comparison's best model and return (model, series, mape).

    Parameters
    ----------
    comparison : mapping
        ML model comparison payload: {"models": {id: result}, "best_model": id}
    """
    parsed = parse_payload(MLModelComparison, comparison)
    if parsed.best_model is None:
        raise UnknownModelError("Model comparison did not name a best model.")

    models: Dict[StatisticalModel, MLForecastResult] = {}
    for key, result in parsed.models.items():
        models[resolve_model(key)] = result

    best = resolve_model(parsed.best_model)
    if best not in models:
        raise UnknownModelError(
            f"Best model '{parsed.best_model}' is not among the returned models: "
            f"{[m.value for m in models]}"
        )
    logger.debug("Selected statistical model %s for reconciliation", best.value)
    series, mape = ml_result_to_series(models[best])
    return best, series, mape
