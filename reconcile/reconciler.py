"""
Forecast reconciliation — compare a driver-based forecast with an independent
statistical forecast and turn the variance into a classification and a short,
ordered list of insights.

  driver_total  = Σ driver revenue over the compared horizon
  model_total   = Σ model revenue over the compared horizon
  difference    = driver_total - model_total
  percent_diff  = difference / model_total × 100   (0 when model_total is 0)
  alignment     = Aligned if |percent_diff| < 15 else Divergent

Insights are always: one primary ladder insight, then the accuracy insight
when the model's MAPE is strong, then the closing recommendation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Mapping, Optional, Tuple

import pandas as pd

from core.config import EngineConfig, HorizonPolicy
from core.schema import ForecastSeries

logger = logging.getLogger(__name__)


class AlignmentClass(str, Enum):
    ALIGNED = "Aligned"
    DIVERGENT = "Divergent"


class InsightKind(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    TIP = "tip"


@dataclass(frozen=True)
class Insight:
    kind: InsightKind
    message: str


class HorizonMismatchError(ValueError):
    """Driver and model series cover different periods under HorizonPolicy.STRICT."""


EXCELLENT_ALIGNMENT = (
    "Excellent alignment: driver assumptions closely match the independent "
    "statistical prediction."
)
GOOD_ALIGNMENT = (
    "Good alignment with minor variance: both forecasts suggest a similar "
    "growth trajectory."
)
DRIVER_OPTIMISTIC = (
    "Driver-based forecast is more optimistic than the statistical model; "
    "review growth rate assumptions."
)
MODEL_HIGHER = (
    "Statistical model predicts higher growth than the drivers; assumptions "
    "may be conservative relative to historical trends."
)
VALIDATE_RECOMMENDATION = (
    "Use the combined view to validate assumptions; if the forecasts diverge "
    "significantly, review the driver logic."
)


@dataclass(frozen=True)
class ReconciliationReport:
    driver_total: float
    model_total: float
    difference: float
    percent_diff: float
    alignment_class: AlignmentClass
    details: Tuple[Insight, ...] = ()
    compared_periods: int = 0
    horizon_truncated: bool = False

    @property
    def insights(self) -> List[str]:
        return [i.message for i in self.details]

    @property
    def is_aligned(self) -> bool:
        return self.alignment_class is AlignmentClass.ALIGNED

    def to_dataframe(self) -> pd.DataFrame:
        """Display-friendly metric table."""
        rows = [
            {"Metric": "Driver-Based Total", "Value": f"{self.driver_total:,.2f}"},
            {"Metric": "Statistical Total", "Value": f"{self.model_total:,.2f}"},
            {"Metric": "Difference", "Value": f"{self.difference:+,.2f}"},
            {"Metric": "Difference (%)", "Value": f"{self.percent_diff:+.1f}%"},
            {"Metric": "Alignment", "Value": self.alignment_class.value},
            {"Metric": "Compared Periods", "Value": str(self.compared_periods)},
        ]
        if self.horizon_truncated:
            rows.append({"Metric": "FLAGS", "Value": "HORIZON_TRUNCATED"})
        return pd.DataFrame(rows)


def _align_horizons(
    driver: ForecastSeries,
    model: ForecastSeries,
    policy: HorizonPolicy,
) -> Tuple[ForecastSeries, ForecastSeries, bool]:
    if policy is HorizonPolicy.STRICT:
        if driver.periods != model.periods:
            raise HorizonMismatchError(
                f"Driver series ({len(driver)} periods) and model series "
                f"({len(model)} periods) do not cover the same months."
            )
        return driver, model, False

    n = min(len(driver), len(model))
    truncated = len(driver) != len(model)
    if truncated:
        logger.debug(
            "Horizon mismatch (driver=%d, model=%d); comparing first %d period(s)",
            len(driver), len(model), n,
        )
    driver, model = driver.head(n), model.head(n)
    if driver.periods != model.periods:
        logger.warning(
            "Driver and model series start in different months (%s vs %s); comparing by position",
            driver.periods[0], model.periods[0],
        )
    return driver, model, truncated


def _primary_insight(percent_diff: float, config: EngineConfig) -> Insight:
    magnitude = abs(percent_diff)
    if magnitude < config.excellent_threshold_pct:
        return Insight(InsightKind.SUCCESS, EXCELLENT_ALIGNMENT)
    if magnitude < config.alignment_threshold_pct:
        return Insight(InsightKind.INFO, GOOD_ALIGNMENT)
    # Divergent from the threshold up (inclusive): the sign alone picks the warning
    if percent_diff > 0:
        return Insight(InsightKind.WARNING, DRIVER_OPTIMISTIC)
    return Insight(InsightKind.WARNING, MODEL_HIGHER)


def reconcile(
    driver_series: ForecastSeries,
    model_series: ForecastSeries,
    model_accuracy: Optional[Mapping[str, float]] = None,
    *,
    config: EngineConfig = EngineConfig(),
) -> ReconciliationReport:
    """
    Reconcile a driver-based forecast against a statistical forecast.

    Parameters
    ----------
    driver_series : ForecastSeries
        Forecast produced from explicit driver assumptions
    model_series : ForecastSeries
        Forecast produced by the statistical/ML service
    model_accuracy : mapping, optional
        Accuracy metrics of the statistical model; only "mape" (in percent,
        e.g. 6.2 for 6.2%) is read
    config : EngineConfig
        Thresholds and horizon policy
    """
    driver, model, truncated = _align_horizons(driver_series, model_series, config.horizon_policy)

    driver_total = driver.total_revenue()
    model_total = model.total_revenue()
    difference = driver_total - model_total
    if model_total != 0:
        percent_diff = difference / model_total * 100
    else:
        logger.debug("Statistical model total is 0; percent difference defined as 0")
        percent_diff = 0.0

    alignment = (
        AlignmentClass.ALIGNED
        if abs(percent_diff) < config.alignment_threshold_pct
        else AlignmentClass.DIVERGENT
    )

    model_mape = model_accuracy.get("mape") if model_accuracy else None
    details = [_primary_insight(percent_diff, config)]
    if model_mape is not None and model_mape < config.strong_accuracy_mape_pct:
        details.append(Insight(
            InsightKind.INFO,
            f"Statistical model shows strong historical accuracy "
            f"(MAPE {model_mape:.1f}% < {config.strong_accuracy_mape_pct:g}%).",
        ))
    details.append(Insight(InsightKind.TIP, VALIDATE_RECOMMENDATION))

    return ReconciliationReport(
        driver_total=driver_total,
        model_total=model_total,
        difference=difference,
        percent_diff=percent_diff,
        alignment_class=alignment,
        details=tuple(details),
        compared_periods=len(driver),
        horizon_truncated=truncated,
    )
