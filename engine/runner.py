"""
Planning runner — one request through the whole engine.

    records ──validate──▶ calibrate ──▶ AssumptionSet
                                          │
                          driver_forecast(assumptions, horizon)   (external)
                                          ▼
                                   baseline ForecastSeries ──▶ project ──▶ ScenarioBundle
                                          │
         model series (external) ────────┴──▶ reconcile ──▶ ReconciliationReport

Runway is computed from cash on hand and the latest month's net burn when
cash is supplied.

The forecast engines are injected as callables; the runner does no I/O.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from calibration.assumptions import AssumptionSet
from calibration.calibrator import CalibrationResult, calibrate_with_diagnostics
from core.config import EngineConfig
from core.schema import ForecastSeries
from data_prep.validators import require_valid_records
from reconcile.reconciler import ReconciliationReport, reconcile
from scenarios.projector import ScenarioBundle, project

from .runway import net_burn, runway, runway_progress_pct

logger = logging.getLogger(__name__)

DriverForecastFn = Callable[[AssumptionSet, int], ForecastSeries]


@dataclass(frozen=True)
class PlanningResult:
    calibration: CalibrationResult
    baseline: ForecastSeries
    scenarios: ScenarioBundle
    reconciliation: Optional[ReconciliationReport]
    runway_months: Optional[float]
    runway_progress_pct: float

    @property
    def assumptions(self) -> AssumptionSet:
        return self.calibration.assumptions


def run_planning(
    records: Sequence[Any],
    driver_forecast: DriverForecastFn,
    *,
    horizon: int = 12,
    model_series: Optional[ForecastSeries] = None,
    model_mape: Optional[float] = None,
    cash_on_hand: Optional[float] = None,
    assumptions: Optional[AssumptionSet] = None,
    config: EngineConfig = EngineConfig(),
) -> PlanningResult:
    """
    Run calibration, scenario projection, reconciliation and runway.

    Parameters
    ----------
    records : sequence
        Monthly history (MonthlyFinancialRecord or mappings with the same fields).
        Validated first; structural problems raise MalformedRecordError.
    driver_forecast : callable
        External driver-based engine: (assumptions, horizon) -> baseline series
    horizon : int
        Months to forecast
    model_series : ForecastSeries, optional
        Statistical/ML forecast to reconcile against; skipped if None
    model_mape : float, optional
        MAPE of the statistical model, in percent
    cash_on_hand : float, optional
        Current cash (minor units); enables runway
    assumptions : AssumptionSet, optional
        User-adjusted assumptions that override the calibrated ones for the
        forecast (calibration diagnostics are still reported)
    """
    if horizon < 0:
        raise ValueError(f"horizon must be non-negative, got {horizon}.")

    clean = require_valid_records(records, config=config)
    calibration = calibrate_with_diagnostics(clean, config=config)
    drivers = assumptions if assumptions is not None else calibration.assumptions

    baseline = driver_forecast(drivers, horizon)
    if len(baseline) != horizon:
        logger.warning(
            "Driver forecast returned %d period(s) for a %d-month horizon",
            len(baseline), horizon,
        )
    bundle = project(baseline)

    report = None
    if model_series is not None:
        accuracy = {"mape": model_mape} if model_mape is not None else None
        report = reconcile(baseline, model_series, accuracy, config=config)

    months = None
    if cash_on_hand is not None and clean:
        months = runway(cash_on_hand, net_burn(clean[-1]))

    return PlanningResult(
        calibration=calibration,
        baseline=baseline,
        scenarios=bundle,
        reconciliation=report,
        runway_months=months,
        runway_progress_pct=runway_progress_pct(months, config.runway_target_months),
    )
