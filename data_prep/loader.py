"""
Adapters from backend JSON payloads (already decoded) to engine types.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Tuple, Type, TypeVar

import pandas as pd
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from core.schema import MONETARY_FIELDS, ForecastPoint, ForecastSeries, MonthlyFinancialRecord, to_period
from core.utils import require_columns

from .payloads import DashboardKPIs, ForecastResult, MLForecastResult, PLSummary
from .validators import MalformedRecordError, ValidationResult, require_valid_records

_M = TypeVar("_M", bound=BaseModel)


def parse_payload(model: Type[_M], payload: Mapping[str, Any]) -> _M:
    """Validate a payload, converting pydantic errors into MalformedRecordError."""
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        result = ValidationResult(errors=[
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        ])
        raise MalformedRecordError(result) from exc


def records_from_summary(payload: Mapping[str, Any]) -> List[MonthlyFinancialRecord]:
    """P&L summary payload -> validated, chronologically ordered records."""
    summary = parse_payload(PLSummary, payload)
    return require_valid_records([p.model_dump() for p in summary.summary])


def records_from_frame(df: pd.DataFrame) -> List[MonthlyFinancialRecord]:
    """DataFrame with a `period` column and the monetary fields -> records."""
    require_columns(df, ["period", *MONETARY_FIELDS])
    rows = df[["period", *MONETARY_FIELDS]].to_dict(orient="records")
    return require_valid_records(rows)


def series_from_forecast_result(payload: Mapping[str, Any]) -> ForecastSeries:
    """Driver-based forecast result -> ForecastSeries (expenses = total_expenses)."""
    result = parse_payload(ForecastResult, payload)
    return ForecastSeries(tuple(
        ForecastPoint(
            period=to_period(p.period),
            revenue=p.revenue,
            expenses=p.total_expenses,
            net_income=p.net_income,
        )
        for p in result.forecast
    ))


def series_from_ml_result(payload: Mapping[str, Any]) -> Tuple[ForecastSeries, Optional[float]]:
    """
    ML forecast result -> (revenue-only ForecastSeries, MAPE or None).

    The ML service forecasts revenue only, so expenses are 0 and net income
    equals revenue in the resulting series.
    """
    result = parse_payload(MLForecastResult, payload)
    return ml_result_to_series(result)


def kpis_from_payload(payload: Mapping[str, Any]) -> DashboardKPIs:
    """Dashboard KPI payload (cents) used for the FY assumption preview."""
    return parse_payload(DashboardKPIs, payload)


def ml_result_to_series(result: MLForecastResult) -> Tuple[ForecastSeries, Optional[float]]:
    series = ForecastSeries(tuple(
        ForecastPoint(period=to_period(p.date), revenue=p.forecast, expenses=0.0, net_income=p.forecast)
        for p in result.forecast
    ))
    mape = result.metrics.mape if result.metrics is not None else None
    return series, mape
