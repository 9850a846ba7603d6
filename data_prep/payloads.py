"""
Pydantic models for the backend JSON contracts the engine consumes.

Only the fields the engine reads are declared; anything else in a payload is
ignored. Amounts are in cents.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")


class HistoricalDataPoint(_Payload):
    period: str  # YYYY-MM-DD
    revenue: int
    cogs: int
    opex: int
    personnel: int
    total_expenses: int
    net_income: int


class PLSummary(_Payload):
    workspace_id: Optional[str] = None
    summary: List[HistoricalDataPoint]
    count: Optional[int] = None


class ForecastDataPoint(_Payload):
    period: str
    revenue: float
    total_expenses: float
    net_income: float


class ForecastResult(_Payload):
    forecast: List[ForecastDataPoint]
    runway: Optional[float] = None


class MLForecastPoint(_Payload):
    date: str
    forecast: float
    lower_bound: Optional[float] = None
    upper_bound: Optional[float] = None


class MLModelMetrics(_Payload):
    mae: Optional[float] = None
    mape: Optional[float] = Field(default=None, ge=0)
    rmse: Optional[float] = None
    coverage: Optional[float] = None


class MLForecastResult(_Payload):
    model: str
    forecast: List[MLForecastPoint]
    metrics: Optional[MLModelMetrics] = None


class MLModelComparison(_Payload):
    models: Dict[str, MLForecastResult] = Field(default_factory=dict)
    best_model: Optional[str] = None
    recommendation: Optional[str] = None


class DashboardKPIs(_Payload):
    total_revenue: float
    net_burn: float
    cash_on_hand: Optional[float] = None
    runway: Optional[float] = None
