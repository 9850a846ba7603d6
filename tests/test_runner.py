"""
End-to-end planning runs with a stubbed driver-based forecast engine.
"""

import pytest

from calibration.assumptions import AssumptionSet
from core.schema import ForecastSeries
from data_prep.validators import MalformedRecordError
from engine.runner import run_planning


def flat_engine(revenue=100_000.0, expenses=80_000.0, start="2025-01"):
    calls = []

    def forecast(assumptions, horizon):
        calls.append((assumptions, horizon))
        return ForecastSeries.from_values(start, [revenue] * horizon, [expenses] * horizon)

    forecast.calls = calls
    return forecast


class TestRunPlanning:
    def test_full_run(self, twelve_month_history, flat_baseline):
        engine = flat_engine()
        result = run_planning(
            twelve_month_history,
            engine,
            model_series=flat_baseline,
            model_mape=4.0,
        )
        assert engine.calls == [(result.assumptions, 12)]
        assert result.assumptions.is_within_bounds()
        assert result.scenarios.base.total_net_income == pytest.approx(240_000)
        assert result.reconciliation.percent_diff == pytest.approx(0.0)
        assert len(result.reconciliation.insights) == 3
        assert result.runway_months is None

    def test_runway_from_latest_month(self, make_records):
        records = make_records([1000, 1000], opex=[1500, 3000])
        result = run_planning(records, flat_engine(), cash_on_hand=20_000)
        assert result.runway_months == pytest.approx(10.0)
        assert result.runway_progress_pct == pytest.approx(10 / 24 * 100)

    def test_profitable_business_has_no_runway(self, twelve_month_history):
        result = run_planning(twelve_month_history, flat_engine(), cash_on_hand=1_000_000)
        assert result.runway_months is None
        assert result.runway_progress_pct == 0.0

    def test_reconciliation_skipped_without_model(self, twelve_month_history):
        assert run_planning(twelve_month_history, flat_engine()).reconciliation is None

    def test_user_assumptions_override_calibration(self, twelve_month_history):
        engine = flat_engine()
        override = AssumptionSet(revenue_growth=0.15)
        result = run_planning(twelve_month_history, engine, horizon=6, assumptions=override)
        assert engine.calls == [(override, 6)]
        assert result.calibration.assumptions != override
        assert result.scenarios.horizon == 6

    def test_out_of_range_override_never_reaches_engine(self, twelve_month_history):
        engine = flat_engine()
        with pytest.raises(ValueError, match="revenue_growth"):
            run_planning(
                twelve_month_history,
                engine,
                assumptions=AssumptionSet(revenue_growth=5.0, cogs_percent=-3.0),
            )
        assert engine.calls == []

        override = AssumptionSet.clamped(revenue_growth=5.0, cogs_percent=-3.0)
        run_planning(twelve_month_history, engine, assumptions=override)
        (forwarded, _), = engine.calls
        assert forwarded.is_within_bounds()
        assert forwarded.revenue_growth == 0.20

    def test_accepts_mapping_records(self):
        rows = [
            {"period": "2024-01-01", "revenue": 100, "cogs": 10, "opex": 20,
             "personnel": 30, "total_expenses": 60, "net_income": 40},
            {"period": "2024-02-01", "revenue": 120, "cogs": 12, "opex": 20,
             "personnel": 30, "total_expenses": 62, "net_income": 58},
        ]
        result = run_planning(rows, flat_engine(), horizon=3)
        assert result.assumptions.revenue_growth == pytest.approx(0.20)

    def test_malformed_records_raise(self):
        with pytest.raises(MalformedRecordError):
            run_planning([{"period": "2024-01-01", "revenue": 1.5}], flat_engine())

    def test_negative_horizon(self, twelve_month_history):
        with pytest.raises(ValueError, match="horizon"):
            run_planning(twelve_month_history, flat_engine(), horizon=-1)

    def test_zero_horizon(self, twelve_month_history):
        result = run_planning(twelve_month_history, flat_engine(), horizon=0)
        assert result.scenarios.horizon == 0
        assert result.scenarios.base.total_net_income == 0
