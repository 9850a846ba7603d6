"""
Statistical model registry and best-model selection.
"""

import pytest

from data_prep.validators import MalformedRecordError
from models.registry import (
    MIN_HISTORY_MONTHS,
    StatisticalModel,
    UnknownModelError,
    available_models,
    resolve_model,
    select_best_model,
)


def _ml_result(model, values, mape=None):
    result = {
        "model": model,
        "forecast": [
            {"date": f"2025-{i + 1:02d}-01", "forecast": v}
            for i, v in enumerate(values)
        ],
    }
    if mape is not None:
        result["metrics"] = {"mape": mape}
    return result


class TestResolveModel:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("prophet", StatisticalModel.PROPHET),
            ("Prophet", StatisticalModel.PROPHET),
            ("prophet_financial", StatisticalModel.PROPHET_TUNED),
            ("Prophet (Tuned)", StatisticalModel.PROPHET_TUNED),
            (" SARIMAX ", StatisticalModel.SARIMAX),
            ("lightgbm", StatisticalModel.LIGHTGBM),
        ],
    )
    def test_known_identifiers(self, name, expected):
        assert resolve_model(name) is expected

    @pytest.mark.parametrize("name", ["arima", "prophet-ish", "", "light gbm"])
    def test_unknown_identifiers_raise(self, name):
        with pytest.raises(UnknownModelError):
            resolve_model(name)

    def test_unknown_model_error_is_key_error(self):
        with pytest.raises(KeyError):
            resolve_model("xgboost")


def test_every_model_has_a_history_minimum():
    assert set(MIN_HISTORY_MONTHS) == set(StatisticalModel)


def test_available_models():
    assert available_models(6) == ()
    assert available_models(12) == (StatisticalModel.PROPHET, StatisticalModel.PROPHET_TUNED)
    assert len(available_models(24)) == len(StatisticalModel)


class TestSelectBestModel:
    def test_returns_series_and_mape_of_best(self):
        comparison = {
            "models": {
                "prophet": _ml_result("prophet", [100.0, 110.0], mape=12.0),
                "sarimax": _ml_result("sarimax", [90.0, 95.0], mape=7.5),
            },
            "best_model": "sarimax",
            "recommendation": "Use SARIMAX",
        }
        model, series, mape = select_best_model(comparison)
        assert model is StatisticalModel.SARIMAX
        assert series.total_revenue() == 185.0
        assert mape == 7.5

    def test_alias_for_best_model(self):
        comparison = {
            "models": {"prophet_financial": _ml_result("prophet_financial", [1.0])},
            "best_model": "Prophet (Tuned)",
        }
        model, _, mape = select_best_model(comparison)
        assert model is StatisticalModel.PROPHET_TUNED
        assert mape is None

    def test_best_model_missing_from_results(self):
        comparison = {
            "models": {"prophet": _ml_result("prophet", [1.0])},
            "best_model": "lightgbm",
        }
        with pytest.raises(UnknownModelError, match="not among"):
            select_best_model(comparison)

    def test_no_best_model(self):
        with pytest.raises(UnknownModelError):
            select_best_model({"models": {}, "best_model": None})

    def test_unknown_best_model(self):
        comparison = {
            "models": {"prophet": _ml_result("prophet", [1.0])},
            "best_model": "neural_prophet",
        }
        with pytest.raises(UnknownModelError):
            select_best_model(comparison)

    def test_malformed_comparison(self):
        with pytest.raises(MalformedRecordError):
            select_best_model({"models": {"prophet": {"forecast": "nope"}}})
