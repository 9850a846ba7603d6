"""
Unit tests for shared numeric helpers and the ForecastSeries type.
"""

import pandas as pd
import pytest

from core.schema import ForecastPoint, ForecastSeries, to_period
from core.utils import (
    clamp,
    coefficient_of_variation,
    mean_period_growth,
    safe_ratio,
    to_major_units,
    to_minor_units,
)


class TestSafeRatio:
    def test_regular_division(self):
        assert safe_ratio(30, 120) == pytest.approx(0.25)

    @pytest.mark.parametrize("denominator", [0, -5, -0.0001])
    def test_zero_or_negative_denominator_is_zero(self, denominator):
        assert safe_ratio(10, denominator) == 0.0


class TestMeanPeriodGrowth:
    def test_skips_pairs_with_non_positive_previous(self):
        mean, n = mean_period_growth([0, 100, 110])
        assert n == 1
        assert mean == pytest.approx(0.10)

    def test_averages_valid_pairs(self):
        mean, n = mean_period_growth([100, 110, 99])
        assert n == 2
        assert mean == pytest.approx((0.10 + (-0.10)) / 2)

    def test_no_valid_pairs(self):
        assert mean_period_growth([0, 0, 0]) == (0.0, 0)
        assert mean_period_growth([-5, 10]) == (0.0, 0)

    def test_short_input(self):
        assert mean_period_growth([]) == (0.0, 0)
        assert mean_period_growth([100]) == (0.0, 0)


class TestCoefficientOfVariation:
    def test_constant_series_is_zero(self):
        assert coefficient_of_variation([500, 500, 500]) == 0.0

    def test_population_std_over_mean(self):
        # mean 100, population std 50
        assert coefficient_of_variation([50, 150]) == pytest.approx(0.5)

    def test_non_positive_mean(self):
        assert coefficient_of_variation([0, 0]) == 0.0
        assert coefficient_of_variation([-10, 5]) == 0.0
        assert coefficient_of_variation([]) == 0.0


def test_clamp():
    assert clamp(0.5, -0.1, 0.2) == 0.2
    assert clamp(-0.5, -0.1, 0.2) == -0.1
    assert clamp(0.05, -0.1, 0.2) == 0.05


def test_minor_unit_conversion():
    assert to_minor_units(12.34) == 1234
    assert to_minor_units(0.125) == 13
    assert to_minor_units(-2.5) == -250
    assert to_major_units(1250) == 12.5


class TestForecastSeries:
    def test_from_values_recomputes_net_income(self):
        s = ForecastSeries.from_values("2025-03-01", [100.0, 120.0], [60.0, 70.0])
        assert len(s) == 2
        assert s.periods == [pd.Period("2025-03", "M"), pd.Period("2025-04", "M")]
        assert [p.net_income for p in s] == [40.0, 50.0]

    def test_gap_is_rejected(self):
        with pytest.raises(ValueError, match="consecutive"):
            ForecastSeries((
                ForecastPoint(to_period("2025-01"), 1.0, 0.0, 1.0),
                ForecastPoint(to_period("2025-03"), 1.0, 0.0, 1.0),
            ))

    def test_out_of_order_is_rejected(self):
        with pytest.raises(ValueError):
            ForecastSeries((
                ForecastPoint(to_period("2025-02"), 1.0, 0.0, 1.0),
                ForecastPoint(to_period("2025-01"), 1.0, 0.0, 1.0),
            ))

    def test_empty_series_is_valid(self):
        s = ForecastSeries()
        assert len(s) == 0
        assert s.total_revenue() == 0.0
        assert list(s.to_dataframe().columns) == ["period", "revenue", "expenses", "net_income"]

    def test_head(self):
        s = ForecastSeries.from_values("2025-01", [1.0, 2.0, 3.0], [0.0, 0.0, 0.0])
        assert s.head(2).total_revenue() == 3.0
        assert len(s.head(10)) == 3
