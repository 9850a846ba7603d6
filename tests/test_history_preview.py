"""
Data-review statistics and the annualized assumption preview.
"""

import pytest

from calibration.assumptions import AssumptionSet
from calibration.history import growth_series, seasonal_profile, summarize_history
from calibration.preview import preview_assumptions


class TestSummarizeHistory:
    def test_totals_and_flags(self, make_records):
        records = make_records([1000, 2000, 3000], opex=[500, 500, 500])
        s = summarize_history(records)
        assert s.months == 3
        assert s.total_revenue == 6000
        assert s.total_expenses == 1500
        assert s.total_net_income == 4500
        assert s.avg_revenue == pytest.approx(2000.0)
        assert s.expense_ratio_pct == pytest.approx(25.0)
        assert not s.has_minimum_data
        assert s.has_revenue and s.has_expenses

    def test_full_year_has_minimum_data(self, twelve_month_history):
        assert summarize_history(twelve_month_history).has_minimum_data

    def test_empty(self):
        s = summarize_history([])
        assert s.months == 0
        assert s.avg_revenue == 0.0
        assert s.expense_ratio_pct == 0.0
        assert not s.has_revenue


class TestSeasonalProfile:
    def test_two_years_average_by_calendar_month(self, make_records):
        # Jan..Dec 2023 at 100, Jan..Dec 2024 at 300 except a 0 in every Jun
        revenue = [100] * 12 + [300] * 12
        revenue[5] = 0
        revenue[17] = 0
        df = seasonal_profile(make_records(revenue, start="2023-01"))
        assert list(df.columns) == ["month", "month_index", "avg_revenue", "avg_expense", "seasonal_index"]
        assert "Jun" not in set(df["month"])
        assert len(df) == 11
        assert df["avg_revenue"].iloc[0] == pytest.approx(200.0)
        assert df["seasonal_index"].mean() == pytest.approx(1.0)

    def test_empty(self):
        assert seasonal_profile([]).empty


def test_growth_series(make_records):
    df = growth_series(make_records([0, 100, 150]))
    assert list(df["period"]) == ["2024-02", "2024-03"]
    assert df["growth_rate_pct"].tolist() == pytest.approx([0.0, 50.0])


class TestPreview:
    def test_fiscal_year_projection(self):
        a = AssumptionSet(revenue_growth=0.10, cogs_percent=0.25, opex_growth=0.05)
        p = preview_assumptions(a, monthly_revenue=100_000, net_burn=-20_000)
        assert p.projected_revenue == pytest.approx(1_320_000)
        assert p.projected_cogs == pytest.approx(330_000)
        assert p.projected_opex == pytest.approx(120_000 * 12 * 1.05)
        assert p.projected_ebitda == pytest.approx(1_320_000 - 330_000 - 1_512_000)
        assert p.ebitda_margin == pytest.approx(p.projected_ebitda / 1_320_000)

    def test_zero_revenue_margin(self):
        p = preview_assumptions(AssumptionSet(), monthly_revenue=0, net_burn=50_000)
        assert p.projected_revenue == 0
        assert p.ebitda_margin == 0.0
