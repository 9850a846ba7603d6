import pytest

from engine.runway import net_burn, runway, runway_progress_pct


class TestRunway:
    def test_months_of_cash(self):
        assert runway(1_200_000, 100_000) == pytest.approx(12.0)

    def test_fractional(self):
        assert runway(150_000, 100_000) == pytest.approx(1.5)

    @pytest.mark.parametrize("burn", [0, -5_000])
    def test_no_burn_is_indeterminate(self, burn):
        assert runway(1_000_000, burn) is None

    def test_out_of_cash_is_zero_not_none(self):
        assert runway(0, 50_000) == 0.0

    def test_negative_cash_passes_through(self):
        assert runway(-100_000, 50_000) == pytest.approx(-2.0)


class TestProgress:
    def test_none_is_zero(self):
        assert runway_progress_pct(None) == 0.0

    def test_capped_at_target(self):
        assert runway_progress_pct(36.0) == 100.0

    def test_partial(self):
        assert runway_progress_pct(6.0) == pytest.approx(25.0)

    def test_floored_at_zero(self):
        assert runway_progress_pct(-2.0) == 0.0

    def test_custom_target(self):
        assert runway_progress_pct(6.0, target_months=12.0) == pytest.approx(50.0)


def test_net_burn(make_records):
    burning, profitable = make_records([1000, 5000], opex=[3000, 3000])
    assert net_burn(burning) == 2000
    assert net_burn(profitable) == -2000
