"""Tests for nominal → real rate conversion."""

import math

import pytest
from retirement_sim import RateError, real_annual_rate, real_monthly_rate


class TestRealAnnualRate:
    def test_base_scenario(self):
        """12% nominal / 4% inflation ≈ 7.69% real."""
        assert real_annual_rate(0.12, 0.04) == pytest.approx(0.076923, abs=1e-6)

    def test_equal_rates_give_zero(self):
        assert real_annual_rate(0.04, 0.04) == 0.0

    def test_negative_real_rate(self):
        assert real_annual_rate(0.0, 0.04) == pytest.approx(1 / 1.04 - 1)

    def test_deflation(self):
        assert real_annual_rate(0.02, -0.02) == pytest.approx(1.02 / 0.98 - 1)


class TestRealMonthlyRate:
    def test_compounds_back_to_annual(self):
        monthly = real_monthly_rate(0.12, 0.04)
        assert (1 + monthly) ** 12 - 1 == pytest.approx(1.12 / 1.04 - 1, rel=1e-12)

    def test_zero(self):
        assert real_monthly_rate(0.04, 0.04) == 0.0

    @pytest.mark.parametrize("nominal", [0.08, 0.12, 0.20])
    def test_formula(self, nominal):
        expected = ((1 + nominal) / 1.04) ** (1 / 12) - 1
        assert real_monthly_rate(nominal, 0.04) == pytest.approx(expected, rel=1e-12)


class TestRateErrors:
    @pytest.mark.parametrize("inflation", [-1.0, -1.5])
    def test_inflation_at_or_below_minus_100(self, inflation):
        with pytest.raises(RateError) as exc:
            real_monthly_rate(0.12, inflation)
        assert exc.value.code == "invalid_inflation"

    def test_growth_at_minus_100(self):
        with pytest.raises(RateError) as exc:
            real_monthly_rate(-1.0, 0.04)
        assert exc.value.code == "invalid_growth_rate"

    @pytest.mark.parametrize(
        "nominal, inflation",
        [(math.nan, 0.04), (0.12, math.inf), (-math.inf, 0.04)],
    )
    def test_non_finite(self, nominal, inflation):
        with pytest.raises(RateError) as exc:
            real_annual_rate(nominal, inflation)
        assert exc.value.code == "non_finite_rate"

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            real_annual_rate(0.12, -2.0)
