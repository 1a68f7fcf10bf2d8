"""Tests for strategy descriptors and the public pension benefit rule."""

import pytest
from retirement_sim import (
    Assumptions,
    FixedHorizon,
    Perpetual,
    PrivatePensionAssumptions,
    PublicPensionAssumptions,
    build_all_strategies,
    public_pension_benefit,
)
from retirement_sim.strategies import (
    DEFINED_BENEFIT,
    DRAWDOWN,
    build_private_pension_strategy,
    build_public_pension_strategy,
)


class TestPublicPensionBenefit:
    def setup_method(self):
        self.rules = PublicPensionAssumptions()

    def test_below_minimum_years(self):
        assert public_pension_benefit(self.rules, 1000, 14) == 0.0

    def test_base_replacement_at_qualifying_years(self):
        # 60% of 500 / 0.11
        assert public_pension_benefit(self.rules, 500, 20) == pytest.approx(0.6 * 500 / 0.11)

    def test_base_replacement_between_minimum_and_qualifying(self):
        assert public_pension_benefit(self.rules, 500, 15) == pytest.approx(0.6 * 500 / 0.11)

    def test_accrual_per_extra_year(self):
        # 35 years: 60% + 15 * 2% = 90%
        assert public_pension_benefit(self.rules, 500, 35) == pytest.approx(0.9 * 500 / 0.11)

    def test_prior_years_count(self):
        rules = PublicPensionAssumptions(prior_contribution_years=10)
        assert public_pension_benefit(rules, 500, 10) == pytest.approx(0.6 * 500 / 0.11)

    def test_replacement_capped(self):
        rules = PublicPensionAssumptions(prior_contribution_years=30)
        assert public_pension_benefit(rules, 500, 35) == pytest.approx(500 / 0.11)

    def test_benefit_ceiling(self):
        assert public_pension_benefit(self.rules, 1000, 35) == 7786.02

    def test_zero_contribution(self):
        assert public_pension_benefit(self.rules, 0, 35) == 0.0


class TestBuildAllStrategies:
    def setup_method(self):
        self.a = Assumptions(current_savings=5000)
        self.strategies = build_all_strategies(self.a)

    def test_order(self):
        assert [s.key for s in self.strategies] == ["btc", "pension", "traditional"]

    def test_bitcoin(self):
        btc = self.strategies[0]
        assert btc.growth_rate == 0.12
        assert btc.monthly_contribution == 1000
        assert btc.initial_balance == 5000
        assert btc.payout == DRAWDOWN
        assert btc.bequeathable

    def test_private_pension_defaults_to_main_contribution(self):
        pension = self.strategies[1]
        assert pension.monthly_contribution == 1000
        assert pension.growth_rate == 0.10
        assert pension.initial_balance == 5000
        assert pension.horizon == FixedHorizon(end_age=90)

    def test_public_pension(self):
        traditional = self.strategies[2]
        assert traditional.initial_balance == 0.0
        assert traditional.payout == DEFINED_BENEFIT
        assert not traditional.bequeathable
        assert traditional.benefit_monthly == 7786.02


class TestStrategyOverrides:
    def test_private_pension_contribution(self):
        a = Assumptions(pension=PrivatePensionAssumptions(monthly_contribution=300))
        assert build_private_pension_strategy(a).monthly_contribution == 300

    def test_private_pension_lifetime(self):
        a = Assumptions(pension=PrivatePensionAssumptions(lifetime=True))
        assert build_private_pension_strategy(a).horizon == Perpetual()

    def test_public_pension_contribution(self):
        a = Assumptions(public_pension=PublicPensionAssumptions(monthly_contribution=200))
        strategy = build_public_pension_strategy(a)
        assert strategy.monthly_contribution == 200
        assert strategy.benefit_monthly == pytest.approx(0.9 * 200 / 0.11)

    def test_public_pension_short_career(self):
        a = Assumptions(current_age=55, retirement_age=65)
        assert build_public_pension_strategy(a).benefit_monthly == 0.0


class TestPensionInputs:
    def test_average_income_sets_reference_salary(self):
        rules = PublicPensionAssumptions(average_monthly_income=3000)
        # 35 years: 90% of 3000, regardless of the contribution
        assert public_pension_benefit(rules, 100, 35) == pytest.approx(2700)

    def test_average_income_capped_at_ceiling(self):
        rules = PublicPensionAssumptions(average_monthly_income=20000)
        assert public_pension_benefit(rules, 100, 35) == 7786.02

    def test_average_income_still_needs_minimum_years(self):
        rules = PublicPensionAssumptions(average_monthly_income=3000)
        assert public_pension_benefit(rules, 100, 10) == 0.0

    def test_public_strategy_uses_average_income(self):
        a = Assumptions(public_pension=PublicPensionAssumptions(average_monthly_income=2000))
        assert build_public_pension_strategy(a).benefit_monthly == pytest.approx(1800)

    def test_private_pension_current_balance(self):
        a = Assumptions(
            current_savings=50000,
            pension=PrivatePensionAssumptions(current_balance=12000),
        )
        strategies = build_all_strategies(a)
        assert strategies[0].initial_balance == 50000
        assert strategies[1].initial_balance == 12000
        assert strategies[2].initial_balance == 0.0

    def test_private_pension_balance_defaults_to_savings(self):
        a = Assumptions(current_savings=50000)
        assert build_private_pension_strategy(a).initial_balance == 50000
