"""Tests for scenario definitions and multi-scenario execution."""

import pytest
from retirement_sim import SCENARIOS, Assumptions, apply_scenario, run_scenarios
from retirement_sim.scenarios import DEFAULT_SCENARIO, scenario_label


class TestScenarios:
    def test_names(self):
        assert list(SCENARIOS) == ["pessimistic", "base", "optimistic"]
        assert DEFAULT_SCENARIO == "base"

    @pytest.mark.parametrize("name, growth", [
        ("pessimistic", 0.08),
        ("base", 0.12),
        ("optimistic", 0.20),
    ])
    def test_apply_scenario(self, name, growth):
        a = apply_scenario(Assumptions(growth_rate=0.5, inflation_rate=0.1), name)
        assert a.growth_rate == growth
        assert a.inflation_rate == 0.04

    def test_apply_keeps_other_fields(self):
        a = apply_scenario(Assumptions(current_age=40, monthly_contribution=250), "optimistic")
        assert a.current_age == 40
        assert a.monthly_contribution == 250

    def test_unknown_scenario(self):
        with pytest.raises(ValueError, match="unknown scenario"):
            apply_scenario(Assumptions(), "crash")

    def test_label(self):
        assert scenario_label("base") == "Base (12% / 4%)"
        assert scenario_label("optimistic") == "Optimistic (20% / 4%)"


class TestRunScenarios:
    def setup_method(self):
        self.results = run_scenarios(Assumptions())

    def test_all_scenarios(self):
        assert list(self.results) == ["pessimistic", "base", "optimistic"]

    def test_wealth_increases_with_growth(self):
        wealth = [r.final_wealth for r in self.results.values()]
        assert wealth[0] < wealth[1] < wealth[2]

    def test_public_pension_unaffected(self):
        """Scenario rates apply to the chosen strategy only."""
        traditional = [r.outcomes["traditional"].final_wealth for r in self.results.values()]
        assert traditional[0] == traditional[1] == traditional[2]
