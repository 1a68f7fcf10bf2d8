"""Tests for config loading and CLI > config > default resolution."""

import argparse
from datetime import date

import pytest
from retirement_sim import FixedHorizon, IncomeIndexation, Perpetual
from retirement_sim.config import (
    DEFAULTS,
    build_assumptions,
    create_parser,
    load_config,
    parse_life_expectancy,
    resolve,
)


def _namespace(**kwargs):
    values = {key: None for key in DEFAULTS}
    values.update(kwargs)
    return argparse.Namespace(**values)


class TestLoadConfig:
    def test_missing_file(self, tmp_path):
        assert load_config(tmp_path / "missing.toml") == {}

    def test_normalizes_values(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(
            'life_expectancy = "Perpetual"\n'
            "birth_date = 1995-06-01\n"
            "contribution = 1500.0\n",
            encoding="utf-8",
        )
        config = load_config(path)
        assert config["life_expectancy"] == "perpetual"
        assert config["birth_date"] == "1995-06-01"
        assert config["contribution"] == 1500.0

    def test_integer_life_expectancy(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("life_expectancy = 85\n", encoding="utf-8")
        assert load_config(path)["life_expectancy"] == "85"

    def test_invalid_toml(self, tmp_path, capsys):
        path = tmp_path / "config.toml"
        path.write_text("contribution = = 1\n", encoding="utf-8")
        with pytest.raises(SystemExit):
            load_config(path)
        assert "Failed to read config file" in capsys.readouterr().err


class TestParseLifeExpectancy:
    def test_age(self):
        assert parse_life_expectancy("85") == FixedHorizon(end_age=85)
        assert parse_life_expectancy(95) == FixedHorizon(end_age=95)

    def test_perpetual(self):
        assert parse_life_expectancy(" PERPETUAL ") == Perpetual()

    def test_invalid(self):
        with pytest.raises(ValueError, match="life expectancy"):
            parse_life_expectancy("forever")


class TestResolve:
    def test_defaults(self):
        assert resolve(_namespace(), {}) == DEFAULTS

    def test_config_over_default(self):
        r = resolve(_namespace(), {"savings": 5000.0})
        assert r["savings"] == 5000.0

    def test_cli_over_config(self):
        r = resolve(_namespace(savings=100.0), {"savings": 5000.0})
        assert r["savings"] == 100.0

    def test_parser_flags_map_to_keys(self):
        args = create_parser("test").parse_args(
            ["--desired-income", "7000", "--life-expectancy", "perpetual", "--pension-lifetime"]
        )
        r = resolve(args, {})
        assert r["desired_income"] == 7000.0
        assert r["life_expectancy"] == "perpetual"
        assert r["pension_lifetime"] is True
        assert r["contribution"] == DEFAULTS["contribution"]


class TestBuildAssumptions:
    def setup_method(self):
        self.today = date(2025, 3, 1)

    def test_defaults(self):
        a = build_assumptions(dict(DEFAULTS), today=self.today)
        assert a.current_age == 30
        assert a.current_year == 2025
        assert a.growth_rate == 0.12
        assert a.inflation_rate == 0.04
        assert a.horizon == FixedHorizon(end_age=90)
        assert a.indexation is IncomeIndexation.ADJUSTED

    def test_birth_date_overrides_age(self):
        r = dict(DEFAULTS, birth_date="1985-06-01")
        assert build_assumptions(r, today=self.today).current_age == 40

    def test_scenario(self):
        r = dict(DEFAULTS, scenario="pessimistic")
        assert build_assumptions(r, today=self.today).growth_rate == 0.08

    def test_rate_overrides_scenario(self):
        r = dict(DEFAULTS, scenario="optimistic", growth_rate=0.15, inflation=0.05)
        a = build_assumptions(r, today=self.today)
        assert a.growth_rate == 0.15
        assert a.inflation_rate == 0.05

    def test_pension_settings(self):
        r = dict(
            DEFAULTS, pension_contribution=300.0, pension_lifetime=True,
            public_prior_years=12, indexation="fixed", current_year=2030,
        )
        a = build_assumptions(r, today=self.today)
        assert a.pension.monthly_contribution == 300.0
        assert a.pension.lifetime
        assert a.public_pension.prior_contribution_years == 12
        assert a.pension.current_balance is None
        assert a.public_pension.average_monthly_income is None

    def test_pension_balance_and_average_income(self):
        args = create_parser("test").parse_args(
            ["--pension-balance", "25000", "--public-average-income", "4200"]
        )
        a = build_assumptions(resolve(args, {}), today=self.today)
        assert a.pension.current_balance == 25000.0
        assert a.public_pension.average_monthly_income == 4200.0
        assert a.indexation is IncomeIndexation.FIXED
        assert a.current_year == 2030

    def test_invalid_life_expectancy(self):
        with pytest.raises(ValueError):
            build_assumptions(dict(DEFAULTS, life_expectancy="never"), today=self.today)
