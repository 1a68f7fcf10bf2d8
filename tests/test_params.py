"""Tests for assumptions and age helpers."""

import dataclasses
from datetime import date

import pytest
from retirement_sim import (
    Assumptions,
    FixedHorizon,
    IncomeIndexation,
    Perpetual,
    age_from_birth_date,
)
from retirement_sim.params import contribution_years


class TestAgeFromBirthDate:
    def test_year_difference(self):
        assert age_from_birth_date("1995-01-01", today=date(2025, 6, 1)) == 30

    def test_ignores_month_and_day(self):
        assert age_from_birth_date("1995-12-31", today=date(2025, 1, 1)) == 30

    def test_date_object(self):
        assert age_from_birth_date(date(1980, 5, 5), today=date(2025, 5, 4)) == 45

    def test_invalid_string(self):
        with pytest.raises(ValueError):
            age_from_birth_date("not-a-date")


class TestAssumptions:
    def test_defaults(self):
        a = Assumptions()
        assert a.current_age == 30
        assert a.retirement_age == 65
        assert a.horizon == FixedHorizon(end_age=90)
        assert a.withdrawal_rate == 0.04
        assert a.indexation is IncomeIndexation.ADJUSTED
        assert not a.is_perpetual

    def test_perpetual(self):
        a = Assumptions(horizon=Perpetual())
        assert a.is_perpetual
        assert a.horizon.mode == "perpetual"

    def test_frozen(self):
        a = Assumptions()
        with pytest.raises(dataclasses.FrozenInstanceError):
            a.current_age = 40


class TestContributionYears:
    @pytest.mark.parametrize("current_age, retirement_age, expected", [
        (30, 65, 35),
        (40, 40, 0),
        (50, 40, 0),
        (-5, 10, 10),
    ])
    def test_contribution_years(self, current_age, retirement_age, expected):
        a = Assumptions(current_age=current_age, retirement_age=retirement_age)
        assert contribution_years(a) == expected
