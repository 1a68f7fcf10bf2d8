"""Simulation assumptions and financial calculation helpers."""

import enum
import math
from dataclasses import dataclass, field
from datetime import date

DEFAULT_WITHDRAWAL_RATE = 0.04  # 4% rule (Trinity study)
DEFAULT_CURRENT_YEAR = 2025
PERPETUAL = "perpetual"
# Upper bound of any monetary input (monthly amounts and balances)
MAX_AMOUNT = 1e15


class IncomeIndexation(enum.Enum):
    """How retirement income evolves after the first retirement year.

    ADJUSTED: from year two on, the prior year's nominal withdrawal is
    compounded by inflation (constant purchasing power).
    FIXED: the nominal amount set at the retirement date is kept, so its
    real value erodes by inflation every year.
    """

    ADJUSTED = "adjusted"
    FIXED = "fixed"


@dataclass(frozen=True)
class FixedHorizon:
    """Withdrawals run until life expectancy."""

    end_age: int
    mode: str = field(default="fixed", init=False)


@dataclass(frozen=True)
class Perpetual:
    """Withdrawals are capped to the sustainable yield and never end."""

    mode: str = field(default=PERPETUAL, init=False)


Horizon = FixedHorizon | Perpetual


@dataclass(frozen=True)
class PrivatePensionAssumptions:

    # None = same monthly contribution as the main strategy
    monthly_contribution: float | None = None
    # Balance already held in the plan; None = same savings as the main strategy
    current_balance: float | None = None
    growth_rate: float = 0.10
    # Lifetime payout (annuity-like): withdrawals capped to the sustainable yield
    lifetime: bool = False


@dataclass(frozen=True)
class PublicPensionAssumptions:
    """Social-security style scheme with accrual rules.

    The benefit is a replacement rate of the reference salary, capped at the
    ceiling. The reference salary is average_monthly_income when given,
    otherwise the salary implied by the contribution
    (contribution / contribution_rate).
    """

    monthly_contribution: float | None = None
    average_monthly_income: float | None = None  # today's money
    contribution_rate: float = 0.11          # share of salary paid into the scheme
    credited_rate: float = 0.04              # nominal rate credited to the notional account
    prior_contribution_years: int = 0
    minimum_years: int = 15                  # no benefit below this
    qualifying_years: int = 20               # base replacement reached here
    base_replacement: float = 0.60
    accrual_per_extra_year: float = 0.02
    max_replacement: float = 1.0
    benefit_ceiling: float = 7786.02         # monthly, today's money


@dataclass(frozen=True)
class Assumptions:
    """Complete input snapshot for one projection run."""

    current_age: int = 30
    retirement_age: int = 65
    horizon: Horizon = FixedHorizon(end_age=90)
    current_year: int = DEFAULT_CURRENT_YEAR

    current_savings: float = 0.0
    monthly_contribution: float = 1000.0
    desired_monthly_income: float = 5000.0  # today's money

    # Economic parameters (annual, nominal)
    growth_rate: float = 0.12
    inflation_rate: float = 0.04
    withdrawal_rate: float = DEFAULT_WITHDRAWAL_RATE
    indexation: IncomeIndexation = IncomeIndexation.ADJUSTED

    pension: PrivatePensionAssumptions = PrivatePensionAssumptions()
    public_pension: PublicPensionAssumptions = PublicPensionAssumptions()

    @property
    def is_perpetual(self) -> bool:
        return isinstance(self.horizon, Perpetual)


def _non_negative(value: float) -> float:
    """Clamp an amount into the simulated domain [0, MAX_AMOUNT] (non-finite -> 0)."""
    if not math.isfinite(value) or value < 0:
        return 0.0
    return min(value, MAX_AMOUNT)


def contribution_years(assumptions: Assumptions) -> int:
    """Years from now to retirement, never negative."""
    return max(0, assumptions.retirement_age - max(0, assumptions.current_age))


def age_from_birth_date(birth_date: date | str, today: date | None = None) -> int:
    """Return the age used by the projection: calendar year difference only."""
    if isinstance(birth_date, str):
        birth_date = date.fromisoformat(birth_date)
    if today is None:
        today = date.today()
    return today.year - birth_date.year


def _required_contribution(
    target: float, balance: float, monthly_rate: float, months: int
) -> float:
    """Monthly contribution c solving target = balance*(1+r)^n + c*((1+r)^n - 1)/r."""
    if months <= 0:
        return 0.0
    growth = (1 + monthly_rate) ** months
    if monthly_rate == 0 or growth == 1:
        return (target - balance) / months
    return (target - balance * growth) * monthly_rate / (growth - 1)
