"""Core simulation engine."""

import enum
import math
from dataclasses import dataclass

from retirement_sim.params import (
    DEFAULT_WITHDRAWAL_RATE,
    MAX_AMOUNT,
    Assumptions,
    FixedHorizon,
    Horizon,
    IncomeIndexation,
    Perpetual,
    _non_negative,
    contribution_years,
)
from retirement_sim.rates import ERR_NON_FINITE_RATE, RateError, real_monthly_rate
from retirement_sim.strategies import DEFINED_BENEFIT, Strategy

# Uniform cap on retirement years (both modes) so decumulation always terminates
MAX_RETIREMENT_YEARS = 60

# Validation error codes
ERR_NEGATIVE_AGE = "negative_age"
ERR_RETIREMENT_BEFORE_CURRENT_AGE = "retirement_before_current_age"
ERR_LIFE_EXPECTANCY_BEFORE_RETIREMENT = "life_expectancy_before_retirement"
ERR_NEGATIVE_CONTRIBUTION = "negative_contribution"
ERR_NEGATIVE_SAVINGS = "negative_savings"
ERR_NEGATIVE_DESIRED_INCOME = "negative_desired_income"
ERR_INVALID_WITHDRAWAL_RATE = "invalid_withdrawal_rate"
ERR_NON_FINITE_AMOUNT = "non_finite_amount"
ERR_AMOUNT_OUT_OF_RANGE = "amount_out_of_range"
ERR_NEGATIVE_AVERAGE_INCOME = "negative_average_income"

ACCUMULATION_PHASE = "Accumulation"
RETIREMENT_PHASE = "Retirement"


class PeriodKind(enum.Enum):
    """State of a simulated year. Exactly one per row."""

    ACCUMULATION = "accumulation"
    FIRST_RETIREMENT_YEAR = "first_retirement_year"
    SECOND_RETIREMENT_YEAR = "second_retirement_year"
    RETIREMENT = "retirement"
    BANKRUPTCY = "bankruptcy"


@dataclass(frozen=True)
class PeriodRow:
    """Year-end snapshot of one strategy."""

    year: int
    age: int
    kind: PeriodKind
    contribution: float
    yield_earned: float
    withdrawal: float
    balance: float
    monthly_income: float = 0.0
    # Desired withdrawal that could not be paid (bankruptcy row only)
    shortfall: float = 0.0
    # Income of the year is a fixed nominal amount (not inflation-adjusted)
    fixed_income: bool = False

    @property
    def phase(self) -> str:
        if self.kind is PeriodKind.ACCUMULATION:
            return ACCUMULATION_PHASE
        return RETIREMENT_PHASE

    @property
    def is_first_retirement_year(self) -> bool:
        return self.kind is PeriodKind.FIRST_RETIREMENT_YEAR

    @property
    def is_second_retirement_year(self) -> bool:
        return self.kind is PeriodKind.SECOND_RETIREMENT_YEAR

    @property
    def is_boiling_point(self) -> bool:
        """Withdrawal exceeds yield: the capital base itself is shrinking."""
        return self.withdrawal > self.yield_earned

    @property
    def is_bankruptcy(self) -> bool:
        """Capital exhausted: a positive required withdrawal met a balance no larger than it.

        A zero balance with nothing to withdraw (zero desired income) is not
        bankruptcy; such years stay ordinary retirement rows.
        """
        return self.kind is PeriodKind.BANKRUPTCY


@dataclass(frozen=True)
class BankruptcySnapshot:
    """Balance available vs. withdrawal required in the year capital ran out."""

    age: int
    year: int
    balance: float
    required: float
    shortfall: float


@dataclass(frozen=True)
class StrategyRun:
    """Rows and edge events produced by simulate_strategy() for one strategy."""

    strategy: Strategy
    rows: tuple[PeriodRow, ...]
    final_wealth: float  # balance at the retirement date
    real_monthly_rate: float
    bankruptcy: BankruptcySnapshot | None = None
    errors: tuple[str, ...] = ()

    @property
    def bankruptcy_age(self) -> int | None:
        for row in self.rows:
            if row.is_bankruptcy:
                return row.age
        return None

    @property
    def legacy_wealth(self) -> float:
        """Balance left at the terminal year (zero if bankrupt or not inheritable)."""
        if self.bankruptcy is not None or not self.strategy.bequeathable:
            return 0.0
        if self.rows:
            return self.rows[-1].balance
        return self.final_wealth

    @property
    def total_contributed(self) -> float:
        return sum(row.contribution for row in self.rows)

    @property
    def accumulation_rows(self) -> tuple[PeriodRow, ...]:
        return tuple(r for r in self.rows if r.kind is PeriodKind.ACCUMULATION)

    @property
    def retirement_rows(self) -> tuple[PeriodRow, ...]:
        return tuple(r for r in self.rows if r.kind is not PeriodKind.ACCUMULATION)


def effective_withdrawal_rate(assumptions: Assumptions) -> float:
    """Withdrawal rate actually used; falls back to the default when out of (0, 1)."""
    rate = assumptions.withdrawal_rate
    if math.isfinite(rate) and 0 < rate < 1:
        return rate
    return DEFAULT_WITHDRAWAL_RATE


def retirement_years(assumptions: Assumptions, horizon: Horizon | None = None) -> int:
    """Years simulated after retirement, capped at MAX_RETIREMENT_YEARS."""
    if horizon is None:
        horizon = assumptions.horizon
    if isinstance(horizon, Perpetual):
        return MAX_RETIREMENT_YEARS
    retirement_age = max(assumptions.retirement_age, max(0, assumptions.current_age))
    return min(max(0, horizon.end_age - retirement_age), MAX_RETIREMENT_YEARS)


def validate_assumptions(assumptions: Assumptions) -> list[str]:
    """Validate domain constraints. Returns list of error codes (empty if valid)."""
    errors = []
    a = assumptions
    contributions = [a.monthly_contribution]
    if a.pension.monthly_contribution is not None:
        contributions.append(a.pension.monthly_contribution)
    if a.public_pension.monthly_contribution is not None:
        contributions.append(a.public_pension.monthly_contribution)

    balances = [a.current_savings]
    if a.pension.current_balance is not None:
        balances.append(a.pension.current_balance)
    incomes = [a.desired_monthly_income]
    average_income = a.public_pension.average_monthly_income
    if average_income is not None:
        incomes.append(average_income)

    amounts = [*balances, *incomes, *contributions]
    if not all(math.isfinite(v) for v in amounts):
        errors.append(ERR_NON_FINITE_AMOUNT)
    if any(math.isfinite(v) and v > MAX_AMOUNT for v in amounts):
        errors.append(ERR_AMOUNT_OUT_OF_RANGE)

    ages = [a.current_age, a.retirement_age]
    if isinstance(a.horizon, FixedHorizon):
        ages.append(a.horizon.end_age)
    if any(age < 0 for age in ages):
        errors.append(ERR_NEGATIVE_AGE)

    if a.retirement_age < a.current_age:
        errors.append(ERR_RETIREMENT_BEFORE_CURRENT_AGE)
    if isinstance(a.horizon, FixedHorizon) and a.horizon.end_age < a.retirement_age:
        errors.append(ERR_LIFE_EXPECTANCY_BEFORE_RETIREMENT)

    if any(c < 0 for c in contributions):
        errors.append(ERR_NEGATIVE_CONTRIBUTION)
    if any(b < 0 for b in balances):
        errors.append(ERR_NEGATIVE_SAVINGS)
    if a.desired_monthly_income < 0:
        errors.append(ERR_NEGATIVE_DESIRED_INCOME)
    if average_income is not None and average_income < 0:
        errors.append(ERR_NEGATIVE_AVERAGE_INCOME)
    if not (math.isfinite(a.withdrawal_rate) and 0 < a.withdrawal_rate < 1):
        errors.append(ERR_INVALID_WITHDRAWAL_RATE)

    return errors


def _retirement_kind(year_index: int) -> PeriodKind:
    if year_index == 1:
        return PeriodKind.FIRST_RETIREMENT_YEAR
    if year_index == 2:
        return PeriodKind.SECOND_RETIREMENT_YEAR
    return PeriodKind.RETIREMENT


def _row_is_finite(row: PeriodRow) -> bool:
    return all(
        math.isfinite(v)
        for v in (row.contribution, row.yield_earned, row.withdrawal, row.balance,
                  row.monthly_income, row.shortfall)
    )


def _walk(
    strategy: Strategy, assumptions: Assumptions, monthly_rate: float,
) -> tuple[list[PeriodRow], float, BankruptcySnapshot | None]:
    """Walk both phases at a resolved real monthly rate."""
    annual_rate = (1 + monthly_rate) ** 12 - 1

    current_age = max(0, assumptions.current_age)
    start_year = assumptions.current_year
    years = contribution_years(assumptions)
    contribution = _non_negative(strategy.monthly_contribution)
    balance = _non_negative(strategy.initial_balance)

    rows: list[PeriodRow] = []

    # Accumulation phase: monthly walk, year-end rows only
    for year_idx in range(1, years + 1):
        year_start_balance = balance
        for _ in range(12):
            balance = balance * (1 + monthly_rate) + contribution
        annual_contribution = contribution * 12
        rows.append(PeriodRow(
            year=start_year + year_idx,
            age=current_age + year_idx,
            kind=PeriodKind.ACCUMULATION,
            contribution=annual_contribution,
            yield_earned=balance - year_start_balance - annual_contribution,
            withdrawal=0.0,
            balance=balance,
        ))

    final_wealth = balance
    retirement_age = current_age + years
    retirement_year = start_year + years
    n_retirement = retirement_years(assumptions, strategy.horizon)

    if strategy.payout == DEFINED_BENEFIT:
        # The scheme pays the benefit for life; nothing is drawn from a balance.
        for k in range(1, n_retirement + 1):
            rows.append(PeriodRow(
                year=retirement_year + k,
                age=retirement_age + k,
                kind=_retirement_kind(k),
                contribution=0.0,
                yield_earned=0.0,
                withdrawal=0.0,
                balance=0.0,
                monthly_income=strategy.benefit_monthly,
                fixed_income=k == 1,
            ))
        return rows, final_wealth, None

    inflation = assumptions.inflation_rate
    if not math.isfinite(inflation) or inflation <= -1:
        inflation = 0.0
    withdrawal_rate = effective_withdrawal_rate(assumptions)
    desired_annual = _non_negative(assumptions.desired_monthly_income) * 12
    perpetual = isinstance(strategy.horizon, Perpetual)
    fixed_nominal = strategy.indexation is IncomeIndexation.FIXED

    # Balances are in today's money: an adjusted income stays constant,
    # a fixed nominal income loses one year of inflation per year.
    erosion = 1.0
    for k in range(1, n_retirement + 1):
        target = desired_annual / erosion if fixed_nominal else desired_annual
        required = min(target, balance * withdrawal_rate) if perpetual else target
        erosion *= 1 + inflation

        year = retirement_year + k
        age = retirement_age + k
        if required > 0 and required >= balance:
            shortfall = required - balance
            rows.append(PeriodRow(
                year=year,
                age=age,
                kind=PeriodKind.BANKRUPTCY,
                contribution=0.0,
                yield_earned=0.0,
                withdrawal=balance,
                balance=0.0,
                monthly_income=balance / 12,
                shortfall=shortfall,
                fixed_income=k == 1 or fixed_nominal,
            ))
            snapshot = BankruptcySnapshot(
                age=age, year=year, balance=balance, required=required, shortfall=shortfall,
            )
            return rows, final_wealth, snapshot

        remaining = balance - required
        yield_earned = remaining * annual_rate
        balance = remaining + yield_earned
        rows.append(PeriodRow(
            year=year,
            age=age,
            kind=_retirement_kind(k),
            contribution=0.0,
            yield_earned=yield_earned,
            withdrawal=required,
            balance=balance,
            monthly_income=required / 12,
            fixed_income=k == 1 or fixed_nominal,
        ))

    return rows, final_wealth, None


def simulate_strategy(strategy: Strategy, assumptions: Assumptions) -> StrategyRun:
    """Simulate accumulation and decumulation for one strategy.

    Accumulation compounds monthly (balance = balance*(1+r) + contribution) and
    keeps the December value of each year. Decumulation withdraws the year's
    income first, then applies the real yield to the remainder. The run stops
    at the first year whose required withdrawal exhausts the balance.

    Invalid rates, and rates whose compounding overflows, are recorded in
    `errors` and replaced by a zero real rate.
    """
    errors = []
    try:
        monthly_rate = real_monthly_rate(strategy.growth_rate, assumptions.inflation_rate)
    except RateError as e:
        errors.append(e.code)
        monthly_rate = 0.0

    try:
        rows, final_wealth, bankruptcy = _walk(strategy, assumptions, monthly_rate)
        finite = math.isfinite(final_wealth) and all(_row_is_finite(r) for r in rows)
    except OverflowError:
        finite = False
    if not finite:
        errors.append(ERR_NON_FINITE_RATE)
        monthly_rate = 0.0
        rows, final_wealth, bankruptcy = _walk(strategy, assumptions, monthly_rate)

    return StrategyRun(
        strategy=strategy,
        rows=tuple(rows),
        final_wealth=final_wealth,
        real_monthly_rate=monthly_rate,
        bankruptcy=bankruptcy,
        errors=tuple(errors),
    )
