"""Comparative summary of the three strategies."""

import math
from concurrent.futures import Executor
from dataclasses import dataclass
from itertools import repeat

from retirement_sim.params import (
    PERPETUAL,
    Assumptions,
    Perpetual,
    _non_negative,
    _required_contribution,
    contribution_years,
)
from retirement_sim.simulation import (
    BankruptcySnapshot,
    PeriodRow,
    StrategyRun,
    effective_withdrawal_rate,
    retirement_years,
    simulate_strategy,
    validate_assumptions,
)
from retirement_sim.strategies import BITCOIN, DEFINED_BENEFIT, build_all_strategies

# A headline figure overflowed (e.g. a withdrawal rate close to zero)
ERR_NON_FINITE_RESULT = "non_finite_result"


def _money(value: float) -> float:
    """Round a reported monetary figure to cents (boundary only)."""
    return round(value, 2)


@dataclass(frozen=True)
class StrategyOutcome:
    """Headline figures of one strategy."""

    key: str
    name: str
    monthly_contribution: float
    total_contributed: float
    final_wealth: float
    monthly_income: float
    legacy_wealth: float
    bankruptcy_age: int | None = None
    bankruptcy: BankruptcySnapshot | None = None


@dataclass(frozen=True)
class SimulationResult:
    """Complete projection result. Numeric fields are populated even when invalid."""

    current_age: int
    retirement_year: int
    end_year: int | str
    contribution_years: int
    enjoyment_years: int | str
    real_annual_rate: float
    final_wealth: float
    total_invested: float
    monthly_passive_income: float
    capital_needed_at_retirement: float
    wealth_needed_today: float
    # Desired income carried to the retirement date by inflation (nominal)
    adjusted_desired_income: float
    income_gap: float
    suggested_contribution: float
    outcomes: dict[str, StrategyOutcome]
    runs: dict[str, StrategyRun]
    validation_errors: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.validation_errors

    @property
    def rows(self) -> tuple[PeriodRow, ...]:
        """Period rows of the chosen (Bitcoin) strategy."""
        return self.runs[BITCOIN].rows

    @property
    def bankruptcy(self) -> BankruptcySnapshot | None:
        return self.runs[BITCOIN].bankruptcy

    @property
    def bankruptcy_age(self) -> int | None:
        return self.outcomes[BITCOIN].bankruptcy_age

    @property
    def legacy_wealth(self) -> dict[str, float]:
        return {key: o.legacy_wealth for key, o in self.outcomes.items()}


def capital_needed_at_retirement(desired_monthly_income: float, withdrawal_rate: float) -> float:
    """Capital whose sustainable withdrawal pays the desired income."""
    return desired_monthly_income * 12 / withdrawal_rate


def _outcome(run: StrategyRun, withdrawal_rate: float) -> StrategyOutcome:
    strategy = run.strategy
    if strategy.payout == DEFINED_BENEFIT:
        income = strategy.benefit_monthly
    else:
        income = run.final_wealth * withdrawal_rate / 12
    return StrategyOutcome(
        key=strategy.key,
        name=strategy.name,
        monthly_contribution=_money(_non_negative(strategy.monthly_contribution)),
        total_contributed=_money(run.total_contributed),
        final_wealth=_money(run.final_wealth),
        monthly_income=_money(income),
        legacy_wealth=_money(run.legacy_wealth),
        bankruptcy_age=run.bankruptcy_age,
        bankruptcy=run.bankruptcy,
    )


def summarize(
    assumptions: Assumptions, runs: list[StrategyRun], errors: list[str] | None = None,
) -> SimulationResult:
    """Aggregate strategy runs into headline metrics.

    runs must contain the Bitcoin strategy; capital and contribution figures
    are computed against its real rate.
    """
    by_key = {run.strategy.key: run for run in runs}
    main = by_key[BITCOIN]
    withdrawal_rate = effective_withdrawal_rate(assumptions)
    years = contribution_years(assumptions)
    months = years * 12
    real_annual = (1 + main.real_monthly_rate) ** 12 - 1

    desired = _non_negative(assumptions.desired_monthly_income)
    needed = capital_needed_at_retirement(desired, withdrawal_rate)
    passive_income = _money(main.final_wealth * withdrawal_rate / 12)
    try:
        discount = (1 + real_annual) ** years
        suggested = _required_contribution(
            needed, _non_negative(assumptions.current_savings), main.real_monthly_rate, months,
        )
    except OverflowError:
        # Growth so large that any capital today (or contribution) suffices
        discount = math.inf
        suggested = 0.0
    # discount underflows to 0 only for rates near -100%; report undiscounted
    needed_today = needed / discount if discount > 0 else needed

    inflation = assumptions.inflation_rate
    if not math.isfinite(inflation) or inflation <= -1:
        inflation = 0.0
    try:
        adjusted = desired * (1 + inflation) ** years
    except OverflowError:
        adjusted = math.inf

    current_age = max(0, assumptions.current_age)
    retirement_year = assumptions.current_year + years
    if isinstance(assumptions.horizon, Perpetual):
        end_year: int | str = PERPETUAL
        enjoyment: int | str = PERPETUAL
    else:
        enjoyment = retirement_years(assumptions)
        end_year = retirement_year + enjoyment

    all_errors = list(errors or [])
    for run in runs:
        all_errors.extend(run.errors)

    headline = (needed, needed_today, adjusted, suggested)
    if not all(math.isfinite(v) for v in headline):
        all_errors.append(ERR_NON_FINITE_RESULT)
        needed, needed_today, adjusted, suggested = (
            v if math.isfinite(v) else 0.0 for v in headline
        )

    return SimulationResult(
        current_age=current_age,
        retirement_year=retirement_year,
        end_year=end_year,
        contribution_years=years,
        enjoyment_years=enjoyment,
        real_annual_rate=real_annual,
        final_wealth=_money(main.final_wealth),
        total_invested=_money(_non_negative(assumptions.monthly_contribution) * months),
        monthly_passive_income=passive_income,
        capital_needed_at_retirement=_money(needed),
        wealth_needed_today=_money(needed_today),
        adjusted_desired_income=_money(adjusted),
        # Today's money on both sides. Negative gap = surplus; not clamped
        income_gap=_money(desired - passive_income),
        suggested_contribution=_money(max(0.0, suggested)),
        outcomes={key: _outcome(run, withdrawal_rate) for key, run in by_key.items()},
        runs=by_key,
        validation_errors=tuple(dict.fromkeys(all_errors)),
    )


def run_simulation(
    assumptions: Assumptions, executor: Executor | None = None,
) -> SimulationResult:
    """Validate, simulate the three strategies and summarize.

    The strategy simulations are independent; pass an Executor to run them
    concurrently. Results are collected in strategy order.
    """
    errors = validate_assumptions(assumptions)
    strategies = build_all_strategies(assumptions)
    if executor is None:
        runs = [simulate_strategy(s, assumptions) for s in strategies]
    else:
        runs = list(executor.map(simulate_strategy, strategies, repeat(assumptions)))
    return summarize(assumptions, runs, errors)
