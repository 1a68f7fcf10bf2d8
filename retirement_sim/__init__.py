"""Retirement Wealth Projection Package."""

from retirement_sim.params import (
    Assumptions,
    FixedHorizon,
    Perpetual,
    PrivatePensionAssumptions,
    PublicPensionAssumptions,
    IncomeIndexation,
    age_from_birth_date,
    DEFAULT_WITHDRAWAL_RATE,
    PERPETUAL,
)
from retirement_sim.rates import RateError, real_annual_rate, real_monthly_rate
from retirement_sim.strategies import (
    Strategy,
    build_all_strategies,
    public_pension_benefit,
    BITCOIN,
    PRIVATE_PENSION,
    PUBLIC_PENSION,
    STRATEGY_KEYS,
)
from retirement_sim.simulation import (
    PeriodKind,
    PeriodRow,
    BankruptcySnapshot,
    StrategyRun,
    simulate_strategy,
    validate_assumptions,
    MAX_RETIREMENT_YEARS,
)
from retirement_sim.summary import (
    SimulationResult,
    StrategyOutcome,
    run_simulation,
    summarize,
)
from retirement_sim.scenarios import SCENARIOS, apply_scenario, run_scenarios
from retirement_sim.series import CHART_MODES, chart_series

__all__ = [
    "Assumptions",
    "FixedHorizon",
    "Perpetual",
    "PrivatePensionAssumptions",
    "PublicPensionAssumptions",
    "IncomeIndexation",
    "age_from_birth_date",
    "DEFAULT_WITHDRAWAL_RATE",
    "PERPETUAL",
    "RateError",
    "real_annual_rate",
    "real_monthly_rate",
    "Strategy",
    "build_all_strategies",
    "public_pension_benefit",
    "BITCOIN",
    "PRIVATE_PENSION",
    "PUBLIC_PENSION",
    "STRATEGY_KEYS",
    "PeriodKind",
    "PeriodRow",
    "BankruptcySnapshot",
    "StrategyRun",
    "simulate_strategy",
    "validate_assumptions",
    "MAX_RETIREMENT_YEARS",
    "SimulationResult",
    "StrategyOutcome",
    "run_simulation",
    "summarize",
    "SCENARIOS",
    "apply_scenario",
    "run_scenarios",
    "CHART_MODES",
    "chart_series",
]
