"""Strategy descriptors for the three compared retirement vehicles."""

from dataclasses import dataclass

from retirement_sim.params import (
    Assumptions,
    Horizon,
    IncomeIndexation,
    Perpetual,
    PublicPensionAssumptions,
    _non_negative,
    contribution_years,
)

# Strategy keys (stable identifiers used by charts and exports)
BITCOIN = "btc"
PRIVATE_PENSION = "pension"
PUBLIC_PENSION = "traditional"
STRATEGY_KEYS = (BITCOIN, PRIVATE_PENSION, PUBLIC_PENSION)

# Payout policies
DRAWDOWN = "drawdown"
DEFINED_BENEFIT = "defined_benefit"


@dataclass(frozen=True)
class Strategy:
    """Contribution schedule, yield and withdrawal policy of one vehicle.

    All three vehicles go through the same simulate_strategy(); only the
    descriptor differs.
    """

    key: str
    name: str
    growth_rate: float  # nominal annual
    monthly_contribution: float
    initial_balance: float
    horizon: Horizon
    payout: str = DRAWDOWN
    indexation: IncomeIndexation = IncomeIndexation.ADJUSTED
    # Monthly benefit in today's money (DEFINED_BENEFIT only)
    benefit_monthly: float = 0.0
    # Whether the remaining balance can be inherited
    bequeathable: bool = True


def public_pension_benefit(
    rules: PublicPensionAssumptions, monthly_contribution: float, contribution_years: int,
) -> float:
    """Monthly benefit (today's money) granted by the public scheme.

    replacement = base + accrual * (years - qualifying), capped at max_replacement;
    zero below minimum_years.
    """
    years = rules.prior_contribution_years + contribution_years
    if years < rules.minimum_years:
        return 0.0
    if rules.average_monthly_income is not None:
        reference_salary = rules.average_monthly_income
    elif rules.contribution_rate > 0:
        reference_salary = monthly_contribution / rules.contribution_rate
    else:
        return 0.0
    replacement = rules.base_replacement + rules.accrual_per_extra_year * max(
        0, years - rules.qualifying_years
    )
    replacement = min(replacement, rules.max_replacement)
    return min(replacement * _non_negative(reference_salary), rules.benefit_ceiling)


def build_bitcoin_strategy(assumptions: Assumptions) -> Strategy:
    return Strategy(
        key=BITCOIN,
        name="Bitcoin",
        growth_rate=assumptions.growth_rate,
        monthly_contribution=assumptions.monthly_contribution,
        initial_balance=assumptions.current_savings,
        horizon=assumptions.horizon,
        indexation=assumptions.indexation,
    )


def build_private_pension_strategy(assumptions: Assumptions) -> Strategy:
    pension = assumptions.pension
    contribution = pension.monthly_contribution
    if contribution is None:
        contribution = assumptions.monthly_contribution
    balance = pension.current_balance
    if balance is None:
        balance = assumptions.current_savings
    return Strategy(
        key=PRIVATE_PENSION,
        name="Private pension",
        growth_rate=pension.growth_rate,
        monthly_contribution=contribution,
        initial_balance=balance,
        horizon=Perpetual() if pension.lifetime else assumptions.horizon,
        indexation=assumptions.indexation,
    )


def build_public_pension_strategy(assumptions: Assumptions) -> Strategy:
    """Public scheme: savings cannot be transferred in, benefit paid for life."""
    rules = assumptions.public_pension
    contribution = rules.monthly_contribution
    if contribution is None:
        contribution = assumptions.monthly_contribution
    return Strategy(
        key=PUBLIC_PENSION,
        name="Public pension",
        growth_rate=rules.credited_rate,
        monthly_contribution=contribution,
        initial_balance=0.0,
        horizon=assumptions.horizon,
        payout=DEFINED_BENEFIT,
        benefit_monthly=public_pension_benefit(
            rules, contribution, contribution_years(assumptions),
        ),
        bequeathable=False,
    )


def build_all_strategies(assumptions: Assumptions) -> list[Strategy]:
    """Build the three compared strategies in STRATEGY_KEYS order."""
    return [
        build_bitcoin_strategy(assumptions),
        build_private_pension_strategy(assumptions),
        build_public_pension_strategy(assumptions),
    ]
