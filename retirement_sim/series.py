"""Chart data: per-age values of the three strategies."""

from retirement_sim.strategies import STRATEGY_KEYS
from retirement_sim.summary import SimulationResult

WEALTH = "wealth"
INCOME = "income"
CONTRIBUTION = "contribution"
CHART_MODES = (WEALTH, INCOME, CONTRIBUTION)

_ROW_VALUE = {
    WEALTH: lambda row: row.balance,
    INCOME: lambda row: row.monthly_income,
    CONTRIBUTION: lambda row: row.contribution,
}


def chart_series(result: SimulationResult, mode: str = WEALTH) -> list[dict]:
    """Return one point per attained age: {"age", "year", "btc", "pension", "traditional"}.

    Ages past a strategy's last row (after bankruptcy) are reported as 0.
    """
    if mode not in _ROW_VALUE:
        raise ValueError(f"unknown chart mode {mode!r} (choose from: {', '.join(CHART_MODES)})")
    value = _ROW_VALUE[mode]

    by_age: dict[int, dict] = {}
    for key in STRATEGY_KEYS:
        run = result.runs.get(key)
        if run is None:
            continue
        for row in run.rows:
            point = by_age.setdefault(row.age, {"age": row.age, "year": row.year})
            point[key] = value(row)

    points = []
    for age in sorted(by_age):
        point = by_age[age]
        for key in STRATEGY_KEYS:
            point.setdefault(key, 0.0)
        points.append(point)
    return points
