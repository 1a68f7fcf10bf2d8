"""Export payload for document rendering.

Builds the data a document renderer needs (configuration summary, headline
metrics, strategy comparison, bankruptcy ages) and renders it as Markdown
using f-strings. Page layout is left to the consumer.
"""

import dataclasses

from retirement_sim.params import Assumptions
from retirement_sim.strategies import PUBLIC_PENSION, STRATEGY_KEYS
from retirement_sim.summary import SimulationResult

PERPETUAL_LABEL = "Perpetual"

# ---------------------------------------------------------------------------
# Format helpers
# ---------------------------------------------------------------------------

def fmt_money(v: float) -> str:
    return f"{v:,.2f}"


def fmt_rate(v: float) -> str:
    return f"{v * 100:.2f}%"


def _horizon_text(assumptions: Assumptions) -> str:
    if assumptions.is_perpetual:
        return PERPETUAL_LABEL
    return f"{assumptions.horizon.end_age} years"


# ---------------------------------------------------------------------------
# Payload
# ---------------------------------------------------------------------------

def config_summary(assumptions: Assumptions, strategy_label: str = "") -> list[tuple[str, str]]:
    """(label, value) pairs describing the assumptions."""
    a = assumptions
    rows = [
        ("Current age", f"{a.current_age} years"),
        ("Retirement age", f"{a.retirement_age} years"),
        ("Life expectancy", _horizon_text(a)),
        ("Monthly contribution", fmt_money(a.monthly_contribution)),
        ("Initial savings", fmt_money(a.current_savings)),
        ("Desired monthly income", fmt_money(a.desired_monthly_income)),
        ("Growth rate", fmt_rate(a.growth_rate)),
        ("Inflation", fmt_rate(a.inflation_rate)),
        ("Withdrawal rate", fmt_rate(a.withdrawal_rate)),
    ]
    if strategy_label:
        rows.append(("Strategy", f"Bitcoin ({strategy_label})"))
    return rows


def headline_metrics(result: SimulationResult) -> list[tuple[str, float]]:
    return [
        ("Wealth needed today", result.wealth_needed_today),
        ("Final wealth", result.final_wealth),
        ("Monthly passive income", result.monthly_passive_income),
        ("Desired income at retirement (nominal)", result.adjusted_desired_income),
        ("Income gap", result.income_gap),
        ("Suggested contribution", result.suggested_contribution),
    ]


def comparison_table(result: SimulationResult) -> dict[str, dict[str, float]]:
    """{strategy_key: {"contribution", "income", "wealth"}} (monthly figures, wealth at retirement)."""
    table = {}
    for key in STRATEGY_KEYS:
        outcome = result.outcomes[key]
        table[key] = {
            "contribution": outcome.monthly_contribution,
            "income": outcome.monthly_income,
            "wealth": outcome.final_wealth,
        }
    return table


def bankruptcy_labels(
    result: SimulationResult, perpetual_label: str = PERPETUAL_LABEL,
) -> dict[str, str]:
    """Age at which capital runs out per strategy, or the perpetual label."""
    labels = {}
    for key in STRATEGY_KEYS:
        age = result.outcomes[key].bankruptcy_age
        if key == PUBLIC_PENSION or age is None:
            labels[key] = perpetual_label
        else:
            labels[key] = f"Age {age}"
    return labels


def build_export_payload(
    assumptions: Assumptions, result: SimulationResult, strategy_label: str = "",
) -> dict:
    """Collect everything a document renderer needs. Chart images are attached by the caller."""
    return {
        "assumptions": dataclasses.asdict(assumptions),
        "config_summary": config_summary(assumptions, strategy_label),
        "metrics": headline_metrics(result),
        "comparison": comparison_table(result),
        "bankruptcy_ages": bankruptcy_labels(result),
        "strategy_names": {key: result.outcomes[key].name for key in STRATEGY_KEYS},
        "is_valid": result.is_valid,
        "validation_errors": list(result.validation_errors),
    }


# ---------------------------------------------------------------------------
# Markdown rendering
# ---------------------------------------------------------------------------

def render_report(payload: dict) -> str:
    """Render an export payload as a Markdown report."""
    names = payload["strategy_names"]
    lines = ["# Retirement projection", ""]

    if not payload["is_valid"]:
        lines.append("> **Invalid assumptions:** " + ", ".join(payload["validation_errors"]))
        lines.append("")

    lines += ["## Configuration", "", "| Item | Value |", "|---|---|"]
    for label, value in payload["config_summary"]:
        lines.append(f"| {label} | {value} |")

    lines += ["", "## Results", "", "| Metric | Value |", "|---|---:|"]
    for label, value in payload["metrics"]:
        lines.append(f"| {label} | {fmt_money(value)} |")

    header = " | ".join(names[key] for key in STRATEGY_KEYS)
    lines += [
        "",
        "## Comparison",
        "",
        f"| Metric | {header} |",
        "|---|" + "---:|" * len(STRATEGY_KEYS),
    ]
    comparison = payload["comparison"]
    for field_name, label in (
        ("contribution", "Monthly contribution"),
        ("income", "Monthly income"),
        ("wealth", "Wealth at retirement"),
    ):
        cells = " | ".join(fmt_money(comparison[key][field_name]) for key in STRATEGY_KEYS)
        lines.append(f"| {label} | {cells} |")
    cells = " | ".join(payload["bankruptcy_ages"][key] for key in STRATEGY_KEYS)
    lines.append(f"| Capital lasts until | {cells} |")
    lines.append("")
    return "\n".join(lines)
