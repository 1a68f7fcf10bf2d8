"""Scenario definitions and multi-scenario execution."""

import dataclasses

from retirement_sim.params import Assumptions
from retirement_sim.summary import SimulationResult, run_simulation

# Nominal growth of the chosen strategy / inflation, both annual
SCENARIOS = {
    "pessimistic": {
        "growth_rate": 0.08,
        "inflation_rate": 0.04,
    },
    "base": {
        "growth_rate": 0.12,
        "inflation_rate": 0.04,
    },
    "optimistic": {
        "growth_rate": 0.20,
        "inflation_rate": 0.04,
    },
}

DEFAULT_SCENARIO = "base"


def apply_scenario(assumptions: Assumptions, name: str) -> Assumptions:
    """Return a copy of assumptions with the scenario's rates."""
    if name not in SCENARIOS:
        raise ValueError(
            f"unknown scenario {name!r} (choose from: {', '.join(SCENARIOS)})"
        )
    return dataclasses.replace(assumptions, **SCENARIOS[name])


def scenario_label(name: str) -> str:
    """e.g. "base" -> "Base (12% / 4%)"."""
    rates = SCENARIOS[name]
    return (
        f"{name.capitalize()} "
        f"({rates['growth_rate']:.0%} / {rates['inflation_rate']:.0%})"
    )


def run_scenarios(assumptions: Assumptions) -> dict[str, SimulationResult]:
    """Execute the projection for all scenarios."""
    return {
        name: run_simulation(apply_scenario(assumptions, name))
        for name in SCENARIOS
    }
