"""Chart generation for projection results."""

from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as ticker

from retirement_sim.series import CONTRIBUTION, INCOME, WEALTH, chart_series
from retirement_sim.strategies import BITCOIN, PRIVATE_PENSION, PUBLIC_PENSION, STRATEGY_KEYS
from retirement_sim.summary import SimulationResult

# Strategy color mapping
STRATEGY_COLORS = {
    BITCOIN: "#c97918",          # gold
    PRIVATE_PENSION: "#1f77b4",  # blue
    PUBLIC_PENSION: "#7f7f7f",   # grey
}

STRATEGY_LABELS = {
    BITCOIN: "Bitcoin",
    PRIVATE_PENSION: "Private pension",
    PUBLIC_PENSION: "Public pension",
}

MODE_TITLES = {
    WEALTH: "Wealth projection (today's money)",
    INCOME: "Monthly income projection (today's money)",
    CONTRIBUTION: "Annual contribution comparison",
}

# Log axes cannot show zero or negative values
LOG_SCALE_EPSILON = 0.1


def apply_log_floor(points: list[dict], epsilon: float = LOG_SCALE_EPSILON) -> list[dict]:
    """Replace non-positive strategy values with epsilon (copies, input untouched)."""
    floored = []
    for point in points:
        point = dict(point)
        for key in STRATEGY_KEYS:
            if point.get(key, 0.0) <= 0:
                point[key] = epsilon
        floored.append(point)
    return floored


def bankruptcy_label_y(ylim: tuple[float, float], log_scale: bool, fraction: float = 0.85) -> float:
    """Y position `fraction` of the way up the axis, in data coordinates."""
    low, high = ylim
    if log_scale:
        return low * (high / low) ** fraction
    return low + (high - low) * fraction


def plot_comparison(
    result: SimulationResult,
    output_path: Path,
    mode: str = WEALTH,
    log_scale: bool = False,
    name: str = "",
) -> Path:
    """Generate a line chart comparing the three strategies by attained age.

    Args:
        result: run_simulation() result.
        output_path: directory to save the PNG.
        mode: "wealth", "income" or "contribution".
        log_scale: logarithmic Y axis (non-positive values floored to epsilon).
        name: optional suffix for the output filename (e.g. "30" → "wealth-30.png").

    Returns:
        Path to the generated PNG file.
    """
    points = chart_series(result, mode)
    if log_scale:
        points = apply_log_floor(points)

    fig, ax = plt.subplots(figsize=(14, 8))
    ages = [p["age"] for p in points]
    for key in STRATEGY_KEYS:
        values = [p[key] for p in points]
        ax.plot(ages, values, label=STRATEGY_LABELS[key],
                color=STRATEGY_COLORS[key], linewidth=2)

    if mode != CONTRIBUTION:
        retirement_age = result.current_age + result.contribution_years
        ax.axvline(retirement_age, color="#888888", linewidth=0.8, linestyle=":")

    # Scale first: annotation positions depend on the final y limits
    if log_scale:
        ax.set_yscale("log")

    bankruptcy_age = result.bankruptcy_age
    if mode == WEALTH and bankruptcy_age is not None:
        ax.axvline(bankruptcy_age, color="#d62728", linewidth=2, linestyle=":")
        ax.annotate(
            f"Capital exhausted at {bankruptcy_age}",
            xy=(bankruptcy_age, bankruptcy_label_y(ax.get_ylim(), log_scale)),
            fontsize=11, fontweight="bold", color="#d62728",
            ha="right",
            bbox=dict(boxstyle="round,pad=0.3", fc="white", ec="#d62728", alpha=0.9),
        )

    ax.yaxis.set_major_formatter(ticker.FuncFormatter(lambda x, _: f"{x:,.0f}"))
    ax.set_xlabel("Age")
    ax.set_title(MODE_TITLES[mode])
    ax.legend(loc="upper left")
    ax.grid(True, alpha=0.3)

    output_path.mkdir(parents=True, exist_ok=True)
    suffix = f"-{name}" if name else ""
    filepath = output_path / f"{mode}{suffix}.png"
    fig.tight_layout()
    fig.savefig(filepath, dpi=150)
    plt.close(fig)
    return filepath
