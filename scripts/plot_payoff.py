"""Plot the remaining-balance timeline for each strategy.

Usage:
    python scripts/plot_payoff.py
    python scripts/plot_payoff.py --config configs/plans/default.yaml --output results/payoff_timeline.png
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend
import matplotlib.pyplot as plt

from src.evaluation.comparison import timeline_frame
from src.strategies import ALL_STRATEGIES
from src.utils.config import load_plan_config


COLORS = {
    "snowball": "#3498db",
    "avalanche": "#9b59b6",
}


def make_timeline_plot(config, output_path: str = "results/payoff_timeline.png") -> None:
    """Line chart of total remaining balance over time, one line per strategy."""
    fig, ax = plt.subplots(figsize=(12, 6))
    fig.suptitle("Remaining Debt Over Time", fontsize=16, fontweight="bold")

    for StrategyClass in ALL_STRATEGIES:
        strategy = StrategyClass()
        result = strategy.run(config.debts, config.extra_monthly_budget, config.start_date)
        df = timeline_frame(result)
        label = f"{strategy.name} ({result.total_months} mo, interest {result.total_interest_paid:,.0f})"
        ax.plot(
            df["month"],
            df["total_remaining"],
            marker=".",
            color=COLORS.get(result.strategy.value, "#333333"),
            label=label,
        )

    ax.set_xlabel("Month")
    ax.set_ylabel("Total remaining balance")
    ax.grid(alpha=0.3)
    ax.legend()
    plt.tight_layout()

    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(str(out), dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"Timeline plot saved to {out}")


def main():
    parser = argparse.ArgumentParser(description="Plot payoff timelines")
    parser.add_argument("--config", type=str, default="configs/plans/default.yaml")
    parser.add_argument("--output", type=str, default="results/payoff_timeline.png")
    args = parser.parse_args()

    config = load_plan_config(args.config)
    if not config.debts:
        print("Error: no debts in config.")
        sys.exit(1)

    make_timeline_plot(config, args.output)


if __name__ == "__main__":
    main()
