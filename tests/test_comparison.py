"""Unit tests for strategy comparison and DataFrame export."""

import numpy as np
import pytest

from src.engine.financial_model import DebtAccount, Strategy
from src.engine.simulator import SimulationRequest, simulate_payoff
from src.evaluation.comparison import (
    budget_grid,
    compare_strategies,
    schedule_frame,
    summarize_result,
    sweep_extra_budget,
    timeline_frame,
)


@pytest.fixture
def debts() -> list[DebtAccount]:
    return [
        DebtAccount("A", "Small low-rate", balance=1000, annual_rate_percent=5, minimum_payment=50),
        DebtAccount("B", "Large high-rate", balance=5000, annual_rate_percent=25, minimum_payment=100),
    ]


class TestCompareStrategies:

    def test_one_row_per_strategy(self, debts):
        df = compare_strategies(debts, extra_monthly_budget=300)
        assert len(df) == 2
        assert set(df["strategy"]) == {"snowball", "avalanche"}

    def test_avalanche_row_cheaper(self, debts):
        df = compare_strategies(debts, extra_monthly_budget=300).set_index("strategy")
        assert df.loc["avalanche", "total_interest"] < df.loc["snowball", "total_interest"]

    def test_same_budget_for_both(self, debts):
        df = compare_strategies(debts, extra_monthly_budget=300)
        assert (df["monthly_budget"] == 450).all()


class TestSweep:

    def test_budget_grid(self):
        grid = budget_grid(1000, 5)
        np.testing.assert_allclose(grid, [0, 250, 500, 750, 1000])

    def test_budget_grid_single_step(self):
        np.testing.assert_allclose(budget_grid(1000, 1), [0.0])

    def test_more_budget_never_slower(self):
        single = [DebtAccount("x", "X", balance=10000, annual_rate_percent=12, minimum_payment=500)]
        df = sweep_extra_budget(single, Strategy.AVALANCHE, budget_grid(2000, 5))
        assert len(df) == 5
        assert df["total_months"].is_monotonic_decreasing
        assert df["total_interest"].is_monotonic_decreasing

    def test_sweep_columns(self, debts):
        df = sweep_extra_budget(debts, "snowball", [0, 100])
        assert list(df["extra_budget"]) == [0.0, 100.0]
        assert (df["strategy"] == "snowball").all()


class TestFrames:

    def test_schedule_frame_shape(self, debts):
        result = simulate_payoff(SimulationRequest(debts, Strategy.AVALANCHE, 300))
        df = schedule_frame(result)
        assert len(df) == result.total_months * len(debts)
        assert df["remaining"].min() >= 0
        assert df["interest"].sum() == pytest.approx(result.total_interest_paid)

    def test_schedule_frame_empty(self):
        df = schedule_frame(simulate_payoff(SimulationRequest([])))
        assert df.empty
        assert "remaining" in df.columns

    def test_timeline_frame(self, debts):
        result = simulate_payoff(SimulationRequest(debts, Strategy.SNOWBALL, 300))
        df = timeline_frame(result)
        assert list(df.columns) == ["month", "total_remaining"]
        assert df["month"].iloc[-1] == result.total_months
        assert df["total_remaining"].iloc[-1] == 0.0

    def test_summarize_result(self, debts):
        result = simulate_payoff(SimulationRequest(debts, Strategy.SNOWBALL, 300))
        row = summarize_result(result)
        assert row["strategy"] == "snowball"
        assert row["all_paid"] is True
        assert row["payoff_date"] is None
