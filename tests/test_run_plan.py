"""Unit tests for the run_plan script."""

import sys

import pandas as pd
import pytest

import scripts.run_plan as run_plan
from src.engine.financial_model import DebtAccount, Strategy
from src.utils.config import PlanConfig


@pytest.fixture
def plan() -> PlanConfig:
    return PlanConfig(
        debts=[DebtAccount("a", "A", balance=1000, annual_rate_percent=0, minimum_payment=300)],
        strategy=Strategy.SNOWBALL,
    )


@pytest.fixture
def counted_simulate(monkeypatch):
    """Wrap simulate_payoff in the script module and count calls."""
    calls = []
    original = run_plan.simulate_payoff

    def wrapper(request):
        calls.append(request)
        return original(request)

    monkeypatch.setattr(run_plan, "simulate_payoff", wrapper)
    return calls


class TestPrintPlan:

    def test_returns_result(self, plan, capsys):
        code, result = run_plan.print_plan(plan)
        assert code == 0
        assert result.total_months == 4
        assert "PAYOFF PLAN" in capsys.readouterr().out

    def test_no_debts(self):
        assert run_plan.print_plan(PlanConfig()) == (0, None)

    def test_invalid_debt(self, capsys):
        bad = PlanConfig(debts=[DebtAccount("x", "X", balance=-5, annual_rate_percent=0, minimum_payment=1)])
        assert run_plan.print_plan(bad) == (2, None)
        assert "Error" in capsys.readouterr().out


class TestMain:

    def test_schedule_csv_uses_single_simulation(self, tmp_path, monkeypatch, counted_simulate, capsys):
        config_path = tmp_path / "plan.yaml"
        config_path.write_text(
            "strategy: snowball\n"
            "start_date: 2026-01-01\n"
            "debts:\n"
            "  - id: a\n"
            "    balance: 1000\n"
            "    minimum_payment: 300\n"
        )
        csv_path = tmp_path / "out" / "schedule.csv"
        monkeypatch.setattr(
            sys, "argv",
            ["run_plan.py", "--config", str(config_path), "--schedule-csv", str(csv_path)],
        )

        with pytest.raises(SystemExit) as exc_info:
            run_plan.main()

        assert exc_info.value.code == 0
        assert len(counted_simulate) == 1
        df = pd.read_csv(csv_path)
        assert len(df) == 4
        assert df["remaining"].iloc[-1] == 0.0
