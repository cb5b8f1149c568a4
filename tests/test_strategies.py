"""Unit tests for debt ordering strategies."""

import pytest

from src.engine.financial_model import DebtAccount, Strategy
from src.strategies import (
    ALL_STRATEGIES,
    AvalancheStrategy,
    SnowballStrategy,
    get_strategy,
    order_debts,
)


def _debt(debt_id: str, balance: float, rate: float, minimum: float = 10.0) -> DebtAccount:
    return DebtAccount(debt_id, debt_id.upper(), balance=balance, annual_rate_percent=rate, minimum_payment=minimum)


@pytest.fixture
def divergent_debts() -> list[DebtAccount]:
    """Small balance has the low rate, so the two strategies disagree."""
    return [_debt("small", 50, 5), _debt("large", 100, 20)]


class TestSnowball:

    def test_smallest_balance_first(self, divergent_debts):
        ordered = SnowballStrategy().order(list(reversed(divergent_debts)))
        assert [d.id for d in ordered] == ["small", "large"]

    def test_ties_keep_input_order(self):
        debts = [_debt("a", 100, 5), _debt("b", 100, 30), _debt("c", 10, 1)]
        ordered = SnowballStrategy().order(debts)
        assert [d.id for d in ordered] == ["c", "a", "b"]


class TestAvalanche:

    def test_highest_rate_first(self, divergent_debts):
        ordered = AvalancheStrategy().order(divergent_debts)
        assert [d.id for d in ordered] == ["large", "small"]

    def test_ties_keep_input_order(self):
        debts = [_debt("a", 500, 20), _debt("b", 100, 20), _debt("c", 10, 30)]
        ordered = AvalancheStrategy().order(debts)
        assert [d.id for d in ordered] == ["c", "a", "b"]


class TestOrdering:

    @pytest.mark.parametrize("strategy", list(Strategy))
    def test_idempotent(self, divergent_debts, strategy):
        first = order_debts(divergent_debts, strategy)
        second = order_debts(divergent_debts, strategy)
        assert first == second
        assert order_debts(first, strategy) == first

    @pytest.mark.parametrize("strategy", list(Strategy))
    def test_input_list_untouched(self, divergent_debts, strategy):
        before = list(divergent_debts)
        order_debts(divergent_debts, strategy)
        assert divergent_debts == before

    @pytest.mark.parametrize("strategy", list(Strategy))
    def test_empty(self, strategy):
        assert order_debts([], strategy) == []

    def test_order_by_string_name(self, divergent_debts):
        assert [d.id for d in order_debts(divergent_debts, "avalanche")] == ["large", "small"]

    def test_get_strategy(self):
        assert isinstance(get_strategy(Strategy.SNOWBALL), SnowballStrategy)
        assert isinstance(get_strategy("avalanche"), AvalancheStrategy)

    def test_every_enum_value_registered(self):
        assert {cls.strategy for cls in ALL_STRATEGIES} == set(Strategy)


class TestRun:

    @pytest.mark.parametrize("StrategyClass", ALL_STRATEGIES)
    def test_run_completes(self, StrategyClass, divergent_debts):
        result = StrategyClass().run(divergent_debts, extra_monthly_budget=20.0)
        assert result.strategy is StrategyClass.strategy
        assert result.all_paid
        assert result.total_months > 0
