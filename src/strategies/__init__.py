"""Debt ordering strategies for payoff planning."""

from src.engine.financial_model import DebtAccount, Strategy
from src.strategies.avalanche import AvalancheStrategy
from src.strategies.base_strategy import PayoffStrategy
from src.strategies.snowball import SnowballStrategy

ALL_STRATEGIES = [
    SnowballStrategy,
    AvalancheStrategy,
]

_BY_STRATEGY = {cls.strategy: cls for cls in ALL_STRATEGIES}


def get_strategy(strategy: Strategy | str) -> PayoffStrategy:
    """Instantiate the ordering class for a Strategy value or name."""
    return _BY_STRATEGY[Strategy.parse(strategy)]()


def order_debts(debts: list[DebtAccount], strategy: Strategy | str) -> list[DebtAccount]:
    """Order debts by strategy without touching the input list."""
    return get_strategy(strategy).order(debts)


__all__ = [
    "PayoffStrategy",
    "SnowballStrategy",
    "AvalancheStrategy",
    "ALL_STRATEGIES",
    "get_strategy",
    "order_debts",
]
