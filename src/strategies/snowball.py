"""Snowball strategy: surplus to the smallest balance first."""

from __future__ import annotations

from src.engine.financial_model import DebtAccount, Strategy
from src.strategies.base_strategy import PayoffStrategy


class SnowballStrategy(PayoffStrategy):
    """Debt snowball: order debts by balance, smallest first.

    Psychologically motivated strategy: quick wins by eliminating small debts.
    """

    strategy = Strategy.SNOWBALL
    descending = False

    @property
    def name(self) -> str:
        return "Snowball"

    def sort_key(self, debt: DebtAccount) -> float:
        return debt.balance
