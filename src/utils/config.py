"""YAML plan configuration and debt-record snapshot loading."""

from __future__ import annotations

import json
import logging
import yaml
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any

from src.engine.financial_model import DebtAccount, DebtKind, Strategy

logger = logging.getLogger(__name__)


def _resolve_config_path(path: str | Path) -> Path:
    """Resolve a config path, anchoring relative paths to the project root.

    The project root is identified as the nearest ancestor directory that
    contains ``pyproject.toml``.  If the file exists as-is (e.g. an absolute
    path or the CWD happens to be the project root already), it is returned
    unchanged.
    """
    p = Path(path)
    if p.is_absolute() or p.exists():
        return p

    here = Path(__file__).resolve()
    for parent in here.parents:
        if (parent / "pyproject.toml").exists():
            # open() gives the descriptive FileNotFoundError if it is missing
            return parent / p

    return p


def _parse_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def _parse_kind(value: Any) -> DebtKind:
    try:
        return DebtKind(str(value))
    except ValueError:
        return DebtKind.LOAN


def debt_from_dict(raw: dict[str, Any], index: int = 0) -> DebtAccount:
    """Build a DebtAccount from a YAML mapping (snake_case keys)."""
    balance = float(raw.get("balance") or 0.0)
    return DebtAccount(
        id=str(raw.get("id", f"debt-{index + 1}")),
        name=str(raw.get("name", f"Debt {index + 1}")),
        balance=balance,
        annual_rate_percent=float(raw.get("annual_rate_percent") or 0.0),
        minimum_payment=float(raw.get("minimum_payment") or 0.0),
        lender=str(raw.get("lender", "")),
        principal=float(raw.get("principal") or balance),
        kind=_parse_kind(raw.get("kind", "loan")),
    )


@dataclass
class PlanConfig:
    """A payoff plan: the debts plus how to pay them down."""

    debts: list[DebtAccount] = field(default_factory=list)
    strategy: Strategy = Strategy.AVALANCHE
    extra_monthly_budget: float = 0.0
    start_date: date | None = None
    monthly_income: float | None = None  # Only used for debt-load assessment

    @property
    def num_debts(self) -> int:
        return len(self.debts)

    @property
    def total_debt(self) -> float:
        return sum(d.balance for d in self.debts)

    @property
    def total_minimum_payment(self) -> float:
        return sum(d.minimum_payment for d in self.debts)

    def to_request(self):
        """Build the SimulationRequest for this plan."""
        from src.engine.simulator import SimulationRequest

        return SimulationRequest(
            debts=self.debts,
            strategy=self.strategy,
            extra_monthly_budget=self.extra_monthly_budget,
            start_date=self.start_date,
        )


def load_plan_config(path: str | Path) -> PlanConfig:
    """Load a PlanConfig from a YAML file.

    Args:
        path: Path to a YAML plan file (e.g., configs/plans/default.yaml).

    Returns:
        Populated PlanConfig instance.
    """
    path = _resolve_config_path(path)
    with open(path, "r") as f:
        raw: dict[str, Any] = yaml.safe_load(f) or {}

    debts = [debt_from_dict(d, i) for i, d in enumerate(raw.get("debts", []) or [])]

    income = raw.get("monthly_income")
    return PlanConfig(
        debts=debts,
        strategy=Strategy.parse(raw.get("strategy", "avalanche")),
        extra_monthly_budget=float(raw.get("extra_monthly_budget", 0.0) or 0.0),
        start_date=_parse_date(raw.get("start_date")),
        monthly_income=float(income) if income is not None else None,
    )


# ── Debt storage snapshot ─────────────────────────────────────────────────
#
# The mobile client stores debts as a JSON list of camelCase records:
#   {"id", "name", "lender", "type", "totalAmount", "remainingAmount",
#    "monthlyPayment", "interestRate", "startDate", "endDate"}

def debt_from_record(record: dict[str, Any]) -> DebtAccount:
    """Convert one stored debt record into a DebtAccount.

    Raises:
        KeyError / TypeError / ValueError: if required fields are missing
        or not numeric.
    """
    total = float(record.get("totalAmount", 0) or 0)
    return DebtAccount(
        id=str(record["id"]),
        name=str(record.get("name", "")),
        balance=float(record["remainingAmount"]),
        annual_rate_percent=float(record.get("interestRate", 0) or 0),
        minimum_payment=float(record["monthlyPayment"]),
        lender=str(record.get("lender", "")),
        principal=total,
        kind=_parse_kind(record.get("type", "loan")),
    )


def debts_from_records(records: list[dict[str, Any]]) -> list[DebtAccount]:
    """Convert stored records, skipping (and logging) the malformed ones."""
    debts = []
    for i, record in enumerate(records):
        try:
            debts.append(debt_from_record(record))
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            logger.warning("Skipping malformed debt record #%d: %r", i, exc)
    return debts


def load_debt_records(path: str | Path) -> list[DebtAccount]:
    """Load the JSON debt snapshot written by the client.

    A missing file or unreadable JSON is treated as "no debts" so callers
    can show an empty state instead of failing.
    """
    path = _resolve_config_path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError:
        logger.warning("Debt snapshot %s not found; using an empty debt list", path)
        return []
    except json.JSONDecodeError as exc:
        logger.warning("Debt snapshot %s is not valid JSON (%s); using an empty debt list", path, exc)
        return []

    if not isinstance(raw, list):
        logger.warning("Debt snapshot %s is not a list; using an empty debt list", path)
        return []
    return debts_from_records(raw)
