"""Business service projecting group balances and suggested settlements."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol

from split_ledger.domain.balances import (
    ExpenseRecord,
    balance_drift,
    compute_balances,
    is_zero_sum,
)
from split_ledger.domain.debt_simplifier import SettlementSuggestion, simplify_debts

logger = logging.getLogger(__name__)


class ExpenseLedgerReaderProtocol(Protocol):
    """Read-side contract returning live expense snapshots of a group."""

    def fetch(self, group_id: str) -> list[ExpenseRecord]: ...


@dataclass(frozen=True, slots=True)
class GroupDebtsProjection:
    """Balances of a group together with the transfers that settle them."""

    group_id: str
    balances: dict[str, Decimal]
    settlements: list[SettlementSuggestion]


class GroupDebtsService:
    """Computes balances and simplified debts from a ledger snapshot."""

    def __init__(self, *, expense_repository: ExpenseLedgerReaderProtocol) -> None:
        self._expense_repository = expense_repository

    def get_balances(self, group_id: str) -> dict[str, Decimal]:
        expenses = self._expense_repository.fetch(group_id)
        balances = compute_balances(expenses)
        if not is_zero_sum(balances):
            logger.warning(
                "balance_drift_detected",
                extra={
                    "group_id": group_id,
                    "drift": str(balance_drift(balances)),
                    "participants": len(balances),
                },
            )
        return balances

    def calculate_group_debts(self, group_id: str) -> list[SettlementSuggestion]:
        return self.get_projection(group_id).settlements

    def get_projection(self, group_id: str) -> GroupDebtsProjection:
        balances = self.get_balances(group_id)
        return GroupDebtsProjection(
            group_id=group_id,
            balances=balances,
            settlements=simplify_debts(balances),
        )
