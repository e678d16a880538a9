"""ORM models for the split_ledger domain."""

from split_ledger.db.models.expense import Expense, ExpensePayer, ExpenseSplit
from split_ledger.db.models.settlement_transaction import (
    SettlementStatus,
    SettlementTransaction,
)

__all__ = [
    "Expense",
    "ExpensePayer",
    "ExpenseSplit",
    "SettlementStatus",
    "SettlementTransaction",
]
