"""Shared-expense balance netting and settlement engine."""

from split_ledger.domain.balances import compute_balances
from split_ledger.domain.debt_simplifier import simplify_debts
from split_ledger.domain.money import distribute_evenly
from split_ledger.domain.validation import (
    validate_expense,
    validate_settlement,
    validate_splits,
)
from split_ledger.services.settlement_service import SettlementRecorder

__all__ = [
    "SettlementRecorder",
    "compute_balances",
    "distribute_evenly",
    "simplify_debts",
    "validate_expense",
    "validate_settlement",
    "validate_splits",
]
