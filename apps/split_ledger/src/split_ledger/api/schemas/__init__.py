"""API request and response schemas."""

from split_ledger.api.schemas.debts import GroupBalancesResponse, GroupDebtsResponse
from split_ledger.api.schemas.expenses import (
    CreateExpenseRequest,
    ExpenseListResponse,
    ExpenseResponse,
    UpdateExpenseRequest,
)
from split_ledger.api.schemas.settlements import (
    RecordSettlementRequest,
    SettlementListResponse,
    SettlementResponse,
)

__all__ = [
    "CreateExpenseRequest",
    "ExpenseListResponse",
    "ExpenseResponse",
    "GroupBalancesResponse",
    "GroupDebtsResponse",
    "RecordSettlementRequest",
    "SettlementListResponse",
    "SettlementResponse",
    "UpdateExpenseRequest",
]
