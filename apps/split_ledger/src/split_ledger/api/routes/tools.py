"""Stateless split and validation helper routes."""

from __future__ import annotations

from decimal import Decimal

from fastapi import APIRouter

from split_ledger.api.schemas.common import ContributionResponse
from split_ledger.api.schemas.tools import (
    DistributeRequest,
    DistributeResponse,
    ValidateExpenseRequest,
    ValidateSettlementRequest,
    ValidationResponse,
)
from split_ledger.domain.money import distribute_evenly, format_money
from split_ledger.domain.validation import (
    ExpenseInput,
    SettlementInput,
    SplitInput,
    validate_expense,
    validate_settlement,
)

router = APIRouter(tags=["Tools"])


@router.post("/splits/distribute", response_model=DistributeResponse)
def distribute(payload: DistributeRequest) -> DistributeResponse:
    """Split a total evenly; the last participant absorbs the rounding rest."""

    total = Decimal(payload.total)
    splits = distribute_evenly(payload.participant_ids, total)
    return DistributeResponse(
        total=format_money(total),
        splits=[ContributionResponse.from_contribution(item) for item in splits],
    )


@router.post("/validations/expense", response_model=ValidationResponse)
def validate_expense_draft(payload: ValidateExpenseRequest) -> ValidationResponse:
    """Report every problem of an expense draft without storing it."""

    issues = validate_expense(
        ExpenseInput(
            description=payload.description,
            amount=payload.amount,
            paid_by=payload.paid_by,
            splits=[
                SplitInput(user_id=item.user_id, amount=item.amount)
                for item in payload.splits
            ],
            date=payload.date,
        )
    )
    return ValidationResponse.from_issues(issues)


@router.post("/validations/settlement", response_model=ValidationResponse)
def validate_settlement_draft(
    payload: ValidateSettlementRequest,
) -> ValidationResponse:
    """Report every problem of a settlement draft without storing it."""

    issues = validate_settlement(
        SettlementInput(
            payer_id=payload.payer_id,
            payee_id=payload.payee_id,
            amount=payload.amount,
            date=payload.date,
        )
    )
    return ValidationResponse.from_issues(issues)
