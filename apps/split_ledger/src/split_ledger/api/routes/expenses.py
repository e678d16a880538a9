"""Group expense routes."""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from split_ledger.api.dependencies import get_expense_service
from split_ledger.api.schemas.expenses import (
    CreateExpenseRequest,
    DeletedExpenseResponse,
    ExpenseListResponse,
    ExpenseResponse,
    UpdateExpenseRequest,
)
from split_ledger.services.expense_service import (
    CreateExpenseInput,
    ExpenseService,
    UpdateExpenseInput,
)

router = APIRouter(prefix="/groups/{group_id}/expenses", tags=["Expenses"])


@router.post(
    "",
    response_model=ExpenseResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Invalid payload or business rule violated"}},
)
def create_expense(
    group_id: str,
    payload: CreateExpenseRequest,
    service: Annotated[ExpenseService, Depends(get_expense_service)],
) -> ExpenseResponse:
    """Register an expense with its payers and splits."""

    expense = service.create_expense(
        group_id,
        CreateExpenseInput(
            description=payload.description,
            amount=Decimal(payload.amount),
            paid_by=payload.paid_by.strip(),
            splits=[item.to_contribution() for item in payload.splits],
            payers=[item.to_contribution() for item in payload.payers]
            if payload.payers
            else None,
            expense_date=payload.expense_date,
            category=payload.category,
            notes=payload.notes,
        ),
    )
    return ExpenseResponse.from_model(expense)


@router.get("", response_model=ExpenseListResponse)
def list_expenses(
    group_id: str,
    service: Annotated[ExpenseService, Depends(get_expense_service)],
) -> ExpenseListResponse:
    """List live expenses in the order the balances are computed from."""

    return ExpenseListResponse.from_models(group_id, service.list_expenses(group_id))


@router.get(
    "/{expense_id}",
    response_model=ExpenseResponse,
    responses={404: {"description": "Expense not found"}},
)
def get_expense(
    group_id: str,
    expense_id: UUID,
    service: Annotated[ExpenseService, Depends(get_expense_service)],
) -> ExpenseResponse:
    """Return one live expense with its effective payers and splits."""

    return ExpenseResponse.from_model(service.get_expense(group_id, expense_id))


@router.patch(
    "/{expense_id}",
    response_model=ExpenseResponse,
    responses={
        400: {"description": "Invalid payload or business rule violated"},
        404: {"description": "Expense not found"},
    },
)
def update_expense(
    group_id: str,
    expense_id: UUID,
    payload: UpdateExpenseRequest,
    service: Annotated[ExpenseService, Depends(get_expense_service)],
) -> ExpenseResponse:
    """Edit an expense; replaced splits are validated against the total."""

    expense = service.update_expense(
        group_id,
        expense_id,
        UpdateExpenseInput(
            description=payload.description,
            amount=Decimal(payload.amount) if payload.amount else None,
            expense_date=payload.expense_date,
            paid_by=payload.paid_by,
            splits=[item.to_contribution() for item in payload.splits]
            if payload.splits is not None
            else None,
            payers=[item.to_contribution() for item in payload.payers]
            if payload.payers is not None
            else None,
        ),
    )
    return ExpenseResponse.from_model(expense)


@router.delete(
    "/{expense_id}",
    response_model=DeletedExpenseResponse,
    responses={404: {"description": "Expense not found"}},
)
def delete_expense(
    group_id: str,
    expense_id: UUID,
    deleted_by: Annotated[str, Query(min_length=1, max_length=64)],
    service: Annotated[ExpenseService, Depends(get_expense_service)],
) -> DeletedExpenseResponse:
    """Soft delete an expense, leaving it restorable for a limited time."""

    result = service.delete_expense(group_id, expense_id, deleted_by)
    return DeletedExpenseResponse.from_result(result)


@router.post(
    "/{expense_id}/restore",
    response_model=ExpenseResponse,
    responses={
        400: {"description": "Expense is not deleted"},
        404: {"description": "Expense not found"},
        422: {"description": "Restore window expired"},
    },
)
def restore_expense(
    group_id: str,
    expense_id: UUID,
    service: Annotated[ExpenseService, Depends(get_expense_service)],
) -> ExpenseResponse:
    """Bring a soft-deleted expense back into the ledger."""

    expense = service.restore_expense(group_id, expense_id)
    return ExpenseResponse.from_model(expense)
