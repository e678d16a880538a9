"""Schemas for expense endpoints."""

from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from split_ledger.api.schemas.common import (
    ContributionPayload,
    ContributionResponse,
    MemberId,
    PositiveMoneyAmount,
    SignedMoneyAmount,
)
from split_ledger.db.models.expense import Expense
from split_ledger.domain.money import format_money, is_equal_split
from split_ledger.repositories.expense_repository import to_expense_record
from split_ledger.services.expense_service import DeletedExpense


class CreateExpenseRequest(BaseModel):
    """Payload for registering a group expense."""

    model_config = ConfigDict(populate_by_name=True)

    description: str = Field(min_length=1, max_length=200)
    amount: PositiveMoneyAmount
    paid_by: MemberId
    splits: list[ContributionPayload] = Field(min_length=1)
    payers: list[ContributionPayload] | None = None
    expense_date: date | None = Field(default=None, alias="date")
    category: str | None = Field(default=None, max_length=64)
    notes: str | None = None

    @field_validator("description")
    @classmethod
    def validate_description(cls, value: str) -> str:
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("Description cannot be blank.")
        return trimmed


class UpdateExpenseRequest(BaseModel):
    """Partial expense update payload."""

    model_config = ConfigDict(populate_by_name=True)

    description: Annotated[str, Field(min_length=1, max_length=200)] | None = None
    amount: PositiveMoneyAmount | None = None
    paid_by: MemberId | None = None
    splits: Annotated[list[ContributionPayload], Field(min_length=1)] | None = None
    payers: list[ContributionPayload] | None = None
    expense_date: date | None = Field(default=None, alias="date")


class ExpenseResponse(BaseModel):
    """Serialized expense with its effective payers and splits."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    group_id: str
    description: str
    amount: SignedMoneyAmount
    paid_by: str
    expense_date: date = Field(alias="date")
    payers: list[ContributionResponse]
    splits: list[ContributionResponse]
    split_type: Literal["equal", "custom"]
    category: str | None
    notes: str | None
    created_at: datetime

    @classmethod
    def from_model(cls, expense: Expense) -> ExpenseResponse:
        record = to_expense_record(expense)
        return cls(
            id=expense.id,
            group_id=expense.group_id,
            description=expense.description,
            amount=format_money(expense.amount),
            paid_by=expense.paid_by,
            expense_date=expense.expense_date,
            payers=[ContributionResponse.from_contribution(p) for p in record.payers],
            splits=[ContributionResponse.from_contribution(s) for s in record.splits],
            split_type="equal"
            if is_equal_split(record.splits, expense.amount)
            else "custom",
            category=expense.category,
            notes=expense.notes,
            created_at=expense.created_at,
        )


class DeletedExpenseResponse(BaseModel):
    id: UUID
    deleted_at: datetime
    can_restore: bool
    hours_remaining: int

    @classmethod
    def from_result(cls, result: DeletedExpense) -> DeletedExpenseResponse:
        return cls(
            id=result.id,
            deleted_at=result.deleted_at,
            can_restore=result.can_restore,
            hours_remaining=result.hours_remaining,
        )


class ExpenseListResponse(BaseModel):
    """Live expenses of a group in ledger order."""

    group_id: str
    items: list[ExpenseResponse]

    @classmethod
    def from_models(
        cls, group_id: str, expenses: list[Expense]
    ) -> ExpenseListResponse:
        return cls(
            group_id=group_id,
            items=[ExpenseResponse.from_model(expense) for expense in expenses],
        )
