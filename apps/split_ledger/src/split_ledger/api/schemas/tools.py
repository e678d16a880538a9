"""Schemas for stateless split and validation helpers."""

from __future__ import annotations

from pydantic import BaseModel, Field

from split_ledger.api.schemas.common import ContributionResponse, MoneyAmount
from split_ledger.domain.validation import ValidationIssue

RawAmount = str | int | float | None


class DistributeRequest(BaseModel):
    participant_ids: list[str] = Field(min_length=1)
    total: MoneyAmount


class DistributeResponse(BaseModel):
    total: MoneyAmount
    splits: list[ContributionResponse]


class RawSplitPayload(BaseModel):
    user_id: str | None = None
    amount: RawAmount = None


class ValidateExpenseRequest(BaseModel):
    """Unchecked expense draft; problems are reported, not rejected."""

    description: str | None = None
    amount: RawAmount = None
    paid_by: str | None = None
    splits: list[RawSplitPayload] = Field(default_factory=list)
    date: str | None = None


class ValidateSettlementRequest(BaseModel):
    payer_id: str | None = None
    payee_id: str | None = None
    amount: RawAmount = None
    date: str | None = None


class ValidationIssueResponse(BaseModel):
    field: str
    message: str


class ValidationResponse(BaseModel):
    valid: bool
    errors: list[ValidationIssueResponse]

    @classmethod
    def from_issues(cls, issues: list[ValidationIssue]) -> ValidationResponse:
        return cls(
            valid=not issues,
            errors=[
                ValidationIssueResponse(field=issue.field, message=issue.message)
                for issue in issues
            ],
        )
