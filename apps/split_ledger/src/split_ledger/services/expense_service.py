"""Business service for expense registration, edits and soft deletion."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import asdict, dataclass
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal
from typing import Protocol
from uuid import UUID

from split_ledger.db.models.expense import Expense, ExpensePayer, ExpenseSplit
from split_ledger.domain.clock import local_today, utc_now
from split_ledger.domain.errors import (
    ExpenseNotFoundError,
    InvalidRequestError,
    RestoreWindowExpiredError,
    compose_error_message,
)
from split_ledger.domain.money import approx_equal, quantize_money
from split_ledger.domain.validation import (
    ExpenseInput,
    SplitInput,
    ValidationIssue,
    validate_expense,
    validate_splits,
)
from split_ledger.domain.value_objects import Contribution

logger = logging.getLogger(__name__)


class SessionProtocol(Protocol):
    """Subset of SQLAlchemy session APIs used by this service."""

    def commit(self) -> None: ...
    def rollback(self) -> None: ...
    def flush(self) -> None: ...
    def refresh(self, instance: object) -> None: ...


class ExpenseRepositoryProtocol(Protocol):
    """Expense repository contract consumed by service."""

    def get(self, group_id: str, expense_id: UUID) -> Expense | None: ...

    def list_live(self, group_id: str) -> list[Expense]: ...

    def add(self, expense: Expense) -> Expense: ...


@dataclass(slots=True, frozen=True)
class CreateExpenseInput:
    """Input model for expense creation.

    ``payers`` is optional: without it the whole amount is attributed to
    ``paid_by``.
    """

    description: str
    amount: Decimal
    paid_by: str
    splits: Sequence[Contribution]
    payers: Sequence[Contribution] | None = None
    expense_date: date | None = None
    category: str | None = None
    notes: str | None = None


@dataclass(slots=True, frozen=True)
class UpdateExpenseInput:
    """Partial update; ``None`` leaves a field unchanged."""

    description: str | None = None
    amount: Decimal | None = None
    expense_date: date | None = None
    paid_by: str | None = None
    splits: Sequence[Contribution] | None = None
    payers: Sequence[Contribution] | None = None


@dataclass(slots=True, frozen=True)
class DeletedExpense:
    id: UUID
    deleted_at: datetime
    can_restore: bool
    hours_remaining: int


def _as_split_inputs(contributions: Sequence[Contribution]) -> list[SplitInput]:
    return [
        SplitInput(user_id=item.user_id, amount=item.amount) for item in contributions
    ]


def _raise_for_issues(issues: list[ValidationIssue]) -> None:
    if not issues:
        return
    raise InvalidRequestError(
        message=compose_error_message(
            cause=issues[0].message + ".",
            action="Fix the listed fields and submit the expense again.",
        ),
        details={"errors": [asdict(issue) for issue in issues]},
    )


def _validate_payers(
    payers: Sequence[Contribution], amount: Decimal
) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for index, payer in enumerate(payers):
        if not payer.user_id.strip():
            issues.append(
                ValidationIssue(
                    f"payers[{index}].user_id",
                    f"Payer {index + 1}: User ID is required",
                )
            )
        if payer.amount <= 0:
            issues.append(
                ValidationIssue(
                    f"payers[{index}].amount",
                    f"Payer {index + 1}: Amount must be greater than 0",
                )
            )
    if len({payer.user_id for payer in payers}) != len(payers):
        issues.append(
            ValidationIssue("payers", "Each person can only appear once in payers")
        )
    payer_sum = sum((payer.amount for payer in payers), Decimal("0"))
    if not approx_equal(quantize_money(payer_sum), quantize_money(amount)):
        issues.append(
            ValidationIssue("payers", "Payers total must equal expense amount")
        )
    return issues


def _payer_rows(payers: Sequence[Contribution]) -> list[ExpensePayer]:
    return [
        ExpensePayer(
            user_id=payer.user_id,
            amount=quantize_money(payer.amount),
            position=position,
        )
        for position, payer in enumerate(payers)
    ]


def _split_rows(splits: Sequence[Contribution]) -> list[ExpenseSplit]:
    return [
        ExpenseSplit(
            user_id=split.user_id,
            amount=quantize_money(split.amount),
            position=position,
        )
        for position, split in enumerate(splits)
    ]


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


class ExpenseService:
    """Handles expense writes that feed the group ledger."""

    def __init__(
        self,
        *,
        expense_repository: ExpenseRepositoryProtocol,
        session: SessionProtocol,
        restore_window_hours: int = 24,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._expense_repository = expense_repository
        self._session = session
        self._restore_window = timedelta(hours=restore_window_hours)
        self._clock = clock

    def create_expense(self, group_id: str, payload: CreateExpenseInput) -> Expense:
        now = self._clock()
        issues = validate_expense(
            ExpenseInput(
                description=payload.description,
                amount=payload.amount,
                paid_by=payload.paid_by,
                splits=_as_split_inputs(payload.splits),
                date=payload.expense_date,
                group_id=group_id,
            ),
            now=now,
        )
        if not issues and payload.payers:
            issues = _validate_payers(payload.payers, payload.amount)
        _raise_for_issues(issues)

        try:
            expense = Expense(
                group_id=group_id,
                description=payload.description.strip(),
                amount=quantize_money(payload.amount),
                paid_by=payload.paid_by.strip(),
                expense_date=payload.expense_date or local_today(now),
                category=payload.category,
                notes=payload.notes,
                payers=_payer_rows(payload.payers or ()),
                splits=_split_rows(payload.splits),
            )
            created_expense = self._expense_repository.add(expense)
            self._session.commit()
            self._session.refresh(created_expense)
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "expense_created",
            extra={
                "expense_id": str(created_expense.id),
                "group_id": group_id,
                "amount": str(created_expense.amount),
                "payers": len(created_expense.payers) or 1,
                "splits": len(created_expense.splits),
            },
        )
        return created_expense

    def update_expense(
        self, group_id: str, expense_id: UUID, payload: UpdateExpenseInput
    ) -> Expense:
        expense = self._get_live_expense(group_id, expense_id)

        amount = payload.amount if payload.amount is not None else expense.amount
        splits = (
            list(payload.splits)
            if payload.splits is not None
            else [
                Contribution(user_id=split.user_id, amount=split.amount)
                for split in expense.splits
            ]
        )
        payers = (
            list(payload.payers)
            if payload.payers is not None
            else [
                Contribution(user_id=payer.user_id, amount=payer.amount)
                for payer in expense.payers
            ]
        )

        issues = validate_expense(
            ExpenseInput(
                description=payload.description
                if payload.description is not None
                else expense.description,
                amount=amount,
                paid_by=payload.paid_by or expense.paid_by,
                splits=_as_split_inputs(splits),
                date=payload.expense_date,
                group_id=group_id,
            ),
            now=self._clock(),
        )
        if payload.splits is not None:
            issues.extend(
                issue
                for issue in validate_splits(_as_split_inputs(splits), amount)
                if issue not in issues
            )
        if not issues and payers:
            issues = _validate_payers(payers, amount)
        _raise_for_issues(issues)

        try:
            if payload.description is not None:
                expense.description = payload.description.strip()
            if payload.amount is not None:
                expense.amount = quantize_money(payload.amount)
            if payload.expense_date is not None:
                expense.expense_date = payload.expense_date
            if payload.paid_by is not None:
                expense.paid_by = payload.paid_by.strip()
            # Old rows must be gone before re-inserting the same user ids.
            if payload.splits is not None:
                expense.splits.clear()
                self._session.flush()
                expense.splits.extend(_split_rows(splits))
            if payload.payers is not None:
                expense.payers.clear()
                self._session.flush()
                expense.payers.extend(_payer_rows(payers))
            self._session.commit()
            self._session.refresh(expense)
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "expense_updated",
            extra={"expense_id": str(expense.id), "group_id": group_id},
        )
        return expense

    def delete_expense(
        self, group_id: str, expense_id: UUID, deleted_by: str
    ) -> DeletedExpense:
        """Soft delete an expense so it can still be restored for a while."""

        expense = self._get_live_expense(group_id, expense_id)
        deleted_at = self._clock()
        try:
            expense.is_deleted = True
            expense.deleted_at = deleted_at
            expense.deleted_by = deleted_by
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "expense_deleted",
            extra={
                "expense_id": str(expense.id),
                "group_id": group_id,
                "deleted_by": deleted_by,
            },
        )
        return DeletedExpense(
            id=expense.id,
            deleted_at=deleted_at,
            can_restore=True,
            hours_remaining=int(self._restore_window.total_seconds() // 3600),
        )

    def restore_expense(self, group_id: str, expense_id: UUID) -> Expense:
        expense = self._expense_repository.get(group_id, expense_id)
        if expense is None:
            raise ExpenseNotFoundError(details={"expense_id": str(expense_id)})
        if not expense.is_deleted or expense.deleted_at is None:
            raise InvalidRequestError(
                message=compose_error_message(
                    cause="Expense is not deleted.",
                    action="Only deleted expenses can be restored.",
                )
            )
        if self._clock() - _aware(expense.deleted_at) > self._restore_window:
            raise RestoreWindowExpiredError(
                details={"deleted_at": _aware(expense.deleted_at).isoformat()}
            )

        try:
            expense.is_deleted = False
            expense.deleted_at = None
            expense.deleted_by = None
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "expense_restored",
            extra={"expense_id": str(expense.id), "group_id": group_id},
        )
        return expense

    def get_expense(self, group_id: str, expense_id: UUID) -> Expense:
        """Return a live expense; soft-deleted rows count as missing."""

        return self._get_live_expense(group_id, expense_id)

    def list_expenses(self, group_id: str) -> list[Expense]:
        return self._expense_repository.list_live(group_id)

    def _get_live_expense(self, group_id: str, expense_id: UUID) -> Expense:
        expense = self._expense_repository.get(group_id, expense_id)
        if expense is None or expense.is_deleted:
            raise ExpenseNotFoundError(details={"expense_id": str(expense_id)})
        return expense
