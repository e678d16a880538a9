"""Expense ledger persistence and snapshot reads."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from split_ledger.db.models.expense import Expense
from split_ledger.domain.balances import ExpenseRecord
from split_ledger.domain.value_objects import (
    Contribution,
    payer_shape,
    resolve_payers,
)


def to_expense_record(expense: Expense) -> ExpenseRecord:
    """Snapshot one ORM expense into the shape the balance fold consumes."""

    shape = payer_shape(
        paid_by=expense.paid_by,
        payers=[
            Contribution(user_id=payer.user_id, amount=payer.amount)
            for payer in expense.payers
        ],
    )
    return ExpenseRecord(
        id=str(expense.id),
        group_id=expense.group_id,
        amount=expense.amount,
        date=expense.expense_date,
        payers=resolve_payers(shape, expense.amount),
        splits=tuple(
            Contribution(user_id=split.user_id, amount=split.amount)
            for split in expense.splits
        ),
    )


class ExpenseRepository:
    """Repository for group expenses and their payer/split rows."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def fetch(self, group_id: str) -> list[ExpenseRecord]:
        """Return live expenses of a group as normalized snapshots."""

        return [to_expense_record(expense) for expense in self.list_live(group_id)]

    def list_live(self, group_id: str) -> list[Expense]:
        """Return expenses of a group that are not soft deleted, in ledger order."""

        statement = (
            select(Expense)
            .where(Expense.group_id == group_id, Expense.is_deleted.is_(False))
            .options(selectinload(Expense.payers), selectinload(Expense.splits))
            .order_by(
                Expense.expense_date.asc(),
                Expense.created_at.asc(),
                Expense.id.asc(),
            )
        )
        return list(self._session.scalars(statement).all())

    def get(self, group_id: str, expense_id: UUID) -> Expense | None:
        statement = (
            select(Expense)
            .where(Expense.id == expense_id, Expense.group_id == group_id)
            .options(selectinload(Expense.payers), selectinload(Expense.splits))
        )
        return self._session.scalar(statement)

    def add(self, expense: Expense) -> Expense:
        self._session.add(expense)
        self._session.flush()
        return expense
