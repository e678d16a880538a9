"""Settlement transaction persistence operations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Literal
from uuid import UUID

from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import Session

from split_ledger.db.models.settlement_transaction import (
    SettlementStatus,
    SettlementTransaction,
)
from split_ledger.domain.money import quantize_money


@dataclass(frozen=True, slots=True)
class SettlementQueryFilters:
    """Supported filters for settlement lookups inside one group."""

    status: SettlementStatus | None = None
    payer_id: str | None = None
    payee_id: str | None = None
    amount: Decimal | None = None
    involving_user_id: str | None = None
    order_by: Literal["created_at", "completed_at"] = "created_at"
    limit: int | None = None


class SettlementRepository:
    """Append-only store for settlement transactions."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def acquire_group_lock(self, group_id: str) -> None:
        """Serialize settlement writes of one group until the transaction ends.

        Only PostgreSQL offers transaction-scoped advisory locks; other
        dialects run without the lock.
        """

        bind = self._session.get_bind()
        if bind.dialect.name != "postgresql":
            return
        self._session.execute(
            select(func.pg_advisory_xact_lock(func.hashtext(group_id)))
        )

    def insert(
        self,
        *,
        group_id: str,
        payer_id: str,
        payee_id: str,
        amount: Decimal,
        status: SettlementStatus,
        created_at: datetime,
        completed_at: datetime | None,
    ) -> UUID:
        settlement = SettlementTransaction(
            group_id=group_id,
            payer_id=payer_id,
            payee_id=payee_id,
            amount=amount,
            status=status,
            created_at=created_at,
            completed_at=completed_at,
        )
        self._session.add(settlement)
        self._session.flush()
        return settlement.id

    def query(
        self, group_id: str, filters: SettlementQueryFilters
    ) -> list[SettlementTransaction]:
        statement = self._apply_filters(
            select(SettlementTransaction).where(
                SettlementTransaction.group_id == group_id
            ),
            filters,
        )
        order_column = (
            SettlementTransaction.completed_at
            if filters.order_by == "completed_at"
            else SettlementTransaction.created_at
        )
        statement = statement.order_by(order_column.desc())
        if filters.limit is not None:
            statement = statement.limit(filters.limit)
        return list(self._session.scalars(statement).all())

    def exists(self, group_id: str, filters: SettlementQueryFilters) -> bool:
        statement = self._apply_filters(
            select(SettlementTransaction.id).where(
                SettlementTransaction.group_id == group_id
            ),
            filters,
        ).limit(1)
        return self._session.scalar(statement) is not None

    @staticmethod
    def _apply_filters(
        statement: Select[Any],
        filters: SettlementQueryFilters,
    ) -> Select[Any]:
        typed_statement = statement
        if filters.status is not None:
            typed_statement = typed_statement.where(
                SettlementTransaction.status == filters.status
            )
        if filters.payer_id is not None:
            typed_statement = typed_statement.where(
                SettlementTransaction.payer_id == filters.payer_id
            )
        if filters.payee_id is not None:
            typed_statement = typed_statement.where(
                SettlementTransaction.payee_id == filters.payee_id
            )
        if filters.amount is not None:
            typed_statement = typed_statement.where(
                SettlementTransaction.amount == quantize_money(filters.amount)
            )
        if filters.involving_user_id is not None:
            typed_statement = typed_statement.where(
                or_(
                    SettlementTransaction.payer_id == filters.involving_user_id,
                    SettlementTransaction.payee_id == filters.involving_user_id,
                )
            )
        return typed_statement
