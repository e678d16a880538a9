"""Settlement transaction append-only ORM model."""

from __future__ import annotations

import enum
from datetime import datetime
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, DateTime, Enum, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from split_ledger.db.base import Base


class SettlementStatus(enum.StrEnum):
    """Settlement states; ``pending`` is reserved and never written today."""

    PENDING = "pending"
    COMPLETED = "completed"


class SettlementTransaction(Base):
    """Recorded payment from one group member to another."""

    __tablename__ = "settlement_transactions"
    __table_args__ = (
        CheckConstraint(
            "amount > 0", name="ck_settlement_transactions_amount_positive"
        ),
        CheckConstraint(
            "payer_id <> payee_id",
            name="ck_settlement_transactions_distinct_parties",
        ),
        Index(
            "ix_settlement_transactions_group_status",
            "group_id",
            "status",
        ),
    )

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    group_id: Mapped[str] = mapped_column(String(64), nullable=False)
    payer_id: Mapped[str] = mapped_column(String(64), nullable=False)
    payee_id: Mapped[str] = mapped_column(String(64), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    status: Mapped[SettlementStatus] = mapped_column(
        Enum(
            SettlementStatus,
            name="settlement_status",
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
            validate_strings=True,
        ),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
