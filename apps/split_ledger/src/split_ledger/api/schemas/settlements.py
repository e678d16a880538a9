"""Schemas for settlement endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel

from split_ledger.api.schemas.common import MemberId, MoneyAmount
from split_ledger.db.models.settlement_transaction import SettlementTransaction
from split_ledger.domain.money import format_money
from split_ledger.services.settlement_service import SettlementStats

SettlementStatusKind = Literal["pending", "completed"]


class RecordSettlementRequest(BaseModel):
    """Payment between two members that reduces their mutual debt."""

    payer_id: MemberId
    payee_id: MemberId
    amount: MoneyAmount


class RecordSettlementResponse(BaseModel):
    id: UUID


class SettlementResponse(BaseModel):
    id: UUID
    group_id: str
    payer_id: str
    payee_id: str
    amount: MoneyAmount
    status: SettlementStatusKind
    created_at: datetime
    completed_at: datetime | None

    @classmethod
    def from_model(cls, settlement: SettlementTransaction) -> SettlementResponse:
        return cls(
            id=settlement.id,
            group_id=settlement.group_id,
            payer_id=settlement.payer_id,
            payee_id=settlement.payee_id,
            amount=format_money(settlement.amount),
            status=settlement.status.value,
            created_at=settlement.created_at,
            completed_at=settlement.completed_at,
        )


class SettlementListResponse(BaseModel):
    items: list[SettlementResponse]

    @classmethod
    def from_models(
        cls, settlements: list[SettlementTransaction]
    ) -> SettlementListResponse:
        return cls(items=[SettlementResponse.from_model(item) for item in settlements])


class SettlementExistsResponse(BaseModel):
    exists: bool


class SettlementStatsResponse(BaseModel):
    """Completed settlement totals of one member."""

    user_id: str
    total_paid: MoneyAmount
    total_received: MoneyAmount
    payment_count: int

    @classmethod
    def from_stats(cls, user_id: str, stats: SettlementStats) -> SettlementStatsResponse:
        return cls(
            user_id=user_id,
            total_paid=format_money(stats.total_paid),
            total_received=format_money(stats.total_received),
            payment_count=stats.payment_count,
        )
