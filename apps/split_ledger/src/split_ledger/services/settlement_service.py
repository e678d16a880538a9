"""Business service for recording and querying settlements."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Protocol
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from split_ledger.db.models.settlement_transaction import (
    SettlementStatus,
    SettlementTransaction,
)
from split_ledger.domain.clock import utc_now
from split_ledger.domain.errors import (
    DuplicateSettlementError,
    InvalidSettlementError,
    PersistenceError,
    compose_error_message,
)
from split_ledger.domain.money import ZERO, quantize_money
from split_ledger.repositories.settlement_repository import SettlementQueryFilters

logger = logging.getLogger(__name__)


class SessionProtocol(Protocol):
    """Subset of SQLAlchemy session APIs used by this service."""

    def commit(self) -> None: ...
    def rollback(self) -> None: ...


class SettlementRepositoryProtocol(Protocol):
    """Settlement sink contract consumed by the recorder."""

    def acquire_group_lock(self, group_id: str) -> None: ...

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
    ) -> UUID: ...

    def query(
        self, group_id: str, filters: SettlementQueryFilters
    ) -> list[SettlementTransaction]: ...

    def exists(self, group_id: str, filters: SettlementQueryFilters) -> bool: ...


@dataclass(frozen=True, slots=True)
class RecordedSettlement:
    id: UUID


@dataclass(frozen=True, slots=True)
class SettlementStats:
    """Completed settlement totals of one member inside a group."""

    total_paid: Decimal
    total_received: Decimal
    payment_count: int
    records: list[SettlementTransaction] = field(default_factory=list)


class SettlementRecorder:
    """Records settlements append-only and answers settlement queries."""

    def __init__(
        self,
        *,
        settlement_repository: SettlementRepositoryProtocol,
        session: SessionProtocol,
        reject_duplicates: bool = False,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._settlement_repository = settlement_repository
        self._session = session
        self._reject_duplicates = reject_duplicates
        self._clock = clock

    def record_settlement(
        self,
        group_id: str,
        payer_id: str,
        payee_id: str,
        amount: Decimal,
    ) -> RecordedSettlement:
        """Persist a completed settlement and return its identifier."""

        self._ensure_recordable(group_id, payer_id, payee_id, amount)
        rounded_amount = quantize_money(amount)

        try:
            self._settlement_repository.acquire_group_lock(group_id)
            if self._reject_duplicates and self._settlement_repository.exists(
                group_id,
                SettlementQueryFilters(
                    status=SettlementStatus.COMPLETED,
                    payer_id=payer_id,
                    payee_id=payee_id,
                    amount=rounded_amount,
                ),
            ):
                raise DuplicateSettlementError(
                    details={
                        "payer_id": payer_id,
                        "payee_id": payee_id,
                        "amount": str(rounded_amount),
                    }
                )

            recorded_at = self._clock()
            settlement_id = self._settlement_repository.insert(
                group_id=group_id,
                payer_id=payer_id,
                payee_id=payee_id,
                amount=rounded_amount,
                status=SettlementStatus.COMPLETED,
                created_at=recorded_at,
                completed_at=recorded_at,
            )
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            logger.error(
                "settlement_record_failed",
                extra={"group_id": group_id, "error": str(exc)},
            )
            raise PersistenceError(
                message=f"Failed to record settlement: {exc}",
            ) from exc
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "settlement_recorded",
            extra={
                "settlement_id": str(settlement_id),
                "group_id": group_id,
                "payer_id": payer_id,
                "payee_id": payee_id,
                "amount": str(rounded_amount),
            },
        )
        return RecordedSettlement(id=settlement_id)

    def settlement_exists(
        self,
        group_id: str,
        payer_id: str,
        payee_id: str,
        amount: Decimal | None = None,
    ) -> bool:
        """Check for a completed settlement, optionally with the same amount."""

        return self._settlement_repository.exists(
            group_id,
            SettlementQueryFilters(
                status=SettlementStatus.COMPLETED,
                payer_id=payer_id,
                payee_id=payee_id,
                amount=quantize_money(amount) if amount is not None else None,
            ),
        )

    def get_settlement(
        self,
        group_id: str,
        payer_id: str,
        payee_id: str,
        status: SettlementStatus | None = None,
    ) -> SettlementTransaction | None:
        """Return the latest settlement between two members, if any."""

        matches = self._settlement_repository.query(
            group_id,
            SettlementQueryFilters(
                status=status,
                payer_id=payer_id,
                payee_id=payee_id,
                limit=1,
            ),
        )
        return matches[0] if matches else None

    def get_pending_settlement(
        self, group_id: str, payer_id: str, payee_id: str
    ) -> SettlementTransaction | None:
        return self.get_settlement(
            group_id, payer_id, payee_id, status=SettlementStatus.PENDING
        )

    def get_settlement_stats(self, group_id: str, user_id: str) -> SettlementStats:
        """Sum completed settlements paid and received by one member."""

        records = self._settlement_repository.query(
            group_id,
            SettlementQueryFilters(
                status=SettlementStatus.COMPLETED,
                involving_user_id=user_id,
            ),
        )
        total_paid = ZERO
        total_received = ZERO
        payment_count = 0
        for record in records:
            if record.payer_id == user_id:
                total_paid += record.amount
                payment_count += 1
            if record.payee_id == user_id:
                total_received += record.amount

        return SettlementStats(
            total_paid=quantize_money(total_paid),
            total_received=quantize_money(total_received),
            payment_count=payment_count,
            records=records,
        )

    def get_all_settlements(self, group_id: str) -> list[SettlementTransaction]:
        return self._settlement_repository.query(
            group_id, SettlementQueryFilters(order_by="created_at")
        )

    def get_completed_settlements(
        self, group_id: str
    ) -> list[SettlementTransaction]:
        return self._settlement_repository.query(
            group_id,
            SettlementQueryFilters(
                status=SettlementStatus.COMPLETED,
                order_by="completed_at",
            ),
        )

    @staticmethod
    def _ensure_recordable(
        group_id: str, payer_id: str, payee_id: str, amount: Decimal
    ) -> None:
        if not group_id or not payer_id or not payee_id:
            raise InvalidSettlementError(
                message=compose_error_message(
                    cause="Missing required fields: group_id, payer_id, payee_id.",
                    action="Provide the group and both members of the settlement.",
                )
            )
        if amount <= 0 or quantize_money(amount) <= 0:
            raise InvalidSettlementError(
                message=compose_error_message(
                    cause="Amount must be greater than 0.",
                    action="Provide a positive settlement amount.",
                ),
                details={"amount": str(amount)},
            )
        if payer_id == payee_id:
            raise InvalidSettlementError(
                message=compose_error_message(
                    cause="Payer and payee cannot be the same.",
                    action="Choose two different members for the settlement.",
                ),
                details={"payer_id": payer_id, "payee_id": payee_id},
            )
