"""Settlement routes."""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from split_ledger.api.dependencies import get_settlement_recorder
from split_ledger.api.schemas.common import MONEY_PATTERN
from split_ledger.api.schemas.settlements import (
    RecordSettlementRequest,
    RecordSettlementResponse,
    SettlementExistsResponse,
    SettlementListResponse,
    SettlementStatsResponse,
    SettlementStatusKind,
)
from split_ledger.services.settlement_service import SettlementRecorder

router = APIRouter(prefix="/groups/{group_id}/settlements", tags=["Settlements"])


@router.post(
    "",
    response_model=RecordSettlementResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid settlement"},
        409: {"description": "Duplicate settlement"},
        503: {"description": "Persistence failure"},
    },
)
def record_settlement(
    group_id: str,
    payload: RecordSettlementRequest,
    recorder: Annotated[SettlementRecorder, Depends(get_settlement_recorder)],
) -> RecordSettlementResponse:
    """Record a completed payment between two members."""

    recorded = recorder.record_settlement(
        group_id,
        payload.payer_id.strip(),
        payload.payee_id.strip(),
        Decimal(payload.amount),
    )
    return RecordSettlementResponse(id=recorded.id)


@router.get("", response_model=SettlementListResponse)
def list_settlements(
    group_id: str,
    recorder: Annotated[SettlementRecorder, Depends(get_settlement_recorder)],
    status: Annotated[SettlementStatusKind | None, Query()] = None,
) -> SettlementListResponse:
    """List settlements, newest first."""

    if status == "completed":
        settlements = recorder.get_completed_settlements(group_id)
    else:
        settlements = recorder.get_all_settlements(group_id)
        if status is not None:
            settlements = [item for item in settlements if item.status == status]
    return SettlementListResponse.from_models(settlements)


@router.get("/exists", response_model=SettlementExistsResponse)
def settlement_exists(
    group_id: str,
    payer_id: Annotated[str, Query(min_length=1, max_length=64)],
    payee_id: Annotated[str, Query(min_length=1, max_length=64)],
    recorder: Annotated[SettlementRecorder, Depends(get_settlement_recorder)],
    amount: Annotated[str | None, Query(pattern=MONEY_PATTERN)] = None,
) -> SettlementExistsResponse:
    """Check whether a completed settlement was already recorded."""

    exists = recorder.settlement_exists(
        group_id,
        payer_id,
        payee_id,
        Decimal(amount) if amount else None,
    )
    return SettlementExistsResponse(exists=exists)


@router.get("/stats", response_model=SettlementStatsResponse)
def get_settlement_stats(
    group_id: str,
    user_id: Annotated[str, Query(min_length=1, max_length=64)],
    recorder: Annotated[SettlementRecorder, Depends(get_settlement_recorder)],
) -> SettlementStatsResponse:
    """Return how much a member paid and received through settlements."""

    stats = recorder.get_settlement_stats(group_id, user_id)
    return SettlementStatsResponse.from_stats(user_id, stats)
