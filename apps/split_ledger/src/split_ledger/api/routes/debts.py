"""Group balance and debt simplification routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from split_ledger.api.dependencies import get_group_debts_service
from split_ledger.api.schemas.debts import GroupBalancesResponse, GroupDebtsResponse
from split_ledger.services.group_debts_service import GroupDebtsService

router = APIRouter(prefix="/groups/{group_id}", tags=["Debts"])


@router.get("/balances", response_model=GroupBalancesResponse)
def get_group_balances(
    group_id: str,
    service: Annotated[GroupDebtsService, Depends(get_group_debts_service)],
) -> GroupBalancesResponse:
    """Return the net balance of every member with expenses in the group."""

    return GroupBalancesResponse.from_balances(
        group_id, service.get_balances(group_id)
    )


@router.get("/debts", response_model=GroupDebtsResponse)
def get_group_debts(
    group_id: str,
    service: Annotated[GroupDebtsService, Depends(get_group_debts_service)],
) -> GroupDebtsResponse:
    """Return balances and the simplified transfers that settle the group."""

    return GroupDebtsResponse.from_projection(service.get_projection(group_id))
