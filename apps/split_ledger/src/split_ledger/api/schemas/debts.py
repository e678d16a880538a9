"""Schemas for group balance and debt endpoints."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel

from split_ledger.api.schemas.common import MoneyAmount, SignedMoneyAmount
from split_ledger.domain.debt_simplifier import SettlementSuggestion
from split_ledger.domain.money import format_money
from split_ledger.services.group_debts_service import GroupDebtsProjection


class MemberBalanceResponse(BaseModel):
    """Net position of one member; positive means the member is owed money."""

    user_id: str
    balance: SignedMoneyAmount


class SettlementSuggestionResponse(BaseModel):
    payer_id: str
    payee_id: str
    amount: MoneyAmount

    @classmethod
    def from_suggestion(
        cls, suggestion: SettlementSuggestion
    ) -> SettlementSuggestionResponse:
        return cls(
            payer_id=suggestion.payer_id,
            payee_id=suggestion.payee_id,
            amount=format_money(suggestion.amount),
        )


class GroupBalancesResponse(BaseModel):
    group_id: str
    balances: list[MemberBalanceResponse]

    @classmethod
    def from_balances(
        cls, group_id: str, balances: dict[str, Decimal]
    ) -> GroupBalancesResponse:
        return cls(
            group_id=group_id,
            balances=[
                MemberBalanceResponse(user_id=user_id, balance=format_money(balance))
                for user_id, balance in balances.items()
            ],
        )


class GroupDebtsResponse(BaseModel):
    """Balances together with the transfers that settle them."""

    group_id: str
    balances: list[MemberBalanceResponse]
    settlements: list[SettlementSuggestionResponse]

    @classmethod
    def from_projection(cls, projection: GroupDebtsProjection) -> GroupDebtsResponse:
        balances = GroupBalancesResponse.from_balances(
            projection.group_id, projection.balances
        )
        return cls(
            group_id=projection.group_id,
            balances=balances.balances,
            settlements=[
                SettlementSuggestionResponse.from_suggestion(item)
                for item in projection.settlements
            ],
        )
