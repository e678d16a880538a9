"""Shared schema building blocks."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field

from split_ledger.domain.money import format_money
from split_ledger.domain.value_objects import Contribution

MONEY_PATTERN = r"^[0-9]+\.[0-9]{2}$"
SIGNED_MONEY_PATTERN = r"^-?[0-9]+\.[0-9]{2}$"


def _positive_amount(value: str) -> str:
    try:
        amount_decimal = Decimal(value)
    except InvalidOperation as exc:
        raise ValueError("Amount must be a decimal number.") from exc
    if amount_decimal <= Decimal("0"):
        raise ValueError("Amount must be greater than zero.")
    return value


MemberId = Annotated[str, Field(min_length=1, max_length=64)]
MoneyAmount = Annotated[str, Field(pattern=MONEY_PATTERN)]
PositiveMoneyAmount = Annotated[
    str, Field(pattern=MONEY_PATTERN), AfterValidator(_positive_amount)
]
SignedMoneyAmount = Annotated[str, Field(pattern=SIGNED_MONEY_PATTERN)]


class ContributionPayload(BaseModel):
    """Amount attributed to one member in a request."""

    user_id: MemberId
    amount: PositiveMoneyAmount

    def to_contribution(self) -> Contribution:
        return Contribution(user_id=self.user_id.strip(), amount=Decimal(self.amount))


class ContributionResponse(BaseModel):
    user_id: str
    amount: SignedMoneyAmount

    @classmethod
    def from_contribution(cls, contribution: Contribution) -> ContributionResponse:
        return cls(
            user_id=contribution.user_id,
            amount=format_money(contribution.amount),
        )
