"""Domain value objects shared by balance and split computations."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True, slots=True)
class Contribution:
    """Amount attributed to one participant, as payer or as split share."""

    user_id: str
    amount: Decimal


@dataclass(frozen=True, slots=True)
class LegacyPayer:
    """Expense paid entirely by the single ``paid_by`` participant."""

    paid_by: str


@dataclass(frozen=True, slots=True)
class PayerList:
    """Expense paid by an explicit list of participants."""

    payers: tuple[Contribution, ...]

    @classmethod
    def of(cls, payers: Iterable[Contribution]) -> PayerList:
        return cls(payers=tuple(payers))


PayerShape = LegacyPayer | PayerList


def resolve_payers(shape: PayerShape, amount: Decimal) -> tuple[Contribution, ...]:
    """Return the uniform multi-payer form of an expense payer shape."""

    if isinstance(shape, LegacyPayer):
        return (Contribution(user_id=shape.paid_by, amount=amount),)
    return shape.payers


def payer_shape(
    *,
    paid_by: str | None,
    payers: Iterable[Contribution] | None,
) -> PayerShape:
    """Pick the payer variant for a stored expense row.

    Explicit payer rows win; an expense without them falls back to the
    legacy ``paid_by`` column.
    """

    explicit = tuple(payers or ())
    if explicit:
        return PayerList(payers=explicit)
    if not paid_by:
        raise ValueError("Expense has neither payer rows nor paid_by.")
    return LegacyPayer(paid_by=paid_by)
