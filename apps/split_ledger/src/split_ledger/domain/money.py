"""Money helpers using Decimal with cent precision rules."""

from __future__ import annotations

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from split_ledger.domain.value_objects import Contribution

MONEY_PRECISION = Decimal("0.01")
MONEY_EPSILON = Decimal("0.01")
MAX_AMOUNT = Decimal("10000000")
ZERO = Decimal("0.00")


def quantize_money(value: Decimal) -> Decimal:
    """Return value rounded to two decimal places with HALF_UP strategy."""

    return value.quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def parse_money(value: str) -> Decimal:
    """Parse and normalize input money string into Decimal."""

    return quantize_money(Decimal(value))


def format_money(value: Decimal) -> str:
    """Render money as string with exactly two decimal places."""

    return f"{quantize_money(value):.2f}"


def to_decimal(value: object) -> Decimal | None:
    """Coerce a raw numeric input into Decimal, or None when not numeric."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        candidate = value
    elif isinstance(value, int | float | str):
        try:
            candidate = Decimal(str(value).strip())
        except InvalidOperation:
            return None
    else:
        return None
    if not candidate.is_finite():
        return None
    return candidate


def approx_equal(a: Decimal, b: Decimal, epsilon: Decimal = MONEY_EPSILON) -> bool:
    """Compare two amounts with the ledger tolerance."""

    return abs(a - b) <= epsilon


def distribute_evenly(
    participant_ids: Sequence[str], total: Decimal
) -> list[Contribution]:
    """Split total across participants, giving the rounding rest to the last.

    The result always sums to ``quantize_money(total)`` exactly. When half-up
    rounding lifts the share above ``total / n`` (many participants, small
    total) the last amount can be zero or negative, so such a distribution
    does not pass ``validate_splits``.
    """

    if not participant_ids:
        return []

    total = quantize_money(total)
    share = quantize_money(total / len(participant_ids))
    others = [
        Contribution(user_id=user_id, amount=share)
        for user_id in participant_ids[:-1]
    ]
    remainder = total - share * len(others)
    return [*others, Contribution(user_id=participant_ids[-1], amount=remainder)]


def is_equal_split(splits: Sequence[Contribution], total: Decimal) -> bool:
    """Return whether every split is within one cent of an even share."""

    if not splits:
        return False
    even_share = total / len(splits)
    return all(approx_equal(split.amount, even_share) for split in splits)
