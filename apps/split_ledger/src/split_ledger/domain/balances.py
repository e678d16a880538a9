"""Net balance computation over expense snapshots."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from split_ledger.domain.money import MONEY_EPSILON
from split_ledger.domain.value_objects import Contribution


@dataclass(frozen=True, slots=True)
class ExpenseRecord:
    """Immutable expense snapshot with payers already normalized."""

    id: str
    group_id: str
    amount: Decimal
    date: date | None
    payers: tuple[Contribution, ...]
    splits: tuple[Contribution, ...]


def _apply(balances: dict[str, Decimal], user_id: str, delta: Decimal) -> None:
    balances[user_id] = balances.get(user_id, Decimal("0")) + delta


def compute_balances(expenses: Iterable[ExpenseRecord]) -> dict[str, Decimal]:
    """Fold expenses into a net balance per participant.

    Payers are credited with what they advanced and split participants are
    debited with their share. Positive means the participant is owed money.
    Keys keep first-seen order, which the debt simplifier uses to break ties.
    """

    balances: dict[str, Decimal] = {}
    for expense in expenses:
        for payer in expense.payers:
            _apply(balances, payer.user_id, payer.amount)
        for split in expense.splits:
            _apply(balances, split.user_id, -split.amount)
    return balances


def balance_drift(balances: dict[str, Decimal]) -> Decimal:
    """Return the sum of all balances, zero for a consistent ledger."""

    return sum(balances.values(), Decimal("0"))


def is_zero_sum(
    balances: dict[str, Decimal], epsilon: Decimal = MONEY_EPSILON
) -> bool:
    """Check the closed-group invariant within epsilon per participant."""

    tolerance = epsilon * max(len(balances), 1)
    return abs(balance_drift(balances)) <= tolerance
