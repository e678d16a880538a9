"""Greedy reduction of net balances into settlement suggestions.

Debtors and creditors are each sorted by descending magnitude, then the
largest remaining debtor pays the largest remaining creditor until one side
runs out. Sorting is stable, so equal magnitudes keep the insertion order of
the balance map and the output is deterministic.

This is a heuristic: it emits at most ``n - 1`` transfers for ``n`` unsettled
participants but does not always find the smallest possible number of
transfers, which is a much harder combinatorial problem.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal

from split_ledger.domain.money import MONEY_EPSILON, MONEY_PRECISION, quantize_money


@dataclass(frozen=True, slots=True)
class SettlementSuggestion:
    """One transfer that moves money from a debtor to a creditor."""

    payer_id: str
    payee_id: str
    amount: Decimal


@dataclass(slots=True)
class _Party:
    user_id: str
    remaining: Decimal


def _by_magnitude(parties: list[_Party]) -> list[_Party]:
    return sorted(parties, key=lambda party: party.remaining, reverse=True)


def simplify_debts(balances: Mapping[str, Decimal]) -> list[SettlementSuggestion]:
    """Turn a balance map into an ordered list of settlement suggestions."""

    creditors: list[_Party] = []
    debtors: list[_Party] = []
    for user_id, balance in balances.items():
        if abs(balance) <= MONEY_EPSILON:
            continue
        if balance > 0:
            creditors.append(_Party(user_id=user_id, remaining=balance))
        else:
            debtors.append(_Party(user_id=user_id, remaining=-balance))

    creditors = _by_magnitude(creditors)
    debtors = _by_magnitude(debtors)

    suggestions: list[SettlementSuggestion] = []
    creditor_index = 0
    debtor_index = 0
    while creditor_index < len(creditors) and debtor_index < len(debtors):
        creditor = creditors[creditor_index]
        debtor = debtors[debtor_index]

        amount = quantize_money(min(debtor.remaining, creditor.remaining))
        suggestions.append(
            SettlementSuggestion(
                payer_id=debtor.user_id,
                payee_id=creditor.user_id,
                amount=amount,
            )
        )
        debtor.remaining -= amount
        creditor.remaining -= amount

        if abs(debtor.remaining) < MONEY_PRECISION:
            debtor_index += 1
        if abs(creditor.remaining) < MONEY_PRECISION:
            creditor_index += 1

    return suggestions
