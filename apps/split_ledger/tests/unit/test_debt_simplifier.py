from __future__ import annotations

import random
from decimal import Decimal

from split_ledger.domain.debt_simplifier import SettlementSuggestion, simplify_debts


def _apply(
    balances: dict[str, Decimal], suggestions: list[SettlementSuggestion]
) -> dict[str, Decimal]:
    remaining = dict(balances)
    for suggestion in suggestions:
        remaining[suggestion.payer_id] += suggestion.amount
        remaining[suggestion.payee_id] -= suggestion.amount
    return remaining


def _random_balances(rng: random.Random, size: int) -> dict[str, Decimal]:
    while True:
        values = [
            Decimal(rng.choice((-1, 1)) * rng.randint(2, 50000)) / 100
            for _ in range(size - 1)
        ]
        values.append(-sum(values, Decimal("0")))
        if abs(values[-1]) > Decimal("0.01"):
            break
    return {f"u{index}": value for index, value in enumerate(values)}


def test_simplify_debts_pays_largest_creditor_from_largest_debtor() -> None:
    suggestions = simplify_debts(
        {
            "alice": Decimal("150"),
            "bob": Decimal("-60"),
            "charlie": Decimal("-90"),
        }
    )

    assert suggestions == [
        SettlementSuggestion(
            payer_id="charlie", payee_id="alice", amount=Decimal("90.00")
        ),
        SettlementSuggestion(payer_id="bob", payee_id="alice", amount=Decimal("60.00")),
    ]


def test_simplify_debts_returns_nothing_for_settled_group() -> None:
    assert simplify_debts({"alice": Decimal("0"), "bob": Decimal("0")}) == []
    assert simplify_debts({}) == []


def test_simplify_debts_ignores_balances_within_one_cent() -> None:
    suggestions = simplify_debts(
        {
            "alice": Decimal("0.01"),
            "bob": Decimal("-0.01"),
            "charlie": Decimal("25.00"),
            "dora": Decimal("-25.00"),
        }
    )

    assert suggestions == [
        SettlementSuggestion(payer_id="dora", payee_id="charlie", amount=Decimal("25.00"))
    ]


def test_simplify_debts_breaks_ties_by_insertion_order() -> None:
    balances = {
        "bob": Decimal("-50"),
        "alice": Decimal("-50"),
        "dora": Decimal("50"),
        "charlie": Decimal("50"),
    }

    suggestions = simplify_debts(balances)

    assert [(item.payer_id, item.payee_id) for item in suggestions] == [
        ("bob", "dora"),
        ("alice", "charlie"),
    ]
    assert simplify_debts(balances) == suggestions


def test_simplify_debts_splits_one_debt_across_creditors() -> None:
    suggestions = simplify_debts(
        {
            "alice": Decimal("70"),
            "bob": Decimal("30"),
            "charlie": Decimal("-100"),
        }
    )

    assert suggestions == [
        SettlementSuggestion(
            payer_id="charlie", payee_id="alice", amount=Decimal("70.00")
        ),
        SettlementSuggestion(payer_id="charlie", payee_id="bob", amount=Decimal("30.00")),
    ]


def test_simplify_debts_properties_hold_for_random_ledgers() -> None:
    rng = random.Random(20240615)
    for _ in range(200):
        balances = _random_balances(rng, rng.randint(2, 9))
        suggestions = simplify_debts(balances)
        unsettled = [value for value in balances.values() if abs(value) > Decimal("0.01")]

        assert all(item.amount > 0 for item in suggestions)
        assert all(item.payer_id != item.payee_id for item in suggestions)
        assert len(suggestions) <= max(len(unsettled) - 1, 0)
        assert all(
            abs(value) <= Decimal("0.01")
            for value in _apply(balances, suggestions).values()
        )
        assert simplify_debts(balances) == suggestions
