from __future__ import annotations

from dataclasses import replace
from datetime import UTC, date, datetime
from decimal import Decimal

from split_ledger.domain.validation import (
    ExpenseInput,
    SettlementInput,
    SplitInput,
    ValidationIssue,
    get_first_error,
    get_first_settlement_error,
    is_valid_expense,
    is_valid_settlement,
    is_valid_splits,
    validate_expense,
    validate_settlement,
    validate_splits,
)

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=UTC)


def _messages(issues: list[ValidationIssue]) -> list[str]:
    return [issue.message for issue in issues]


BASE_EXPENSE = ExpenseInput(
    description="Hotel",
    amount="300.00",
    paid_by="alice",
    splits=[
        SplitInput(user_id="alice", amount="100.00"),
        SplitInput(user_id="bob", amount="100.00"),
        SplitInput(user_id="charlie", amount="100.00"),
    ],
    date=date(2024, 6, 10),
)


def _valid_expense(**overrides: object) -> ExpenseInput:
    return replace(BASE_EXPENSE, **overrides)


def test_validate_expense_accepts_consistent_expense() -> None:
    assert validate_expense(_valid_expense(), now=NOW) == []
    assert is_valid_expense(_valid_expense(), now=NOW)
    assert get_first_error(_valid_expense(), now=NOW) is None


def test_validate_expense_collects_every_problem() -> None:
    issues = validate_expense(
        ExpenseInput(
            description="",
            amount=-100,
            paid_by=None,
            splits=[
                SplitInput(user_id="u1", amount=50),
                SplitInput(user_id="u2", amount=40),
            ],
        ),
        now=NOW,
    )

    messages = _messages(issues)
    assert "Description is required" in messages
    assert "Amount must be greater than 0" in messages
    assert "Splits total (90.00) must equal expense amount (-100.00)" in messages
    assert messages[0] == "Description is required"


def test_validate_expense_rejects_long_description_and_huge_amount() -> None:
    issues = validate_expense(
        _valid_expense(description="x" * 201, amount="10000001"),
        now=NOW,
    )

    assert _messages(issues)[:2] == [
        "Description must be less than 200 characters",
        "Amount exceeds maximum limit (10,000,000)",
    ]


def test_validate_expense_reports_non_numeric_amount() -> None:
    issues = validate_expense(_valid_expense(amount="abc"), now=NOW)

    assert ValidationIssue("amount", "Amount must be a valid number") in issues


def test_validate_expense_rejects_future_and_malformed_dates() -> None:
    future = validate_expense(_valid_expense(date="2024-06-16"), now=NOW)
    malformed = validate_expense(_valid_expense(date="not-a-date"), now=NOW)

    assert _messages(future) == ["Date cannot be in the future"]
    assert _messages(malformed) == ["Invalid date format"]


def test_validate_expense_requires_at_least_one_split() -> None:
    issues = validate_expense(_valid_expense(splits=[]), now=NOW)

    assert _messages(issues) == ["At least one split is required"]


def test_validate_expense_reports_split_items_and_duplicates() -> None:
    issues = validate_expense(
        _valid_expense(
            amount="50.00",
            splits=[
                SplitInput(user_id="alice", amount="30.00"),
                SplitInput(user_id="alice", amount="20.00"),
                SplitInput(user_id=" ", amount="x"),
            ],
        ),
        now=NOW,
    )

    assert _messages(issues) == [
        "Split 3: User ID is required",
        "Split 3: Amount must be a valid number",
        "Each person can only appear once in splits",
    ]


def test_validate_expense_tolerates_one_cent_rounding() -> None:
    issues = validate_expense(
        _valid_expense(
            amount="100.00",
            splits=[
                SplitInput(user_id="alice", amount="33.33"),
                SplitInput(user_id="bob", amount="33.33"),
                SplitInput(user_id="charlie", amount="33.33"),
            ],
        ),
        now=NOW,
    )

    assert issues == []


def test_validate_splits_checks_each_amount_against_total() -> None:
    issues = validate_splits(
        [
            SplitInput(user_id="alice", amount=Decimal("80")),
            SplitInput(user_id="bob", amount=Decimal("-20")),
        ],
        Decimal("60"),
    )

    assert _messages(issues) == [
        "Split 1: Amount cannot exceed total",
        "Split 2: Amount must be greater than 0",
    ]
    assert not is_valid_splits(
        [SplitInput(user_id="alice", amount="80")], Decimal("60")
    )


def test_validate_splits_rejects_bad_total_and_empty_list() -> None:
    assert validate_splits([], "10") == [
        ValidationIssue("splits", "At least one split is required")
    ]
    bad_total = validate_splits([SplitInput(user_id="alice", amount="10")], "0")
    assert [issue.field for issue in bad_total] == ["total_amount"]


def test_validate_splits_accepts_even_distribution() -> None:
    splits = [
        SplitInput(user_id="u1", amount="3.33"),
        SplitInput(user_id="u2", amount="3.33"),
        SplitInput(user_id="u3", amount="3.34"),
    ]

    assert validate_splits(splits, "10") == []


def test_validate_settlement_rejects_same_member() -> None:
    settlement = SettlementInput(payer_id="u1", payee_id="u1", amount=100)

    assert _messages(validate_settlement(settlement, now=NOW)) == [
        "Payer and payee cannot be the same person"
    ]
    assert not is_valid_settlement(settlement, now=NOW)


def test_validate_settlement_requires_members_and_positive_amount() -> None:
    settlement = SettlementInput(payer_id="", payee_id=None, amount=0)

    assert get_first_settlement_error(settlement, now=NOW) == "Payer is required"
    assert _messages(validate_settlement(settlement, now=NOW)) == [
        "Payer is required",
        "Payee is required",
        "Amount must be greater than 0",
    ]


def test_validate_settlement_accepts_past_payment() -> None:
    settlement = SettlementInput(
        payer_id="bob", payee_id="alice", amount="60.00", date="2024-06-01"
    )

    assert validate_settlement(settlement, now=NOW) == []
