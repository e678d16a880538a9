"""Pure validation of expense, split and settlement inputs.

Validators never raise: they return an ordered list of field-tagged issues so
callers decide whether an operation is blocked.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from split_ledger.domain.clock import local_today, parse_calendar_date
from split_ledger.domain.money import (
    MAX_AMOUNT,
    approx_equal,
    format_money,
    quantize_money,
    to_decimal,
)

MAX_DESCRIPTION_LENGTH = 200


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """One field-tagged validation failure."""

    field: str
    message: str


@dataclass(frozen=True, slots=True)
class SplitInput:
    user_id: str | None
    amount: object


@dataclass(frozen=True, slots=True)
class ExpenseInput:
    """Raw expense data as submitted by a client."""

    description: str | None
    amount: object
    paid_by: str | None
    splits: Sequence[SplitInput] = field(default_factory=tuple)
    date: object = None
    group_id: str | None = None


@dataclass(frozen=True, slots=True)
class SettlementInput:
    """Raw settlement data as submitted by a client."""

    payer_id: str | None
    payee_id: str | None
    amount: object
    group_id: str | None = None
    date: object = None


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _validate_amount(value: object, errors: list[ValidationIssue]) -> Decimal | None:
    amount = to_decimal(value)
    if amount is None:
        errors.append(ValidationIssue("amount", "Amount must be a valid number"))
    elif amount <= 0:
        errors.append(ValidationIssue("amount", "Amount must be greater than 0"))
    elif amount > MAX_AMOUNT:
        errors.append(
            ValidationIssue("amount", "Amount exceeds maximum limit (10,000,000)")
        )
    return amount


def _validate_date(
    value: object, errors: list[ValidationIssue], now: datetime | None
) -> None:
    if value is None or value == "":
        return
    parsed = parse_calendar_date(value)
    if parsed is None:
        errors.append(ValidationIssue("date", "Invalid date format"))
    elif parsed > local_today(now):
        errors.append(ValidationIssue("date", "Date cannot be in the future"))


def _validate_split_items(
    splits: Sequence[SplitInput],
    errors: list[ValidationIssue],
    *,
    total: Decimal | None = None,
) -> list[Decimal] | None:
    """Check each split; return the parsed amounts when all are numeric."""

    amounts: list[Decimal] = []
    all_numeric = True
    for index, split in enumerate(splits):
        position = index + 1
        if _is_blank(split.user_id):
            errors.append(
                ValidationIssue(
                    f"splits[{index}].user_id",
                    f"Split {position}: User ID is required",
                )
            )

        amount = to_decimal(split.amount)
        if amount is None:
            all_numeric = False
            errors.append(
                ValidationIssue(
                    f"splits[{index}].amount",
                    f"Split {position}: Amount must be a valid number",
                )
            )
            continue
        amounts.append(amount)
        if amount <= 0:
            errors.append(
                ValidationIssue(
                    f"splits[{index}].amount",
                    f"Split {position}: Amount must be greater than 0",
                )
            )
        elif total is not None and amount > total:
            errors.append(
                ValidationIssue(
                    f"splits[{index}].amount",
                    f"Split {position}: Amount cannot exceed total",
                )
            )
    return amounts if all_numeric else None


def _validate_split_sum(
    amounts: list[Decimal], total: Decimal, errors: list[ValidationIssue]
) -> None:
    split_sum = quantize_money(sum(amounts, Decimal("0")))
    rounded_total = quantize_money(total)
    if not approx_equal(split_sum, rounded_total):
        errors.append(
            ValidationIssue(
                "splits",
                f"Splits total ({format_money(split_sum)}) must equal "
                f"expense amount ({format_money(rounded_total)})",
            )
        )


def _validate_unique_users(
    splits: Sequence[SplitInput], errors: list[ValidationIssue]
) -> None:
    user_ids = [split.user_id for split in splits]
    if len(user_ids) != len(set(user_ids)):
        errors.append(
            ValidationIssue("splits", "Each person can only appear once in splits")
        )


def validate_expense(
    expense: ExpenseInput, *, now: datetime | None = None
) -> list[ValidationIssue]:
    """Validate a full expense submission."""

    errors: list[ValidationIssue] = []

    if _is_blank(expense.description):
        errors.append(ValidationIssue("description", "Description is required"))
    elif len(expense.description or "") > MAX_DESCRIPTION_LENGTH:
        errors.append(
            ValidationIssue(
                "description", "Description must be less than 200 characters"
            )
        )

    amount = _validate_amount(expense.amount, errors)
    _validate_date(expense.date, errors, now)

    if _is_blank(expense.paid_by):
        errors.append(ValidationIssue("paid_by", "Payer is required"))

    if not expense.splits:
        errors.append(ValidationIssue("splits", "At least one split is required"))
        return errors

    split_amounts = _validate_split_items(expense.splits, errors)
    if amount is not None and split_amounts is not None:
        _validate_split_sum(split_amounts, amount, errors)
    _validate_unique_users(expense.splits, errors)
    return errors


def validate_splits(
    splits: Sequence[SplitInput], total: object
) -> list[ValidationIssue]:
    """Validate a split distribution against its expense total."""

    if not splits:
        return [ValidationIssue("splits", "At least one split is required")]

    total_amount = to_decimal(total)
    if total_amount is None or total_amount <= 0:
        return [
            ValidationIssue("total_amount", "Total amount must be a positive number")
        ]

    errors: list[ValidationIssue] = []
    split_amounts = _validate_split_items(splits, errors, total=total_amount)
    if split_amounts is not None:
        _validate_split_sum(split_amounts, total_amount, errors)
    _validate_unique_users(splits, errors)
    return errors


def validate_settlement(
    settlement: SettlementInput, *, now: datetime | None = None
) -> list[ValidationIssue]:
    """Validate a settlement between two members."""

    errors: list[ValidationIssue] = []
    if _is_blank(settlement.payer_id):
        errors.append(ValidationIssue("payer_id", "Payer is required"))
    if _is_blank(settlement.payee_id):
        errors.append(ValidationIssue("payee_id", "Payee is required"))
    if (
        settlement.payer_id
        and settlement.payee_id
        and settlement.payer_id == settlement.payee_id
    ):
        errors.append(
            ValidationIssue("payee_id", "Payer and payee cannot be the same person")
        )

    _validate_amount(settlement.amount, errors)
    _validate_date(settlement.date, errors, now)
    return errors


def is_valid_expense(expense: ExpenseInput, *, now: datetime | None = None) -> bool:
    return not validate_expense(expense, now=now)


def is_valid_splits(splits: Sequence[SplitInput], total: object) -> bool:
    return not validate_splits(splits, total)


def is_valid_settlement(
    settlement: SettlementInput, *, now: datetime | None = None
) -> bool:
    return not validate_settlement(settlement, now=now)


def get_first_error(
    expense: ExpenseInput, *, now: datetime | None = None
) -> str | None:
    """Return the first expense validation message, if any."""

    errors = validate_expense(expense, now=now)
    return errors[0].message if errors else None


def get_first_settlement_error(
    settlement: SettlementInput, *, now: datetime | None = None
) -> str | None:
    """Return the first settlement validation message, if any."""

    errors = validate_settlement(settlement, now=now)
    return errors[0].message if errors else None
