from decimal import Decimal

from split_ledger.domain.money import (
    approx_equal,
    distribute_evenly,
    format_money,
    is_equal_split,
    parse_money,
    quantize_money,
    to_decimal,
)
from split_ledger.domain.validation import SplitInput, validate_splits
from split_ledger.domain.value_objects import Contribution


def test_quantize_money_uses_round_half_up() -> None:
    assert quantize_money(Decimal("10.005")) == Decimal("10.01")
    assert quantize_money(Decimal("10.004")) == Decimal("10.00")


def test_parse_money_returns_quantized_decimal() -> None:
    assert parse_money("2.675") == Decimal("2.68")


def test_format_money_has_two_decimal_places() -> None:
    assert format_money(Decimal("5")) == "5.00"
    assert format_money(Decimal("-60")) == "-60.00"


def test_approx_equal_accepts_one_cent_difference() -> None:
    assert approx_equal(Decimal("10.00"), Decimal("10.01"))
    assert not approx_equal(Decimal("10.00"), Decimal("10.02"))


def test_to_decimal_rejects_non_numeric_values() -> None:
    assert to_decimal("12.50") == Decimal("12.50")
    assert to_decimal(3) == Decimal("3")
    assert to_decimal("abc") is None
    assert to_decimal(None) is None
    assert to_decimal(True) is None
    assert to_decimal("NaN") is None
    assert to_decimal(float("inf")) is None


def test_distribute_evenly_gives_rounding_rest_to_last_participant() -> None:
    splits = distribute_evenly(["u1", "u2", "u3"], Decimal("10"))

    assert splits == [
        Contribution(user_id="u1", amount=Decimal("3.33")),
        Contribution(user_id="u2", amount=Decimal("3.33")),
        Contribution(user_id="u3", amount=Decimal("3.34")),
    ]
    assert sum((item.amount for item in splits), Decimal("0")) == Decimal("10.00")


def test_distribute_evenly_sums_exactly_for_awkward_totals() -> None:
    for total in ("0.01", "0.05", "99.99", "100.00", "1234.57"):
        for count in range(1, 8):
            ids = [f"u{index}" for index in range(count)]
            splits = distribute_evenly(ids, Decimal(total))
            assert sum((item.amount for item in splits), Decimal("0")) == Decimal(
                total
            )


def test_distribute_evenly_returns_empty_list_without_participants() -> None:
    assert distribute_evenly([], Decimal("10")) == []


def test_is_equal_split_detects_even_shares() -> None:
    even = distribute_evenly(["u1", "u2", "u3"], Decimal("100"))
    custom = [
        Contribution(user_id="u1", amount=Decimal("70.00")),
        Contribution(user_id="u2", amount=Decimal("30.00")),
    ]

    assert is_equal_split(even, Decimal("100"))
    assert not is_equal_split(custom, Decimal("100"))
    assert not is_equal_split([], Decimal("100"))


def test_distribute_evenly_last_share_goes_negative_for_tiny_totals() -> None:
    ids = [f"u{index}" for index in range(200)]

    splits = distribute_evenly(ids, Decimal("1.00"))

    assert splits[0].amount == Decimal("0.01")
    assert splits[-1] == Contribution(user_id="u199", amount=Decimal("-0.99"))
    assert sum((item.amount for item in splits), Decimal("0")) == Decimal("1.00")
    issues = validate_splits(
        [SplitInput(user_id=item.user_id, amount=item.amount) for item in splits],
        Decimal("1.00"),
    )
    assert [issue.message for issue in issues] == [
        "Split 200: Amount must be greater than 0"
    ]
