"""Tests for fee and commission arithmetic."""

from decimal import Decimal

import pytest

from transfer_service.core.config import FeeSettings
from transfer_service.domain.transactions import FeePolicy, calculate_fee, has_money_scale


def test_fee_is_percentage_of_amount():
    fee = calculate_fee(Decimal("5.00"), Decimal("0.005"), Decimal("100"))
    assert fee == Decimal("0.02500")


def test_fee_is_capped():
    fee = calculate_fee(Decimal("1000000"), Decimal("0.005"), Decimal("100"))
    assert fee == Decimal("100")


def test_fee_at_cap_boundary():
    assert calculate_fee(Decimal("20000"), Decimal("0.005"), Decimal("100")) == Decimal("100")


@pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-1")])
def test_fee_rejects_non_positive_amount(amount):
    with pytest.raises(ValueError):
        calculate_fee(amount, Decimal("0.005"), Decimal("100"))


def test_fee_rejects_negative_rate():
    with pytest.raises(ValueError):
        calculate_fee(Decimal("10"), Decimal("-0.1"), Decimal("100"))


def test_policy_billed_amount_and_commission():
    policy = FeePolicy.from_settings(FeeSettings())

    assert policy.billed_amount(Decimal("5.00")) == Decimal("5.02500")
    assert policy.commission_for(Decimal("0.025")) == Decimal("0.005")


def test_policy_uses_configured_rates():
    policy = FeePolicy.from_settings(
        FeeSettings(fee_percentage=Decimal("0.01"), fee_cap=Decimal("2"), commission_percentage=Decimal("0.5"))
    )

    assert policy.fee_for(Decimal("100")) == Decimal("1.00")
    assert policy.fee_for(Decimal("1000")) == Decimal("2")
    assert policy.commission_for(Decimal("2")) == Decimal("1.0")


def test_fee_is_rounded_half_up_to_eight_places():
    assert calculate_fee(Decimal("1.12345678"), Decimal("0.005"), Decimal("100")) == Decimal("0.00561728")
    assert calculate_fee(Decimal("0.000001"), Decimal("0.005"), Decimal("100")) == Decimal("0.00000001")


def test_billed_amount_is_sum_of_rounded_values():
    policy = FeePolicy.from_settings(FeeSettings())
    amount = Decimal("1.12345679")

    fee = policy.fee_for(amount)

    assert fee == Decimal("0.00561728")
    assert policy.billed_amount(amount) == Decimal("1.12907407")
    assert policy.billed_amount(amount, fee) == amount + fee


def test_commission_is_rounded_to_eight_places():
    policy = FeePolicy.from_settings(FeeSettings())

    assert policy.commission_for(Decimal("0.00000003")) == Decimal("0.00000001")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (Decimal("1.12345678"), True),
        (Decimal("100"), True),
        (Decimal("1.123456789"), False),
    ],
)
def test_has_money_scale(value, expected):
    assert has_money_scale(value) is expected
