"""Fee and commission arithmetic.

Money carries at most eight fractional digits. Computed fees and commissions
are quantized to that scale with ``ROUND_HALF_UP`` so that the billed amount
is always ``amount + fee`` on values that are stored exactly.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from transfer_service.core.config import FeeSettings

MONEY_PLACES = 8
MONEY_QUANTUM = Decimal(1).scaleb(-MONEY_PLACES)


def to_money(value: Decimal) -> Decimal:
    return value.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def has_money_scale(value: Decimal) -> bool:
    """True when ``value`` needs no rounding to fit the money scale."""
    try:
        return value.quantize(MONEY_QUANTUM) == value
    except InvalidOperation:
        return False


def calculate_fee(amount: Decimal, fee_rate: Decimal, fee_cap: Decimal) -> Decimal:
    """Percentage fee on ``amount``, never above ``fee_cap``."""
    if amount <= 0:
        raise ValueError("amount must be greater than zero")
    if fee_rate < 0 or fee_cap < 0:
        raise ValueError("fee rate and fee cap must not be negative")
    return to_money(min(amount * fee_rate, fee_cap))


@dataclass(frozen=True, slots=True)
class FeePolicy:
    fee_rate: Decimal
    fee_cap: Decimal
    commission_rate: Decimal

    @classmethod
    def from_settings(cls, settings: FeeSettings) -> "FeePolicy":
        return cls(
            fee_rate=settings.fee_percentage,
            fee_cap=settings.fee_cap,
            commission_rate=settings.commission_percentage,
        )

    def fee_for(self, amount: Decimal) -> Decimal:
        return calculate_fee(amount, self.fee_rate, self.fee_cap)

    def billed_amount(self, amount: Decimal, fee: Decimal | None = None) -> Decimal:
        if fee is None:
            fee = self.fee_for(amount)
        return amount + fee

    def commission_for(self, fee: Decimal) -> Decimal:
        return to_money(fee * self.commission_rate)
