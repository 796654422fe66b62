"""Repository protocol for accounts."""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol

from .models import Account, AccountCreateInput, AccountStatus


class AccountRepository(Protocol):
    """Abstract repository interface for account persistence."""

    async def get_by_number(self, account_number: str, status: AccountStatus | None = None) -> Account | None:
        ...

    async def create_account(self, payload: AccountCreateInput) -> Account:
        ...

    async def apply_debit(self, account_number: str, amount: Decimal) -> Account:
        """Subtract ``amount``; raises ``BalanceTooLowError`` if it is not covered."""
        ...

    async def apply_credit(self, account_number: str, amount: Decimal) -> Account:
        ...
