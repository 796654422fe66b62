"""Domain services for account lookup and balance mutation."""

from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from .exceptions import AccountAlreadyExistsError, AccountNotFoundError
from .models import Account, AccountCreateInput, AccountStatus
from .repository import AccountRepository

logger = logging.getLogger(__name__)


class AccountService:
    """Encapsulates account enquiry and the debit/credit operations.

    Callers are expected to hold the account's lock from
    :mod:`transfer_service.domain.accounts.locks` around a debit or credit.
    """

    def __init__(self, repository: AccountRepository) -> None:
        self._repository = repository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "AccountService":
        from transfer_service.infrastructure.database.repositories import SqlAccountRepository

        return cls(SqlAccountRepository(session))

    async def account_enquiry(self, account_number: str) -> Account:
        logger.info("Initiating account enquiry for account number: %s", account_number)
        account = await self._repository.get_by_number(account_number, AccountStatus.ACTIVE)
        if account is None:
            logger.error("No active account found with number: %s", account_number)
            raise AccountNotFoundError(account_number)
        return account

    async def get_account(self, account_number: str) -> Account | None:
        return await self._repository.get_by_number(account_number)

    async def create_account(self, payload: AccountCreateInput) -> Account:
        existing = await self._repository.get_by_number(payload.account_number)
        if existing is not None:
            raise AccountAlreadyExistsError(f"Account already exists: {payload.account_number}")
        return await self._repository.create_account(payload)

    async def debit_account(self, account: Account, amount: Decimal) -> Decimal:
        logger.info(
            "Debiting account: %s, Current Balance: %s, Amount to Debit: %s",
            account.account_number,
            account.balance,
            amount,
        )
        updated = await self._repository.apply_debit(account.account_number, amount)
        account.balance = updated.balance
        logger.info(
            "Account debited successfully. Account: %s, New Balance: %s",
            account.account_number,
            updated.balance,
        )
        return updated.balance

    async def credit_account(self, account: Account, amount: Decimal) -> Decimal:
        logger.info(
            "Crediting account: %s, Current Balance: %s, Amount to Credit: %s",
            account.account_number,
            account.balance,
            amount,
        )
        updated = await self._repository.apply_credit(account.account_number, amount)
        account.balance = updated.balance
        logger.info(
            "Account credited successfully. Account: %s, New Balance: %s",
            account.account_number,
            updated.balance,
        )
        return updated.balance
