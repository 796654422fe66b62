"""SQLAlchemy implementation of the account repository."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import select, update

from transfer_service.domain.accounts.exceptions import (
    AccountNotFoundError,
    BalanceTooLowError,
    StaleBalanceError,
)
from transfer_service.domain.accounts.models import Account, AccountCreateInput, AccountStatus
from transfer_service.domain.accounts.repository import AccountRepository
from transfer_service.domain.common.repository import AsyncRepository
from transfer_service.infrastructure.database.models import Account as AccountModel


class SqlAccountRepository(AsyncRepository[AccountModel], AccountRepository):
    """Account repository backed by SQLAlchemy models.

    Balances are read, adjusted as :class:`~decimal.Decimal` and written back
    with a compare-and-set on the previous value, so a write racing from
    another process fails instead of being lost.
    """

    async def get_by_number(self, account_number: str, status: AccountStatus | None = None) -> Account | None:
        model = await self._load(account_number, status)
        return self._to_domain(model)

    async def create_account(self, payload: AccountCreateInput) -> Account:
        model = AccountModel(
            account_number=payload.account_number,
            account_name=payload.account_name,
            balance=payload.balance,
            currency=payload.currency,
            status=payload.status.value,
        )
        await self.add(model)
        await self.session.refresh(model)
        return self._to_domain(model)

    async def apply_debit(self, account_number: str, amount: Decimal) -> Account:
        model = await self._load(account_number)
        if model is None:
            raise AccountNotFoundError(account_number)
        if model.balance < amount:
            raise BalanceTooLowError(account_number, amount)
        return await self._swap_balance(model, model.balance - amount)

    async def apply_credit(self, account_number: str, amount: Decimal) -> Account:
        model = await self._load(account_number)
        if model is None:
            raise AccountNotFoundError(account_number)
        return await self._swap_balance(model, model.balance + amount)

    async def _swap_balance(self, model: AccountModel, new_balance: Decimal) -> Account:
        stmt = (
            update(AccountModel)
            .where(
                AccountModel.id == model.id,
                AccountModel.deleted.is_(False),
                AccountModel.balance == model.balance,
            )
            .values(balance=new_balance)
            .execution_options(synchronize_session=False)
            .returning(AccountModel.id)
        )
        result = await self.session.execute(stmt)
        if result.scalar_one_or_none() is None:
            raise StaleBalanceError(model.account_number)
        return await self._reload(model.account_number)

    async def _load(self, account_number: str, status: AccountStatus | None = None) -> AccountModel | None:
        stmt = (
            select(AccountModel)
            .where(
                AccountModel.account_number == account_number,
                AccountModel.deleted.is_(False),
            )
            .execution_options(populate_existing=True)
        )
        if status is not None:
            stmt = stmt.where(AccountModel.status == status.value)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def _reload(self, account_number: str) -> Account:
        stmt = (
            select(AccountModel)
            .where(AccountModel.account_number == account_number)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return self._to_domain(result.scalar_one())

    @staticmethod
    def _to_domain(model: AccountModel | None) -> Account | None:
        if model is None:
            return None
        return Account(
            account_number=model.account_number,
            account_name=model.account_name,
            balance=model.balance,
            currency=model.currency,
            status=AccountStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
