"""Pytest configuration and fixtures."""

from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from transfer_service.core.config import DatabaseSettings, SchedulerSettings, Settings
from transfer_service.domain.accounts import AccountCreateInput, AccountLockRegistry, AccountService
from transfer_service.domain.transactions import FeePolicy, Transaction, TransactionStatus, TransferService, to_money
from transfer_service.infrastructure.database import models  # noqa: F401
from transfer_service.infrastructure.database.base import Base
from transfer_service.infrastructure.database.repositories import (
    SqlAccountRepository,
    SqlTransactionRepository,
    SqlUnitOfWork,
)

FIXED_NOW = datetime(2024, 11, 5, 14, 30, 0)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        environment="test",
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'transfer.db'}", create_tables=False),
        scheduler=SchedulerSettings(enabled=False),
    )


@pytest.fixture
async def engine(settings):
    """Temporary SQLite database with the full schema."""
    engine = create_async_engine(settings.database_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def fee_policy(settings):
    return FeePolicy.from_settings(settings.fees)


@pytest.fixture
def make_transfer_service(fee_policy):
    """Build a transfer engine bound to a session with a fixed clock and private locks."""
    locks = AccountLockRegistry()

    def _make(session, clock=lambda: FIXED_NOW):
        return TransferService(
            accounts=AccountService(SqlAccountRepository(session)),
            ledger=SqlTransactionRepository(session),
            unit_of_work=SqlUnitOfWork(session),
            fees=fee_policy,
            clock=clock,
            locks=locks,
        )

    return _make


@pytest.fixture
def create_account(session_factory):
    async def _create(account_number, balance, currency="NGN", account_name="Test Account", status=None):
        payload = AccountCreateInput(
            account_number=account_number,
            account_name=account_name,
            currency=currency,
            balance=Decimal(balance),
        )
        if status is not None:
            payload.status = status
        async with session_factory() as session:
            account = await SqlAccountRepository(session).create_account(payload)
            await session.commit()
        return account

    return _create


@pytest.fixture
def fetch_balance(session_factory):
    async def _fetch(account_number):
        async with session_factory() as session:
            account = await SqlAccountRepository(session).get_by_number(account_number)
        return account.balance

    return _fetch


@pytest.fixture
def record_transaction(session_factory):
    """Insert a terminal ledger entry directly, bypassing the engine."""

    async def _record(
        reference,
        amount,
        created_at,
        status=TransactionStatus.SUCCESSFUL,
        fee=None,
        commission=None,
        source="0123456789",
        destination="0987654321",
    ):
        amount = Decimal(amount)
        fee = Decimal(fee) if fee is not None else to_money(amount * Decimal("0.005"))
        transaction = Transaction(
            reference=reference,
            amount=amount,
            fee=fee,
            billed_amount=amount + fee,
            currency="NGN",
            source_account_number=source,
            destination_account_number=destination,
            created_at=created_at,
            status=status,
            status_message="seeded",
            commission_worthy=commission is not None,
            commission=Decimal(commission) if commission is not None else None,
        )
        async with session_factory() as session:
            saved = await SqlTransactionRepository(session).save(transaction)
            await session.commit()
        return saved

    return _record
