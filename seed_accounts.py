"""
Seed demo accounts for local testing.
Creates two NGN accounts and one USD account if they do not exist yet.
"""
import asyncio
import logging
from decimal import Decimal

from transfer_service.core.config import get_settings
from transfer_service.core.logging import setup_logging
from transfer_service.domain.accounts import AccountCreateInput, AccountService
from transfer_service.infrastructure.database import dispose_engine, init_db, session_scope

logger = logging.getLogger("transfer_service.seed")

DEMO_ACCOUNTS = [
    AccountCreateInput(account_number="0123456789", account_name="Ada Obi", currency="NGN", balance=Decimal("50000")),
    AccountCreateInput(account_number="0987654321", account_name="Tunde Bello", currency="NGN", balance=Decimal("25000")),
    AccountCreateInput(account_number="1122334455", account_name="Grace Eze", currency="USD", balance=Decimal("1000")),
]


async def seed_accounts() -> None:
    setup_logging(get_settings().logging)
    await init_db()

    async with session_scope() as session:
        service = AccountService.with_session(session)
        for payload in DEMO_ACCOUNTS:
            if await service.get_account(payload.account_number) is not None:
                logger.info("Account already exists: %s", payload.account_number)
                continue
            await service.create_account(payload)
            logger.info(
                "Created account %s (%s) with balance %s %s",
                payload.account_number,
                payload.account_name,
                payload.balance,
                payload.currency,
            )

    await dispose_engine()


if __name__ == "__main__":
    asyncio.run(seed_accounts())
