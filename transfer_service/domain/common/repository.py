"""Base class for the SQL account and ledger repositories.

Repositories only flush; committing or rolling back is left to the
:class:`~transfer_service.domain.common.unit_of_work.UnitOfWork` so a debit,
a credit and the ledger entry of one transfer land in a single transaction.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

ModelT = TypeVar("ModelT")


class AsyncRepository(Generic[ModelT]):
    """Holds the request's session and flushes newly added rows."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def add(self, instance: ModelT) -> ModelT:
        """Stage ``instance`` and flush so generated keys and constraint errors surface now."""
        self.session.add(instance)
        await self.session.flush()
        return instance
