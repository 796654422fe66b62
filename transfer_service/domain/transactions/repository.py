"""Repository protocol for the transaction ledger."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Protocol, Sequence

from .models import Page, Transaction, TransactionFilter, TransactionStatus


class TransactionRepository(Protocol):
    async def exists(self, reference: str) -> bool:
        ...

    async def get_by_reference(self, reference: str) -> Transaction | None:
        ...

    async def save(self, transaction: Transaction) -> Transaction:
        """Insert a terminal ledger entry; raises ``DuplicateReferenceError`` on a taken reference."""
        ...

    async def update_commission(self, reference: str, commission: Decimal) -> Transaction | None:
        ...

    async def soft_delete(self, reference: str) -> bool:
        ...

    async def find_by_status_between(
        self,
        status: TransactionStatus,
        start: datetime,
        end: datetime,
    ) -> Sequence[Transaction]:
        ...

    async def find_between(self, start: datetime, end: datetime) -> Sequence[Transaction]:
        ...

    async def search(self, filters: TransactionFilter, page: int, size: int) -> Page[Transaction]:
        ...
