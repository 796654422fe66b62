"""Aggregation of ledger windows into financial summaries."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from transfer_service.core.clock import day_window

from .models import TransactionStatus, TransactionSummary
from .repository import TransactionRepository

logger = logging.getLogger(__name__)

# Both rejection statuses count as failed in summaries.
FAILED_STATUSES = frozenset({TransactionStatus.FAILED, TransactionStatus.INSUFFICIENT_FUND})


@dataclass(slots=True)
class SummaryService:
    repository: TransactionRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "SummaryService":
        from transfer_service.infrastructure.database.repositories import SqlTransactionRepository

        return cls(SqlTransactionRepository(session))

    async def summarize(self, start: datetime, end: datetime) -> TransactionSummary:
        """Totals over every ledger entry created in ``[start, end]``."""
        logger.info("Starting transaction summary for period: %s to %s", start, end)

        transactions = await self.repository.find_between(start, end)
        logger.info("Fetched %s transactions for the specified period.", len(transactions))

        total_amount = sum((t.amount for t in transactions), Decimal("0"))
        total_commission = sum(
            (t.commission for t in transactions if t.commission_worthy and t.commission is not None),
            Decimal("0"),
        )
        successful = sum(1 for t in transactions if t.status is TransactionStatus.SUCCESSFUL)
        failed = sum(1 for t in transactions if t.status in FAILED_STATUSES)
        insufficient = sum(1 for t in transactions if t.status is TransactionStatus.INSUFFICIENT_FUND)

        logger.info(
            "Transaction summary completed for period: %s to %s (total=%s, successful=%s, failed=%s, amount=%s, commission=%s)",
            start,
            end,
            len(transactions),
            successful,
            failed,
            total_amount,
            total_commission,
        )
        return TransactionSummary(
            start=start,
            end=end,
            total_transactions=len(transactions),
            successful_transactions=successful,
            failed_transactions=failed,
            insufficient_fund_transactions=insufficient,
            total_amount=total_amount,
            total_commission=total_commission,
        )

    async def daily_summary(self, day: date) -> TransactionSummary:
        start, end = day_window(day)
        return await self.summarize(start, end)
