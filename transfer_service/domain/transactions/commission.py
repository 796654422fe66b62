"""Commission accrual over a day's successful transactions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from transfer_service.core.config import Settings
from transfer_service.domain.common.unit_of_work import UnitOfWork

from .fees import FeePolicy
from .models import CommissionRunReport, TransactionStatus
from .repository import TransactionRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CommissionService:
    repository: TransactionRepository
    unit_of_work: UnitOfWork
    fees: FeePolicy

    @classmethod
    def with_session(cls, session: AsyncSession, settings: Settings) -> "CommissionService":
        from transfer_service.infrastructure.database.repositories import (
            SqlTransactionRepository,
            SqlUnitOfWork,
        )

        return cls(
            repository=SqlTransactionRepository(session),
            unit_of_work=SqlUnitOfWork(session),
            fees=FeePolicy.from_settings(settings.fees),
        )

    async def process_commissions(self, start: datetime, end: datetime) -> CommissionRunReport:
        """Tag every SUCCESSFUL entry created in ``[start, end]`` with its commission.

        Each entry is committed on its own; a failing entry is rolled back,
        logged and skipped so the rest of the batch still runs. Entries that
        already carry a commission are left alone.
        """
        logger.info("Processing commissions for transactions created between: %s and %s", start, end)
        report = CommissionRunReport(start=start, end=end)

        transactions = await self.repository.find_by_status_between(TransactionStatus.SUCCESSFUL, start, end)
        report.candidates = len(transactions)
        logger.info("Found %s successful transactions for commission processing.", len(transactions))

        for transaction in transactions:
            if transaction.commission_worthy:
                report.skipped += 1
                logger.debug("Commission already recorded for transaction: %s", transaction.reference)
                continue
            try:
                commission = self.fees.commission_for(transaction.fee)
                updated = await self.repository.update_commission(transaction.reference, commission)
                if updated is None:
                    raise LookupError(f"transaction {transaction.reference} disappeared before update")
                await self.unit_of_work.commit()
            except Exception as exc:
                await self.unit_of_work.rollback()
                report.failed += 1
                report.failed_references.append(transaction.reference)
                logger.error("Error processing commission for transaction: %s, %s", transaction.reference, exc)
                continue
            report.processed += 1
            logger.info("Commission processed for transaction: %s, commission: %s", transaction.reference, commission)

        logger.info(
            "Commission run finished: candidates=%s processed=%s skipped=%s failed=%s",
            report.candidates,
            report.processed,
            report.skipped,
            report.failed,
        )
        return report
