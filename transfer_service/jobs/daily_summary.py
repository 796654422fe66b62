"""Daily summary of yesterday's ledger, handed to a notifier."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Protocol

from transfer_service.core.clock import yesterday_window
from transfer_service.core.config import Settings, get_settings
from transfer_service.domain.transactions.models import TransactionSummary
from transfer_service.domain.transactions.summary import SummaryService
from transfer_service.infrastructure.database import session_scope

logger = logging.getLogger(__name__)


class SummaryNotifier(Protocol):
    async def notify(self, summary: TransactionSummary) -> None:
        ...


class LoggingSummaryNotifier:
    """Writes the summary to the service log."""

    async def notify(self, summary: TransactionSummary) -> None:
        logger.info(
            "Daily transaction summary %s - %s: total=%s successful=%s failed=%s "
            "insufficient_fund=%s amount=%s commission=%s",
            summary.start,
            summary.end,
            summary.total_transactions,
            summary.successful_transactions,
            summary.failed_transactions,
            summary.insufficient_fund_transactions,
            summary.total_amount,
            summary.total_commission,
        )


async def run_daily_summary_job(
    notifier: SummaryNotifier | None = None,
    settings: Settings | None = None,
    now: datetime | None = None,
) -> TransactionSummary:
    settings = settings or get_settings()
    notifier = notifier or LoggingSummaryNotifier()
    start, end = yesterday_window(settings.timezone, now)

    async with session_scope() as session:
        summary = await SummaryService.with_session(session).summarize(start, end)

    await notifier.notify(summary)
    return summary
