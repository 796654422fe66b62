"""Daily commission run over yesterday's successful transfers."""

from __future__ import annotations

import logging
from datetime import datetime

from transfer_service.core.clock import yesterday_window
from transfer_service.core.config import Settings, get_settings
from transfer_service.domain.transactions.commission import CommissionService
from transfer_service.domain.transactions.models import CommissionRunReport
from transfer_service.infrastructure.database import session_scope

logger = logging.getLogger(__name__)


async def run_commission_job(
    settings: Settings | None = None,
    now: datetime | None = None,
) -> CommissionRunReport:
    settings = settings or get_settings()
    start, end = yesterday_window(settings.timezone, now)
    logger.info("Commission job started for window %s - %s", start, end)

    async with session_scope() as session:
        service = CommissionService.with_session(session, settings)
        report = await service.process_commissions(start, end)

    if report.failed:
        logger.warning(
            "Commission job completed with %s failed transaction(s): %s",
            report.failed,
            ", ".join(report.failed_references),
        )
    return report
