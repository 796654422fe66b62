"""APScheduler setup for the daily jobs.

Two cron jobs run in the configured business time zone:

1. commission - daily at ``scheduler.commission_hour`` (default 01:00)
   - Tags yesterday's successful transfers with their commission

2. daily_summary - daily at ``scheduler.summary_hour`` (default 02:00)
   - Summarizes yesterday's ledger and hands it to the notifier
"""

from __future__ import annotations

import logging

from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_EXECUTED, JobExecutionEvent
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from transfer_service.core.config import Settings

logger = logging.getLogger(__name__)

COMMISSION_JOB_ID = "commission"
DAILY_SUMMARY_JOB_ID = "daily_summary"

scheduler: AsyncIOScheduler | None = None


def job_listener(event: JobExecutionEvent) -> None:
    if event.exception:
        logger.error("Job '%s' failed: %s", event.job_id, event.exception)
    else:
        logger.info("Job '%s' finished", event.job_id)


def init_scheduler(settings: Settings) -> AsyncIOScheduler:
    """Create the scheduler and register the daily jobs without starting it."""
    global scheduler

    from transfer_service.jobs.commission import run_commission_job
    from transfer_service.jobs.daily_summary import run_daily_summary_job

    zone = settings.timezone
    scheduler = AsyncIOScheduler(timezone=zone)
    scheduler.add_listener(job_listener, EVENT_JOB_EXECUTED | EVENT_JOB_ERROR)

    scheduler.add_job(
        run_commission_job,
        CronTrigger(hour=settings.scheduler.commission_hour, minute=0, timezone=zone),
        kwargs={"settings": settings},
        id=COMMISSION_JOB_ID,
        name="Daily Commission",
        replace_existing=True,
    )
    scheduler.add_job(
        run_daily_summary_job,
        CronTrigger(hour=settings.scheduler.summary_hour, minute=0, timezone=zone),
        kwargs={"settings": settings},
        id=DAILY_SUMMARY_JOB_ID,
        name="Daily Summary",
        replace_existing=True,
    )

    logger.info(
        "Scheduler initialized - commission:%02d:00, daily_summary:%02d:00 (%s)",
        settings.scheduler.commission_hour,
        settings.scheduler.summary_hour,
        settings.scheduler.timezone,
    )
    return scheduler


def start_scheduler() -> None:
    if scheduler and not scheduler.running:
        scheduler.start()
        logger.info("Scheduler started")


def stop_scheduler() -> None:
    if scheduler and scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
