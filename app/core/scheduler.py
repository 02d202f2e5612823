# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Periodic trigger — APScheduler job that runs the reminder tick.
Started and stopped by the application lifespan.
"""

from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from app.core.config import settings
from app.core.logging import get_logger
from app.services.reminder_scheduler import ReminderScheduler

logger = get_logger(__name__)

REMINDER_JOB_ID = "boss_key_reminders"

_scheduler: Optional[AsyncIOScheduler] = None


def start_scheduler(reminders: ReminderScheduler) -> Optional[AsyncIOScheduler]:
    """Register the reminder job and start APScheduler (once per process)."""
    global _scheduler

    if not settings.SCHEDULER_ENABLED:
        logger.info("Reminder scheduler disabled via SCHEDULER_ENABLED")
        return None
    if _scheduler is not None:
        logger.info("Reminder scheduler already running")
        return _scheduler

    _scheduler = AsyncIOScheduler(
        timezone=settings.CLAN_TIMEZONE,
        job_defaults={"coalesce": True, "max_instances": 1, "misfire_grace_time": 60},
    )
    _scheduler.add_job(
        func=reminders.run_tick,
        trigger=IntervalTrigger(minutes=settings.REMINDER_INTERVAL_MINUTES),
        id=REMINDER_JOB_ID,
        name="Check boss key reminders",
        replace_existing=True,
    )
    _scheduler.start()
    logger.info(
        "Reminder scheduler started: every %d minutes (%s)",
        settings.REMINDER_INTERVAL_MINUTES, settings.CLAN_TIMEZONE,
    )
    return _scheduler


def stop_scheduler() -> None:
    global _scheduler
    if _scheduler is not None:
        _scheduler.shutdown(wait=False)
        _scheduler = None
        logger.info("Reminder scheduler stopped")
