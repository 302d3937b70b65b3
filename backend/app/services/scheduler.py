"""Background scheduler firing the birthday sweep once a day."""

from __future__ import annotations

import logging
from datetime import date, datetime
from zoneinfo import ZoneInfo

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from app.config import Settings, get_settings
from app.database import get_db_session
from app.services.birthday_sweep import SweepReport, run_birthday_sweep
from app.services.email import get_email_dispatcher

logger = logging.getLogger(__name__)

SWEEP_JOB_ID = "birthday_sweep"

_scheduler: BackgroundScheduler | None = None


def run_sweep_now(today: date | None = None) -> SweepReport:
    """Run one sweep in a fresh session, as the scheduled job does."""

    with get_db_session() as db:
        return run_birthday_sweep(db, get_email_dispatcher(), today=today)


def sweep_date(timezone: str | None = None, now: datetime | None = None) -> date:
    """Calendar date the sweep should use, taken in ``timezone`` when one is set."""

    if timezone is None:
        now = now or datetime.now()
        return now.astimezone().date() if now.tzinfo else now.date()
    zone = ZoneInfo(timezone)
    return (now or datetime.now(zone)).astimezone(zone).date()


def _scheduled_sweep(timezone: str | None = None) -> None:
    today = sweep_date(timezone)
    logger.info("Running scheduled birthday check for %s", today.isoformat())
    run_sweep_now(today=today)


def build_scheduler(settings: Settings | None = None) -> BackgroundScheduler:
    settings = settings or get_settings()
    timezone = settings.birthday_sweep_timezone
    scheduler = BackgroundScheduler(timezone=timezone) if timezone else BackgroundScheduler()
    scheduler.add_job(
        _scheduled_sweep,
        CronTrigger(
            hour=settings.birthday_sweep_hour,
            minute=settings.birthday_sweep_minute,
            timezone=timezone,
        ),
        args=[timezone],
        id=SWEEP_JOB_ID,
        max_instances=1,
        coalesce=True,
        replace_existing=True,
    )
    return scheduler


def start_scheduler(settings: Settings | None = None) -> BackgroundScheduler | None:
    global _scheduler

    settings = settings or get_settings()
    if not settings.birthday_sweep_enabled:
        logger.info("Birthday sweep scheduler disabled")
        return None
    if _scheduler is not None and _scheduler.running:
        return _scheduler

    _scheduler = build_scheduler(settings)
    _scheduler.start()
    logger.info(
        "Birthday emails scheduled daily at %02d:%02d",
        settings.birthday_sweep_hour,
        settings.birthday_sweep_minute,
    )
    return _scheduler


def shutdown_scheduler() -> None:
    global _scheduler

    if _scheduler is not None and _scheduler.running:
        _scheduler.shutdown(wait=False)
        logger.info("Birthday sweep scheduler stopped")
    _scheduler = None
