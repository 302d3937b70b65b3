"""Daily sweep that emails users whose birthday is today."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.dates import today_key
from app.models import User
from app.services.email import EmailDispatcher
from app.services.recipients import count_messages_for_date

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SweepReport:
    """Summary of one sweep run."""

    date_key: str
    users_matched: int = 0
    emails_sent: int = 0
    emails_failed: int = 0
    error: str | None = None


def run_birthday_sweep(
    db: Session,
    dispatcher: EmailDispatcher,
    today: date | None = None,
) -> SweepReport:
    """
    Email every user whose birthday is ``today`` (default: the local date).

    Each user is handled on their own: a failed send is logged and the sweep
    moves on. The message count is the number of messages addressed to
    today's key, the same for every matched user. Nothing here raises; a
    store failure ends the run early and is recorded in the report.

    Returns:
        SweepReport with per-run counters.
    """
    key = today_key(today)
    report = SweepReport(date_key=key)
    logger.info("Checking for birthdays on %s", key)

    try:
        users = (
            db.execute(select(User).where(User.birthday_key == key).order_by(User.id))
            .scalars()
            .all()
        )
    except Exception as exc:
        db.rollback()
        logger.error("Error loading birthday users for %s: %s", key, exc, exc_info=True)
        report.error = str(exc)
        return report

    report.users_matched = len(users)
    if not users:
        logger.info("No users have birthdays on %s", key)
        return report

    logger.info("Found %d user(s) with birthday on %s", len(users), key)
    for user in users:
        try:
            message_count = count_messages_for_date(db, key)
            result = dispatcher.send_birthday_email(user.email, user.username, message_count)
        except Exception as exc:
            db.rollback()
            logger.error("Failed to send email to %s: %s", user.email, exc, exc_info=True)
            report.emails_failed += 1
            continue

        if result.success:
            logger.info("Email sent to %s (%s) with %d message(s)", user.username, user.email, message_count)
            report.emails_sent += 1
        else:
            logger.error("Failed to send email to %s: %s", user.email, result.error)
            report.emails_failed += 1

    logger.info(
        "Birthday email check completed: %d sent, %d failed",
        report.emails_sent,
        report.emails_failed,
    )
    return report
