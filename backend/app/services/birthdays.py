"""Owner-scoped CRUD for personal birthday reminders."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.dates import resolve_reminder_date
from app.core.errors import NotFound, ValidationError
from app.core.identifiers import parse_id
from app.models import BirthdayReminder, User
from app.services.persistence import commit


def _get_owned(db: Session, owner: User, reminder_id: str | int) -> BirthdayReminder:
    parsed = parse_id(reminder_id, label="birthday id")
    stmt = select(BirthdayReminder).where(
        BirthdayReminder.id == parsed,
        BirthdayReminder.owner_user_id == owner.id,
    )
    reminder = db.execute(stmt).scalar_one_or_none()
    if reminder is None:
        raise NotFound("Birthday not found or not authorized")
    return reminder


def create_reminder(
    db: Session,
    owner: User,
    *,
    name: str,
    raw_date: str | None,
    description: str | None = None,
    reminder_enabled: bool = True,
) -> BirthdayReminder:
    subject = (name or "").strip()
    if not subject or not raw_date:
        raise ValidationError("Please provide name and date")
    full_date, key = resolve_reminder_date(raw_date)

    reminder = BirthdayReminder(
        owner_user_id=owner.id,
        subject_name=subject,
        description=description.strip() if description else None,
        reminder_enabled=reminder_enabled,
    )
    reminder.set_date(full_date, key)
    db.add(reminder)
    commit(db)
    db.refresh(reminder)
    return reminder


def list_reminders(db: Session, owner: User) -> list[BirthdayReminder]:
    """Reminders of ``owner`` in calendar order (month, day)."""

    stmt = (
        select(BirthdayReminder)
        .where(BirthdayReminder.owner_user_id == owner.id)
        .order_by(BirthdayReminder.birthday_key, BirthdayReminder.id)
    )
    return list(db.execute(stmt).scalars().all())


def get_reminder(db: Session, owner: User, reminder_id: str | int) -> BirthdayReminder:
    return _get_owned(db, owner, reminder_id)


def update_reminder(
    db: Session,
    owner: User,
    reminder_id: str | int,
    *,
    name: str | None = None,
    raw_date: str | None = None,
    description: str | None = None,
    reminder_enabled: bool | None = None,
) -> BirthdayReminder:
    resolved = resolve_reminder_date(raw_date) if raw_date else None
    subject = None
    if name is not None:
        subject = name.strip()
        if not subject:
            raise ValidationError("Name cannot be empty")

    reminder = _get_owned(db, owner, reminder_id)
    if subject is not None:
        reminder.subject_name = subject
    if resolved is not None:
        reminder.set_date(*resolved)
    if description is not None:
        reminder.description = description.strip() or None
    if reminder_enabled is not None:
        reminder.reminder_enabled = reminder_enabled

    db.add(reminder)
    commit(db)
    db.refresh(reminder)
    return reminder


def delete_reminder(db: Session, owner: User, reminder_id: str | int) -> None:
    reminder = _get_owned(db, owner, reminder_id)
    db.delete(reminder)
    commit(db)
