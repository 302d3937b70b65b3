"""HTTP endpoints for the caller's saved birthdays."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.database import get_db
from app.models import User
from app.schemas import BirthdayCreate, BirthdayList, BirthdayRead, BirthdayUpdate
from app.services import birthdays as birthday_service

router = APIRouter(prefix="/birthdays", tags=["birthdays"])


@router.post("", response_model=BirthdayRead, status_code=status.HTTP_201_CREATED)
def create_birthday(
    payload: BirthdayCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> BirthdayRead:
    reminder = birthday_service.create_reminder(
        db,
        current_user,
        name=payload.name,
        raw_date=payload.raw_date,
        description=payload.resolved_description,
        reminder_enabled=payload.reminder_enabled,
    )
    return BirthdayRead.model_validate(reminder)


@router.get("", response_model=BirthdayList)
def list_birthdays(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> BirthdayList:
    reminders = birthday_service.list_reminders(db, current_user)
    return BirthdayList(
        count=len(reminders),
        birthdays=[BirthdayRead.model_validate(reminder) for reminder in reminders],
    )


@router.get("/{birthday_id}", response_model=BirthdayRead)
def read_birthday(
    birthday_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> BirthdayRead:
    return BirthdayRead.model_validate(birthday_service.get_reminder(db, current_user, birthday_id))


@router.put("/{birthday_id}", response_model=BirthdayRead)
def update_birthday(
    birthday_id: str,
    payload: BirthdayUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> BirthdayRead:
    reminder = birthday_service.update_reminder(
        db,
        current_user,
        birthday_id,
        name=payload.name,
        raw_date=payload.raw_date,
        description=payload.resolved_description,
        reminder_enabled=payload.reminder_enabled,
    )
    return BirthdayRead.model_validate(reminder)


@router.delete("/{birthday_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_birthday(
    birthday_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Response:
    birthday_service.delete_reminder(db, current_user, birthday_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
