"""Unit tests for personal birthday reminders."""

from __future__ import annotations

from datetime import date

import pytest

from app.core.errors import InvalidDateFormat, InvalidId, NotFound, ValidationError
from app.services import birthdays as birthday_service


@pytest.fixture()
def owner(make_user):
    return make_user("planner", "01-01")


def test_create_reminder_keeps_full_date(db_session, owner):
    reminder = birthday_service.create_reminder(
        db_session, owner, name=" Grandma ", raw_date="1950-03-15", description=" Call "
    )

    assert reminder.subject_name == "Grandma"
    assert reminder.date == date(1950, 3, 15)
    assert reminder.birthday_key == "03-15"
    assert reminder.description == "Call"
    assert reminder.reminder_enabled is True


def test_create_reminder_validates_input(db_session, owner):
    with pytest.raises(ValidationError) as exc:
        birthday_service.create_reminder(db_session, owner, name="  ", raw_date="03-15")
    assert exc.value.detail == "Please provide name and date"
    with pytest.raises(InvalidDateFormat):
        birthday_service.create_reminder(db_session, owner, name="Ann", raw_date="15.03.1950")


def test_list_reminders_calendar_order_and_scope(db_session, owner, make_user):
    stranger = make_user("stranger")
    december = birthday_service.create_reminder(db_session, owner, name="Dec", raw_date="12-01")
    march = birthday_service.create_reminder(db_session, owner, name="Mar", raw_date="1980-03-02")
    birthday_service.create_reminder(db_session, stranger, name="Hidden", raw_date="01-02")

    listed = birthday_service.list_reminders(db_session, owner)

    assert [reminder.id for reminder in listed] == [march.id, december.id]


def test_reminders_are_private(db_session, owner, make_user):
    stranger = make_user("stranger")
    reminder = birthday_service.create_reminder(db_session, owner, name="Ann", raw_date="04-04")

    with pytest.raises(NotFound) as exc:
        birthday_service.get_reminder(db_session, stranger, reminder.id)
    assert exc.value.detail == "Birthday not found or not authorized"
    with pytest.raises(NotFound):
        birthday_service.delete_reminder(db_session, stranger, reminder.id)
    with pytest.raises(InvalidId):
        birthday_service.get_reminder(db_session, owner, "four")


def test_update_reminder_partial(db_session, owner):
    reminder = birthday_service.create_reminder(
        db_session, owner, name="Ann", raw_date="1990-04-04", description="Flowers"
    )

    updated = birthday_service.update_reminder(
        db_session, owner, str(reminder.id), raw_date="1991-05-06", reminder_enabled=False
    )

    assert updated.subject_name == "Ann"
    assert updated.description == "Flowers"
    assert updated.date == date(1991, 5, 6)
    assert updated.birthday_key == "05-06"
    assert updated.reminder_enabled is False

    with pytest.raises(ValidationError):
        birthday_service.update_reminder(db_session, owner, reminder.id, name="   ")


def test_delete_reminder(db_session, owner):
    reminder = birthday_service.create_reminder(db_session, owner, name="Ann", raw_date="04-04")

    birthday_service.delete_reminder(db_session, owner, reminder.id)

    assert birthday_service.list_reminders(db_session, owner) == []
