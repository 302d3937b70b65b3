"""Helpers for turning date input into year-agnostic ``MM-DD`` keys."""

from __future__ import annotations

import calendar
import re
from datetime import date, datetime

from app.core.errors import InvalidDateFormat

_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_MONTH_DAY = re.compile(r"^(\d{2})-(\d{2})$")
_US_DATE = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")

# February allows the 29th so leap-day birthdays are valid in every year.
_DAYS_IN_MONTH = (31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def _split(raw: str) -> tuple[int | None, int, int]:
    """Return ``(year, month, day)`` for one of the accepted shapes."""

    match = _ISO_DATE.match(raw)
    if match:
        year, month, day = match.groups()
        return int(year), int(month), int(day)
    match = _MONTH_DAY.match(raw)
    if match:
        month, day = match.groups()
        return None, int(month), int(day)
    match = _US_DATE.match(raw)
    if match:
        month, day, year = match.groups()
        return int(year), int(month), int(day)
    raise InvalidDateFormat()


def _check_month_day(month: int, day: int) -> None:
    if not 1 <= month <= 12:
        raise InvalidDateFormat(f"Invalid month {month:02d}; expected 01-12")
    if not 1 <= day <= _DAYS_IN_MONTH[month - 1]:
        raise InvalidDateFormat(f"Invalid day {day:02d} for month {month:02d}")


def normalize_birthday_key(raw: str | date) -> str:
    """Canonicalize ``YYYY-MM-DD``, ``MM-DD`` or ``MM/DD/YYYY`` into ``MM-DD``.

    ``date`` and ``datetime`` values are accepted as well. Shapes are tried in
    that order; anything else, or a month/day that does not exist on the
    calendar, raises :class:`InvalidDateFormat`. The year never takes part in
    validation, so ``02-29`` is always a valid key.
    """

    if isinstance(raw, (date, datetime)):
        return raw.strftime("%m-%d")
    if not isinstance(raw, str):
        raise InvalidDateFormat()

    _, month, day = _split(raw.strip())
    _check_month_day(month, day)
    return f"{month:02d}-{day:02d}"


def today_key(today: date | None = None) -> str:
    """Key for ``today`` or for the current local date."""

    return normalize_birthday_key(today or date.today())


def resolve_reminder_date(raw: str | date, *, today: date | None = None) -> tuple[date, str]:
    """Return a full date and its key for a birthday reminder.

    The input year is kept when present and the day exists in it. Otherwise
    the current year is used, stepping back to the latest leap year for
    ``02-29``.
    """

    if isinstance(raw, datetime):
        raw = raw.date()
    if isinstance(raw, date):
        return raw, normalize_birthday_key(raw)

    key = normalize_birthday_key(raw)
    year, month, day = _split(raw.strip())
    if year is not None:
        try:
            return date(year, month, day), key
        except ValueError:
            pass

    year = (today or date.today()).year
    if (month, day) == (2, 29):
        while not calendar.isleap(year):
            year -= 1
    return date(year, month, day), key
