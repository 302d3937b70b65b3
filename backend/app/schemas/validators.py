"""Reusable annotated types shared by request schemas."""

from __future__ import annotations

from typing import Annotated

from pydantic import AfterValidator

from app.core.dates import normalize_birthday_key
from app.core.errors import InvalidDateFormat


def _to_birthday_key(value: str) -> str:
    try:
        return normalize_birthday_key(value)
    except InvalidDateFormat as exc:
        raise ValueError(exc.detail) from exc


BirthdayKey = Annotated[str, AfterValidator(_to_birthday_key)]


def _check_date_input(value: str) -> str:
    _to_birthday_key(value)
    return value.strip()


# Keeps the caller's text (and year) once it is known to normalize cleanly.
DateInput = Annotated[str, AfterValidator(_check_date_input)]
