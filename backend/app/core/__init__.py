"""Core utilities for the Wishing You backend."""

from .dates import normalize_birthday_key, resolve_reminder_date, today_key
from .identifiers import parse_id

__all__ = [
    "normalize_birthday_key",
    "resolve_reminder_date",
    "today_key",
    "parse_id",
]
