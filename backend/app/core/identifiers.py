"""Parsing of record identifiers received in URLs and payloads."""

from __future__ import annotations

from app.core.errors import InvalidId


def parse_id(raw: str | int, *, label: str = "id") -> int:
    """Return ``raw`` as a positive integer id or raise :class:`InvalidId`."""

    if isinstance(raw, bool):
        raise InvalidId(f"Invalid {label}")
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw).strip()
        if not (text.isascii() and text.isdigit()):
            raise InvalidId(f"Invalid {label}")
        value = int(text)
    if value <= 0:
        raise InvalidId(f"Invalid {label}")
    return value
