"""Schemas for personal birthday reminders."""

from __future__ import annotations

import datetime as dt
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, constr, model_validator

from app.schemas.validators import DateInput


class BirthdayCreate(BaseModel):
    """Payload for saving someone's birthday."""

    name: constr(strip_whitespace=True, min_length=1, max_length=128)
    date: DateInput | None = Field(
        default=None,
        description="Birthday as MM-DD, YYYY-MM-DD or MM/DD/YYYY",
    )
    birthday_date: DateInput | None = Field(default=None, description="Alias of date")
    description: str | None = None
    notes: str | None = Field(default=None, description="Alias of description")
    reminder_enabled: bool = True

    @model_validator(mode="after")
    def ensure_date(self) -> "BirthdayCreate":
        if self.date is None and self.birthday_date is None:
            raise ValueError("Please provide name and date")
        return self

    @property
    def raw_date(self) -> str:
        return self.date or self.birthday_date  # type: ignore[return-value]

    @property
    def resolved_description(self) -> str | None:
        return self.description if self.description is not None else self.notes


class BirthdayUpdate(BaseModel):
    """Payload for editing a saved birthday; omitted fields stay as they are."""

    name: constr(strip_whitespace=True, min_length=1, max_length=128) | None = None
    date: DateInput | None = None
    birthday_date: DateInput | None = None
    description: str | None = None
    notes: str | None = None
    reminder_enabled: bool | None = None

    @property
    def raw_date(self) -> str | None:
        return self.date or self.birthday_date

    @property
    def resolved_description(self) -> str | None:
        return self.description if self.description is not None else self.notes


class BirthdayRead(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    name: str = Field(validation_alias="subject_name")
    date: dt.date
    birthday_key: str
    description: str | None = None
    reminder_enabled: bool
    created_at: datetime
    updated_at: datetime


class BirthdayList(BaseModel):
    count: int
    birthdays: list[BirthdayRead]
