"""Schemas related to user profiles."""

from pydantic import BaseModel, EmailStr, Field

from app.schemas.validators import BirthdayKey


class UserProfileUpdate(BaseModel):
    """Payload for updating profile fields."""

    email: EmailStr | None = Field(default=None, description="New email address")
    birthday: BirthdayKey | None = Field(
        default=None,
        description="New birthday in any accepted date format",
    )

