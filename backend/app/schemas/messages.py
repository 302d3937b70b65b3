"""Schemas related to birthday messages."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, constr

from app.schemas.validators import BirthdayKey


class MessageCreate(BaseModel):
    """Payload for sending a birthday message."""

    sender_name: str | None = Field(
        default=None,
        max_length=128,
        description="Display name of the sender, defaults to Anonymous",
    )
    message_text: str = Field(..., description="Message body, up to 1000 characters")
    target_birthday: BirthdayKey = Field(..., description="Birthday the message is addressed to")
    recipient_username: str | None = Field(
        default=None,
        max_length=64,
        description="Optional username the sender had in mind",
    )


class MessageUpdate(BaseModel):
    """Payload for editing a message."""

    message_text: str | None = None
    target_birthday: BirthdayKey | None = None


class ReactionRequest(BaseModel):
    """Payload for adding a reaction."""

    emoji: constr(strip_whitespace=True, min_length=1, max_length=32)


class ReactionRead(BaseModel):
    """Single reaction entry; one per user."""

    model_config = ConfigDict(from_attributes=True)

    emoji: str
    user_id: int


class MessageRead(BaseModel):
    """Serialized representation of a birthday message."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    sender_name: str = Field(validation_alias="sender_display_name")
    message_text: str = Field(validation_alias="text")
    target_birthday: str = Field(validation_alias="target_birthday_key")
    owner_user_id: int | None = None
    recipient_username: str | None = Field(default=None, validation_alias="recipient_username_hint")
    reactions: list[ReactionRead] = []
    created_at: datetime
    updated_at: datetime


class MessageList(BaseModel):
    """Messages sharing a birthday key."""

    date: str
    count: int
    messages: list[MessageRead]


class SentMessageList(BaseModel):
    """Messages sent by the current user."""

    count: int
    messages: list[MessageRead]


class MessageSearchResult(BaseModel):
    query: str
    count: int
    messages: list[MessageRead]


class LongestMessage(BaseModel):
    length: int
    message: MessageRead
