"""Schemas related to comments on birthday messages."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CommentCreate(BaseModel):
    """Payload for commenting on a message."""

    message_id: int | str = Field(..., description="Identifier of the message being commented on")
    commenter_name: str | None = Field(default=None, max_length=128)
    comment_text: str = Field(..., description="Comment body, up to 500 characters")


class CommentUpdate(BaseModel):
    """Payload for editing a comment."""

    comment_text: str | None = None


class CommentRead(BaseModel):
    """Serialized comment."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    message_id: int
    commenter_name: str = Field(validation_alias="commenter_display_name")
    commenter_user_id: int | None = None
    comment_text: str = Field(validation_alias="text")
    created_at: datetime
    updated_at: datetime


class CommentList(BaseModel):
    message_id: int
    count: int
    comments: list[CommentRead]


class ReceivedCommentGroup(BaseModel):
    """A message owned by the caller together with comments left by others."""

    message_id: int
    message_text: str
    target_birthday: str
    created_at: datetime
    comments: list[CommentRead]


class ReceivedComments(BaseModel):
    count: int
    received: list[ReceivedCommentGroup]
