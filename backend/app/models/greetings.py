from __future__ import annotations

import datetime as dt
from datetime import datetime

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base

ANONYMOUS_NAME = "Anonymous"


class User(Base):
    """Registered user with a year-agnostic birthday."""

    __tablename__ = "users"
    __table_args__ = (Index("ix_users_birthday_key", "birthday_key"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    birthday_key: Mapped[str] = mapped_column(String(5), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    messages: Mapped[list["Message"]] = relationship(back_populates="owner")
    comments: Mapped[list["Comment"]] = relationship(back_populates="commenter")
    birthday_reminders: Mapped[list["BirthdayReminder"]] = relationship(back_populates="owner")


class Message(Base):
    """Greeting addressed to everyone sharing a birthday key."""

    __tablename__ = "messages"
    __table_args__ = (
        Index("ix_messages_target_created_at", "target_birthday_key", "created_at"),
        Index("ix_messages_owner", "owner_user_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    sender_display_name: Mapped[str] = mapped_column(
        String(128), default=ANONYMOUS_NAME, nullable=False
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    target_birthday_key: Mapped[str] = mapped_column(String(5), nullable=False)
    owner_user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"))
    recipient_username_hint: Mapped[str | None] = mapped_column(String(64))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    owner: Mapped[User | None] = relationship(back_populates="messages")
    reactions: Mapped[list["MessageReaction"]] = relationship(
        back_populates="message", cascade="all, delete-orphan", order_by="MessageReaction.id"
    )
    comments: Mapped[list["Comment"]] = relationship(
        back_populates="message", cascade="all, delete-orphan"
    )


class MessageReaction(Base):
    """A user's single emoji reaction to a message."""

    __tablename__ = "message_reactions"
    __table_args__ = (
        UniqueConstraint("message_id", "user_id", name="uq_message_reaction_user"),
        Index("ix_reactions_message", "message_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    message_id: Mapped[int] = mapped_column(
        ForeignKey("messages.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    emoji: Mapped[str] = mapped_column(String(32), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    message: Mapped[Message] = relationship(back_populates="reactions")


class Comment(Base):
    """Comment left on a message, anonymous or by a user."""

    __tablename__ = "comments"
    __table_args__ = (Index("ix_comments_message_created_at", "message_id", "created_at"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    message_id: Mapped[int] = mapped_column(
        ForeignKey("messages.id", ondelete="CASCADE"), nullable=False
    )
    commenter_display_name: Mapped[str] = mapped_column(
        String(128), default=ANONYMOUS_NAME, nullable=False
    )
    commenter_user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL")
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    message: Mapped[Message] = relationship(back_populates="comments")
    commenter: Mapped[User | None] = relationship(back_populates="comments")


class BirthdayReminder(Base):
    """Personal calendar entry a user keeps about someone else's birthday."""

    __tablename__ = "birthday_reminders"
    __table_args__ = (Index("ix_birthday_reminders_owner_key", "owner_user_id", "birthday_key"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    owner_user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"))
    subject_name: Mapped[str] = mapped_column(String(128), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    birthday_key: Mapped[str] = mapped_column(String(5), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    reminder_enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    owner: Mapped[User | None] = relationship(back_populates="birthday_reminders")

    def set_date(self, value: dt.date, key: str) -> None:
        """Assign the full date together with its derived key."""

        self.date = value
        self.birthday_key = key
