"""Creation, editing and reactions for birthday messages."""

from __future__ import annotations

import logging
from datetime import date

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from app.config import get_settings
from app.core.dates import normalize_birthday_key, today_key
from app.core.errors import Forbidden, NotFound, ValidationError
from app.models import Message, MessageReaction, User
from app.models.greetings import ANONYMOUS_NAME
from app.services.persistence import commit
from app.services.recipients import find_message, messages_for_date

logger = logging.getLogger(__name__)

settings = get_settings()


def clean_text(value: str | None, *, max_length: int, required: str) -> str:
    """Strip ``value`` and enforce presence and length limits."""

    text = (value or "").strip()
    if not text:
        raise ValidationError(required)
    if len(text) > max_length:
        raise ValidationError(f"Text exceeds maximum length of {max_length} characters")
    return text


def display_name(value: str | None) -> str:
    name = (value or "").strip()
    return name or ANONYMOUS_NAME


def _ensure_owner(message: Message, user: User, action: str) -> None:
    if message.owner_user_id is None or message.owner_user_id != user.id:
        raise Forbidden(f"You can only {action} your own messages")


def create_message(
    db: Session,
    *,
    text: str,
    target_birthday: str,
    sender_name: str | None = None,
    owner: User | None = None,
    recipient_username: str | None = None,
) -> Message:
    """Store a new message addressed to ``target_birthday``."""

    body = clean_text(
        text,
        max_length=settings.message_max_length,
        required="Message and target birthday are required",
    )
    if not target_birthday:
        raise ValidationError("Message and target birthday are required")
    key = normalize_birthday_key(target_birthday)

    message = Message(
        sender_display_name=display_name(sender_name),
        text=body,
        target_birthday_key=key,
        owner_user_id=owner.id if owner is not None else None,
        recipient_username_hint=(recipient_username or "").strip() or None,
    )
    db.add(message)
    commit(db)
    db.refresh(message)
    logger.info(
        "Message %s created for %s (%s)",
        message.id,
        key,
        f"user {owner.id}" if owner is not None else "anonymous",
    )
    return message


def update_message(
    db: Session,
    message_id: str | int,
    user: User,
    *,
    text: str | None = None,
    target_birthday: str | None = None,
) -> Message:
    """Edit text and/or target key of a message owned by ``user``."""

    if text is None and target_birthday is None:
        raise ValidationError("Provide message_text or target_birthday to update")
    body = None
    if text is not None:
        body = clean_text(
            text,
            max_length=settings.message_max_length,
            required="Message text cannot be empty",
        )
    key = normalize_birthday_key(target_birthday) if target_birthday is not None else None

    message = find_message(db, message_id)
    _ensure_owner(message, user, "edit")

    if body is not None:
        message.text = body
    if key is not None:
        message.target_birthday_key = key
    db.add(message)
    commit(db)
    db.refresh(message)
    return message


def delete_message(db: Session, message_id: str | int, user: User) -> None:
    """Delete a message owned by ``user`` along with its comments and reactions."""

    message = find_message(db, message_id)
    _ensure_owner(message, user, "delete")
    db.delete(message)
    commit(db)
    logger.info("Message %s deleted by user %s", message_id, user.id)


def add_reaction(message: Message, user_id: int, emoji: str) -> MessageReaction:
    """Set ``user_id``'s reaction, replacing the emoji of an existing one."""

    for reaction in message.reactions:
        if reaction.user_id == user_id:
            reaction.emoji = emoji
            return reaction
    reaction = MessageReaction(user_id=user_id, emoji=emoji)
    message.reactions.append(reaction)
    return reaction


def remove_reaction(message: Message, user_id: int) -> bool:
    """Drop any reaction by ``user_id``. Returns whether something was removed."""

    matching = [reaction for reaction in message.reactions if reaction.user_id == user_id]
    for reaction in matching:
        message.reactions.remove(reaction)
    return bool(matching)


def react_to_message(db: Session, message_id: str | int, user: User, emoji: str) -> Message:
    emoji = (emoji or "").strip()
    if not emoji:
        raise ValidationError("Emoji is required")
    message = find_message(db, message_id)
    add_reaction(message, user.id, emoji)
    commit(db)
    db.refresh(message)
    return message


def unreact_to_message(db: Session, message_id: str | int, user: User) -> Message:
    message = find_message(db, message_id)
    if remove_reaction(message, user.id):
        commit(db)
        db.refresh(message)
    return message


def messages_for_today(db: Session, today: date | None = None) -> tuple[str, list[Message]]:
    key = today_key(today)
    return key, messages_for_date(db, key)


def longest_message(db: Session) -> Message:
    """The message with the longest text; the older one wins a tie."""

    stmt = (
        select(Message)
        .options(selectinload(Message.reactions))
        .order_by(func.length(Message.text).desc(), Message.created_at.asc(), Message.id.asc())
        .limit(1)
    )
    message = db.execute(stmt).scalar_one_or_none()
    if message is None:
        raise NotFound("No messages found")
    return message


def search_messages(db: Session, query: str | None) -> list[Message]:
    """Case-insensitive substring search over message text, newest first."""

    term = (query or "").strip()
    if not term:
        raise ValidationError("Search query is required")
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    stmt = (
        select(Message)
        .where(func.lower(Message.text).like(f"%{escaped.lower()}%", escape="\\"))
        .options(selectinload(Message.reactions))
        .order_by(Message.created_at.desc(), Message.id.desc())
    )
    return list(db.execute(stmt).scalars().all())
