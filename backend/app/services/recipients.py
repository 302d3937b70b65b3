"""Resolution of messages and comments to the people they are meant for.

Messages are addressed to a month-day key rather than to a user, so a user's
inbox is every message whose key equals their own ``birthday_key``. Comments
are attributed the other way round: a user "receives" the comments other
people leave on messages the user sent.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session, selectinload

from app.core.dates import normalize_birthday_key
from app.core.errors import NotFound
from app.core.identifiers import parse_id
from app.models import Comment, Message, User


@dataclass(slots=True)
class CommentGroup:
    """A message together with the comments it received."""

    message: Message
    comments: list[Comment] = field(default_factory=list)


@dataclass(slots=True)
class ReceivedCommentGroups:
    groups: list[CommentGroup] = field(default_factory=list)

    @property
    def count(self) -> int:
        return sum(len(group.comments) for group in self.groups)


@dataclass(slots=True)
class SentMessage:
    message: Message
    recipient_username: str | None


def find_message(db: Session, message_id: str | int) -> Message:
    """Return a message by id, raising InvalidId or NotFound."""

    parsed = parse_id(message_id, label="message id")
    stmt = select(Message).where(Message.id == parsed).options(selectinload(Message.reactions))
    message = db.execute(stmt).scalar_one_or_none()
    if message is None:
        raise NotFound("Message not found")
    return message


def messages_for_date(db: Session, key: str) -> list[Message]:
    """All messages addressed to ``key``, newest first."""

    birthday_key = normalize_birthday_key(key)
    stmt = (
        select(Message)
        .where(Message.target_birthday_key == birthday_key)
        .options(selectinload(Message.reactions))
        .order_by(Message.created_at.desc(), Message.id.desc())
    )
    return list(db.execute(stmt).scalars().all())


def count_messages_for_date(db: Session, key: str) -> int:
    birthday_key = normalize_birthday_key(key)
    stmt = select(func.count(Message.id)).where(Message.target_birthday_key == birthday_key)
    return int(db.execute(stmt).scalar_one())


def received_messages(db: Session, user: User) -> list[Message]:
    """Inbox of ``user``: every message addressed to their birthday."""

    return messages_for_date(db, user.birthday_key)


def comments_received_by(db: Session, user_id: int) -> ReceivedCommentGroups:
    """Comments other people left on messages owned by ``user_id``.

    The user's own comments are excluded, anonymous ones are kept. Only
    messages with at least one such comment are returned, newest message
    first, each with its comments newest first.
    """

    owned = (
        db.execute(
            select(Message)
            .where(Message.owner_user_id == user_id)
            .order_by(Message.created_at.desc(), Message.id.desc())
        )
        .scalars()
        .all()
    )
    if not owned:
        return ReceivedCommentGroups()

    groups = {message.id: CommentGroup(message=message) for message in owned}
    comments = (
        db.execute(
            select(Comment)
            .where(
                Comment.message_id.in_(list(groups)),
                or_(Comment.commenter_user_id.is_(None), Comment.commenter_user_id != user_id),
            )
            .order_by(Comment.created_at.desc(), Comment.id.desc())
        )
        .scalars()
        .all()
    )
    for comment in comments:
        groups[comment.message_id].comments.append(comment)

    return ReceivedCommentGroups(groups=[group for group in groups.values() if group.comments])


def sent_messages(db: Session, user_id: int) -> list[SentMessage]:
    """Messages sent by ``user_id`` with the recipient's username when it can be resolved.

    An explicit ``recipient_username_hint`` wins; otherwise the first user
    (lowest id) whose birthday matches the message key is named.
    """

    messages = (
        db.execute(
            select(Message)
            .where(Message.owner_user_id == user_id)
            .options(selectinload(Message.reactions))
            .order_by(Message.created_at.desc(), Message.id.desc())
        )
        .scalars()
        .all()
    )

    keys = {message.target_birthday_key for message in messages if not message.recipient_username_hint}
    usernames: dict[str, str] = {}
    if keys:
        rows = db.execute(
            select(User.birthday_key, User.username)
            .where(User.birthday_key.in_(keys))
            .order_by(User.id)
        ).all()
        for birthday_key, username in rows:
            usernames.setdefault(birthday_key, username)

    return [
        SentMessage(
            message=message,
            recipient_username=message.recipient_username_hint
            or usernames.get(message.target_birthday_key),
        )
        for message in messages
    ]
