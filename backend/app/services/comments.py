"""Comment operations on birthday messages.

Comments left without signing in have no author to check against, so anyone
may edit or delete them. Comments with an author can only be changed by that
author.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.config import get_settings
from app.core.errors import Forbidden, NotFound
from app.core.identifiers import parse_id
from app.models import Comment, User
from app.services.messages import clean_text, display_name
from app.services.persistence import commit
from app.services.recipients import find_message

logger = logging.getLogger(__name__)

settings = get_settings()


def _get_comment(db: Session, comment_id: str | int) -> Comment:
    parsed = parse_id(comment_id, label="comment id")
    comment = db.get(Comment, parsed)
    if comment is None:
        raise NotFound("Comment not found")
    return comment


def _ensure_can_modify(comment: Comment, user: User | None, action: str) -> None:
    if comment.commenter_user_id is None:
        return
    if user is not None and user.id == comment.commenter_user_id:
        return
    raise Forbidden(f"Not authorized to {action} this comment")


def create_comment(
    db: Session,
    *,
    message_id: str | int,
    text: str,
    commenter_name: str | None = None,
    commenter: User | None = None,
) -> Comment:
    body = clean_text(
        text,
        max_length=settings.comment_max_length,
        required="Message ID and comment text are required",
    )
    message = find_message(db, message_id)

    comment = Comment(
        message_id=message.id,
        commenter_display_name=display_name(commenter_name),
        commenter_user_id=commenter.id if commenter is not None else None,
        text=body,
    )
    db.add(comment)
    commit(db)
    db.refresh(comment)
    return comment


def list_comments(db: Session, message_id: str | int) -> tuple[int, list[Comment]]:
    """Comments on a message, newest first."""

    parsed = parse_id(message_id, label="message id")
    stmt = (
        select(Comment)
        .where(Comment.message_id == parsed)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
    )
    return parsed, list(db.execute(stmt).scalars().all())


def update_comment(
    db: Session,
    comment_id: str | int,
    *,
    text: str | None,
    user: User | None = None,
) -> Comment:
    parsed = parse_id(comment_id, label="comment id")
    body = clean_text(
        text,
        max_length=settings.comment_max_length,
        required="Comment text is required",
    )
    comment = _get_comment(db, parsed)
    _ensure_can_modify(comment, user, "edit")

    comment.text = body
    db.add(comment)
    commit(db)
    db.refresh(comment)
    return comment


def delete_comment(db: Session, comment_id: str | int, *, user: User | None = None) -> None:
    comment = _get_comment(db, comment_id)
    _ensure_can_modify(comment, user, "delete")
    db.delete(comment)
    commit(db)
    logger.info("Comment %s deleted", comment.id)
