"""Account lifecycle: registration, profile edits and removal."""

from __future__ import annotations

import logging

from sqlalchemy import delete, or_, select, update
from sqlalchemy.orm import Session

from app.core.dates import normalize_birthday_key
from app.core.errors import Conflict, Unauthorized
from app.core.security import get_password_hash, verify_password
from app.models import BirthdayReminder, Comment, Message, MessageReaction, User
from app.services.persistence import commit

logger = logging.getLogger(__name__)


def _ensure_unique(db: Session, *, username: str | None = None, email: str | None = None, exclude_id: int | None = None) -> None:
    if username is not None:
        stmt = select(User.id).where(User.username == username)
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        if db.execute(stmt).first() is not None:
            raise Conflict("Username is already taken")
    if email is not None:
        stmt = select(User.id).where(User.email == email)
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        if db.execute(stmt).first() is not None:
            raise Conflict("Email is already registered")


def register_user(db: Session, *, username: str, email: str, password: str, birthday: str) -> User:
    email = email.strip().lower()
    username = username.strip()
    key = normalize_birthday_key(birthday)
    _ensure_unique(db, username=username, email=email)

    user = User(
        username=username,
        email=email,
        hashed_password=get_password_hash(password),
        birthday_key=key,
    )
    db.add(user)
    commit(db)
    db.refresh(user)
    logger.info("Registered user %s with birthday %s", user.id, key)
    return user


def authenticate(db: Session, login: str, password: str) -> User:
    """Return the user matching ``login`` (username or email) and ``password``."""

    ident = login.strip()
    stmt = select(User).where(or_(User.username == ident, User.email == ident.lower())).limit(1)
    user = db.execute(stmt).scalar_one_or_none()
    if user is None or not verify_password(password, user.hashed_password):
        raise Unauthorized("Incorrect login or password")
    return user


def update_profile(db: Session, user: User, *, email: str | None = None, birthday: str | None = None) -> User:
    new_email = email.strip().lower() if email is not None else None
    key = normalize_birthday_key(birthday) if birthday is not None else None
    if new_email is not None and new_email != user.email:
        _ensure_unique(db, email=new_email, exclude_id=user.id)

    if new_email is not None:
        user.email = new_email
    if key is not None:
        user.birthday_key = key
    db.add(user)
    commit(db)
    db.refresh(user)
    return user


def delete_account(db: Session, user: User) -> None:
    """Remove ``user``; their messages, comments and reminders stay, ownerless."""

    user_id = user.id
    db.execute(update(Message).where(Message.owner_user_id == user_id).values(owner_user_id=None))
    db.execute(
        update(Comment).where(Comment.commenter_user_id == user_id).values(commenter_user_id=None)
    )
    db.execute(
        update(BirthdayReminder)
        .where(BirthdayReminder.owner_user_id == user_id)
        .values(owner_user_id=None)
    )
    db.execute(delete(MessageReaction).where(MessageReaction.user_id == user_id))
    db.expire_all()
    db.delete(db.get(User, user_id))
    commit(db)
    logger.info("Deleted user %s", user_id)
