"""HTTP endpoints for birthday messages."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, get_optional_user
from app.core.dates import normalize_birthday_key
from app.database import get_db
from app.models import Message, User
from app.schemas import (
    LongestMessage,
    MessageCreate,
    MessageList,
    MessageRead,
    MessageSearchResult,
    MessageUpdate,
    ReactionRequest,
    SentMessageList,
)
from app.services import messages as message_service
from app.services import recipients

router = APIRouter(prefix="/messages", tags=["messages"])


def serialize_message(message: Message) -> MessageRead:
    return MessageRead.model_validate(message)


def _message_list(key: str, messages: list[Message]) -> MessageList:
    return MessageList(
        date=key,
        count=len(messages),
        messages=[serialize_message(message) for message in messages],
    )


@router.post("", response_model=MessageRead, status_code=status.HTTP_201_CREATED)
def create_message(
    payload: MessageCreate,
    db: Session = Depends(get_db),
    current_user: User | None = Depends(get_optional_user),
) -> MessageRead:
    """Send a birthday message, anonymously or as the signed-in user."""

    message = message_service.create_message(
        db,
        text=payload.message_text,
        target_birthday=payload.target_birthday,
        sender_name=payload.sender_name,
        owner=current_user,
        recipient_username=payload.recipient_username,
    )
    return serialize_message(message)


@router.get("/user/sent", response_model=SentMessageList)
def read_sent_messages(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> SentMessageList:
    """Messages sent by the current user, with the recipient's username when known."""

    sent = recipients.sent_messages(db, current_user.id)
    items = [
        serialize_message(entry.message).model_copy(
            update={"recipient_username": entry.recipient_username}
        )
        for entry in sent
    ]
    return SentMessageList(count=len(items), messages=items)


@router.get("/user/received", response_model=MessageList)
def read_received_messages(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageList:
    """Messages addressed to the current user's birthday."""

    return _message_list(current_user.birthday_key, recipients.received_messages(db, current_user))


@router.get("/today/all", response_model=MessageList)
def read_today_messages(db: Session = Depends(get_db)) -> MessageList:
    key, messages = message_service.messages_for_today(db)
    return _message_list(key, messages)


@router.get("/longest/all", response_model=LongestMessage)
def read_longest_message(db: Session = Depends(get_db)) -> LongestMessage:
    message = message_service.longest_message(db)
    return LongestMessage(length=len(message.text), message=serialize_message(message))


@router.get("/search/query", response_model=MessageSearchResult)
def search_messages(
    q: str | None = Query(default=None, description="Keyword to look for"),
    db: Session = Depends(get_db),
) -> MessageSearchResult:
    found = message_service.search_messages(db, q)
    return MessageSearchResult(
        query=(q or "").strip(),
        count=len(found),
        messages=[serialize_message(message) for message in found],
    )


@router.get("/{date}", response_model=MessageList)
def read_messages_for_date(date: str, db: Session = Depends(get_db)) -> MessageList:
    """All messages addressed to a birthday, newest first."""

    key = normalize_birthday_key(date)
    return _message_list(key, recipients.messages_for_date(db, key))


@router.put("/{message_id}", response_model=MessageRead)
def update_message(
    message_id: str,
    payload: MessageUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageRead:
    """Edit text or target birthday of one of the caller's messages."""

    message = message_service.update_message(
        db,
        message_id,
        current_user,
        text=payload.message_text,
        target_birthday=payload.target_birthday,
    )
    return serialize_message(message)


@router.delete("/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_message(
    message_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Response:
    message_service.delete_message(db, message_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{message_id}/reactions", response_model=MessageRead)
def add_reaction(
    message_id: str,
    payload: ReactionRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageRead:
    """Set the caller's reaction; a second call replaces the emoji."""

    message = message_service.react_to_message(db, message_id, current_user, payload.emoji)
    return serialize_message(message)


@router.delete("/{message_id}/reactions", response_model=MessageRead)
def remove_reaction(
    message_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageRead:
    message = message_service.unreact_to_message(db, message_id, current_user)
    return serialize_message(message)
