"""HTTP endpoints for comments on birthday messages."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, get_optional_user
from app.database import get_db
from app.models import User
from app.schemas import (
    CommentCreate,
    CommentList,
    CommentRead,
    CommentUpdate,
    ReceivedCommentGroup,
    ReceivedComments,
)
from app.services import comments as comment_service
from app.services import recipients

router = APIRouter(prefix="/comments", tags=["comments"])


@router.post("", response_model=CommentRead, status_code=status.HTTP_201_CREATED)
def create_comment(
    payload: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User | None = Depends(get_optional_user),
) -> CommentRead:
    """Comment on a message; signed-in callers are recorded as the author."""

    comment = comment_service.create_comment(
        db,
        message_id=payload.message_id,
        text=payload.comment_text,
        commenter_name=payload.commenter_name,
        commenter=current_user,
    )
    return CommentRead.model_validate(comment)


@router.get("/user/received", response_model=ReceivedComments)
def read_received_comments(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ReceivedComments:
    """Comments other people left on the caller's messages, grouped by message."""

    result = recipients.comments_received_by(db, current_user.id)
    return ReceivedComments(
        count=result.count,
        received=[
            ReceivedCommentGroup(
                message_id=group.message.id,
                message_text=group.message.text,
                target_birthday=group.message.target_birthday_key,
                created_at=group.message.created_at,
                comments=[CommentRead.model_validate(comment) for comment in group.comments],
            )
            for group in result.groups
        ],
    )


@router.get("/{message_id}", response_model=CommentList)
def read_comments(message_id: str, db: Session = Depends(get_db)) -> CommentList:
    parsed, comments = comment_service.list_comments(db, message_id)
    return CommentList(
        message_id=parsed,
        count=len(comments),
        comments=[CommentRead.model_validate(comment) for comment in comments],
    )


@router.put("/{comment_id}", response_model=CommentRead)
def update_comment(
    comment_id: str,
    payload: CommentUpdate,
    db: Session = Depends(get_db),
    current_user: User | None = Depends(get_optional_user),
) -> CommentRead:
    """Edit a comment; anonymous comments are open to anyone."""

    comment = comment_service.update_comment(
        db, comment_id, text=payload.comment_text, user=current_user
    )
    return CommentRead.model_validate(comment)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(
    comment_id: str,
    db: Session = Depends(get_db),
    current_user: User | None = Depends(get_optional_user),
) -> Response:
    comment_service.delete_comment(db, comment_id, user=current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
