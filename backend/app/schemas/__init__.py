"""Pydantic schemas for API payloads."""

from .auth import LoginRequest, Token, UserCreate, UserRead
from .birthdays import BirthdayCreate, BirthdayList, BirthdayRead, BirthdayUpdate
from .comments import (
    CommentCreate,
    CommentList,
    CommentRead,
    CommentUpdate,
    ReceivedCommentGroup,
    ReceivedComments,
)
from .messages import (
    LongestMessage,
    MessageCreate,
    MessageList,
    MessageRead,
    MessageSearchResult,
    MessageUpdate,
    ReactionRead,
    ReactionRequest,
    SentMessageList,
)
from .users import UserProfileUpdate

__all__ = [
    "LoginRequest",
    "Token",
    "UserCreate",
    "UserRead",
    "UserProfileUpdate",
    "MessageCreate",
    "MessageUpdate",
    "MessageRead",
    "MessageList",
    "SentMessageList",
    "MessageSearchResult",
    "LongestMessage",
    "ReactionRead",
    "ReactionRequest",
    "CommentCreate",
    "CommentUpdate",
    "CommentRead",
    "CommentList",
    "ReceivedCommentGroup",
    "ReceivedComments",
    "BirthdayCreate",
    "BirthdayUpdate",
    "BirthdayRead",
    "BirthdayList",
]
