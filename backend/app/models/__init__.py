"""Database models package."""

from .base import Base
from .greetings import BirthdayReminder, Comment, Message, MessageReaction, User

__all__ = [
    "Base",
    "User",
    "Message",
    "MessageReaction",
    "Comment",
    "BirthdayReminder",
]
