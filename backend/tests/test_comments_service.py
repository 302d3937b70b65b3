"""Unit tests for comments and comment attribution."""

from __future__ import annotations

import pytest

from app.core.errors import Forbidden, InvalidId, NotFound, ValidationError
from app.models import Comment, Message, User
from app.services import comments as comment_service
from app.services import recipients


@pytest.fixture()
def message(db_session, make_user):
    owner = make_user("owner", "01-01")
    message = Message(
        sender_display_name="Owner",
        text="Happy birthday!",
        target_birthday_key="05-23",
        owner_user_id=owner.id,
    )
    db_session.add(message)
    db_session.commit()
    return message


def test_create_comment_anonymous(db_session, message):
    comment = comment_service.create_comment(db_session, message_id=str(message.id), text=" Lovely ")

    assert comment.commenter_display_name == "Anonymous"
    assert comment.commenter_user_id is None
    assert comment.text == "Lovely"


def test_create_comment_requires_existing_message(db_session):
    with pytest.raises(NotFound):
        comment_service.create_comment(db_session, message_id=404, text="Hello")
    with pytest.raises(InvalidId):
        comment_service.create_comment(db_session, message_id="x1", text="Hello")


def test_create_comment_enforces_length(db_session, message):
    with pytest.raises(ValidationError):
        comment_service.create_comment(db_session, message_id=message.id, text="y" * 501)
    with pytest.raises(ValidationError):
        comment_service.create_comment(db_session, message_id=message.id, text="   ")


def test_list_comments_newest_first(db_session, message):
    first = comment_service.create_comment(db_session, message_id=message.id, text="one")
    second = comment_service.create_comment(db_session, message_id=message.id, text="two")

    parsed, comments = comment_service.list_comments(db_session, str(message.id))

    assert parsed == message.id
    assert [comment.id for comment in comments] == [second.id, first.id]


def test_only_author_can_modify_signed_comment(db_session, message, make_user):
    author = make_user("author")
    other = make_user("other")
    comment = comment_service.create_comment(
        db_session, message_id=message.id, text="mine", commenter=author
    )

    with pytest.raises(Forbidden):
        comment_service.update_comment(db_session, comment.id, text="theirs", user=other)
    with pytest.raises(Forbidden):
        comment_service.delete_comment(db_session, comment.id, user=None)

    updated = comment_service.update_comment(db_session, comment.id, text="edited", user=author)
    assert updated.text == "edited"
    comment_service.delete_comment(db_session, comment.id, user=author)
    assert db_session.query(Comment).count() == 0


def test_anonymous_comment_is_open_to_anyone(db_session, message):
    comment = comment_service.create_comment(db_session, message_id=message.id, text="anon")

    updated = comment_service.update_comment(db_session, comment.id, text="changed", user=None)
    assert updated.text == "changed"


def test_update_comment_rejects_empty_text(db_session, message):
    comment = comment_service.create_comment(db_session, message_id=message.id, text="keep me")

    with pytest.raises(ValidationError):
        comment_service.update_comment(db_session, comment.id, text="  ")

    db_session.refresh(comment)
    assert comment.text == "keep me"


def test_missing_comment(db_session):
    with pytest.raises(NotFound) as exc:
        comment_service.delete_comment(db_session, 12)
    assert exc.value.detail == "Comment not found"


def test_comments_received_by_groups_and_filters(db_session, message, make_user):
    owner_id = message.owner_user_id
    friend = make_user("friend")
    quiet = Message(
        sender_display_name="Owner",
        text="No replies",
        target_birthday_key="06-01",
        owner_user_id=owner_id,
    )
    db_session.add(quiet)
    db_session.commit()

    owner = db_session.get(User, owner_id)
    comment_service.create_comment(db_session, message_id=message.id, text="self", commenter=owner)
    anon = comment_service.create_comment(db_session, message_id=message.id, text="anon")
    signed = comment_service.create_comment(
        db_session, message_id=message.id, text="from friend", commenter=friend
    )

    received = recipients.comments_received_by(db_session, owner_id)

    assert received.count == 2
    assert len(received.groups) == 1
    group = received.groups[0]
    assert group.message.id == message.id
    assert [comment.id for comment in group.comments] == [signed.id, anon.id]


def test_comments_received_by_user_without_messages(db_session, make_user):
    loner = make_user("loner")
    received = recipients.comments_received_by(db_session, loner.id)
    assert received.count == 0
    assert received.groups == []
