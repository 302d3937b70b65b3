"""Unit tests for authentication helpers and endpoints."""

from __future__ import annotations

from datetime import timedelta

import pytest

from app.api.auth import login_user
from app.api.deps import get_current_user, get_optional_user, get_user_from_token
from app.core.errors import Conflict, Unauthorized
from app.core.security import create_access_token
from app.schemas import LoginRequest
from app.services import accounts


@pytest.fixture()
def user(make_user):
    return make_user("tester", "05-23")


def test_login_user_returns_token(db_session, user):
    """Successful login should return a bearer token."""

    credentials = LoginRequest(login="tester", password="supersecret")
    token = login_user(credentials, db_session)

    assert token.token_type == "bearer"
    assert isinstance(token.access_token, str) and token.access_token
    assert token.expires_in == 7 * 24 * 60 * 60


def test_login_accepts_email(db_session, user):
    credentials = LoginRequest(login="Tester@Example.com", password="supersecret")
    token = login_user(credentials, db_session)

    assert get_user_from_token(token.access_token, db_session).id == user.id


def test_login_user_rejects_invalid_credentials(db_session):
    """Invalid credentials must raise Unauthorized."""

    credentials = LoginRequest(login="ghost", password="doesnotmatter")
    with pytest.raises(Unauthorized) as exc:
        login_user(credentials, db_session)

    assert exc.value.status_code == 401
    assert "Incorrect login" in exc.value.detail


def test_get_user_from_token(db_session, user):
    """Tokens should resolve to existing users."""

    token = create_access_token({"sub": str(user.id)})
    resolved = get_user_from_token(token, db_session)

    assert resolved.id == user.id
    assert resolved.username == user.username


def test_get_user_from_token_invalid_payload(db_session):
    """Invalid tokens must result in a 401 error."""

    with pytest.raises(Unauthorized) as exc:
        get_user_from_token("invalid-token", db_session)

    assert exc.value.status_code == 401
    assert "Could not validate credentials" in exc.value.detail


def test_expired_token_is_rejected(db_session, user):
    token = create_access_token({"sub": str(user.id)}, expires_delta=timedelta(seconds=-5))

    with pytest.raises(Unauthorized) as exc:
        get_user_from_token(token, db_session)

    assert exc.value.detail == "Token has expired"


def test_current_user_requires_token(db_session):
    with pytest.raises(Unauthorized) as exc:
        get_current_user(token=None, db=db_session)

    assert exc.value.detail == "Not authenticated"


def test_optional_user_ignores_bad_tokens(db_session, user):
    assert get_optional_user(token=None, db=db_session) is None
    assert get_optional_user(token="garbage", db=db_session) is None

    token = create_access_token({"sub": str(user.id)})
    assert get_optional_user(token=token, db=db_session).id == user.id


def test_register_normalizes_birthday_and_email(db_session):
    created = accounts.register_user(
        db_session,
        username="carol",
        email="Carol@Example.com",
        password="supersecret",
        birthday="1990-07-04",
    )

    assert created.birthday_key == "07-04"
    assert created.email == "carol@example.com"
    assert created.hashed_password != "supersecret"


def test_register_rejects_duplicates(db_session, user):
    with pytest.raises(Conflict) as exc:
        accounts.register_user(
            db_session,
            username="tester",
            email="other@example.com",
            password="supersecret",
            birthday="01-01",
        )
    assert exc.value.detail == "Username is already taken"

    with pytest.raises(Conflict) as exc:
        accounts.register_user(
            db_session,
            username="someone",
            email="tester@example.com",
            password="supersecret",
            birthday="01-01",
        )
    assert exc.value.detail == "Email is already registered"
