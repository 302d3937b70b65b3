"""FastAPI dependencies for the API layer."""

import logging

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.core.errors import Unauthorized
from app.core.security import decode_access_token
from app.database import get_db
from app.models import User

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_user_from_token(token: str, db: Session) -> User:
    """Resolve a user from a JWT token or raise Unauthorized."""

    payload = decode_access_token(token)
    sub = payload.get("sub")
    if sub is None:
        raise Unauthorized()

    try:
        user_id = int(sub)
    except (TypeError, ValueError):
        raise Unauthorized() from None

    user = db.get(User, user_id)
    if user is None:
        raise Unauthorized()
    return user


def get_current_user(
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Retrieve the current user from the JWT token."""

    if not token:
        raise Unauthorized("Not authenticated")
    return get_user_from_token(token, db)


def get_optional_user(
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User | None:
    """Current user when a valid token was sent; anonymous otherwise."""

    if not token:
        return None
    try:
        return get_user_from_token(token, db)
    except Unauthorized as exc:
        logger.info("Ignoring invalid token on public endpoint: %s", exc.detail)
        return None
