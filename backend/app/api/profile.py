"""Profile management API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.database import get_db
from app.models import User
from app.schemas import UserProfileUpdate, UserRead
from app.services import accounts

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("/me", response_model=UserRead)
def read_profile(current_user: User = Depends(get_current_user)) -> UserRead:
    """Return profile information for the authenticated user."""

    return UserRead.model_validate(current_user, from_attributes=True)


@router.patch("", response_model=UserRead)
def update_profile(
    payload: UserProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UserRead:
    """Update email and/or birthday for the current user."""

    user = accounts.update_profile(
        db,
        current_user,
        email=payload.email,
        birthday=payload.birthday,
    )
    return UserRead.model_validate(user, from_attributes=True)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def delete_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Response:
    """Delete the account; messages, comments and reminders stay without an owner."""

    accounts.delete_account(db, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
