"""Commit helper translating store failures into service errors."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import DependencyError

logger = logging.getLogger(__name__)


def commit(db: Session) -> None:
    """Commit the unit of work, rolling back and raising DependencyError on failure."""

    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Database commit failed: %s", exc, exc_info=True)
        raise DependencyError() from exc
