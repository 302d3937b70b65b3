"""Service-level errors mapped onto HTTP responses by the API layer."""

from __future__ import annotations

from fastapi import status


class ServiceError(Exception):
    """Base class for errors raised by domain services."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Something went wrong"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(ServiceError):
    """Missing or malformed input that the caller can fix."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request"


class InvalidDateFormat(ValidationError):
    """A date could not be turned into a month-day key."""

    default_detail = "Date must be in MM-DD format (e.g., 05-23)"


class InvalidId(ValidationError):
    """An identifier does not have a valid shape."""

    default_detail = "Invalid id"


class Unauthorized(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Could not validate credentials"


class Forbidden(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Not allowed"


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class Conflict(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Already exists"


class DependencyError(ServiceError):
    """The store or an outside collaborator failed; details stay in the logs."""
