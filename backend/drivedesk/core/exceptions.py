# backend/drivedesk/core/exceptions.py
"""
Errors raised by DriveDesk services.

Each DomainException subclass carries the HTTP status it maps to, so routes
can let them propagate and the handlers in ``drivedesk.errors`` render the
problem document.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class DomainException(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or type(self).__name__
        self.details = details or {}

    def to_http_exception(self) -> HTTPException:
        payload = {"message": self.message, "code": self.code, "details": self.details}
        return HTTPException(status_code=self.status_code, detail=payload)


class ValidationException(DomainException):
    """Input that parses but breaks a booking, car or package rule."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedException(DomainException):
    """Missing, expired or malformed bearer token."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def to_http_exception(self) -> HTTPException:
        exc = super().to_http_exception()
        exc.headers = {"WWW-Authenticate": "Bearer"}
        return exc


class ForbiddenException(DomainException):
    """Authenticated, but not allowed (e.g. non-admin on the support inbox)."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundException(DomainException):
    """Unknown id, malformed id, or a record owned by another instructor."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictException(DomainException):
    status_code = status.HTTP_409_CONFLICT


class ServiceException(DomainException):
    """A unit of work failed at the database and was rolled back."""


class DuplicateTopicException(ConflictException):
    def __init__(self, name: str):
        super().__init__(
            message=f"A topic named '{name}' already exists",
            code="DUPLICATE_TOPIC",
            details={"name": name},
        )


class RepositoryException(Exception):
    """Data access failure that escaped a repository without a service transaction."""
