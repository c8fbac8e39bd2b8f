# backend/app/core/exceptions.py
"""
Domain-specific exceptions for the EventHub booking API.

These exceptions provide clear, business-focused error messages
that can be caught and handled appropriately at the API layer.
"""

from enum import Enum
from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class BookingErrorCode(str, Enum):
    """Closed set of reasons a booking request can be rejected."""

    ENROLLMENT_NOT_FOUND = "ENROLLMENT_NOT_FOUND"
    TICKET_NOT_FOUND = "TICKET_NOT_FOUND"
    TICKET_NOT_PAID = "TICKET_NOT_PAID"
    TICKET_TYPE_INELIGIBLE = "TICKET_TYPE_INELIGIBLE"
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    ROOM_FULL = "ROOM_FULL"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    BOOKING_NOT_OWNED = "BOOKING_NOT_OWNED"


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_http_exception(self) -> HTTPException:
        """Default conversion to HTTPException (override in subclasses)."""
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class NotFoundException(DomainException):
    """Raised when a requested resource is not found."""

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class ForbiddenException(DomainException):
    """Raised when the entity exists but the user is not eligible for the action."""

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class ServiceException(DomainException):
    """Raised when a service operation fails."""

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "message": self.message or "An error occurred processing your request",
                "code": self.code,
                "details": self.details if self.details else {},
            },
        )


# Specific booking exceptions


def booking_not_found(reason: BookingErrorCode, message: str, **details: Any) -> NotFoundException:
    """Build a NotFoundException tagged with a booking reason code."""
    return NotFoundException(message=message, code=reason.value, details=details)


def booking_forbidden(reason: BookingErrorCode, message: str, **details: Any) -> ForbiddenException:
    """Build a ForbiddenException tagged with a booking reason code."""
    return ForbiddenException(message=message, code=reason.value, details=details)


class RepositoryException(Exception):
    """
    Exception raised for repository layer errors.

    This exception is used when data access operations fail,
    such as database connection issues, query failures, or
    constraint violations. Missing rows are not errors; repositories
    return None for those.
    """
