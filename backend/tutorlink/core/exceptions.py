# backend/tutorlink/core/exceptions.py
"""
Domain-specific exceptions for the TutorLink platform.

These exceptions provide clear, business-focused error messages
that can be caught and handled appropriately at the API layer
and at the real-time gateway.

Every exception maps onto one entry of the error taxonomy:
VALIDATION_ERROR, UNAUTHORIZED, FORBIDDEN, NOT_FOUND, CONFLICT
and INTERNAL_ERROR.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.default_code
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }

    def to_http_exception(self) -> HTTPException:
        """Convert to an HTTPException carrying the uniform error body."""
        return HTTPException(status_code=self.status_code, detail=self.to_dict())

    def to_socket_error(self) -> Dict[str, Any]:
        """Payload for a ``socket:error`` frame."""
        return {"code": self.status_code, "type": self.code, "message": self.message}


class ValidationException(DomainException):
    """Raised when business validation fails."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "VALIDATION_ERROR"


class UnauthorizedException(DomainException):
    """Raised when user is not authenticated."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_code = "UNAUTHORIZED"

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=self.status_code,
            detail=self.to_dict(),
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenException(DomainException):
    """Raised when user lacks permission for an action."""

    status_code = status.HTTP_403_FORBIDDEN
    default_code = "FORBIDDEN"


class NotFoundException(DomainException):
    """Raised when a requested resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND
    default_code = "NOT_FOUND"


class ConflictException(DomainException):
    """Raised when there's a conflict with existing data."""

    status_code = status.HTTP_409_CONFLICT
    default_code = "CONFLICT"


class ServiceException(DomainException):
    """Raised when a service operation fails."""

    def to_http_exception(self) -> HTTPException:
        # Internal failures never leak their message to the caller.
        return HTTPException(
            status_code=self.status_code,
            detail={
                "code": self.code,
                "message": "An unexpected error occurred.",
                "details": None,
            },
        )

    def to_socket_error(self) -> Dict[str, Any]:
        return {
            "code": self.status_code,
            "type": self.code,
            "message": "An unexpected error occurred.",
        }


# Specific business exceptions


class AvailabilityOverlapException(ConflictException):
    """Raised when a slot intersects another slot of the same teacher and day."""

    def __init__(self, *, day_of_week: int, conflicting_slot_id: Optional[str] = None) -> None:
        details: Dict[str, Any] = {"dayOfWeek": day_of_week}
        if conflicting_slot_id:
            details["conflictingSlotId"] = conflicting_slot_id
        super().__init__(
            "This slot overlaps with an existing availability slot",
            details=details,
        )


class PendingRequestExistsException(ConflictException):
    """Raised when a student already has a pending request to the teacher."""

    def __init__(self, message: str = "A pending contact request already exists") -> None:
        super().__init__(message)


class ConversationInactiveException(ConflictException):
    """Raised when messaging a conversation whose contact request is not accepted."""

    def __init__(self, conversation_id: Optional[str] = None) -> None:
        super().__init__(
            "Conversation is not active",
            details={"conversationId": conversation_id} if conversation_id else None,
        )


class DuplicateReviewException(ConflictException):
    """Raised when a student reviews the same teacher twice."""

    def __init__(self) -> None:
        super().__init__("You have already reviewed this teacher")


class RepositoryException(Exception):
    """Raised when repository operations fail."""


class IntegrityConflictError(RepositoryException):
    """Raised when a write violates a uniqueness or foreign-key constraint."""
