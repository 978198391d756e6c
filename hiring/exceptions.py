"""
Custom exception classes and error handling.

This module provides custom exceptions and utilities for consistent
error handling across the application.
"""
import logging
import uuid
from typing import Any, Dict, Optional
from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class HiringException(Exception):
    """Base exception for all hiring-specific errors."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(HiringException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, resource_id: str, details: Optional[Dict[str, Any]] = None):
        message = f"{resource} not found: {resource_id}"
        super().__init__(message, status.HTTP_404_NOT_FOUND, details)
        self.resource = resource
        self.resource_id = resource_id


class ValidationError(HiringException):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)
        self.field = field


class InvalidUUIDError(ValidationError):
    """Raised when a UUID format is invalid."""

    def __init__(self, uuid_str: str, field: str = "id"):
        message = f"Invalid UUID format: {uuid_str}"
        super().__init__(message, field=field)
        self.uuid_str = uuid_str


class PreconditionFailedError(HiringException):
    """Raised when an action's preconditions don't hold (no CV, closed job offer)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


class ConflictError(HiringException):
    """Raised when the resource already exists (duplicate application)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_409_CONFLICT, details)


class InvalidStateError(HiringException):
    """Raised when the resource's current state doesn't allow the action."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_409_CONFLICT, details)


class AlreadyCompletedError(HiringException):
    """Raised when a technical test has already been submitted."""

    def __init__(self, application_id: str, details: Optional[Dict[str, Any]] = None):
        message = f"Technical test already completed for application: {application_id}"
        super().__init__(message, status.HTTP_409_CONFLICT, details)
        self.application_id = application_id


class ForbiddenError(HiringException):
    """Raised when the requester does not own the resource."""

    def __init__(self, message: str = "Access denied", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_403_FORBIDDEN, details)


class TestExpiredError(HiringException):
    """Raised when a technical test is submitted after its deadline."""

    def __init__(self, application_id: str, details: Optional[Dict[str, Any]] = None):
        message = f"Technical test time limit exceeded for application: {application_id}"
        super().__init__(message, status.HTTP_410_GONE, details)
        self.application_id = application_id


# =============================================================================
# Exception Handlers
# =============================================================================

async def hiring_exception_handler(request: Request, exc: HiringException) -> JSONResponse:
    """Handle HiringException instances."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.message,
            "details": exc.details
        }
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions."""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=True)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "details": {}
        }
    )


# =============================================================================
# Helper Functions
# =============================================================================

def parse_uuid(uuid_str: str, field: str = "id") -> uuid.UUID:
    """
    Parse a UUID string and raise InvalidUUIDError if invalid.

    Example:
        >>> job_uuid = parse_uuid(job_offer_id, field="job_offer_id")
    """
    try:
        return uuid.UUID(uuid_str)
    except (ValueError, AttributeError, TypeError):
        raise InvalidUUIDError(uuid_str, field=field)


def register_exception_handlers(app):
    """
    Register all custom exception handlers with the FastAPI app.

    Call this during app initialization:
        from hiring.exceptions import register_exception_handlers
        register_exception_handlers(app)
    """
    app.add_exception_handler(HiringException, hiring_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
