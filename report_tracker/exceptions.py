"""Application exception hierarchy.

Every exception carries the HTTP status and machine-readable error code
used by the global exception handlers to build the error response.
"""

from typing import Any, Optional


class BaseAPIException(Exception):
    """Base class for all API-facing exceptions."""

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if error_code is not None:
            self.error_code = error_code
        self.details = details or {}
        super().__init__(message)


# ============================================================================
# Resource errors
# ============================================================================


class ResourceNotFoundError(BaseAPIException):
    """Referenced resource does not exist."""

    status_code = 404
    error_code = "RESOURCE_NOT_FOUND"

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            message=f"{resource_type} not found with id: {resource_id}",
            details={"resource_type": resource_type, "resource_id": resource_id},
        )


class ReportAccessDeniedError(BaseAPIException):
    """Report exists but belongs to another user."""

    status_code = 403
    error_code = "REPORT_ACCESS_DENIED"

    def __init__(self):
        super().__init__(message="You don't have permission to access this report")


class InvalidStatusTransitionError(BaseAPIException):
    """Requested status change is not reachable from the current status."""

    status_code = 400
    error_code = "INVALID_STATUS_TRANSITION"

    def __init__(self, current_status: str, requested_status: str, allowed: list[str]):
        super().__init__(
            message=f"Cannot transition from {current_status} to {requested_status}",
            details={
                "current_status": current_status,
                "requested_status": requested_status,
                "allowed_transitions": allowed,
            },
        )


# ============================================================================
# Storage errors
# ============================================================================


class StorageError(BaseAPIException):
    """Artifact write, read or delete failed."""

    status_code = 500
    error_code = "STORAGE_ERROR"

    def __init__(self, message: str, location: Optional[str] = None):
        details = {"location": location} if location else {}
        super().__init__(message=message, details=details)


class DatabaseError(BaseAPIException):
    """Database operation failed."""

    status_code = 500
    error_code = "DATABASE_ERROR"

    def __init__(self, message: str = "Database operation failed"):
        super().__init__(message=message)


# ============================================================================
# Authentication errors
# ============================================================================


class MissingTokenError(BaseAPIException):
    """No bearer token supplied."""

    status_code = 401
    error_code = "MISSING_TOKEN"

    def __init__(self):
        super().__init__(message="Authentication required")


class InvalidTokenError(BaseAPIException):
    """Bearer token is malformed, expired or untrusted."""

    status_code = 401
    error_code = "INVALID_TOKEN"

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message=message)


class InvalidCredentialsError(BaseAPIException):
    """Login failed. Message is identical for unknown email and wrong password."""

    status_code = 401
    error_code = "INVALID_CREDENTIALS"

    def __init__(self):
        super().__init__(message="Invalid email or password")
