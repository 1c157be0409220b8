"""Application error taxonomy.

Every error raised by services and the access-control layer derives from
AppError and carries the HTTP status it maps to. The exception handlers
registered in ivrflow.main turn them into ``{"error": message}`` bodies.
"""

from __future__ import annotations

from typing import Any

from fastapi import status

# =============================================================================
# Base class
# =============================================================================


class AppError(Exception):
    """Base application error.

    Attributes:
        message: Human-readable message returned to the client.
        status_code: HTTP status code the error maps to.
        details: Optional structured context (logged, not returned).
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# Authentication / authorisation
# =============================================================================


class UnauthenticatedError(AppError):
    """Raised when the request carries no valid bearer token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class InvalidCredentialsError(UnauthenticatedError):
    """Raised when login credentials do not match a user."""

    default_message = "Invalid email or password"


class UserNotFoundError(AppError):
    """Raised when a valid token references an account that no longer exists."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "User not found"


class ForbiddenError(AppError):
    """Raised when the caller does not own the target resource."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


# =============================================================================
# Resources
# =============================================================================


class ResourceNotFoundError(AppError):
    """Raised when the target resource does not exist.

    Example:
        >>> raise ResourceNotFoundError("flow", "c0ffee")
    """

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource_type: str, resource_id: Any) -> None:
        self.resource_type = resource_type
        self.resource_id = str(resource_id)
        super().__init__(
            f"{resource_type.capitalize()} not found",
            details={"resource_type": resource_type, "resource_id": self.resource_id},
        )


class InputValidationError(AppError):
    """Raised when a request is missing required fields or is inconsistent."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class VersionConflictError(AppError):
    """Raised when an optimistic-concurrency version does not match."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Version conflict: flow is at version {actual}, got {expected}",
            details={"expected": expected, "actual": actual},
        )


class StorageError(AppError):
    """Raised when the backing store fails to read or write."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Storage failure"


__all__ = [
    "AppError",
    "ForbiddenError",
    "InputValidationError",
    "InvalidCredentialsError",
    "ResourceNotFoundError",
    "StorageError",
    "UnauthenticatedError",
    "UserNotFoundError",
    "VersionConflictError",
]
