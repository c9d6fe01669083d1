"""Domain exceptions for the space portal.

Defines domain-level exceptions that represent business rule violations
and integrity failures. These exceptions are independent of infrastructure
concerns. Presentation layer maps them to HTTP responses in exception
handlers.

Visitor-facing access refusals are not exceptions: they are returned as
AccessDenied results (see app.application.dtos.access).
"""

from typing import Any


class PortalException(Exception):
    """Base exception for all space portal errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(PortalException):
    """Raised when input validation fails (e.g. invalid format or duplicate value)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(PortalException):
    """Raised when a staff token or portal session is missing or invalid."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(PortalException):
    """Raised when the caller lacks access to the requested resource."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'space').
            action: Optional action that was attempted (e.g. 'update').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(PortalException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'space_member').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class SpaceNotFoundException(PortalException):
    """Raised when a space id does not resolve to a space (hard 404 upstream)."""

    def __init__(self, space_id: str) -> None:
        super().__init__(
            "Space not found",
            "SPACE_NOT_FOUND",
            {"space_id": space_id},
        )


class InvalidTransitionException(PortalException):
    """Raised when a status change is not in the allowed transition table."""

    def __init__(self, from_status: str, to_status: str) -> None:
        """Initialize with the rejected edge.

        Args:
            from_status: Current persisted status.
            to_status: Requested status.
        """
        super().__init__(
            f"Cannot transition from {from_status} to {to_status}",
            "INVALID_TRANSITION",
            {"from": from_status, "to": to_status},
        )


class EncryptionIntegrityException(PortalException):
    """Raised when an encrypted secret is malformed or fails tag verification.

    Never caught to substitute a value; callers may only log and record it.
    """

    def __init__(self, message: str = "Encrypted secret failed integrity check") -> None:
        super().__init__(message, "ENCRYPTION_INTEGRITY_ERROR")


class SqlNotConfiguredException(PortalException):
    """Raised when an operation requires the database but DATABASE_URL is not usable."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
