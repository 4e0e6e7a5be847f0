"""Domain exceptions for the docshare application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.

The search parser and permission resolver never raise: malformed queries
degrade to free text or no-match sentinels, and missing grants are False.
"""

from typing import Any


class DocShareException(Exception):
    """Base exception for all docshare application errors.

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


class ValidationException(DocShareException):
    """Raised when input validation fails (e.g. unsupported language)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(DocShareException):
    """Raised when authentication is required but missing or invalid."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(DocShareException):
    """Raised when the caller lacks the permission required on a document."""

    def __init__(
        self,
        resource_id: str | None = None,
        permission: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource id, permission, and message.

        Args:
            resource_id: Optional id of the document the caller tried to act on.
            permission: Optional permission level that was required (e.g. 'WRITE').
            message: Human-readable message; default used when resource/permission omitted.
        """
        if resource_id and permission:
            message = f"Permission denied: {permission} on {resource_id}"
        details: dict[str, Any] = {}
        if resource_id:
            details["resource_id"] = resource_id
        if permission:
            details["permission"] = permission
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(DocShareException):
    """Raised when a requested resource is not found (or not visible to the caller)."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'document').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ShareAccessException(DocShareException):
    """Raised when an anonymous share link does not open the requested document.

    Served as 404, like ResourceNotFoundException, under its own error code.
    """

    def __init__(self, document_id: str, share_id: str) -> None:
        super().__init__(
            f"Share link does not grant access to document: {document_id}",
            "SHARE_ACCESS_DENIED",
            {"resource_id": document_id, "share_id": share_id},
        )


class TagNotFoundException(DocShareException):
    """Raised when a document is assigned a tag the caller cannot see."""

    def __init__(self, tag_id: str) -> None:
        super().__init__(
            f"Tag not found: {tag_id}",
            "TAG_NOT_FOUND",
            {"tag_id": tag_id},
        )


class SqlNotConfiguredException(DocShareException):
    """Raised when an operation requires Postgres but the engine could not be created."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
