"""Domain exceptions for the application.

These exceptions represent business-logic errors and are automatically
converted to HTTP responses by the exception handlers.
"""

from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from gatekeeper.core.permissions.schemas import AuthFailure


class AppException(Exception):
    """Base exception for all application errors.

    All domain exceptions should inherit from this class.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for clients
        status_code: HTTP status code for the response
        details: Additional error details
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AppException):
    """Raised when input data fails validation.

    Example:
        raise ValidationError(
            "Invalid permission name",
            errors=[{"field": "name", "message": "Empty segment"}]
        )
    """

    message = "Validation error"
    error_code = "validation_error"
    status_code = 422

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if errors:
            details["errors"] = errors
        super().__init__(message=message, details=details, **kwargs)


class NotFoundError(AppException):
    """Raised when a requested resource is not found.

    Example:
        raise NotFoundError("Role not found", resource="role", resource_id=name)
    """

    message = "Resource not found"
    error_code = "not_found"
    status_code = 404

    def __init__(
        self,
        message: str | None = None,
        resource: str | None = None,
        resource_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if resource:
            details["resource"] = resource
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message=message, details=details, **kwargs)


class PermissionCheckError(AppException):
    """Raised by route dependencies when an authorization check fails.

    Carries the structured failure produced by the authorization
    middleware; the status code follows the failure (401, 403 or 500).

    Example:
        result = await handler(request, response)
        if isinstance(result, AuthFailure):
            raise PermissionCheckError(result)
    """

    error_code = "permission_check_failed"

    def __init__(self, failure: "AuthFailure") -> None:
        self.failure = failure
        self.status_code = failure.status
        super().__init__(message=failure.message)
