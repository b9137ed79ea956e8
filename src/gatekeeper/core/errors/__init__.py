"""Error handling module with RFC 7807 Problem Details."""

from gatekeeper.core.errors.exceptions import (
    AppException,
    NotFoundError,
    PermissionCheckError,
    ValidationError,
)
from gatekeeper.core.errors.handlers import (
    FieldError,
    ProblemDetail,
    register_exception_handlers,
)


__all__ = [
    # Exceptions
    "AppException",
    # Handlers
    "FieldError",
    "NotFoundError",
    "PermissionCheckError",
    "ProblemDetail",
    "ValidationError",
    "register_exception_handlers",
]
