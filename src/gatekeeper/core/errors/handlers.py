"""Exception handlers for the HTTP app.

Failed permission checks are rendered with the authorization failure
body (``status``, ``success``, ``type``, ``message``). Everything else
becomes an RFC 7807 problem document.

See: https://tools.ietf.org/html/rfc7807
"""

from typing import TYPE_CHECKING, Any, cast

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from gatekeeper.config import settings
from gatekeeper.core.errors.exceptions import AppException, PermissionCheckError


if TYPE_CHECKING:
    from starlette.types import ExceptionHandler


logger = structlog.get_logger()


class FieldError(BaseModel):
    """One invalid request field."""

    field: str
    message: str
    type: str | None = None


class ProblemDetail(BaseModel):
    """RFC 7807 problem document.

    ``type`` points at the error code's page under ``api_docs_base_url``;
    ``trace_id`` is the request id set by ``RequestIdMiddleware``.
    """

    type: str
    title: str
    status: int
    detail: str
    instance: str | None = None
    errors: list[FieldError] | None = None
    trace_id: str | None = None

    model_config = {"extra": "allow"}


def _problem_response(
    request: Request,
    status_code: int,
    error_code: str,
    detail: str,
    errors: list[FieldError] | None = None,
    extra: dict[str, Any] | None = None,
) -> JSONResponse:
    content = ProblemDetail(
        type=f"{settings.api_docs_base_url}/errors/{error_code}",
        title=error_code.replace("_", " ").title(),
        status=status_code,
        detail=detail,
        instance=request.url.path,
        errors=errors,
        trace_id=getattr(request.state, "trace_id", None),
    ).model_dump(exclude_none=True)

    # Extra details never shadow the standard members
    for key, value in (extra or {}).items():
        content.setdefault(key, value)

    return JSONResponse(status_code=status_code, content=content)


async def permission_check_exception_handler(
    request: Request, exc: PermissionCheckError
) -> JSONResponse:
    """Render a failed permission check as its authorization failure body."""
    logger.info(
        "permission_check_rejected",
        status_code=exc.status_code,
        message=exc.message,
        path=request.url.path,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.failure.model_dump())


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render a domain error, merging its details into the problem document."""
    logger.warning(
        "app_exception",
        error_code=exc.error_code,
        status_code=exc.status_code,
        path=request.url.path,
    )
    return _problem_response(
        request, exc.status_code, exc.error_code, exc.message, extra=exc.details
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation failures with one entry per field."""
    errors = []
    for error in exc.errors():
        parts = [str(p) for p in error.get("loc", ()) if p not in ("body", "query")]
        errors.append(
            FieldError(
                field=".".join(parts) or "unknown",
                message=error.get("msg", "Invalid value"),
                type=error.get("type"),
            )
        )

    logger.warning("validation_error", path=request.url.path, error_count=len(errors))
    return _problem_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "validation_error",
        "Request validation failed",
        errors=errors,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log an unexpected error and hide its details from the client."""
    logger.exception(
        "unhandled_exception",
        path=request.url.path,
        error_type=type(exc).__name__,
    )
    return _problem_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "internal_error",
        "An unexpected error occurred",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every handler to ``app``.

    Starlette picks the handler of the closest class in the MRO, so
    ``PermissionCheckError`` keeps the authorization failure body.
    """
    app.add_exception_handler(
        PermissionCheckError,
        cast("ExceptionHandler", permission_check_exception_handler),
    )
    app.add_exception_handler(
        AppException, cast("ExceptionHandler", app_exception_handler)
    )
    app.add_exception_handler(
        RequestValidationError, cast("ExceptionHandler", validation_exception_handler)
    )
    app.add_exception_handler(Exception, generic_exception_handler)
