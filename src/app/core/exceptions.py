"""Centralized exception hierarchy and handlers for the application.

This module provides a unified exception system that maps all application errors
to appropriate HTTP status codes and response formats. Services and routes
raise exceptions from this hierarchy rather than HTTPException directly.

Exception Hierarchy:
    AppException (base)
    ├── ValidationError (400)
    ├── AuthenticationError (401)
    ├── NotFoundError (404)
    └── ConflictError (409)

Usage in Services:
    from app.core.exceptions import ValidationError

    def check_rate(rate: Decimal) -> None:
        if rate <= 0:
            raise ValidationError(errors={"rate": ["Rate must be greater than zero."]})

Usage in Routes:
    @router.delete("/{rate_id}")
    async def delete_rate(rate_id: int):
        rate = await repo.get_by_id_and_user(rate_id, user.id)
        if not rate:
            raise NotFoundError("Exchange rate not found")

The exception handler converts these to JSON responses.
"""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppException(Exception):
    """
    Base exception class for all application errors.

    Attributes:
        status_code: HTTP status code for this error type
        detail: User-facing error message
        error_code: Machine-readable error code (optional)
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "Internal server error"
    error_code: str | None = None

    def __init__(
        self,
        detail: str | None = None,
        *,
        error_code: str | None = None,
    ) -> None:
        """
        Initialize the exception.

        Args:
            detail: Custom error message (overrides class default)
            error_code: Machine-readable error identifier
        """
        self.detail = detail or self.__class__.detail
        self.error_code = error_code or self.__class__.error_code
        super().__init__(self.detail)


class ValidationError(AppException):
    """
    Raised when input validation fails.

    Carries a field map so clients can attach each message to the input that
    caused it, e.g. ``{"rate": ["Rate must be greater than zero."]}``.
    Maps to HTTP 400 Bad Request.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Validation error"
    error_code = "VALIDATION_ERROR"

    def __init__(
        self,
        detail: str | None = None,
        *,
        errors: dict[str, list[str]] | None = None,
        error_code: str | None = None,
    ) -> None:
        self.errors: dict[str, list[str]] = errors or {}
        super().__init__(detail, error_code=error_code)

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        """Build a validation error for a single field."""
        return cls(message, errors={field: [message]})


class AuthenticationError(AppException):
    """
    Raised when authentication fails.

    Maps to HTTP 401 Unauthorized.
    """

    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Authentication failed"
    error_code = "AUTHENTICATION_ERROR"


class NotFoundError(AppException):
    """
    Raised when a requested resource is not found.

    Also used when the resource exists but belongs to another user, so that
    callers cannot tell the two cases apart.
    Maps to HTTP 404 Not Found.
    """

    status_code = status.HTTP_404_NOT_FOUND
    detail = "Resource not found"
    error_code = "NOT_FOUND"


class ConflictError(AppException):
    """
    Raised when there's a conflict in the operation.

    Maps to HTTP 409 Conflict.
    """

    status_code = status.HTTP_409_CONFLICT
    detail = "Resource conflict"
    error_code = "CONFLICT"


async def app_exception_handler(
    request: Request,
    exc: AppException,
) -> JSONResponse:
    """
    Handle application exceptions and convert to HTTP responses.

    Response Format:
        {
            "detail": "User-facing error message",
            "error_code": "MACHINE_READABLE_CODE",
            "errors": {"field": ["message"]}  # validation errors only
        }
    """
    if exc.status_code >= 500:
        logger.error(
            f"{exc.__class__.__name__}: {exc.detail}",
            exc_info=True,
            extra={
                "status_code": exc.status_code,
                "error_code": exc.error_code,
                "request_path": request.url.path,
            },
        )
    else:
        logger.warning(
            f"{exc.__class__.__name__}: {exc.detail}",
            extra={
                "status_code": exc.status_code,
                "error_code": exc.error_code,
                "request_path": request.url.path,
            },
        )

    response_body: dict[str, Any] = {"detail": exc.detail}
    if exc.error_code:
        response_body["error_code"] = exc.error_code
    if isinstance(exc, ValidationError) and exc.errors:
        response_body["errors"] = exc.errors

    headers = None
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=exc.status_code,
        content=response_body,
        headers=headers,
    )
