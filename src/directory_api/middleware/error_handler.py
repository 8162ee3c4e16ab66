"""Global error handling that maps failures to a uniform error payload.

Every error response has the shape::

    {"timestamp": ..., "status": 404, "error": "Not Found", "message": ...}

with an extra ``validation_errors`` field map on 400 responses.
"""

import logging
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from directory_api.config import get_settings
from directory_api.exceptions import (
    ConflictError,
    DirectoryAPIError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from directory_api.utils.secure_logging import sanitize_exception_message

logger = logging.getLogger(__name__)

VALIDATION_FAILED = "Validation Failed"

# Safe error messages that can be shown to users
SAFE_ERROR_MESSAGES = {
    400: "Invalid request",
    401: "Authentication required",
    403: "Access denied",
    404: "Resource not found",
    405: "Method not allowed",
    409: "Conflict with existing resource",
    429: "Too many requests",
    500: "Internal server error",
    503: "Service temporarily unavailable",
}

# HTTPException details that don't reveal internal implementation details
ALLOWED_ERROR_PATTERNS = [
    "Authentication required",
    "Invalid or expired token",
    "Invalid service credentials",
    "Not Found",
    "Method Not Allowed",
]


def _get_cors_headers(request: Request) -> dict[str, str]:
    """Get CORS headers for error responses.

    Exception handlers run outside the CORS middleware, so allowed origins
    have to be echoed here too.

    Args:
        request: The incoming request

    Returns:
        Dict of CORS headers to add to the response
    """
    origin = request.headers.get("origin")
    if not origin:
        return {}

    if origin in get_settings().cors_origins_list:
        return {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Credentials": "true",
        }

    return {}


def build_error_body(
    status_code: int,
    message: str,
    error: str | None = None,
    validation_errors: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Build the error payload shared by all handlers.

    Args:
        status_code: HTTP status code
        message: Human-readable message
        error: Short label; defaults to the HTTP reason phrase
        validation_errors: Optional field name to message map

    Returns:
        JSON-serializable error body
    """
    body: dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "status": status_code,
        "error": error or HTTPStatus(status_code).phrase,
        "message": message,
    }
    if validation_errors is not None:
        body["validation_errors"] = validation_errors
    return body


def _error_response(
    request: Request,
    status_code: int,
    message: str,
    error: str | None = None,
    validation_errors: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=build_error_body(status_code, message, error, validation_errors),
        headers=_get_cors_headers(request),
    )


def is_safe_error_message(message: str) -> bool:
    """Check if an error message is safe to expose to users.

    Args:
        message: Error message to check

    Returns:
        True if message is safe to expose
    """
    message_lower = message.lower()
    return any(pattern.lower() in message_lower for pattern in ALLOWED_ERROR_PATTERNS)


def _field_errors_from_pydantic(errors: list[dict[str, Any]]) -> dict[str, str]:
    """Collapse pydantic error entries to one message per field."""
    field_errors: dict[str, str] = {}
    for error in errors:
        loc = error.get("loc", ())
        # Skip the "body"/"query"/"path" prefix
        field = ".".join(str(part) for part in loc[1:]) if len(loc) > 1 else "request"
        message = str(error.get("msg", "Invalid value"))
        message = message.removeprefix("Value error, ")
        field_errors.setdefault(field, message)
    return field_errors


async def directory_api_exception_handler(
    request: Request, exc: DirectoryAPIError
) -> JSONResponse:
    """Handle domain exceptions raised by services and the front door.

    Args:
        request: FastAPI request
        exc: Domain exception

    Returns:
        JSONResponse with the mapped status code
    """
    if isinstance(exc, NotFoundError):
        logger.info("Not found on %s %s: %s", request.method, request.url.path, exc.message)
        return _error_response(request, status.HTTP_404_NOT_FOUND, exc.message)

    if isinstance(exc, ConflictError):
        logger.info("Conflict on %s %s: %s", request.method, request.url.path, exc.message)
        return _error_response(request, status.HTTP_409_CONFLICT, exc.message)

    if isinstance(exc, UnauthorizedError):
        logger.warning("Role denied on %s %s", request.method, request.url.path)
        return _error_response(request, status.HTTP_403_FORBIDDEN, exc.message)

    if isinstance(exc, ValidationError):
        return _error_response(
            request,
            status.HTTP_400_BAD_REQUEST,
            exc.message,
            error=VALIDATION_FAILED,
            validation_errors=exc.field_errors,
        )

    return await generic_exception_handler(request, exc)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors as 400 with a field map.

    Args:
        request: FastAPI request
        exc: Validation exception

    Returns:
        JSONResponse with field errors
    """
    field_errors = _field_errors_from_pydantic(list(exc.errors()))
    logger.warning("Validation error for %s: %s", request.url.path, sorted(field_errors))

    return await directory_api_exception_handler(request, ValidationError(field_errors))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions with sanitized messages.

    Args:
        request: FastAPI request
        exc: HTTP exception

    Returns:
        JSONResponse with sanitized error
    """
    detail = exc.detail
    if get_settings().debug or (isinstance(detail, str) and is_safe_error_message(detail)):
        message = str(detail)
    else:
        message = SAFE_ERROR_MESSAGES.get(exc.status_code, "Request failed")

    response = _error_response(request, exc.status_code, message)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle rate limit rejections, including a Retry-After header."""
    response = _error_response(
        request, status.HTTP_429_TOO_MANY_REQUESTS, SAFE_ERROR_MESSAGES[429]
    )
    response.headers["Retry-After"] = "60"
    return response


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle SQLAlchemy exceptions without leaking database details.

    A unique or foreign key violation that escaped a service still means the
    request conflicts with stored state, so it becomes a 409.

    Args:
        request: FastAPI request
        exc: SQLAlchemy exception

    Returns:
        JSONResponse with safe error
    """
    if isinstance(exc, IntegrityError):
        logger.warning(
            "Integrity error for %s %s: %s",
            request.method,
            request.url.path,
            sanitize_exception_message(exc),
        )
        return _error_response(request, status.HTTP_409_CONFLICT, SAFE_ERROR_MESSAGES[409])

    logger.error("Database error for %s: %s", request.url.path, exc, exc_info=True)
    message = "Database error occurred"
    if get_settings().debug:
        message = f"Database error ({type(exc).__name__})"
    return _error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, message)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without leaking information.

    Args:
        request: FastAPI request
        exc: Unexpected exception

    Returns:
        JSONResponse with generic error
    """
    logger.error("Unhandled exception for %s: %s", request.url.path, exc, exc_info=True)

    response = _error_response(
        request, status.HTTP_500_INTERNAL_SERVER_ERROR, SAFE_ERROR_MESSAGES[500]
    )
    if get_settings().debug:
        body = build_error_body(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
        body["type"] = type(exc).__name__
        response = JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=body,
            headers=_get_cors_headers(request),
        )
    return response
