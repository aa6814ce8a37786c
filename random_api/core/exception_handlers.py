"""Global exception handlers for consistent plain-text error responses.

Every endpoint answers in plain text, errors included: the body is the
human-readable message and the status code carries the error class.

Design:
- ValidationAppError / RequestValidationError → 400
- RateLimitAppError → 429
- Unexpected Exception → generic 500 (the process never crashes on a bad request)
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from random_api.core.errors import AppError, RateLimitAppError, ValidationAppError
from random_api.core.logging import get_request_id

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


def status_for(exc: AppError) -> int:
    """Map an application error to its HTTP status code."""
    if isinstance(exc, RateLimitAppError):
        return 429
    return 400


def build_error_response(exc: AppError, headers: dict[str, str] | None = None) -> PlainTextResponse:
    """Render an AppError as a plain-text response."""
    return PlainTextResponse(exc.message, status_code=status_for(exc), headers=headers)


async def app_error_handler(request: Request, exc: AppError) -> PlainTextResponse:
    """Handle domain application errors.

    Args:
        request: FastAPI request object.
        exc: AppError instance (or subclass).

    Returns:
        PlainTextResponse whose body is the error message.
    """
    status_code = status_for(exc)

    logger.info(
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "error_message": exc.message,
            "status_code": status_code,
            "request_path": request.url.path,
            "request_id": get_request_id(),
        },
    )

    return build_error_response(exc)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> PlainTextResponse:
    """Turn query-parameter coercion failures into 400 plain-text responses.

    Only the first error is reported, e.g.
    ``Invalid value for query parameter 'min': Input should be a valid integer``.
    """
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = first.get("loc", ())
    name = loc[-1] if loc else "request"
    reason = first.get("msg", "invalid value")

    error = ValidationAppError(
        code="invalid_parameter",
        message=f"Invalid value for query parameter '{name}': {reason}",
        details={"parameter": str(name)},
    )
    return await app_error_handler(request, error)


async def general_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
    """Fallback handler for unexpected errors.

    Logs the failure with its traceback and returns a generic message, so
    implementation details never reach the client.
    """
    logger.error(
        "unhandled_exception",
        exc_info=exc,
        extra={
            "error_type": type(exc).__name__,
            "request_path": request.url.path,
            "request_method": request.method,
            "request_id": get_request_id(),
        },
    )

    return PlainTextResponse(INTERNAL_ERROR_MESSAGE, status_code=500)


def setup_exception_handlers(app) -> None:
    """Register all exception handlers with the FastAPI app.

    Example:
        >>> from fastapi import FastAPI
        >>> app = FastAPI()
        >>> setup_exception_handlers(app)
    """
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(RequestValidationError)(request_validation_handler)
    app.exception_handler(Exception)(general_exception_handler)
