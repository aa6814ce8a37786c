"""HTTP middleware for request correlation and timing.

Usage:
    app.middleware("http")(recovery_middleware)
    app.middleware("http")(request_id_middleware)
"""

from __future__ import annotations

import logging
import time
import uuid

from fastapi import Request, Response

from random_api.core.config import settings
from random_api.core.exception_handlers import general_exception_handler
from random_api.core.logging import clear_request_id, set_request_id

logger = logging.getLogger(__name__)


async def request_id_middleware(request: Request, call_next) -> Response:
    """Propagate or generate a request id and time the request.

    The id comes from the configured request-id header when the client
    sends one, otherwise a fresh UUID4. It is bound to the logging context
    for the lifetime of the request and echoed back on the response next
    to ``X-Request-Duration-ms``.

    Args:
        request: The incoming HTTP request object.
        call_next: The next middleware/route handler in the stack.

    Returns:
        Response: The downstream response with correlation headers added.
    """

    header_name = settings.log.request_id_header
    request_id = request.headers.get(header_name) or str(uuid.uuid4())
    set_request_id(request_id)
    start = time.perf_counter()
    try:
        response: Response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.debug(
            "request.completed",
            extra={
                "request_method": request.method,
                "request_path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
    finally:
        clear_request_id()

    response.headers[header_name] = request_id
    response.headers.setdefault("X-Request-Duration-ms", f"{duration_ms:.2f}")
    return response


async def recovery_middleware(request: Request, call_next) -> Response:
    """Turn unexpected route errors into a generic 500.

    Installed innermost, so the recovered response still passes through the
    request-id, rate-limit and CORS layers on its way out.
    """

    try:
        return await call_next(request)
    except Exception as exc:
        return await general_exception_handler(request, exc)
