"""Per-client rate limiting middleware.

Every request, API or static, consumes one unit from its client's budget.
The client key is the ``X-Forwarded-For`` header when a proxy sets it,
otherwise the peer address.

Responses carry ``X-RateLimit-Limit``, ``X-RateLimit-Remaining`` and
``X-RateLimit-Reset`` (seconds until the window resets). Throttled requests
get 429 ``Too many requests`` plus ``Retry-After``.
"""

from __future__ import annotations

import logging

from fastapi import Request, Response

from random_api.adapters.rate_limit import AbstractRateLimiter, RateLimitResult, build_rate_limiter
from random_api.core.config import settings
from random_api.core.errors import RateLimitAppError
from random_api.core.exception_handlers import build_error_response
from random_api.core.logging import hash_client_key

logger = logging.getLogger(__name__)

FORWARDED_FOR_HEADER = "X-Forwarded-For"
RATE_LIMITED_MESSAGE = "Too many requests"


_limiter: AbstractRateLimiter | None = None
_limiter_config: tuple[str, int, int] | None = None


def get_rate_limiter() -> AbstractRateLimiter:
    """Return the process-wide rate limiter instance.

    The instance is cached in-module to preserve state across requests.
    If configuration changes (primarily in tests), the limiter is rebuilt.
    """

    global _limiter, _limiter_config

    config = (
        settings.app.rate_limit_strategy,
        settings.app.rate_limit_requests,
        settings.app.rate_limit_window_seconds,
    )

    if _limiter is None or _limiter_config != config:
        _limiter = build_rate_limiter(
            settings.app.rate_limit_strategy,
            limit=settings.app.rate_limit_requests,
            window_seconds=settings.app.rate_limit_window_seconds,
        )
        _limiter_config = config

    return _limiter


def reset_rate_limiter() -> None:
    """Forget all client windows; the next request builds a fresh limiter."""
    global _limiter, _limiter_config
    _limiter = None
    _limiter_config = None


def client_key(request: Request) -> str:
    """Build the limiter key for the current request."""

    forwarded = request.headers.get(FORWARDED_FOR_HEADER)
    if forwarded:
        return forwarded
    return request.client.host if request.client else "unknown"


def _rate_limit_headers(result: RateLimitResult) -> dict[str, str]:
    headers = {
        "X-RateLimit-Limit": str(result.limit),
        "X-RateLimit-Remaining": str(result.remaining),
        "X-RateLimit-Reset": str(result.reset_after_seconds),
    }
    if result.retry_after_seconds is not None:
        headers["Retry-After"] = str(result.retry_after_seconds)
    return headers


async def rate_limit_middleware(request: Request, call_next) -> Response:
    """HTTP middleware enforcing the per-client request quota.

    Args:
        request: The incoming HTTP request object.
        call_next: The next middleware/route handler in the stack.

    Returns:
        Response: 429 when the client's window is exhausted, otherwise the
            downstream response with rate limit headers added.
    """

    if not settings.app.rate_limit_enabled:
        return await call_next(request)

    key = client_key(request)
    result = get_rate_limiter().consume(key)
    headers = _rate_limit_headers(result) if settings.app.rate_limit_include_headers else {}

    if not result.allowed:
        logger.warning(
            "rate_limit.exceeded",
            extra={
                "key_hash": hash_client_key(key),
                "limit": result.limit,
                "remaining": result.remaining,
                "window_s": settings.app.rate_limit_window_seconds,
                "retry_after_s": result.retry_after_seconds,
            },
        )
        error = RateLimitAppError(
            code="rate_limited",
            message=RATE_LIMITED_MESSAGE,
            details={"retry_after": result.retry_after_seconds or 0},
        )
        return build_error_response(error, headers=headers)

    response: Response = await call_next(request)
    for name, value in headers.items():
        response.headers.setdefault(name, value)
    return response
