"""Rate limiting adapters.

In-memory fixed and sliding window limiters behind a small interface, so a
shared store could replace them without touching the HTTP layer.
"""

from random_api.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from random_api.adapters.rate_limit.in_memory import (
    InMemoryFixedWindowRateLimiter,
    InMemorySlidingWindowRateLimiter,
    build_rate_limiter,
)

__all__ = [
    "AbstractRateLimiter",
    "RateLimitResult",
    "InMemoryFixedWindowRateLimiter",
    "InMemorySlidingWindowRateLimiter",
    "build_rate_limiter",
]
