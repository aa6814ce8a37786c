"""In-memory window rate limiters.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Thread-safe: a lock guards the per-key state map.
- Keys idle for longer than two windows are pruned on window rollover.
"""

from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass
from typing import Callable

from random_api.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult


@dataclass
class _WindowState:
    window_start: int
    count: int
    previous_count: int = 0


class _InMemoryRateLimiter(AbstractRateLimiter):
    """Shared bookkeeping for the window strategies below."""

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the limiter.

        Args:
            limit: Maximum number of allowed units per window.
            window_seconds: Size of the window in seconds.
            clock: Time source function returning UNIX time in seconds.

        Raises:
            ValueError: If limit or window_seconds are invalid.
        """
        super().__init__(limit=limit, window_seconds=window_seconds)
        self._clock = clock
        self._lock = threading.RLock()
        self._state_by_key: dict[str, _WindowState] = {}
        self._last_pruned_window: int | None = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._state_by_key)

    def _get_window_bounds(self, now: float) -> tuple[int, int]:
        """Return (window_start, reset_at) epoch seconds for ``now``."""
        window_start = int(now // self._window_seconds) * self._window_seconds
        return window_start, window_start + self._window_seconds

    def _prune(self, window_start: int) -> None:
        """Drop keys whose last activity is older than the previous window."""
        if self._last_pruned_window == window_start:
            return
        horizon = window_start - self._window_seconds
        stale = [k for k, s in self._state_by_key.items() if s.window_start < horizon]
        for key in stale:
            del self._state_by_key[key]
        self._last_pruned_window = window_start

    def _roll(self, key: str, window_start: int) -> _WindowState:
        """Fetch the state for ``key``, advancing it into the current window."""
        state = self._state_by_key.get(key)
        if state is None:
            state = _WindowState(window_start=window_start, count=0)
            self._state_by_key[key] = state
        elif state.window_start != window_start:
            adjacent = state.window_start == window_start - self._window_seconds
            state.previous_count = state.count if adjacent else 0
            state.count = 0
            state.window_start = window_start
        return state

    def _used(self, state: _WindowState, now: float) -> int:
        """Units counted against the key at ``now``."""
        raise NotImplementedError

    def consume(self, key: str, *, cost: int = 1) -> RateLimitResult:
        """Consume rate limit budget for the provided key.

        Raises:
            ValueError: If key is empty or cost is invalid.
        """
        if cost < 1:
            raise ValueError("cost must be >= 1")
        if not key:
            raise ValueError("key must be a non-empty string")

        now = self._clock()
        window_start, reset_at = self._get_window_bounds(now)
        reset_after = max(0, int(math.ceil(reset_at - now)))

        with self._lock:
            self._prune(window_start)
            state = self._roll(key, window_start)
            used = self._used(state, now)

            if used + cost <= self._limit:
                state.count += cost
                return RateLimitResult(
                    allowed=True,
                    limit=self._limit,
                    remaining=max(0, self._limit - used - cost),
                    reset_at=reset_at,
                    reset_after_seconds=reset_after,
                    retry_after_seconds=None,
                )

            return RateLimitResult(
                allowed=False,
                limit=self._limit,
                remaining=max(0, self._limit - used),
                reset_at=reset_at,
                reset_after_seconds=reset_after,
                retry_after_seconds=reset_after,
            )


class InMemoryFixedWindowRateLimiter(_InMemoryRateLimiter):
    """Limit requests per key within aligned fixed windows.

    Example: with 180 requests per 60 seconds, a client may spend its whole
    budget in the last second of one window and again in the first second
    of the next.
    """

    def _used(self, state: _WindowState, now: float) -> int:
        return state.count


class InMemorySlidingWindowRateLimiter(_InMemoryRateLimiter):
    """Approximate a sliding window from two adjacent fixed windows.

    The previous window's count is weighted by the fraction of it still
    covered by a window of the same length ending at ``now``:

        used = floor(previous * (1 - elapsed / window)) + current

    This smooths the burst allowed across a window boundary by the fixed
    strategy while keeping only two counters per key.
    """

    def _used(self, state: _WindowState, now: float) -> int:
        elapsed = now - state.window_start
        weight = max(0.0, 1.0 - elapsed / self._window_seconds)
        return int(state.previous_count * weight) + state.count


def build_rate_limiter(
    strategy: str,
    *,
    limit: int,
    window_seconds: int,
    clock: Callable[[], float] = time.time,
) -> AbstractRateLimiter:
    """Create a limiter for ``strategy`` ("sliding" or "fixed")."""
    if strategy == "sliding":
        return InMemorySlidingWindowRateLimiter(
            limit=limit, window_seconds=window_seconds, clock=clock
        )
    if strategy == "fixed":
        return InMemoryFixedWindowRateLimiter(
            limit=limit, window_seconds=window_seconds, clock=clock
        )
    raise ValueError(f"unknown rate limit strategy: {strategy!r}")
