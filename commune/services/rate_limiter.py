"""Simple in-memory sliding window rate limiter.

Each caller key maps to a list of request timestamps (milliseconds).
Timestamps older than the window are pruned on every check, the current
request is appended, and the request is admitted while the bucket holds
no more than the configured maximum.  Rejected attempts stay recorded,
so a caller that keeps hammering the endpoint keeps its window full.

Enforcement is best effort: buckets live in process memory, are not
shared between instances and reset on restart.
"""

from __future__ import annotations

import time
from functools import lru_cache
from typing import Dict, List

from loguru import logger

from ..config.app_config import get_app_config

RATE_LIMIT_WINDOW_MS: int = 60_000
RATE_LIMIT_MAX_REQUESTS: int = 30


def _now_ms() -> float:
    return time.monotonic() * 1000


class SlidingWindowRateLimiter:
    """Per-caller sliding window admission control."""

    def __init__(
        self,
        window_ms: int = RATE_LIMIT_WINDOW_MS,
        max_requests: int = RATE_LIMIT_MAX_REQUESTS,
    ) -> None:
        self.window_ms = window_ms
        self.max_requests = max_requests
        self._buckets: Dict[str, List[float]] = {}

    def admit(self, caller_key: str, now: float | None = None) -> bool:
        """Record a request for ``caller_key`` and return whether it is allowed.

        Parameters
        ----------
        caller_key: str
            Identity the request is counted against.
        now: float, optional
            Evaluation instant in milliseconds.  Defaults to the monotonic
            clock, so wall-clock adjustments do not move the window.
        """
        if now is None:
            now = _now_ms()
        bucket = [t for t in self._buckets.get(caller_key, []) if now - t < self.window_ms]
        bucket.append(now)
        self._buckets[caller_key] = bucket

        if len(bucket) > self.max_requests:
            logger.warning(
                "Rate limit exceeded for caller={} ({} requests in {} ms)",
                caller_key,
                len(bucket),
                self.window_ms,
            )
            return False
        return True

    def bucket_size(self, caller_key: str) -> int:
        """Return the number of timestamps stored for ``caller_key``."""
        return len(self._buckets.get(caller_key, []))

    def reset(self) -> None:
        """Forget every recorded request."""
        self._buckets.clear()


@lru_cache()
def get_rate_limiter() -> SlidingWindowRateLimiter:
    """Dependency injector for the process-wide rate limiter.

    The lru_cache decorator ensures a single instance, and therefore a
    single bucket map, exists per process.
    """
    app_config = get_app_config()
    return SlidingWindowRateLimiter(
        window_ms=app_config.rate_limit_window_ms,
        max_requests=app_config.rate_limit_max_requests,
    )
