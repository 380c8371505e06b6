"""In-memory sliding window rate limiting."""

import logging
import math
import threading
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitState:
    """Outcome of a rate limit check, in the terms of the RateLimit-* headers."""

    allowed: bool
    limit: int
    remaining: int
    reset_after: int
    retry_after: int = 0

    def headers(self) -> dict[str, str]:
        """Standard ``RateLimit-*`` headers for this state."""
        return {
            "RateLimit-Limit": str(self.limit),
            "RateLimit-Remaining": str(self.remaining),
            "RateLimit-Reset": str(self.reset_after),
        }


class SlidingWindowLimiter:
    """Per-client limit of ``max_requests`` in any ``window`` seconds.

    Accepted request times are kept per client; a request is rejected while
    ``max_requests`` of them fall inside the trailing window.
    """

    def __init__(
        self,
        max_requests: int,
        window: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max_requests
        self.window = window
        self._clock = clock
        self._requests: dict[str, deque[float]] = {}
        self._lock = threading.Lock()

    def check(self, client_id: str) -> RateLimitState:
        """Record a request for the client if it is within the limit."""
        now = self._clock()
        with self._lock:
            self._prune(now)
            accepted = self._requests.setdefault(client_id, deque())

            if len(accepted) >= self.max_requests:
                retry_after = max(1, math.ceil(accepted[0] + self.window - now))
                logger.warning(f"Rate limit exceeded for client: {client_id}")
                return RateLimitState(
                    allowed=False,
                    limit=self.max_requests,
                    remaining=0,
                    reset_after=retry_after,
                    retry_after=retry_after,
                )

            accepted.append(now)
            return RateLimitState(
                allowed=True,
                limit=self.max_requests,
                remaining=self.max_requests - len(accepted),
                reset_after=math.ceil(accepted[0] + self.window - now),
            )

    def _prune(self, now: float) -> None:
        cutoff = now - self.window
        for client_id in list(self._requests):
            accepted = self._requests[client_id]
            while accepted and accepted[0] <= cutoff:
                accepted.popleft()
            if not accepted:
                del self._requests[client_id]
