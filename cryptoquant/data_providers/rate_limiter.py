"""
Sliding-window rate limiter for upstream requests.
"""
import logging
import time
from collections import deque
from typing import Any, Callable, Deque, Dict

from .interfaces import RateLimitExceededError

logger = logging.getLogger(__name__)


class SlidingWindowRateLimiter:
    """
    Allows at most ``max_requests`` requests in any ``window_seconds`` span.
    
    Timestamps of recent requests are kept and dropped once they fall out
    of the window.
    """
    
    def __init__(
        self,
        max_requests: int = 30,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_requests <= 0:
            raise ValueError("max_requests must be positive")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._requests: Deque[float] = deque()
    
    def _cleanup(self, now: float) -> None:
        cutoff = now - self.window_seconds
        while self._requests and self._requests[0] <= cutoff:
            self._requests.popleft()
    
    def can_make_request(self) -> bool:
        self._cleanup(self._clock())
        return len(self._requests) < self.max_requests
    
    def record_request(self) -> None:
        """
        Record a request.
        
        Raises:
            RateLimitExceededError: the window is already full
        """
        now = self._clock()
        self._cleanup(now)
        if len(self._requests) >= self.max_requests:
            retry_after = self.wait_time()
            logger.warning(
                f"Rate limit exceeded: {self.max_requests} requests per {self.window_seconds}s"
            )
            raise RateLimitExceededError(self.max_requests, self.window_seconds, retry_after)
        self._requests.append(now)
    
    def request_count(self) -> int:
        self._cleanup(self._clock())
        return len(self._requests)
    
    def remaining_requests(self) -> int:
        return max(0, self.max_requests - self.request_count())
    
    def wait_time(self) -> float:
        """Seconds until the next request is allowed (0 if allowed now)."""
        now = self._clock()
        self._cleanup(now)
        if len(self._requests) < self.max_requests:
            return 0.0
        return max(0.0, self._requests[0] + self.window_seconds - now)
    
    def get_stats(self) -> Dict[str, Any]:
        current = self.request_count()
        return {
            "current_requests": current,
            "max_requests": self.max_requests,
            "remaining_requests": max(0, self.max_requests - current),
            "window_seconds": self.window_seconds,
            "wait_time": self.wait_time(),
            "request_rate": current / self.window_seconds,
        }
