"""
Rate limiter utility for API rate limiting.
"""
import threading
import time
from typing import Callable, Dict, Optional, Tuple


class RateLimiter:
    """
    Fixed-window request counter keyed by client.

    Each key gets ``max_requests`` hits per ``window_seconds``. The window
    starts on the first hit from that key and is reset once it elapses.
    Rejected hits are not counted.

    Example:
        limiter = RateLimiter(max_requests=100, window_seconds=60)
        if not limiter.hit(client_ip):
            ...  # reject with 429
    """

    def __init__(
        self,
        max_requests: int = 100,
        window_seconds: float = 60.0,
        max_tracked_keys: int = 10_000,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize rate limiter.

        Args:
            max_requests: Maximum number of requests allowed per window
            window_seconds: Length of the window in seconds
            max_tracked_keys: Number of keys above which expired windows are pruned
            clock: Monotonic time source, overridable in tests
        """
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.max_tracked_keys = max_tracked_keys
        self._clock = clock
        self._windows: Dict[str, Tuple[float, int]] = {}
        self._lock = threading.Lock()

    def hit(self, key: str) -> bool:
        """
        Record a request for ``key``.

        Returns:
            True if the request is within the limit, False if it must be rejected.
        """
        with self._lock:
            now = self._clock()
            if len(self._windows) > self.max_tracked_keys:
                self._prune(now)

            started_at, count = self._windows.get(key, (now, 0))
            if now - started_at >= self.window_seconds:
                started_at, count = now, 0

            if count >= self.max_requests:
                self._windows[key] = (started_at, count)
                return False

            self._windows[key] = (started_at, count + 1)
            return True

    def remaining(self, key: str) -> int:
        """Requests left for ``key`` in its current window."""
        with self._lock:
            window = self._windows.get(key)
            if window is None or self._clock() - window[0] >= self.window_seconds:
                return self.max_requests
            return max(self.max_requests - window[1], 0)

    def reset(self, key: Optional[str] = None):
        """Reset the counter for one key, or for every key."""
        with self._lock:
            if key is None:
                self._windows.clear()
            else:
                self._windows.pop(key, None)

    def _prune(self, now: float):
        expired = [
            key
            for key, (started_at, _) in self._windows.items()
            if now - started_at >= self.window_seconds
        ]
        for key in expired:
            del self._windows[key]
