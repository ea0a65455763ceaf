"""Per-tool sliding-window rate limiting.

Model:
    One ordered timestamp sequence per key (tool name). On each `check`, entries
    older than the window are pruned; the call fails when the remaining count
    has reached capacity, otherwise the current timestamp is recorded.

Concurrency:
    All read-modify-write on the windows happens under one lock, so concurrent
    tool calls cannot corrupt a timestamp sequence. State is local to the
    process and resets on restart.

Determinism:
    The clock is injectable; tests drive it explicitly.
"""

import threading
import time
from collections import deque
from typing import Callable

from image_beautifier.core.errors import RateLimitError


class SlidingWindowRateLimiter:
    """Cap calls per key within a trailing time window."""

    def __init__(
        self,
        capacity: int = 20,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, deque[float]] = {}
        self._lock = threading.Lock()

    def check(self, key: str) -> None:
        """Record one call for `key` or raise `RateLimitError`."""
        with self._lock:
            now = self._clock()
            window = self._windows.setdefault(key, deque())
            while window and now - window[0] >= self.window_seconds:
                window.popleft()

            if len(window) >= self.capacity:
                raise RateLimitError(
                    f"Rate limit exceeded: max {self.capacity} requests per minute"
                )
            window.append(now)
