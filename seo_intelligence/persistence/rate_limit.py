"""
Rate Limiting

Fixed-window request counter per caller identity. A separate collaborator
for whatever outer layer triggers analyses; the engine never consults it.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Dict, Optional

from ..utils.config import get_settings

logger = logging.getLogger(__name__)


@dataclass
class _Window:
    count: int
    reset_at: float


class FixedWindowRateLimiter:
    """
    Allows `max_requests` per identity in each window of `window_seconds`.

    The first request from an identity opens its window; once the window
    expires the next request opens a fresh one.

    Usage:
        limiter = FixedWindowRateLimiter()
        if not limiter.check(f"analyze_{user_id}"):
            ...  # reject
    """

    def __init__(self, max_requests: Optional[int] = None, window_seconds: Optional[float] = None):
        settings = get_settings()
        self.max_requests = max_requests or settings.RATE_LIMIT_MAX_REQUESTS
        self.window_seconds = window_seconds or settings.RATE_LIMIT_WINDOW
        self._windows: Dict[str, _Window] = {}
        self._lock = threading.Lock()

    def check(self, identity: str, now: Optional[float] = None) -> bool:
        """Count one request; return False if the identity is over its limit."""
        now = time.time() if now is None else now

        with self._lock:
            self._drop_expired(now)

            window = self._windows.get(identity)
            if window is None:
                self._windows[identity] = _Window(count=1, reset_at=now + self.window_seconds)
                return True

            if window.count >= self.max_requests:
                logger.warning(f"Rate limit exceeded for {identity}")
                return False

            window.count += 1
            return True

    def _drop_expired(self, now: float) -> None:
        expired = [key for key, window in self._windows.items() if now > window.reset_at]
        for key in expired:
            del self._windows[key]

    @property
    def tracked_identities(self) -> int:
        with self._lock:
            return len(self._windows)

    def reset(self, identity: Optional[str] = None) -> None:
        """Forget one identity's window, or every window."""
        with self._lock:
            if identity is None:
                self._windows.clear()
            else:
                self._windows.pop(identity, None)
