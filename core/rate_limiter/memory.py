import asyncio
import time
from typing import Dict, List, Optional

from core.rate_limiter.base import RateLimiterBackend


class InMemoryRateLimiter(RateLimiterBackend):
    """Process local sliding window limiter, only correct for a single instance"""

    def __init__(self):
        self._requests: Dict[str, List[float]] = {}
        self._lock = asyncio.Lock()

    def _prune(self, key: str, now: float, window: int) -> List[float]:
        # keys left with no hits are dropped so idle clients do not pile up
        cutoff_time = now - window
        hits = [ts for ts in self._requests.get(key, []) if ts > cutoff_time]
        if hits:
            self._requests[key] = hits
        else:
            self._requests.pop(key, None)
        return hits

    async def is_allowed(
        self, key: str, limit: int, window: int
    ) -> tuple[bool, Optional[float]]:
        async with self._lock:
            now = time.time()
            hits = self._prune(key, now, window)

            if len(hits) < limit:
                self._requests[key] = hits + [now]
                return True, None

            if not hits:
                return False, float(window)
            retry_after = window - (now - min(hits))
            return False, max(0, retry_after)

    async def get_remaining(self, key: str, limit: int, window: int) -> int:
        async with self._lock:
            hits = self._prune(key, time.time(), window)
            return max(0, limit - len(hits))

    async def reset(self, key: str) -> None:
        async with self._lock:
            self._requests.pop(key, None)

    async def cleanup_expired(self, window: int) -> None:
        """
        Drop keys without hits in the last `window` seconds,
        meant for a periodic background task
        """
        async with self._lock:
            now = time.time()
            for key in list(self._requests.keys()):
                self._prune(key, now, window)
