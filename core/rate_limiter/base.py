from abc import ABCMeta, abstractmethod
from typing import Optional


class RateLimiterBackend(metaclass=ABCMeta):
    """Storage for sliding window rate limit state.

    Implementations must be safe to share between requests. Swap the
    in-memory backend for the redis one when running more than one
    instance of the app.
    """

    @abstractmethod
    async def is_allowed(
        self, key: str, limit: int, window: int
    ) -> tuple[bool, Optional[float]]:
        """
        Record a hit for `key` when it is under `limit` hits in the last
        `window` seconds.

        Returns:
            Tuple of (is_allowed, retry_after_seconds)
        """

    @abstractmethod
    async def get_remaining(self, key: str, limit: int, window: int) -> int:
        """Hits left for `key` in the current window"""

    @abstractmethod
    async def reset(self, key: str) -> None:
        """Forget every hit recorded for `key`"""
