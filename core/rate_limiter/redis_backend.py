import time
import uuid
from typing import Optional

from redis.asyncio import Redis

from core.rate_limiter.base import RateLimiterBackend


class RedisRateLimiter(RateLimiterBackend):
    """Sliding window limiter shared by every app instance.

    Each key is a sorted set of hit timestamps. Pruning, counting and
    recording run in one MULTI/EXEC pipeline, and a hit that lands over
    the limit is removed again so rejected requests do not extend the
    window.
    """

    def __init__(self, client: Redis, prefix: str = "ratelimit"):
        self.client = client
        self.prefix = prefix

    @classmethod
    def from_url(cls, url: str, prefix: str = "ratelimit") -> "RedisRateLimiter":
        return cls(Redis.from_url(url, decode_responses=True), prefix=prefix)

    def _key(self, key: str) -> str:
        return f"{self.prefix}:{key}"

    async def is_allowed(
        self, key: str, limit: int, window: int
    ) -> tuple[bool, Optional[float]]:
        redis_key = self._key(key)
        now = time.time()
        member = f"{now}:{uuid.uuid4().hex}"

        async with self.client.pipeline(transaction=True) as pipe:
            pipe.zremrangebyscore(redis_key, 0, now - window)
            pipe.zadd(redis_key, {member: now})
            pipe.zcard(redis_key)
            pipe.expire(redis_key, window)
            _, _, count, _ = await pipe.execute()

        if count <= limit:
            return True, None

        await self.client.zrem(redis_key, member)
        oldest = await self.client.zrange(redis_key, 0, 0, withscores=True)
        if not oldest:
            return False, float(window)
        retry_after = window - (now - oldest[0][1])
        return False, max(0, retry_after)

    async def get_remaining(self, key: str, limit: int, window: int) -> int:
        redis_key = self._key(key)
        now = time.time()
        async with self.client.pipeline(transaction=True) as pipe:
            pipe.zremrangebyscore(redis_key, 0, now - window)
            pipe.zcard(redis_key)
            _, count = await pipe.execute()
        return max(0, limit - count)

    async def reset(self, key: str) -> None:
        await self.client.delete(self._key(key))
