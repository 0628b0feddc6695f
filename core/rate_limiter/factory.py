from core.log import logger
from core.rate_limiter.base import RateLimiterBackend
from core.rate_limiter.memory import InMemoryRateLimiter
from settings import RATE_LIMIT_BACKEND, REDIS_URL


def build_rate_limiter(
    backend: str = RATE_LIMIT_BACKEND, redis_url: str = REDIS_URL
) -> RateLimiterBackend:
    if backend == "redis":
        from core.rate_limiter.redis_backend import RedisRateLimiter

        logger.info("rate limiter uses redis backend")
        return RedisRateLimiter.from_url(redis_url)
    if backend != "memory":
        raise ValueError(f"Unknown rate limit backend: {backend}")
    logger.info("rate limiter uses in-memory backend")
    return InMemoryRateLimiter()


# shared by the middleware and the per-endpoint decorators
rate_limiter = build_rate_limiter()
