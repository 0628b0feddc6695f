from unittest.async_case import IsolatedAsyncioTestCase
from unittest.mock import AsyncMock, MagicMock
from core.rate_limiter.redis_backend import RedisRateLimiter


def mock_client(pipeline_result: list, oldest=None):
    pipe = MagicMock()
    pipe.execute = AsyncMock(return_value=pipeline_result)
    pipe.__aenter__ = AsyncMock(return_value=pipe)
    pipe.__aexit__ = AsyncMock(return_value=None)

    client = MagicMock()
    client.pipeline = MagicMock(return_value=pipe)
    client.zrem = AsyncMock()
    client.zrange = AsyncMock(return_value=oldest or [])
    client.delete = AsyncMock()
    return client, pipe


class TestRedisRateLimiter(IsolatedAsyncioTestCase):
    async def test_allows_under_limit(self):
        # Given
        client, pipe = mock_client([0, 1, 2, True])
        limiter = RedisRateLimiter(client, prefix="test")

        # When
        allowed, retry_after = await limiter.is_allowed("anon:1.1.1.1", 3, 60)

        # Expect
        self.assertTrue(allowed)
        self.assertIsNone(retry_after)
        client.pipeline.assert_called_once_with(transaction=True)
        pipe.zremrangebyscore.assert_called_once()
        self.assertEqual(pipe.zremrangebyscore.call_args[0][0], "test:anon:1.1.1.1")
        pipe.expire.assert_called_once_with("test:anon:1.1.1.1", 60)
        client.zrem.assert_not_called()

    async def test_rejected_hit_is_removed(self):
        # Given
        client, _ = mock_client([0, 1, 4, True], oldest=[("first", 0.0)])
        limiter = RedisRateLimiter(client, prefix="test")

        # When
        allowed, retry_after = await limiter.is_allowed("anon:1.1.1.1", 3, 60)

        # Expect
        self.assertFalse(allowed)
        self.assertEqual(retry_after, 0)
        client.zrem.assert_awaited_once()
        self.assertEqual(client.zrem.call_args[0][0], "test:anon:1.1.1.1")

    async def test_get_remaining(self):
        client, _ = mock_client([0, 2])
        limiter = RedisRateLimiter(client)

        remaining = await limiter.get_remaining("user:1", 5, 60)

        self.assertEqual(remaining, 3)

    async def test_reset(self):
        client, _ = mock_client([])
        limiter = RedisRateLimiter(client, prefix="test")

        await limiter.reset("user:1")

        client.delete.assert_awaited_once_with("test:user:1")
