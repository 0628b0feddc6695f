import asyncio
from unittest.async_case import IsolatedAsyncioTestCase
from core.rate_limiter.base import RateLimiterBackend
from core.rate_limiter.memory import InMemoryRateLimiter


class TestInMemoryRateLimiter(IsolatedAsyncioTestCase):
    def setUp(self):
        self.limiter = InMemoryRateLimiter()

    def test_is_a_backend(self):
        self.assertIsInstance(self.limiter, RateLimiterBackend)

    async def test_blocks_after_limit(self):
        # Given
        key, limit, window = "forgot_password:anon:10.0.0.1", 3, 900

        # When
        results = [await self.limiter.is_allowed(key, limit, window) for _ in range(4)]

        # Expect
        self.assertEqual([allowed for allowed, _ in results], [True, True, True, False])
        self.assertIsNone(results[0][1])
        self.assertGreater(results[3][1], 0)
        self.assertLessEqual(results[3][1], window)

    async def test_sliding_window_expires(self):
        key, limit, window = "sliding", 2, 1
        for _ in range(limit):
            allowed, _ = await self.limiter.is_allowed(key, limit, window)
            self.assertTrue(allowed)
        allowed, _ = await self.limiter.is_allowed(key, limit, window)
        self.assertFalse(allowed)

        await asyncio.sleep(window + 0.1)

        allowed, retry_after = await self.limiter.is_allowed(key, limit, window)
        self.assertTrue(allowed)
        self.assertIsNone(retry_after)

    async def test_keys_are_independent(self):
        await self.limiter.is_allowed("key1", 1, 60)
        blocked, _ = await self.limiter.is_allowed("key1", 1, 60)
        allowed, _ = await self.limiter.is_allowed("key2", 1, 60)
        self.assertFalse(blocked)
        self.assertTrue(allowed)

    async def test_get_remaining_and_reset(self):
        key, limit, window = "remaining", 5, 60
        self.assertEqual(await self.limiter.get_remaining(key, limit, window), 5)

        await self.limiter.is_allowed(key, limit, window)
        await self.limiter.is_allowed(key, limit, window)
        self.assertEqual(await self.limiter.get_remaining(key, limit, window), 3)

        await self.limiter.reset(key)
        self.assertEqual(await self.limiter.get_remaining(key, limit, window), 5)

    async def test_cleanup_expired(self):
        await self.limiter.is_allowed("old", 3, 1)
        await asyncio.sleep(1.1)

        await self.limiter.cleanup_expired(1)

        self.assertNotIn("old", self.limiter._requests)

    async def test_idle_key_is_dropped_on_lookup(self):
        # Given
        await self.limiter.is_allowed("idle", 3, 1)
        self.assertIn("idle", self.limiter._requests)

        # When
        await asyncio.sleep(1.1)
        remaining = await self.limiter.get_remaining("idle", 3, 1)

        # Expect
        self.assertEqual(remaining, 3)
        self.assertNotIn("idle", self.limiter._requests)

    async def test_lookup_does_not_create_key(self):
        await self.limiter.get_remaining("never-seen", 3, 60)
        allowed, _ = await self.limiter.is_allowed("zero", 0, 60)

        self.assertFalse(allowed)
        self.assertEqual(self.limiter._requests, {})

    async def test_concurrent_requests_respect_limit(self):
        results = await asyncio.gather(
            *[self.limiter.is_allowed("concurrent", 10, 60) for _ in range(20)]
        )
        self.assertEqual(sum(1 for allowed, _ in results if allowed), 10)

    async def test_zero_limit_blocks(self):
        allowed, retry_after = await self.limiter.is_allowed("zero", 0, 60)
        self.assertFalse(allowed)
        self.assertEqual(retry_after, 60)
