from unittest.async_case import IsolatedAsyncioTestCase
from unittest.mock import Mock
from fastapi import Request
from fastapi.responses import JSONResponse
from core.rate_limiter.decorator import rate_limit
from core.rate_limiter.memory import InMemoryRateLimiter


def create_mock_request(host: str = "10.0.0.1"):
    request = Mock(spec=Request)
    request.client = Mock()
    request.client.host = host
    request.headers = {}
    return request


class TestRateLimitDecorator(IsolatedAsyncioTestCase):
    async def test_limits_endpoint(self):
        # Given
        backend = InMemoryRateLimiter()

        @rate_limit(backend=backend, limit=3, window=900)
        async def forgot_password(request: Request):
            return JSONResponse({"message": "ok"})

        request = create_mock_request()

        # When
        responses = [await forgot_password(request=request) for _ in range(4)]

        # Expect
        self.assertEqual(
            [r.status_code for r in responses], [200, 200, 200, 429]
        )
        self.assertEqual(responses[2].headers["X-RateLimit-Remaining"], "0")
        self.assertIn("Retry-After", responses[3].headers)

    async def test_scopes_are_independent(self):
        backend = InMemoryRateLimiter()

        @rate_limit(backend=backend, limit=1, window=60)
        async def first(request: Request):
            return JSONResponse({})

        @rate_limit(backend=backend, limit=1, window=60)
        async def second(request: Request):
            return JSONResponse({})

        request = create_mock_request()
        await first(request)

        response = await second(request)

        self.assertEqual(response.status_code, 200)

    async def test_requires_request(self):
        @rate_limit(backend=InMemoryRateLimiter(), limit=1, window=60)
        async def endpoint(value: int):
            return value

        with self.assertRaises(ValueError):
            await endpoint(value=1)

    def test_requires_backend_instance(self):
        with self.assertRaises(ValueError):
            rate_limit(backend=InMemoryRateLimiter, limit=1, window=60)
