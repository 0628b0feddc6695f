import json
from unittest.async_case import IsolatedAsyncioTestCase
from unittest.mock import Mock
from fastapi import Request
from fastapi.responses import JSONResponse
from core.rate_limiter.middleware import RateLimitMiddleware
from core.rate_limiter.memory import InMemoryRateLimiter
from main import app


async def ok_call_next(req):
    return JSONResponse({"status": "ok"})


class TestRateLimitMiddleware(IsolatedAsyncioTestCase):
    def setUp(self):
        self.backend = InMemoryRateLimiter()
        self.limit = 3
        self.window = 60

    def create_middleware(self, **kwargs) -> RateLimitMiddleware:
        options = dict(
            app=app,
            backend=self.backend,
            enabled=True,
            limit=self.limit,
            window=self.window,
            use_fingerprint=False,
        )
        options.update(kwargs)
        return RateLimitMiddleware(**options)

    def create_mock_request(self, path="/volunteer/opportunities/", host="10.0.0.1"):
        request = Mock(spec=Request)
        request.url = Mock()
        request.url.path = path
        request.client = Mock()
        request.client.host = host
        request.headers = {"User-Agent": "TestAgent"}
        return request

    async def test_headers_count_down(self):
        # Given
        middleware = self.create_middleware()
        request = self.create_mock_request()

        # When
        responses = [
            await middleware.dispatch(request, ok_call_next) for _ in range(self.limit)
        ]

        # Expect
        self.assertEqual(
            [int(r.headers["X-RateLimit-Remaining"]) for r in responses], [2, 1, 0]
        )
        self.assertEqual(responses[0].headers["X-RateLimit-Limit"], str(self.limit))
        self.assertEqual(responses[0].headers["X-RateLimit-Window"], str(self.window))

    async def test_blocks_with_429(self):
        middleware = self.create_middleware()
        request = self.create_mock_request()
        for _ in range(self.limit):
            await middleware.dispatch(request, ok_call_next)

        response = await middleware.dispatch(request, ok_call_next)

        self.assertEqual(response.status_code, 429)
        self.assertEqual(response.headers["X-RateLimit-Remaining"], "0")
        self.assertIn("Retry-After", response.headers)

    async def test_clients_are_independent(self):
        middleware = self.create_middleware(limit=1)
        await middleware.dispatch(self.create_mock_request(host="10.0.0.1"), ok_call_next)

        response = await middleware.dispatch(
            self.create_mock_request(host="10.0.0.2"), ok_call_next
        )

        self.assertEqual(response.status_code, 200)

    async def test_disabled(self):
        middleware = self.create_middleware(enabled=False, limit=1)
        request = self.create_mock_request()

        for _ in range(5):
            response = await middleware.dispatch(request, ok_call_next)
            self.assertEqual(response.status_code, 200)
            self.assertNotIn("X-RateLimit-Limit", response.headers)

    async def test_excluded_paths(self):
        middleware = self.create_middleware(limit=1, exclude_paths=["/health"])
        request = self.create_mock_request(path="/health")

        for _ in range(5):
            response = await middleware.dispatch(request, ok_call_next)
            self.assertEqual(response.status_code, 200)

    async def test_shared_backend_between_middlewares(self):
        # two app instances pointing at the same backend share the budget
        first = self.create_middleware(limit=2)
        second = self.create_middleware(limit=2)
        request = self.create_mock_request()

        await first.dispatch(request, ok_call_next)
        await second.dispatch(request, ok_call_next)
        response = await first.dispatch(request, ok_call_next)

        self.assertEqual(response.status_code, 429)

    async def test_blocked_body_rounds_retry_after_up(self):
        # Given
        middleware = self.create_middleware(limit=1)
        request = self.create_mock_request()
        await middleware.dispatch(request, ok_call_next)

        # When
        response = await middleware.dispatch(request, ok_call_next)

        # Expect
        body = json.loads(response.body)
        self.assertEqual(body["message"], "Too many requests, please try again later")
        self.assertIsInstance(body["retry_after"], int)
        self.assertGreater(body["retry_after"], 0)
        self.assertLessEqual(body["retry_after"], self.window)
        self.assertEqual(response.headers["Retry-After"], str(body["retry_after"]))

    async def test_custom_key_func(self):
        # every caller lands on the same counter
        middleware = self.create_middleware(limit=1, key_func=lambda request: "all")
        await middleware.dispatch(self.create_mock_request(host="10.0.0.1"), ok_call_next)

        response = await middleware.dispatch(
            self.create_mock_request(host="10.0.0.2"), ok_call_next
        )

        self.assertEqual(response.status_code, 429)
