"""Global request budget for the volunteer API.

Every caller, keyed by signed-in user or by client address, may make `limit`
requests per `window` seconds across all routes. Endpoints that need a tighter
budget, like forgot-password, stack the `rate_limit` decorator on top.
"""

from typing import Callable, Dict, Optional
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from core.rate_limiter.base import RateLimiterBackend
from core.rate_limiter.key_builder import RateLimitKeyBuilder
from core.responses import TooManyRequests, common_response


def quota_headers(limit: int, remaining: int, window: int) -> Dict[str, str]:
    return {
        "X-RateLimit-Limit": str(limit),
        "X-RateLimit-Remaining": str(remaining),
        "X-RateLimit-Window": str(window),
    }


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app,
        backend: RateLimiterBackend,
        enabled: bool = True,
        limit: int = 100,
        window: int = 60,
        key_func: Optional[Callable[[Request], str]] = None,
        exclude_paths: Optional[list[str]] = None,
        use_fingerprint: bool = True,
    ):
        """
        backend: counters shared by every worker pointing at it
        key_func: overrides the user/address key, mostly for tests
        exclude_paths: prefixes like /health that are never counted
        """
        super().__init__(app)
        self.backend = backend
        self.enabled = enabled
        self.limit = limit
        self.window = window
        self.exempt_prefixes = tuple(exclude_paths or [])
        self.client_key = key_func or (
            lambda request: RateLimitKeyBuilder.build_key(
                request, use_fingerprint=use_fingerprint
            )
        )

    def is_exempt(self, request: Request) -> bool:
        if not self.enabled:
            return True
        return bool(self.exempt_prefixes) and request.url.path.startswith(
            self.exempt_prefixes
        )

    async def dispatch(self, request: Request, call_next):
        if self.is_exempt(request):
            return await call_next(request)

        key = self.client_key(request)
        allowed, retry_after = await self.backend.is_allowed(
            key, self.limit, self.window
        )
        if not allowed:
            return common_response(
                TooManyRequests(retry_after=retry_after, limit=self.limit)
            )

        remaining = await self.backend.get_remaining(key, self.limit, self.window)
        response = await call_next(request)
        response.headers.update(quota_headers(self.limit, remaining, self.window))
        return response
