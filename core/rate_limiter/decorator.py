from functools import wraps
from typing import Callable, Optional
from fastapi import Request
from core.rate_limiter.base import RateLimiterBackend
from core.rate_limiter.key_builder import RateLimitKeyBuilder
from core.responses import TooManyRequests, common_response


def rate_limit(
    backend: RateLimiterBackend,
    limit: int = 10,
    window: int = 60,
    key_func: Optional[Callable[[Request], str]] = None,
    use_fingerprint: bool = False,
    scope: Optional[str] = None,
):
    """
    Rate limit a single endpoint, on top of the global middleware limit.

    The endpoint must accept a `request: Request` argument. `scope` keeps
    counters of different endpoints apart, it defaults to the function name.

    Example:
        @router.post("/email/forgot-password/")
        @rate_limit(backend=rate_limiter, limit=3, window=900)
        async def forgot_password(request: Request, ...):
            ...
    """
    if not isinstance(backend, RateLimiterBackend):
        raise ValueError("A RateLimiterBackend instance must be provided")

    def decorator(func):
        key_scope = scope or func.__name__

        @wraps(func)
        async def wrapper(*args, **kwargs):
            request = kwargs.get("request")
            if request is None:
                request = next((arg for arg in args if isinstance(arg, Request)), None)
            if request is None:
                raise ValueError("Request object not found in function arguments")

            if key_func:
                key = key_func(request)
            else:
                key = RateLimitKeyBuilder.build_key(request, use_fingerprint)
            key = f"{key_scope}:{key}"

            is_allowed, retry_after = await backend.is_allowed(key, limit, window)
            if not is_allowed:
                return common_response(
                    TooManyRequests(retry_after=retry_after, limit=limit)
                )

            response = await func(*args, **kwargs)

            if hasattr(response, "headers"):
                remaining = await backend.get_remaining(key, limit, window)
                response.headers["X-RateLimit-Limit"] = str(limit)
                response.headers["X-RateLimit-Remaining"] = str(remaining)
                response.headers["X-RateLimit-Window"] = str(window)

            return response

        return wrapper

    return decorator
