import hashlib
from typing import Optional
from fastapi import Request
import jwt

from settings import ALGORITHM, SECRET_KEY


class RateLimitKeyBuilder:
    """Builds the identity a request is counted against.

    Signed-in callers are counted per user id taken from a verified JWT,
    everyone else per client ip, optionally narrowed by a fingerprint of
    browser headers.
    """

    @staticmethod
    def get_real_client_ip(request: Request) -> str:
        # the TCP peer can't be spoofed, proxy headers are a fallback only
        if request.client and request.client.host:
            return request.client.host

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip.strip()

        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()

        return "unknown"

    @staticmethod
    def get_composite_fingerprint(request: Request) -> str:
        factors = [
            request.headers.get("User-Agent", ""),
            request.headers.get("Accept-Language", ""),
            request.headers.get("Accept-Encoding", ""),
            RateLimitKeyBuilder.get_real_client_ip(request),
        ]
        return hashlib.sha256("|".join(factors).encode()).hexdigest()[:12]

    @staticmethod
    def get_user_id(request: Request) -> Optional[str]:
        authorization = request.headers.get("authorization") or request.headers.get(
            "Authorization"
        )
        if not authorization or not authorization.startswith("Bearer "):
            return None

        token = authorization.split(" ", 1)[1].strip()
        try:
            payload = jwt.decode(jwt=token, key=SECRET_KEY, algorithms=[ALGORITHM])
        except jwt.PyJWTError:
            return None
        return payload.get("id")

    @staticmethod
    def build_key(request: Request, use_fingerprint: bool = True) -> str:
        """
        user:<id>[:fingerprint] for signed-in callers,
        anon:<ip>[:fingerprint] otherwise
        """
        user_id = RateLimitKeyBuilder.get_user_id(request)
        if user_id:
            key = f"user:{user_id}"
        else:
            key = f"anon:{RateLimitKeyBuilder.get_real_client_ip(request)}"

        if use_fingerprint:
            key = f"{key}:{RateLimitKeyBuilder.get_composite_fingerprint(request)}"
        return key
