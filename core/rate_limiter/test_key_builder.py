import time
from typing import Optional
from unittest import TestCase
from unittest.mock import Mock
import jwt
from core.rate_limiter.key_builder import RateLimitKeyBuilder
from settings import ALGORITHM, SECRET_KEY


class TestRateLimitKeyBuilder(TestCase):
    def create_mock_request(
        self,
        client_host: Optional[str] = "192.168.1.1",
        user_agent: str = "Mozilla/5.0",
        accept_language: str = "en-US",
        authorization: Optional[str] = None,
        extra_headers: Optional[dict] = None,
    ):
        request = Mock()
        if client_host is None:
            request.client = None
        else:
            request.client = Mock()
            request.client.host = client_host

        headers = {
            "User-Agent": user_agent,
            "Accept-Language": accept_language,
        }
        if authorization:
            headers["authorization"] = authorization
        headers.update(extra_headers or {})
        request.headers = headers
        return request

    def create_jwt_token(self, user_id: str, **kwargs) -> str:
        return jwt.encode({"id": user_id, **kwargs}, SECRET_KEY, algorithm=ALGORITHM)

    def test_client_ip_prefers_tcp_peer(self):
        request = self.create_mock_request(
            client_host="203.0.113.42", extra_headers={"X-Real-IP": "198.51.100.1"}
        )
        self.assertEqual(RateLimitKeyBuilder.get_real_client_ip(request), "203.0.113.42")

    def test_client_ip_falls_back_to_proxy_headers(self):
        request = self.create_mock_request(
            client_host=None,
            extra_headers={"X-Forwarded-For": "198.51.100.2, 192.0.2.1"},
        )
        self.assertEqual(RateLimitKeyBuilder.get_real_client_ip(request), "198.51.100.2")

        request = self.create_mock_request(client_host=None)
        self.assertEqual(RateLimitKeyBuilder.get_real_client_ip(request), "unknown")

    def test_fingerprint_depends_on_headers(self):
        chrome = self.create_mock_request(user_agent="Chrome")
        firefox = self.create_mock_request(user_agent="Firefox")
        chrome_again = self.create_mock_request(user_agent="Chrome")

        fp = RateLimitKeyBuilder.get_composite_fingerprint(chrome)

        self.assertEqual(fp, RateLimitKeyBuilder.get_composite_fingerprint(chrome_again))
        self.assertNotEqual(fp, RateLimitKeyBuilder.get_composite_fingerprint(firefox))
        self.assertEqual(len(fp), 12)

    def test_anonymous_key(self):
        request = self.create_mock_request(client_host="10.0.0.1")
        self.assertEqual(
            RateLimitKeyBuilder.build_key(request, use_fingerprint=False),
            "anon:10.0.0.1",
        )
        key = RateLimitKeyBuilder.build_key(request, use_fingerprint=True)
        self.assertTrue(key.startswith("anon:10.0.0.1:"))

    def test_authenticated_key(self):
        token = self.create_jwt_token("9b2f0c7e-2d1a-4c55-9a0e-3f7b6f1d2e11")
        request = self.create_mock_request(authorization=f"Bearer {token}")

        self.assertEqual(
            RateLimitKeyBuilder.build_key(request, use_fingerprint=False),
            "user:9b2f0c7e-2d1a-4c55-9a0e-3f7b6f1d2e11",
        )

    def test_invalid_or_expired_token_is_anonymous(self):
        expired = jwt.encode(
            {"id": "someone", "exp": int(time.time()) - 3600},
            SECRET_KEY,
            algorithm=ALGORITHM,
        )
        for token in ["invalid_token", expired]:
            request = self.create_mock_request(authorization=f"Bearer {token}")
            key = RateLimitKeyBuilder.build_key(request, use_fingerprint=False)
            self.assertEqual(key, "anon:192.168.1.1")
