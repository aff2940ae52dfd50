"""
Shared fixtures for the chat server tests.

The environment is pinned before the app is imported so settings are
deterministic and no real database is needed.
"""
import os
import time

TEST_JWT_SECRET = "test-chat-secret-0123456789-abcdefghijklmnop"

os.environ["NODE_ENV"] = "development"
os.environ["JWT_SECRET"] = TEST_JWT_SECRET
os.environ["CHAT_RATE_LIMIT_MAX_REQUESTS"] = "100"
os.environ["CHAT_RATE_LIMIT_WINDOW_SECONDS"] = "60"

import pytest  # noqa: E402
from authlib.jose import JsonWebToken  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from main import app  # noqa: E402 (must come after env override)
from netzero_chat.api.dependencies.rate_limit import get_chat_rate_limiter  # noqa: E402
from netzero_chat.config.settings import get_settings  # noqa: E402

_jwt = JsonWebToken(["HS256"])


@pytest.fixture(autouse=True)
def _fresh_state():
    """Reset cached settings and rate-limit counters between tests."""
    get_settings.cache_clear()
    get_chat_rate_limiter().reset()
    yield
    get_settings.cache_clear()
    get_chat_rate_limiter().reset()


@pytest.fixture
def client() -> TestClient:
    # Not used as a context manager, so the lifespan (DB probe) does not run
    return TestClient(app)


@pytest.fixture
def make_token():
    """Factory for HS256 bearer tokens."""

    def _make(claims=None, secret: str = TEST_JWT_SECRET, expires_in: int = 3600) -> str:
        now = int(time.time())
        payload = {"iat": now, "exp": now + expires_in}
        payload.update(claims or {})
        return _jwt.encode({"alg": "HS256"}, payload, secret).decode("utf-8")

    return _make


@pytest.fixture
def auth_header(make_token):
    def _header(claims=None, **kwargs) -> dict:
        return {"Authorization": f"Bearer {make_token(claims, **kwargs)}"}

    return _header
