"""
Unit tests for backend/auth.py
"""

import asyncio
import time

import jwt
import pytest
from fastapi import HTTPException

from backend.auth import get_current_user, validate_api_key, validate_jwt
from backend.settings import Settings

SECRET = "test-secret-that-is-at-least-32-bytes-long"


@pytest.fixture
def settings():
    return Settings(jwt_secret=SECRET, api_keys="sk_live,sk_other", _env_file=None)


def bearer(payload, secret=SECRET):
    return "Bearer " + jwt.encode(payload, secret, algorithm="HS256")


@pytest.mark.unit
class TestApiKey:
    def test_bound_key_returns_user(self, settings):
        assert validate_api_key("sk_live:user-1", settings) == "user-1"

    def test_bare_key_is_rejected(self, settings):
        with pytest.raises(HTTPException) as exc_info:
            validate_api_key("sk_live", settings)
        assert exc_info.value.status_code == 401

    def test_unknown_key_is_rejected(self, settings):
        with pytest.raises(HTTPException) as exc_info:
            validate_api_key("sk_nope:user-1", settings)
        assert exc_info.value.detail == "Invalid API key"

    def test_no_keys_configured(self):
        with pytest.raises(HTTPException) as exc_info:
            validate_api_key("sk_live:user-1", Settings(_env_file=None, api_keys=""))
        assert exc_info.value.status_code == 401


@pytest.mark.unit
class TestJwt:
    def test_sub_claim(self, settings):
        assert validate_jwt(bearer({"sub": "user-1"}), settings) == "user-1"

    def test_user_id_claim(self, settings):
        assert validate_jwt(bearer({"userId": 42}), settings) == "42"

    def test_expired_token(self, settings):
        token = bearer({"sub": "user-1", "exp": int(time.time()) - 60})
        with pytest.raises(HTTPException) as exc_info:
            validate_jwt(token, settings)
        assert exc_info.value.detail == "Token expired"

    def test_wrong_secret(self, settings):
        with pytest.raises(HTTPException) as exc_info:
            validate_jwt(bearer({"sub": "user-1"}, secret="another-secret-that-is-at-least-32-bytes"), settings)
        assert exc_info.value.status_code == 401

    def test_missing_subject(self, settings):
        with pytest.raises(HTTPException) as exc_info:
            validate_jwt(bearer({"role": "user"}), settings)
        assert exc_info.value.detail == "Token missing user ID"

    def test_not_a_bearer_header(self, settings):
        with pytest.raises(HTTPException):
            validate_jwt("Basic abc", settings)


@pytest.mark.unit
class TestGetCurrentUser:
    async def _call(self, settings, **headers):
        return await get_current_user(
            authorization=headers.get("authorization"),
            x_api_key=headers.get("x_api_key"),
            settings=settings,
        )

    def test_api_key_wins_over_jwt(self, settings):
        user = asyncio.run(
            self._call(
                settings,
                x_api_key="sk_other:phone-user",
                authorization=bearer({"sub": "web-user"}),
            )
        )
        assert user == "phone-user"

    def test_no_credentials(self, settings):
        with pytest.raises(HTTPException) as exc_info:
            asyncio.run(self._call(settings))
        assert exc_info.value.status_code == 401
