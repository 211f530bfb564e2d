"""Tests for access-token verification."""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from config.settings import settings
from src.lm_common.errors import InvalidCredentialsError
from src.lm_gateway.auth.jwt_handler import decode_access_token


class TestDecodeAccessToken:
    def test_valid_token(self, make_token) -> None:
        payload = decode_access_token(make_token("user-42"))
        assert payload["sub"] == "user-42"
        assert payload["email"] == "student@example.com"

    def test_expired_token(self, make_token) -> None:
        expired = make_token(exp=datetime.now(UTC) - timedelta(minutes=1))
        with pytest.raises(InvalidCredentialsError):
            decode_access_token(expired)

    def test_wrong_audience(self, make_token) -> None:
        with pytest.raises(InvalidCredentialsError):
            decode_access_token(make_token(aud="anon"))

    def test_wrong_secret(self) -> None:
        token = jwt.encode(
            {"sub": "user-1", "aud": settings.JWT_AUDIENCE},
            "some-other-secret",
            algorithm="HS256",
        )
        with pytest.raises(InvalidCredentialsError):
            decode_access_token(token)

    def test_missing_sub(self) -> None:
        token = jwt.encode(
            {"aud": settings.JWT_AUDIENCE}, settings.JWT_SECRET, algorithm="HS256"
        )
        with pytest.raises(InvalidCredentialsError):
            decode_access_token(token)

    def test_garbage(self) -> None:
        with pytest.raises(InvalidCredentialsError):
            decode_access_token("not-a-jwt")
