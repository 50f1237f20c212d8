"""Unit tests for AuthService — token creation and verification."""

from __future__ import annotations

import time

import pytest
from jose import jwt

from fanout.core.auth import AuthService
from fanout.core.config import settings
from fanout.core.exceptions import UnauthorisedError


@pytest.fixture
def auth_service() -> AuthService:
    return AuthService()


def test_create_access_token(auth_service: AuthService) -> None:
    """Creating an access token returns a valid JWT string."""
    token = auth_service.create_access_token("user-42")
    assert isinstance(token, str)
    assert len(token) > 0


def test_verify_token_roundtrip(auth_service: AuthService) -> None:
    """A token created by create_access_token can be verified."""
    token = auth_service.create_access_token("user-42")

    claims = auth_service.verify_token(token)
    assert claims.user_id == "user-42"
    assert claims.exp > int(time.time())


def test_verify_token_expired_raises(auth_service: AuthService) -> None:
    """An expired token raises UnauthorisedError."""
    payload = {
        "sub": "user-42",
        "exp": int(time.time()) - 3600,
        "iat": int(time.time()) - 7200,
    }
    token = jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)

    with pytest.raises(UnauthorisedError):
        auth_service.verify_token(token)


def test_verify_token_wrong_secret_raises(auth_service: AuthService) -> None:
    payload = {"sub": "user-42", "exp": int(time.time()) + 60}
    token = jwt.encode(payload, "some-other-secret", algorithm=settings.jwt_algorithm)

    with pytest.raises(UnauthorisedError):
        auth_service.verify_token(token)


def test_verify_token_missing_sub_raises(auth_service: AuthService) -> None:
    """A token without a subject cannot identify a client."""
    payload = {"exp": int(time.time()) + 60}
    token = jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)

    with pytest.raises(UnauthorisedError, match="missing required claims"):
        auth_service.verify_token(token)
