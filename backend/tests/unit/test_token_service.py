"""
Unit tests for the JWT token service.
"""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from crola.core.config import Settings
from crola.infrastructure.auth.jwt_token_service import JwtTokenService


def _tamper_signature(token: str) -> str:
    header, payload, signature = token.split(".")
    # Middle character: every bit of it contributes to the decoded signature
    index = len(signature) // 2
    replacement = "A" if signature[index] != "A" else "B"
    return ".".join([header, payload, signature[:index] + replacement + signature[index + 1:]])


def test_requires_secret():
    with pytest.raises(ValueError):
        JwtTokenService(Settings(JWT_SECRET=""))


def test_issue_then_verify_roundtrip(settings):
    service = JwtTokenService(settings)
    token = service.issue("user-123", "a@x.com")

    user = service.verify(token)

    assert user is not None
    assert user.id == "user-123"
    assert user.email == "a@x.com"


def test_token_claims(settings):
    service = JwtTokenService(settings)
    token = service.issue("user-123", "a@x.com")

    claims = jwt.get_unverified_claims(token)

    assert claims["sub"] == "user-123"
    assert claims["iss"] == "crola-test"
    assert claims["exp"] - claims["iat"] == 60 * 60


def test_verify_rejects_tampered_signature(settings):
    service = JwtTokenService(settings)
    token = service.issue("user-123", "a@x.com")

    assert service.verify(_tamper_signature(token)) is None


def test_verify_rejects_other_secret(settings):
    token = JwtTokenService(settings).issue("user-123", "a@x.com")
    other = JwtTokenService(settings.model_copy(update={"JWT_SECRET": "another-secret"}))

    assert other.verify(token) is None


def test_verify_rejects_expired_token(settings):
    past = datetime.now(timezone.utc) - timedelta(days=2)
    token = jwt.encode(
        {
            "sub": "user-123",
            "email": "a@x.com",
            "iat": int(past.timestamp()),
            "exp": int((past + timedelta(days=1)).timestamp()),
            "iss": settings.JWT_ISSUER,
        },
        settings.JWT_SECRET,
        algorithm="HS256",
    )

    assert JwtTokenService(settings).verify(token) is None


def test_verify_rejects_wrong_issuer(settings):
    token = jwt.encode(
        {"sub": "user-123", "email": "a@x.com", "iss": "someone-else"},
        settings.JWT_SECRET,
        algorithm="HS256",
    )

    assert JwtTokenService(settings).verify(token) is None


def test_verify_rejects_missing_claims(settings):
    token = jwt.encode(
        {"email": "a@x.com", "iss": settings.JWT_ISSUER},
        settings.JWT_SECRET,
        algorithm="HS256",
    )

    assert JwtTokenService(settings).verify(token) is None


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c", "Bearer x.y.z"])
def test_verify_never_raises_on_malformed_input(settings, token):
    assert JwtTokenService(settings).verify(token) is None
