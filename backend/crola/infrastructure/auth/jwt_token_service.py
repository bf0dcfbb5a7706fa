"""
HMAC-signed JWT token service.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import JWTError, jwt

from crola.core.config import Settings
from crola.interfaces.token_service import AuthUser, ITokenService

logger = logging.getLogger(__name__)

_ALGORITHM = "HS256"


class JwtTokenService(ITokenService):
    """Token service backed by HS256 JWTs."""

    def __init__(self, settings: Settings):
        if not settings.JWT_SECRET:
            raise ValueError("JWT_SECRET must be set for local auth")
        self._secret = settings.JWT_SECRET
        self._issuer = settings.JWT_ISSUER or None
        self._expire_minutes = settings.JWT_EXPIRE_MINUTES

    def issue(self, user_id: str, email: str, expires_minutes: int | None = None) -> str:
        now = datetime.now(timezone.utc)
        expires = now + timedelta(minutes=expires_minutes or self._expire_minutes)
        payload: dict[str, Any] = {
            "sub": user_id,
            "email": email,
            "iat": int(now.timestamp()),
            "exp": int(expires.timestamp()),
        }
        if self._issuer:
            payload["iss"] = self._issuer
        return jwt.encode(payload, self._secret, algorithm=_ALGORITHM)

    def _decode_token(self, token: str) -> dict[str, Any]:
        options = {"verify_iss": bool(self._issuer)}
        return jwt.decode(
            token,
            self._secret,
            algorithms=[_ALGORITHM],
            issuer=self._issuer,
            options=options,
        )

    def verify(self, token: str) -> Optional[AuthUser]:
        if not token:
            return None
        try:
            claims = self._decode_token(token)
        except JWTError as exc:
            logger.debug(f"Token rejected: {exc}")
            return None

        subject = claims.get("sub")
        email = claims.get("email")
        if not subject or not email:
            logger.debug("Token rejected: missing sub or email claim")
            return None
        return AuthUser(id=str(subject), email=str(email))
