"""
Token service interface.

Issues and verifies signed, time-limited identity tokens.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel


class AuthUser(BaseModel):
    """Identity carried by a verified token."""

    id: str
    email: str


class ITokenService(ABC):
    """Abstract interface for identity tokens."""

    @abstractmethod
    def issue(self, user_id: str, email: str) -> str:
        """
        Issue a signed token for a user.

        Args:
            user_id: User ID
            email: Normalized user email

        Returns:
            Encoded token string
        """
        pass

    @abstractmethod
    def verify(self, token: str) -> Optional[AuthUser]:
        """
        Verify a token.

        Returns None when the token is malformed, tampered with or expired.
        Never raises.
        """
        pass
