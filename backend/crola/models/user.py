"""
User account models.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """Create a user account."""

    email: str = Field(..., min_length=3, max_length=255)
    password_hash: str = Field(..., max_length=255)


class UserAccount(BaseModel):
    """User account stored in the database."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    password_hash: str
    created_at: datetime

    def to_public(self) -> "PublicUser":
        return PublicUser(id=self.id, email=self.email, created_at=self.created_at)


class PublicUser(BaseModel):
    """User fields safe to return to clients."""

    id: UUID
    email: str
    created_at: datetime
