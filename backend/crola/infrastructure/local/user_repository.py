"""
SQLite implementation of user repository.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from crola.core.exceptions import DuplicateError
from crola.infrastructure.local.database import UserORM, get_session_factory
from crola.interfaces.user_repository import IUserRepository
from crola.models.user import UserAccount, UserCreate


def _normalize_email(value: str) -> str:
    return value.strip().lower()


class SqliteUserRepository(IUserRepository):
    """SQLite implementation of user repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: UserORM) -> UserAccount:
        return UserAccount(
            id=UUID(orm.id),
            email=orm.email,
            password_hash=orm.password_hash,
            created_at=orm.created_at,
        )

    async def get(self, user_id: UUID) -> Optional[UserAccount]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(UserORM).where(UserORM.id == str(user_id))
            )
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def get_by_email(self, email: str) -> Optional[UserAccount]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(UserORM).where(UserORM.email == _normalize_email(email))
            )
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def create(self, data: UserCreate) -> UserAccount:
        email = _normalize_email(data.email)
        async with self._session_factory() as session:
            existing = await session.execute(select(UserORM.id).where(UserORM.email == email))
            if existing.scalar_one_or_none():
                raise DuplicateError(f"User with email {email} already exists")

            orm = UserORM(
                id=str(uuid4()),
                email=email,
                password_hash=data.password_hash,
            )
            session.add(orm)
            try:
                await session.commit()
            except IntegrityError as exc:
                # Lost a race with a concurrent signup for the same email
                await session.rollback()
                raise DuplicateError(f"User with email {email} already exists") from exc
            await session.refresh(orm)
            return self._orm_to_model(orm)
