"""
Shared pytest fixtures.

Repositories run against a throwaway SQLite file per test.
"""

from uuid import UUID

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from crola.core.config import Settings
from crola.core.security import hash_password
from crola.infrastructure.local.chat_repository import SqliteChatRepository
from crola.infrastructure.local.database import init_db
from crola.infrastructure.local.user_repository import SqliteUserRepository
from crola.models.user import UserCreate

TEST_JWT_SECRET = "test-secret-for-unit-tests"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        JWT_SECRET=TEST_JWT_SECRET,
        JWT_ISSUER="crola-test",
        JWT_EXPIRE_MINUTES=60,
        LLM_PROVIDER="custom",
        AI_API_KEY="test-key",
        AI_API_ENDPOINT="https://llm.test/v1/chat/completions",
        AI_MODEL_NAME="test-model",
    )


@pytest.fixture
async def session_factory(tmp_path):
    """Create a session factory bound to a fresh SQLite database."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_db(engine)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def user_repo(session_factory) -> SqliteUserRepository:
    return SqliteUserRepository(session_factory=session_factory)


@pytest.fixture
def chat_repo(session_factory) -> SqliteChatRepository:
    return SqliteChatRepository(session_factory=session_factory)


async def _create_user(user_repo: SqliteUserRepository, email: str) -> UUID:
    user = await user_repo.create(
        UserCreate(email=email, password_hash=hash_password("password1", iterations=1000))
    )
    return user.id


@pytest.fixture
async def test_user_id(user_repo) -> UUID:
    return await _create_user(user_repo, "owner@example.com")


@pytest.fixture
async def other_user_id(user_repo) -> UUID:
    return await _create_user(user_repo, "other@example.com")
