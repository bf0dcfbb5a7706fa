"""
SQLite implementation of Chat repository.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy import and_, select
from sqlalchemy.orm import lazyload

from crola.core.exceptions import NotFoundError
from crola.infrastructure.local.database import ChatMessageORM, ChatORM, get_session_factory
from crola.interfaces.chat_repository import IChatRepository
from crola.models.chat import DEFAULT_CHAT_TITLE, Chat, ChatMessage, MessageRole
from crola.utils.datetime_utils import utcnow_naive

_CHAT_NOT_FOUND = "Chat not found or access denied"


class SqliteChatRepository(IChatRepository):
    """SQLite implementation of chat repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _message_orm_to_model(self, orm: ChatMessageORM) -> ChatMessage:
        """Convert message ORM object to Pydantic model."""
        return ChatMessage(
            id=UUID(orm.id),
            chat_id=UUID(orm.chat_id),
            role=MessageRole(orm.role),
            content=orm.content,
            created_at=orm.created_at,
        )

    def _chat_orm_to_model(self, orm: ChatORM) -> Chat:
        """Convert chat ORM object (with loaded messages) to Pydantic model."""
        return Chat(
            id=UUID(orm.id),
            user_id=UUID(orm.user_id),
            title=orm.title or DEFAULT_CHAT_TITLE,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
            messages=[self._message_orm_to_model(m) for m in orm.messages],
        )

    def _owned_chat_query(self, user_id: UUID, chat_id: UUID):
        return select(ChatORM).where(
            and_(
                ChatORM.id == str(chat_id),
                ChatORM.user_id == str(user_id),
            )
        )

    async def list_chats(self, user_id: UUID) -> list[Chat]:
        """List chats for a user, most recently updated first."""
        async with self._session_factory() as session:
            query = (
                select(ChatORM)
                .where(ChatORM.user_id == str(user_id))
                .order_by(ChatORM.updated_at.desc())
            )
            result = await session.execute(query)
            return [self._chat_orm_to_model(orm) for orm in result.scalars().all()]

    async def create_chat(self, user_id: UUID, title: Optional[str] = None) -> Chat:
        """Create an empty chat."""
        title = (title or "").strip() or DEFAULT_CHAT_TITLE
        now = utcnow_naive()
        async with self._session_factory() as session:
            orm = ChatORM(
                user_id=str(user_id),
                title=title,
                created_at=now,
                updated_at=now,
                messages=[],
            )
            session.add(orm)
            await session.commit()
            return self._chat_orm_to_model(orm)

    async def get_chat(self, user_id: UUID, chat_id: UUID) -> Optional[Chat]:
        """Get a chat owned by the user."""
        async with self._session_factory() as session:
            result = await session.execute(self._owned_chat_query(user_id, chat_id))
            orm = result.scalar_one_or_none()
            return self._chat_orm_to_model(orm) if orm else None

    async def delete_chat(self, user_id: UUID, chat_id: UUID) -> None:
        """Delete an owned chat together with its messages."""
        async with self._session_factory() as session:
            result = await session.execute(self._owned_chat_query(user_id, chat_id))
            orm = result.scalar_one_or_none()
            if not orm:
                raise NotFoundError(_CHAT_NOT_FOUND)
            await session.delete(orm)
            await session.commit()

    async def append_message(
        self,
        chat_id: UUID,
        role: MessageRole,
        content: str,
    ) -> ChatMessage:
        """Append a message and bump the chat's updated_at."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(ChatORM)
                .options(lazyload(ChatORM.messages))
                .where(ChatORM.id == str(chat_id))
            )
            chat_orm = result.scalar_one_or_none()
            if not chat_orm:
                raise NotFoundError(_CHAT_NOT_FOUND)

            now = utcnow_naive()
            message_orm = ChatMessageORM(
                chat=chat_orm,
                role=MessageRole(role).value,
                content=content or "",
                created_at=now,
            )
            session.add(message_orm)
            chat_orm.updated_at = now

            await session.commit()
            await session.refresh(message_orm)
            return self._message_orm_to_model(message_orm)

    async def get_history(self, user_id: UUID, chat_id: UUID) -> list[ChatMessage]:
        """List messages of an owned chat oldest-first."""
        async with self._session_factory() as session:
            owned = await session.execute(
                select(ChatORM.id).where(
                    and_(
                        ChatORM.id == str(chat_id),
                        ChatORM.user_id == str(user_id),
                    )
                )
            )
            if not owned.scalar_one_or_none():
                raise NotFoundError(_CHAT_NOT_FOUND)

            query = (
                select(ChatMessageORM)
                .where(ChatMessageORM.chat_id == str(chat_id))
                .order_by(ChatMessageORM.created_at.asc())
            )
            result = await session.execute(query)
            return [self._message_orm_to_model(orm) for orm in result.scalars().all()]
