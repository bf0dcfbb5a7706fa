"""
Chat repository interface.

Defines the contract for chat and message persistence.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from crola.models.chat import Chat, ChatMessage, MessageRole


class IChatRepository(ABC):
    """Abstract interface for chat persistence."""

    @abstractmethod
    async def list_chats(self, user_id: UUID) -> list[Chat]:
        """
        List chats for a user.

        Args:
            user_id: Owner user ID

        Returns:
            Chats ordered by most recently updated first, each with its
            messages ordered oldest-first
        """
        pass

    @abstractmethod
    async def create_chat(self, user_id: UUID, title: Optional[str] = None) -> Chat:
        """
        Create an empty chat.

        Args:
            user_id: Owner user ID
            title: Optional title, defaults to "New Chat"

        Returns:
            Chat
        """
        pass

    @abstractmethod
    async def get_chat(self, user_id: UUID, chat_id: UUID) -> Optional[Chat]:
        """Get a chat owned by the user, or None."""
        pass

    @abstractmethod
    async def delete_chat(self, user_id: UUID, chat_id: UUID) -> None:
        """
        Delete a chat and its messages.

        Raises:
            NotFoundError: If the chat does not exist or belongs to another user
        """
        pass

    @abstractmethod
    async def append_message(
        self,
        chat_id: UUID,
        role: MessageRole,
        content: str,
    ) -> ChatMessage:
        """
        Append a message to a chat.

        Args:
            chat_id: Chat ID
            role: Message role (user/assistant)
            content: Message content

        Returns:
            ChatMessage

        Raises:
            NotFoundError: If the chat does not exist
        """
        pass

    @abstractmethod
    async def get_history(self, user_id: UUID, chat_id: UUID) -> list[ChatMessage]:
        """
        List messages of a chat oldest-first.

        Raises:
            NotFoundError: If the chat does not exist or belongs to another user
        """
        pass
