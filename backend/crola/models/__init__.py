"""Pydantic models (schemas) for the application."""

from crola.models.chat import (
    DEFAULT_CHAT_TITLE,
    Chat,
    ChatCreate,
    ChatMessage,
    MessageRole,
    SendMessageRequest,
    SendMessageResponse,
)
from crola.models.user import PublicUser, UserAccount, UserCreate

__all__ = [
    # Chats
    "DEFAULT_CHAT_TITLE",
    "Chat",
    "ChatCreate",
    "ChatMessage",
    "MessageRole",
    "SendMessageRequest",
    "SendMessageResponse",
    # Users
    "PublicUser",
    "UserAccount",
    "UserCreate",
]
