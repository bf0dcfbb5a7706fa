"""
Chat and message models.

A chat is a titled, user-owned container of append-only messages.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_CHAT_TITLE = "New Chat"


class MessageRole(str, Enum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """Chat message model."""

    id: UUID
    chat_id: UUID
    role: MessageRole
    content: str = Field("", max_length=100000, description="Message content")
    created_at: datetime


class Chat(BaseModel):
    """Chat model with its messages ordered oldest-first."""

    id: UUID
    user_id: UUID = Field(..., description="Owner user ID")
    title: str = Field(DEFAULT_CHAT_TITLE, max_length=200)
    created_at: datetime
    updated_at: datetime
    messages: list[ChatMessage] = Field(default_factory=list)


class ChatCreate(BaseModel):
    """Request body for creating a chat."""

    title: Optional[str] = Field(None, max_length=200)


class SendMessageRequest(BaseModel):
    """Request body for sending a message."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(..., min_length=1, max_length=100000)
    chat_id: Optional[UUID] = Field(None, alias="chatId")
    model_id: Optional[str] = Field(None, alias="modelId", max_length=200)

    @field_validator("message")
    @classmethod
    def _strip_message(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Message cannot be empty")
        return value


class SendMessageResponse(BaseModel):
    """Updated thread returned after a message round trip."""

    chat: Chat
    reply: ChatMessage
    failed: bool = False
