"""
Chat service.

Runs one user turn: persist the user message, ask the completion gateway for a
reply, persist the reply (or an apology when the gateway fails).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from crola.core.exceptions import LLMError, NotFoundError, ValidationError
from crola.core.logger import logger
from crola.interfaces.chat_repository import IChatRepository
from crola.interfaces.llm_provider import ILLMProvider
from crola.models.chat import Chat, ChatMessage, MessageRole

_TITLE_MAX_CHARS = 50
_FAILURE_REPLY = "Sorry, I couldn't get a response from the AI service ({reason}). Please try again."


@dataclass
class SendMessageResult:
    chat: Chat
    reply: ChatMessage
    failed: bool = False


def derive_title(message: str) -> str:
    """Title for a chat started by its first message."""
    text = " ".join(message.split())
    if len(text) <= _TITLE_MAX_CHARS:
        return text
    return text[: _TITLE_MAX_CHARS - 3].rstrip() + "..."


class ChatService:
    """Orchestrates a message round trip between the chat store and the gateway."""

    def __init__(self, chat_repo: IChatRepository, llm_provider: ILLMProvider):
        self._chat_repo = chat_repo
        self._llm_provider = llm_provider

    async def send_message(
        self,
        user_id: UUID,
        message: str,
        chat_id: Optional[UUID] = None,
        model_id: Optional[str] = None,
    ) -> SendMessageResult:
        """
        Send a user message and store the assistant reply.

        The history passed to the gateway excludes the new user message; the
        gateway appends it after the prior turns.

        Raises:
            ValidationError: If the message is blank
            NotFoundError: If chat_id is not an existing chat owned by user_id
        """
        message = (message or "").strip()
        if not message:
            raise ValidationError("Message is required")

        if chat_id:
            chat = await self._chat_repo.get_chat(user_id, chat_id)
            if not chat:
                raise NotFoundError("Chat not found or access denied")
        else:
            chat = await self._chat_repo.create_chat(user_id, derive_title(message))

        history = list(chat.messages)
        await self._chat_repo.append_message(chat.id, MessageRole.USER, message)

        failed = False
        try:
            reply_text = await self._llm_provider.complete(message, history, model_id)
        except LLMError as e:
            logger.warning(f"Completion failed for chat {chat.id}: {e.message}")
            reply_text = _FAILURE_REPLY.format(reason=e.message)
            failed = True

        reply = await self._chat_repo.append_message(chat.id, MessageRole.ASSISTANT, reply_text)

        updated = await self._chat_repo.get_chat(user_id, chat.id)
        if not updated:
            # Deleted by a concurrent request while the completion was running
            raise NotFoundError("Chat not found or access denied")
        return SendMessageResult(chat=updated, reply=reply, failed=failed)
