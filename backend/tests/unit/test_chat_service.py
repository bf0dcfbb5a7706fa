"""
Unit tests for ChatService.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from crola.core.exceptions import LLMError, NotFoundError, ValidationError
from crola.models.chat import Chat, ChatMessage, MessageRole
from crola.services.chat_service import ChatService, derive_title

_NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _chat(user_id: UUID, messages: list[ChatMessage] | None = None, chat_id: UUID | None = None) -> Chat:
    return Chat(
        id=chat_id or uuid4(),
        user_id=user_id,
        title="Existing",
        created_at=_NOW,
        updated_at=_NOW,
        messages=messages or [],
    )


def _message(chat_id: UUID, role: MessageRole, content: str) -> ChatMessage:
    return ChatMessage(id=uuid4(), chat_id=chat_id, role=role, content=content, created_at=_NOW)


def _repo_for(chat: Chat) -> AsyncMock:
    repo = AsyncMock()
    repo.get_chat.return_value = chat
    repo.create_chat.return_value = chat
    repo.append_message.side_effect = lambda chat_id, role, content: _message(chat_id, role, content)
    return repo


def test_derive_title_short_message():
    assert derive_title("  hello   world ") == "hello world"


def test_derive_title_truncates_long_message():
    title = derive_title("x" * 120)
    assert len(title) == 50
    assert title.endswith("...")


@pytest.mark.asyncio
async def test_send_message_passes_prior_turns_only():
    user_id = uuid4()
    chat_id = uuid4()
    prior = [
        _message(chat_id, MessageRole.USER, "earlier"),
        _message(chat_id, MessageRole.ASSISTANT, "earlier reply"),
    ]
    chat = _chat(user_id, prior, chat_id=chat_id)
    repo = _repo_for(chat)
    llm = AsyncMock()
    llm.complete.return_value = "new reply"

    result = await ChatService(repo, llm).send_message(user_id, " hello ", chat_id=chat_id, model_id="m1")

    llm.complete.assert_awaited_once_with("hello", prior, "m1")
    assert [c.args[1:] for c in repo.append_message.await_args_list] == [
        (MessageRole.USER, "hello"),
        (MessageRole.ASSISTANT, "new reply"),
    ]
    assert result.failed is False
    assert result.reply.content == "new reply"
    assert result.chat is chat


@pytest.mark.asyncio
async def test_send_message_without_chat_id_creates_titled_chat():
    user_id = uuid4()
    chat = _chat(user_id)
    repo = _repo_for(chat)
    llm = AsyncMock()
    llm.complete.return_value = "reply"

    await ChatService(repo, llm).send_message(user_id, "What is the capital of France?")

    repo.create_chat.assert_awaited_once_with(user_id, "What is the capital of France?")
    llm.complete.assert_awaited_once_with("What is the capital of France?", [], None)


@pytest.mark.asyncio
async def test_send_message_unknown_chat():
    user_id = uuid4()
    repo = AsyncMock()
    repo.get_chat.return_value = None
    llm = AsyncMock()

    with pytest.raises(NotFoundError):
        await ChatService(repo, llm).send_message(user_id, "hello", chat_id=uuid4())

    repo.append_message.assert_not_awaited()
    llm.complete.assert_not_awaited()


@pytest.mark.asyncio
async def test_send_message_blank_message():
    with pytest.raises(ValidationError):
        await ChatService(AsyncMock(), AsyncMock()).send_message(uuid4(), "   ")


@pytest.mark.asyncio
async def test_gateway_failure_is_stored_as_assistant_reply():
    user_id = uuid4()
    chat = _chat(user_id)
    repo = _repo_for(chat)
    llm = AsyncMock()
    llm.complete.side_effect = LLMError("AI service returned status 503", status_code=503)

    result = await ChatService(repo, llm).send_message(user_id, "hello", chat_id=chat.id)

    assert result.failed is True
    assert result.reply.role == MessageRole.ASSISTANT
    assert "503" in result.reply.content
    assert repo.append_message.await_count == 2
