"""
Unit tests for chat API handlers.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from fastapi import HTTPException

from crola.api.chats import _parse_chat_id, delete_chat, get_history, send_message
from crola.core.exceptions import NotFoundError
from crola.models.chat import SendMessageRequest


def _user():
    return SimpleNamespace(id=str(uuid4()), email="a@x.com")


@pytest.mark.parametrize("raw", [None, "", "   ", "not-a-uuid", "1234"])
def test_parse_chat_id_rejects_bad_values(raw):
    with pytest.raises(HTTPException) as exc_info:
        _parse_chat_id(raw, "chatId")

    assert exc_info.value.status_code == 400
    assert "chatId" in exc_info.value.detail


def test_parse_chat_id_accepts_uuid():
    chat_id = uuid4()
    assert _parse_chat_id(f" {chat_id} ", "id") == chat_id


@pytest.mark.asyncio
async def test_history_not_found_maps_to_404():
    repo = AsyncMock()
    repo.get_history.side_effect = NotFoundError("Chat not found or access denied")

    with pytest.raises(HTTPException) as exc_info:
        await get_history(_user(), repo, str(uuid4()))

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_delete_not_found_maps_to_404():
    repo = AsyncMock()
    repo.delete_chat.side_effect = NotFoundError("Chat not found or access denied")

    with pytest.raises(HTTPException) as exc_info:
        await delete_chat(_user(), repo, str(uuid4()))

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_send_message_unknown_chat_maps_to_404():
    repo = AsyncMock()
    repo.get_chat.return_value = None
    llm = AsyncMock()

    request = SendMessageRequest(message="hi", chatId=uuid4())
    with pytest.raises(HTTPException) as exc_info:
        await send_message(request, _user(), repo, llm)

    assert exc_info.value.status_code == 404
    llm.complete.assert_not_awaited()


def test_send_message_request_accepts_camel_and_snake_case():
    chat_id = uuid4()

    camel = SendMessageRequest.model_validate({"message": " hi ", "chatId": str(chat_id), "modelId": "m"})
    snake = SendMessageRequest(message="hi", chat_id=chat_id, model_id="m")

    assert camel.message == "hi"
    assert camel.chat_id == snake.chat_id == chat_id
    assert camel.model_id == snake.model_id == "m"
